"""Directive that stamps test identifiers onto rendered elements.

Register it under a directive name (``testid`` by convention) and write
``v-testid:submit-button`` style bindings in templates; the element then
carries ``data-testid="submit-button"`` and is reachable through
``handle.find_by_test_id("submit-button")``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class TestIdDirective:
    """Sets the configured test-id attribute from the binding argument."""

    __test__ = False

    def __init__(self, attribute: str = "data-testid") -> None:
        self.attribute = attribute

    def created(self, element: Any, binding: Any) -> None:
        arg = binding.get("arg") if isinstance(binding, Mapping) else getattr(binding, "arg", None)
        if arg is None:
            return
        element.set_attribute(self.attribute, str(arg))


test_id_directive = TestIdDirective()
