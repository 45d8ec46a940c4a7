"""Base model for pystoryfix configuration records.

Every record inherits from :class:`FixtureModel`, which provides:

* ``arbitrary_types_allowed`` so components, render functions and
  collaborator instances can travel inside a record untouched.
* ``populate_by_name`` so snake_case fields also accept the camelCase
  spellings story authors copy from component docs (``argTypes``,
  ``linkActiveClass``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FixtureModel(BaseModel):
    """Base for pystoryfix records."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_options(self) -> dict[str, Any]:
        """Dump fields set on this record (snake_case keys, no ``None``)."""
        return self.model_dump(exclude_none=True, by_alias=False)
