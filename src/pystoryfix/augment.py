"""Extend mounted handles with test-id lookups.

Mount engines differ in how they let callers extend the handles they
produce. :class:`HandleAugmenter` tries, in order:

1. ``engine.add_handle_plugin(install)`` - the engine calls *install* on
   every handle it creates.
2. ``engine.handle_class`` - the methods are set on the handle class.
3. Wrapping ``engine.mount`` / ``engine.shallow_mount`` so each returned
   handle receives bound methods.

Installing is idempotent per engine.
"""

from __future__ import annotations

import functools
import logging
import types
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from pystoryfix.config import FixtureConfig
from pystoryfix.engine import Handle, HandlePluginHost
from pystoryfix.exceptions import AugmentationError, TestIdLookupError

_logger = logging.getLogger(__name__)

_WRAPPED_OPERATIONS = ("mount", "shallow_mount")


def selector_for(test_id: str, attribute: str = "data-testid") -> str:
    return f'[{attribute}="{test_id}"]'


@dataclass(frozen=True)
class LookupFailure:
    """Error result of a test-id lookup that matched zero or several candidates."""

    test_id: str
    selector: str
    matches: int

    def exists(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    @property
    def error(self) -> str:
        if self.matches == 0:
            return f"No element matches {self.selector}"
        return f"{self.matches} elements match {self.selector}; expected exactly one"

    def unwrap(self) -> Any:
        raise TestIdLookupError(self.error, test_id=self.test_id, matches=self.matches)


class TestIdMatches(Sequence[Any]):
    """All nodes carrying a test id.

    The query runs lazily on first access and again on every new
    iteration, so the sequence reflects the handle's current render.
    """

    __test__ = False

    def __init__(self, query: Callable[[], Sequence[Any]]) -> None:
        self._query = query

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._query()))

    def __len__(self) -> int:
        return len(list(self._query()))

    def __getitem__(self, index: Any) -> Any:
        return list(self._query())[index]

    def exists(self) -> bool:
        return len(self) > 0


def find_by_test_id(handle: Handle, test_id: str, *, attribute: str = "data-testid") -> Any:
    """Find the single node whose test id equals *test_id*.

    No match returns the engine's own not-found marker (whatever
    ``handle.find`` returns); several matches return a :class:`LookupFailure`.
    """
    selector = selector_for(test_id, attribute)
    matches = list(handle.find_all(selector))
    if len(matches) == 1:
        return matches[0]
    if not matches:
        return handle.find(selector)
    return LookupFailure(test_id=test_id, selector=selector, matches=len(matches))


def find_all_by_test_id(handle: Handle, test_id: str, *, attribute: str = "data-testid") -> TestIdMatches:
    selector = selector_for(test_id, attribute)
    return TestIdMatches(lambda: handle.find_all(selector))


def find_component_by_test_id(handle: Handle, test_id: str, *, attribute: str = "data-testid") -> Any:
    """Find the single component rooted at *test_id*; :class:`LookupFailure` otherwise."""
    selector = selector_for(test_id, attribute)
    query = getattr(handle, "find_all_components", None) or handle.find_all
    matches = list(query(selector))
    if len(matches) == 1:
        return matches[0]
    return LookupFailure(test_id=test_id, selector=selector, matches=len(matches))


def _handle_methods(attribute: str) -> dict[str, Callable[..., Any]]:
    def _find_by_test_id(self: Any, test_id: str) -> Any:
        return find_by_test_id(self, test_id, attribute=attribute)

    def _find_all_by_test_id(self: Any, test_id: str) -> TestIdMatches:
        return find_all_by_test_id(self, test_id, attribute=attribute)

    def _find_component_by_test_id(self: Any, test_id: str) -> Any:
        return find_component_by_test_id(self, test_id, attribute=attribute)

    return {
        "find_by_test_id": _find_by_test_id,
        "find_all_by_test_id": _find_all_by_test_id,
        "find_component_by_test_id": _find_component_by_test_id,
    }


class HandleAugmenter:
    """Registers the test-id methods against a mount engine."""

    def __init__(self, config: FixtureConfig | None = None) -> None:
        self._config = config or FixtureConfig()
        self._methods = _handle_methods(self._config.test_id_attribute)
        self._installed: dict[int, tuple[Any, str]] = {}

    def is_installed(self, engine: Any) -> bool:
        return self.strategy(engine) is not None

    def strategy(self, engine: Any) -> str | None:
        """Name of the strategy used for *engine*, if installed."""
        entry = self._installed.get(id(engine))
        return entry[1] if entry is not None and entry[0] is engine else None

    def augment(self, handle: Any) -> Any:
        """Attach the methods to a single *handle* instance."""
        for name, method in self._methods.items():
            setattr(handle, name, types.MethodType(method, handle))
        return handle

    def install(self, engine: Any) -> str:
        """Extend every handle *engine* produces from now on. Idempotent."""
        existing = self.strategy(engine)
        if existing is not None:
            return existing

        if isinstance(engine, HandlePluginHost):
            engine.add_handle_plugin(self.augment)
            strategy = "plugin"
        elif isinstance(getattr(engine, "handle_class", None), type):
            for name, method in self._methods.items():
                setattr(engine.handle_class, name, method)
            strategy = "class"
        elif any(callable(getattr(engine, op, None)) for op in _WRAPPED_OPERATIONS):
            self._wrap(engine)
            strategy = "wrap"
        else:
            raise AugmentationError(f"{type(engine).__name__} exposes no mount operation to extend")

        self._installed[id(engine)] = (engine, strategy)
        _logger.debug("Installed handle extensions on %s via %s", type(engine).__name__, strategy)
        return strategy

    def _augmenting(self, original: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(original)
        def wrapped(*args: Any, **kwargs: Any) -> Any:
            return self.augment(original(*args, **kwargs))

        return wrapped

    def _wrap(self, engine: Any) -> None:
        for op in _WRAPPED_OPERATIONS:
            original = getattr(engine, op, None)
            if callable(original):
                setattr(engine, op, self._augmenting(original))


default_augmenter = HandleAugmenter()


def install_once(engine: Any) -> str:
    """Install the default augmenter on *engine* (no-op after the first call)."""
    return default_augmenter.install(engine)
