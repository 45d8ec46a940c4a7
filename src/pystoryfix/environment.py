"""Process-wide mount defaults.

A :class:`MountEnvironment` collects the stubs, mocks, directives,
components and plugins every mount should receive. Fixtures copy the
environment for each mount, so per-mount registrations made through
``MountOptions.extend`` never leak into other mounts.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pystoryfix.merge import merge

_logger = logging.getLogger(__name__)


def _stub_value(value: Any) -> Any:
    # ``True`` registers an empty placeholder.
    return {} if value is True else value


class MountEnvironment:
    """Global registrations merged into every mount's ``global`` options."""

    def __init__(self) -> None:
        self.stubs: dict[str, Any] = {}
        self.mocks: dict[str, Any] = {}
        self.directives: dict[str, Any] = {}
        self.components: dict[str, Any] = {}
        self.plugins: list[Any] = []

    def set_stubs(self, stubs: Mapping[str, Any] | None = None) -> dict[str, Any]:
        self.stubs = merge(self.stubs, stubs)
        return self.stubs

    def set_mocks(self, mocks: Mapping[str, Any] | None = None) -> dict[str, Any]:
        self.mocks = merge(self.mocks, mocks)
        return self.mocks

    def mock_directives(self, directives: Mapping[str, Any] | None = None) -> None:
        for name, value in (directives or {}).items():
            self.directives[name] = _stub_value(value)

    def mock_components(self, components: Mapping[str, Any] | None = None) -> None:
        for name, value in (components or {}).items():
            self.components[name] = _stub_value(value)

    def setup_plugins(self, plugins: Iterable[Any] = ()) -> None:
        for plugin in plugins:
            if plugin not in self.plugins:
                self.plugins.append(plugin)

    def copy(self) -> MountEnvironment:
        """Independent copy for a single mount."""
        clone = MountEnvironment()
        clone.stubs = copy.copy(self.stubs)
        clone.mocks = copy.copy(self.mocks)
        clone.directives = copy.copy(self.directives)
        clone.components = copy.copy(self.components)
        clone.plugins = list(self.plugins)
        return clone

    def as_global(self) -> dict[str, Any]:
        """Render the registrations as a mount engine ``global`` section."""
        return {
            "plugins": list(self.plugins),
            "stubs": dict(self.stubs),
            "mocks": dict(self.mocks),
            "directives": dict(self.directives),
            "components": dict(self.components),
        }

    def clear(self) -> None:
        self.stubs = {}
        self.mocks = {}
        self.directives = {}
        self.components = {}
        self.plugins = []
        _logger.debug("Mount environment cleared")


default_environment = MountEnvironment()


def set_stubs(stubs: Mapping[str, Any] | None = None) -> dict[str, Any]:
    return default_environment.set_stubs(stubs)


def set_mocks(mocks: Mapping[str, Any] | None = None) -> dict[str, Any]:
    return default_environment.set_mocks(mocks)


def mock_directives(directives: Mapping[str, Any] | None = None) -> None:
    default_environment.mock_directives(directives)


def mock_components(components: Mapping[str, Any] | None = None) -> None:
    default_environment.mock_components(components)


def setup_plugins(plugins: Iterable[Any] = ()) -> None:
    default_environment.setup_plugins(plugins)
