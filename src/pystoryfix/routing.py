"""In-memory router used when a fixture mocks routing.

The router keeps its own history list instead of touching any real
location. Route matching supports static segments and ``:param``
placeholders, which covers the route tables stories declare.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pystoryfix.models.routing import RouterConfig, RouteSpec

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteMatch:
    """A resolved location."""

    path: str
    route: RouteSpec
    params: dict[str, str] = field(default_factory=dict)


def _split(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _join(prefix: str, path: str) -> str:
    if path.startswith("/"):
        return path
    return "/" + "/".join([*_split(prefix), *_split(path)])


def _match(pattern: str, path: str) -> dict[str, str] | None:
    pattern_parts = _split(pattern)
    path_parts = _split(path)
    if len(pattern_parts) != len(path_parts):
        return None
    params: dict[str, str] = {}
    for expected, actual in zip(pattern_parts, path_parts, strict=True):
        if expected.startswith(":"):
            params[expected[1:]] = actual
        elif expected != actual:
            return None
    return params


class MemoryRouter:
    """Router test double with an in-memory history stack."""

    def __init__(self, config: RouterConfig | Mapping[str, Any] | None = None) -> None:
        if not isinstance(config, RouterConfig):
            config = RouterConfig.model_validate(dict(config or {}))
        self.config = config
        self.routes: list[RouteSpec] = []
        self.history: list[str] = []
        self._index = -1
        self.add_routes(config.routes)

    def add_routes(self, routes: Iterable[RouteSpec | Mapping[str, Any]]) -> None:
        """Append *routes* to the route table."""
        added = [route if isinstance(route, RouteSpec) else RouteSpec.model_validate(route) for route in routes]
        self.routes.extend(added)
        if added:
            _logger.debug("Router registered routes: %s", [route.path for route in added])

    @property
    def route_paths(self) -> list[str]:
        return [route.path for route in self.routes]

    def _flatten(self) -> Iterable[tuple[str, RouteSpec]]:
        stack = [("/", route) for route in self.routes]
        while stack:
            prefix, route = stack.pop(0)
            full = _join(prefix, route.path)
            yield full, route
            stack.extend((full, child) for child in route.children)

    def resolve(self, path: str) -> RouteMatch | None:
        """Match *path* against the route table; ``None`` when nothing matches."""
        target = path.split("?", 1)[0].split("#", 1)[0] or "/"
        for full, route in self._flatten():
            params = _match(full, target)
            if params is not None:
                return RouteMatch(path=path, route=route, params=params)
        return None

    @property
    def current_path(self) -> str | None:
        if self._index < 0:
            return None
        return self.history[self._index]

    @property
    def current_route(self) -> RouteMatch | None:
        current = self.current_path
        return self.resolve(current) if current is not None else None

    def push(self, path: str) -> RouteMatch | None:
        """Navigate to *path*, discarding any forward history."""
        del self.history[self._index + 1 :]
        self.history.append(path)
        self._index = len(self.history) - 1
        return self.current_route

    def replace(self, path: str) -> RouteMatch | None:
        if self._index < 0:
            return self.push(path)
        self.history[self._index] = path
        return self.current_route

    def back(self) -> RouteMatch | None:
        if self._index > 0:
            self._index -= 1
        return self.current_route

    def install(self, target: Any) -> None:
        """Plugin hook: expose the router on the mount target."""
        setattr(target, "router", self)
