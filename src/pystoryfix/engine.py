"""Interfaces of the external collaborators.

pystoryfix never renders anything itself. It decides what configuration
to hand to these collaborators and composes their results.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Handle(Protocol):
    """A mounted component instance, queryable for assertions.

    ``find`` returns the engine's own not-found marker when nothing
    matches; ``find_all`` returns every matching node.
    """

    def find(self, selector: str) -> Any: ...

    def find_all(self, selector: str) -> Sequence[Any]: ...


@runtime_checkable
class MountEngine(Protocol):
    """Component mounting collaborator.

    ``options`` is shaped ``{"props": ..., "global": {"plugins", "stubs",
    "mocks", "directives", "components"}, ...passthrough}``.
    """

    def mount(self, renderable: Any, options: dict[str, Any]) -> Any: ...

    def shallow_mount(self, renderable: Any, options: dict[str, Any]) -> Any: ...

    def render(self, renderable: Any, options: dict[str, Any]) -> Any: ...


@runtime_checkable
class HandlePluginHost(Protocol):
    """Engine extension point: *install* runs once for every produced handle."""

    def add_handle_plugin(self, install: Callable[[Any], None]) -> None: ...


@runtime_checkable
class Router(Protocol):
    def add_routes(self, routes: Iterable[Any]) -> None: ...


@runtime_checkable
class FrameScheduler(Protocol):
    """Runs *callback* on the next animation frame."""

    def request_animation_frame(self, callback: Callable[[], None]) -> None: ...
