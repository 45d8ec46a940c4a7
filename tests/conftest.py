from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from pystoryfix.augment import HandleAugmenter
from pystoryfix.environment import MountEnvironment
from pystoryfix.stories import clear_decorations

_SELECTOR = re.compile(r'^\[([\w-]+)="([^"]*)"\]$')


class FakeNode:
    def __init__(
        self,
        tag: str,
        attrs: dict[str, str] | None = None,
        children: list[FakeNode] | None = None,
        *,
        component: bool = False,
    ) -> None:
        self.tag = tag
        self.attrs = dict(attrs or {})
        self.children = list(children or [])
        self.component = component

    def set_attribute(self, name: str, value: str) -> None:
        self.attrs[name] = value

    def walk(self) -> Iterator[FakeNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    def exists(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"FakeNode({self.tag!r}, {self.attrs!r})"


class Missing:
    """Not-found marker, the way the fake engine reports empty ``find``."""

    def __init__(self, selector: str) -> None:
        self.selector = selector

    def exists(self) -> bool:
        return False


class FakeHandle:
    def __init__(self, renderable: Any, options: dict[str, Any]) -> None:
        self.renderable = renderable
        self.options = options
        self.root = renderable if isinstance(renderable, FakeNode) else FakeNode("div")

    @property
    def props(self) -> dict[str, Any]:
        return self.options["props"]

    def _select(self, selector: str) -> list[FakeNode]:
        match = _SELECTOR.match(selector)
        assert match is not None, selector
        name, value = match.groups()
        return [node for node in self.root.walk() if node.attrs.get(name) == value]

    def find(self, selector: str) -> Any:
        nodes = self._select(selector)
        return nodes[0] if nodes else Missing(selector)

    def find_all(self, selector: str) -> list[FakeNode]:
        return self._select(selector)

    def find_all_components(self, selector: str) -> list[FakeNode]:
        return [node for node in self._select(selector) if node.component]


class BareEngine:
    """Engine with mount operations only; handles are extended by wrapping."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any, dict[str, Any]]] = []

    def _produce(self, operation: str, renderable: Any, options: dict[str, Any]) -> Any:
        self.calls.append((operation, renderable, options))
        return FakeHandle(renderable, options)

    def mount(self, renderable: Any, options: dict[str, Any]) -> Any:
        return self._produce("mount", renderable, options)

    def shallow_mount(self, renderable: Any, options: dict[str, Any]) -> Any:
        return self._produce("shallow_mount", renderable, options)

    def render(self, renderable: Any, options: dict[str, Any]) -> str:
        self.calls.append(("render", renderable, options))
        return f"<markup props={sorted(options['props'])}>"

    @property
    def last_options(self) -> dict[str, Any]:
        return self.calls[-1][2]


class PluginEngine(BareEngine):
    """Engine with a per-handle install hook."""

    def __init__(self) -> None:
        super().__init__()
        self.handle_plugins: list[Callable[[Any], None]] = []

    def add_handle_plugin(self, install: Callable[[Any], None]) -> None:
        self.handle_plugins.append(install)

    def _produce(self, operation: str, renderable: Any, options: dict[str, Any]) -> Any:
        handle = super()._produce(operation, renderable, options)
        for install in self.handle_plugins:
            install(handle)
        return handle


class ClassEngine(BareEngine):
    """Engine exposing its handle class for class-level extension."""

    def __init__(self) -> None:
        super().__init__()
        self.handle_class = type("ClassEngineHandle", (FakeHandle,), {})

    def _produce(self, operation: str, renderable: Any, options: dict[str, Any]) -> Any:
        self.calls.append((operation, renderable, options))
        return self.handle_class(renderable, options)


@pytest.fixture(autouse=True)
def _fresh_decorations() -> Iterator[None]:
    yield
    clear_decorations()


@pytest.fixture
def engine() -> PluginEngine:
    return PluginEngine()


@pytest.fixture
def augmenter() -> HandleAugmenter:
    return HandleAugmenter()


@pytest.fixture
def environment() -> MountEnvironment:
    return MountEnvironment()


@pytest.fixture
def button() -> dict[str, Any]:
    return {"name": "AppButton"}


@pytest.fixture
def node() -> type[FakeNode]:
    return FakeNode


@pytest.fixture
def engines() -> dict[str, type[BareEngine]]:
    return {"plugin": PluginEngine, "class": ClassEngine, "wrap": BareEngine}
