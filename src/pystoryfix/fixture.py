"""Mount one story (or bare component) with fully merged configuration.

Each mount runs the same pipeline:

1. merge props: story args (suite defaults already applied) <- call props
2. build the mock set: router (suite-wide toggle or story
   ``parameters.router``), store (suite request or call ``store``)
3. materialize the renderable
4. assemble engine options: environment <- mocks <- call options
5. delegate to the engine and expose the mocks on the handle

Nothing computed during a mount outlives it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pystoryfix._redact import summarize_for_log
from pystoryfix.augment import HandleAugmenter, default_augmenter
from pystoryfix.config import FixtureConfig
from pystoryfix.engine import MountEngine
from pystoryfix.environment import MountEnvironment, default_environment
from pystoryfix.merge import merge
from pystoryfix.models.options import MountOptions
from pystoryfix.models.store import StoreConfig
from pystoryfix.registry import MockRegistry, MockSet, RouterFactory, StoreFactory
from pystoryfix.routing import MemoryRouter
from pystoryfix.stores import TestingStore
from pystoryfix.stories import DecoratedStory

_logger = logging.getLogger(__name__)

OptionsLike = MountOptions | Mapping[str, Any] | None


def _story_router_section(parameters: Mapping[str, Any]) -> Mapping[str, Any] | None:
    section = parameters.get("router")
    if section is None or section is False:
        return None
    if isinstance(section, Mapping):
        return section
    # ``router: True`` asks for a router with the suite routes only.
    return {}


class _MountPipeline:
    def __init__(
        self,
        engine: MountEngine,
        *,
        config: FixtureConfig | None = None,
        environment: MountEnvironment | None = None,
        augmenter: HandleAugmenter | None = None,
        mock_router: bool = False,
        router_config: Mapping[str, Any] | None = None,
        store_config: StoreConfig | Mapping[str, Any] | None = None,
        router_factory: RouterFactory = MemoryRouter,
        store_factory: StoreFactory = TestingStore,
    ) -> None:
        self.engine = engine
        self.config = config or FixtureConfig()
        self.environment = environment if environment is not None else default_environment
        self.mock_router = mock_router
        self.router_config = dict(router_config or {})
        self.store_config = store_config
        self._router_factory = router_factory
        self._store_factory = store_factory
        (augmenter or default_augmenter).install(engine)

    def _build_mocks(self, call: MountOptions, story_router: Mapping[str, Any] | None) -> MockSet:
        registry = MockRegistry(
            self.config,
            router_factory=self._router_factory,
            store_factory=self._store_factory,
        )
        if call.router is not None:
            registry.use_router(call.router)
        elif self.mock_router or story_router is not None:
            registry.register_router(self.router_config, story_config=story_router)
        registry.register_store(call.store if call.store is not None else self.store_config)
        return registry.mocks

    def _engine_options(self, call: MountOptions, props: dict[str, Any], mocks: MockSet) -> dict[str, Any]:
        environment = self.environment.copy()
        if call.extend is not None:
            call.extend(environment)

        env_global = environment.as_global()
        plugins = [*env_global.pop("plugins"), *call.plugins, *mocks.plugins]
        global_section = merge(
            env_global,
            {"stubs": mocks.stubs},
            {
                "stubs": call.stubs,
                "mocks": call.mocks,
                "directives": call.directives,
                "components": call.components,
            },
        )
        global_section["plugins"] = plugins

        passthrough = call.passthrough()
        options = merge({"props": props, "global": global_section}, passthrough)
        extra_plugins = (passthrough.get("global") or {}).get("plugins")
        if extra_plugins:
            options["global"]["plugins"] = [*plugins, *extra_plugins]
        return options

    def _invoke(self, operation: str, renderable: Any, options: dict[str, Any], mocks: MockSet) -> Any:
        _logger.debug("%s %s with %s", operation, type(self).__name__, summarize_for_log(options))
        result = getattr(self.engine, operation)(renderable, options)
        if operation != "render":
            result.router = mocks.router
            result.store = mocks.store
        return result


class StoryFixture(_MountPipeline):
    """A decorated story bound to a mount engine."""

    def __init__(self, story: DecoratedStory, engine: MountEngine, **kwargs: Any) -> None:
        super().__init__(engine, **kwargs)
        self.story = story

    def prepare(self, options: OptionsLike = None, **overrides: Any) -> tuple[Any, dict[str, Any], MockSet]:
        """Run the merge and mock stages without mounting."""
        call = MountOptions.coerce(options, **overrides)
        props = merge(self.story.args, call.props)
        mocks = self._build_mocks(call, _story_router_section(self.story.parameters))
        renderable = self.story.materialize(props)
        return renderable, self._engine_options(call, props, mocks), mocks

    def _run(self, operation: str, options: OptionsLike, overrides: dict[str, Any]) -> Any:
        renderable, engine_options, mocks = self.prepare(options, **overrides)
        return self._invoke(operation, renderable, engine_options, mocks)

    def mount(self, options: OptionsLike = None, **overrides: Any) -> Any:
        return self._run("mount", options, overrides)

    def shallow_mount(self, options: OptionsLike = None, **overrides: Any) -> Any:
        return self._run("shallow_mount", options, overrides)

    def render(self, options: OptionsLike = None, **overrides: Any) -> Any:
        return self._run("render", options, overrides)


class ComponentFixture(_MountPipeline):
    """A bare component with baseline props, outside the story merge."""

    def __init__(self, component: Any, engine: MountEngine, *, props: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        super().__init__(engine, **kwargs)
        self.component = component
        self.props = dict(props or {})

    def _run(self, operation: str, options: OptionsLike, overrides: dict[str, Any]) -> Any:
        call = MountOptions.coerce(options, **overrides)
        props = merge(self.props, call.props)
        mocks = self._build_mocks(call, None)
        return self._invoke(operation, self.component, self._engine_options(call, props, mocks), mocks)

    def mount(self, options: OptionsLike = None, **overrides: Any) -> Any:
        return self._run("mount", options, overrides)

    def shallow_mount(self, options: OptionsLike = None, **overrides: Any) -> Any:
        return self._run("shallow_mount", options, overrides)

    def render(self, options: OptionsLike = None, **overrides: Any) -> Any:
        return self._run("render", options, overrides)


def mount_component(engine: MountEngine, component: Any, options: OptionsLike = None, **kwargs: Any) -> Any:
    """Mount *component* with generated options (environment, router and store mocks)."""
    return ComponentFixture(component, engine, **kwargs).mount(options)


def shallow_mount_component(engine: MountEngine, component: Any, options: OptionsLike = None, **kwargs: Any) -> Any:
    return ComponentFixture(component, engine, **kwargs).shallow_mount(options)


def render_component(engine: MountEngine, component: Any, options: OptionsLike = None, **kwargs: Any) -> Any:
    return ComponentFixture(component, engine, **kwargs).render(options)
