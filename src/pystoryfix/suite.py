"""Turn a story suite into a set of mount functions."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pystoryfix.augment import HandleAugmenter
from pystoryfix.config import FixtureConfig
from pystoryfix.engine import MountEngine
from pystoryfix.environment import MountEnvironment
from pystoryfix.exceptions import StoryConfigError
from pystoryfix.fixture import ComponentFixture, OptionsLike, StoryFixture
from pystoryfix.merge import merge
from pystoryfix.models.store import StoreConfig
from pystoryfix.registry import RouterFactory, StoreFactory
from pystoryfix.routing import MemoryRouter
from pystoryfix.stores import TestingStore
from pystoryfix.stories import DecoratedStory, decorate, story_field, suite_entries

_logger = logging.getLogger(__name__)

RESERVED_NAMES = frozenset({"utils", "component"})


class StoryMountFn:
    """Mount function for one story.

    Calling it mounts; ``shallow_mount`` stubs child components and
    ``render`` produces markup only. All three share one merge pipeline.
    """

    def __init__(self, fixture: StoryFixture) -> None:
        self.fixture = fixture

    @property
    def story(self) -> DecoratedStory:
        return self.fixture.story

    def __call__(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.mount(options, **overrides)

    def mount(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.mount(options, **overrides)

    def shallow_mount(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.shallow_mount(options, **overrides)

    def render(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.render(options, **overrides)

    def __repr__(self) -> str:
        return f"StoryMountFn({self.story.name!r})"


class ComponentMountFn:
    """Mount function for the suite's base component with the default args as props."""

    def __init__(self, fixture: ComponentFixture) -> None:
        self.fixture = fixture

    def __call__(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.mount(options, **overrides)

    def mount(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.mount(options, **overrides)

    def shallow_mount(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.shallow_mount(options, **overrides)

    def render(self, options: OptionsLike = None, /, **overrides: Any) -> Any:
        return self.fixture.render(options, **overrides)


@dataclass(frozen=True)
class SuiteUtils:
    """Direct access to the suite's baseline outside the story pipeline."""

    component: Any
    default_export: Any
    args: dict[str, Any]
    parameters: dict[str, Any]


class SuiteFixtures(Mapping[str, Any]):
    """Story mount functions keyed by story name, plus ``utils`` and ``component``.

    Entries are reachable by key (``fixtures["primary"]``) or attribute
    (``fixtures.primary``).
    """

    def __init__(self, stories: dict[str, StoryMountFn], component: ComponentMountFn, utils: SuiteUtils) -> None:
        self._stories = stories
        self.component = component
        self.utils = utils

    def __getitem__(self, name: str) -> Any:
        if name == "component":
            return self.component
        if name == "utils":
            return self.utils
        return self._stories[name]

    def __iter__(self) -> Iterator[str]:
        yield from self._stories
        yield "component"
        yield "utils"

    def __len__(self) -> int:
        return len(self._stories) + 2

    def __getattr__(self, name: str) -> StoryMountFn:
        stories = self.__dict__.get("_stories", {})
        if name in stories:
            return stories[name]
        raise AttributeError(name)


class SuiteFixtureSet:
    """Builds :class:`SuiteFixtures` for story suites.

    Usage::

        fixtures = SuiteFixtureSet(engine).mock_router({"routes": [...]}).build(button_stories)
        handle = fixtures.primary(props={"label": "Save"})
    """

    def __init__(
        self,
        engine: MountEngine,
        *,
        config: FixtureConfig | None = None,
        environment: MountEnvironment | None = None,
        augmenter: HandleAugmenter | None = None,
        router_factory: RouterFactory = MemoryRouter,
        store_factory: StoreFactory = TestingStore,
    ) -> None:
        self.engine = engine
        self.config = config or FixtureConfig()
        self.environment = environment
        self.augmenter = augmenter
        self.router_factory = router_factory
        self.store_factory = store_factory
        self.should_mock_router = False
        self.router_config: dict[str, Any] = {}
        self.store_config: StoreConfig | Mapping[str, Any] | None = None

    def mock_router(self, config: Mapping[str, Any] | None = None) -> SuiteFixtureSet:
        """Mock routing for every story of the suite."""
        self.should_mock_router = True
        if config is not None:
            self.router_config = merge(self.router_config, config)
        return self

    def set_router_config(self, config: Mapping[str, Any]) -> SuiteFixtureSet:
        self.router_config = dict(config)
        return self

    def mock_store(self, config: StoreConfig | Mapping[str, Any] | None = None) -> SuiteFixtureSet:
        """Give every mount of the suite a testing store."""
        self.store_config = config if config is not None else StoreConfig()
        return self

    def _pipeline_kwargs(self) -> dict[str, Any]:
        return {
            "config": self.config,
            "environment": self.environment,
            "augmenter": self.augmenter,
            "mock_router": self.should_mock_router,
            "router_config": self.router_config,
            "store_config": self.store_config,
            "router_factory": self.router_factory,
            "store_factory": self.store_factory,
        }

    def build(self, suite: Any) -> SuiteFixtures:
        """Create mount functions for every story in *suite*.

        Raises
        ------
        StoryConfigError
            A story has no render function, or uses a reserved name.
        """
        default, entries = suite_entries(suite)
        kwargs = self._pipeline_kwargs()

        stories: dict[str, StoryMountFn] = {}
        for name, entry in entries.items():
            if name in RESERVED_NAMES:
                raise StoryConfigError(f"Story name {name!r} is reserved", story=name)
            decorated = decorate(default, entry, name=name)
            stories[name] = StoryMountFn(StoryFixture(decorated, self.engine, **kwargs))

        args = merge(story_field(default, "args"))
        component = ComponentMountFn(
            ComponentFixture(story_field(default, "component"), self.engine, props=args, **kwargs)
        )
        utils = SuiteUtils(
            component=story_field(default, "component"),
            default_export=default,
            args=args,
            parameters=merge(story_field(default, "parameters")),
        )
        _logger.debug("Built suite fixtures: %s", sorted(stories))
        return SuiteFixtures(stories, component, utils)


def generate_suite(suite: Any, engine: MountEngine, **kwargs: Any) -> SuiteFixtures:
    """Build fixtures for *suite* with no suite-wide mocks."""
    return SuiteFixtureSet(engine, **kwargs).build(suite)
