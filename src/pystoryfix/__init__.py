"""pystoryfix - Turn component story suites into mountable test fixtures."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pystoryfix")
except PackageNotFoundError:
    __version__ = "0+local"
from pystoryfix.augment import (
    HandleAugmenter,
    LookupFailure,
    TestIdMatches,
    find_all_by_test_id,
    find_by_test_id,
    find_component_by_test_id,
    install_once,
)
from pystoryfix.config import FixtureConfig
from pystoryfix.directives import TestIdDirective, test_id_directive
from pystoryfix.engine import FrameScheduler, Handle, HandlePluginHost, MountEngine
from pystoryfix.environment import (
    MountEnvironment,
    default_environment,
    mock_components,
    mock_directives,
    set_mocks,
    set_stubs,
    setup_plugins,
)
from pystoryfix.exceptions import (
    AugmentationError,
    StoryConfigError,
    StoryFixError,
    TestIdLookupError,
)
from pystoryfix.fixture import (
    ComponentFixture,
    StoryFixture,
    mount_component,
    render_component,
    shallow_mount_component,
)
from pystoryfix.frames import LoopFrameScheduler, wait_for_animation_frame
from pystoryfix.merge import merge, merge_routes
from pystoryfix.models import MountOptions, RouterConfig, RouteSpec, StoreConfig
from pystoryfix.registry import MockRegistry, MockSet
from pystoryfix.routing import MemoryRouter, RouteMatch
from pystoryfix.stores import TestingStore
from pystoryfix.stories import DecoratedStory, Story, decorate, story
from pystoryfix.suite import (
    ComponentMountFn,
    StoryMountFn,
    SuiteFixtures,
    SuiteFixtureSet,
    SuiteUtils,
    generate_suite,
)

__all__ = [
    "__version__",
    "AugmentationError",
    "ComponentFixture",
    "ComponentMountFn",
    "DecoratedStory",
    "FixtureConfig",
    "FrameScheduler",
    "Handle",
    "HandlePluginHost",
    "HandleAugmenter",
    "LookupFailure",
    "LoopFrameScheduler",
    "MemoryRouter",
    "MockRegistry",
    "MockSet",
    "MountEngine",
    "MountEnvironment",
    "MountOptions",
    "RouteMatch",
    "RouteSpec",
    "RouterConfig",
    "StoreConfig",
    "Story",
    "StoryConfigError",
    "StoryFixError",
    "StoryFixture",
    "StoryMountFn",
    "SuiteFixtureSet",
    "SuiteFixtures",
    "SuiteUtils",
    "TestIdDirective",
    "TestIdLookupError",
    "TestIdMatches",
    "TestingStore",
    "decorate",
    "default_environment",
    "find_all_by_test_id",
    "find_by_test_id",
    "find_component_by_test_id",
    "generate_suite",
    "install_once",
    "merge",
    "merge_routes",
    "mock_components",
    "mock_directives",
    "mount_component",
    "render_component",
    "set_mocks",
    "set_stubs",
    "setup_plugins",
    "shallow_mount_component",
    "story",
    "test_id_directive",
    "wait_for_animation_frame",
]
