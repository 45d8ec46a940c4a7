from __future__ import annotations

from typing import Any

import pytest

from pystoryfix.augment import HandleAugmenter
from pystoryfix.environment import MountEnvironment
from pystoryfix.exceptions import StoryConfigError
from pystoryfix.routing import MemoryRouter
from pystoryfix.stores import TestingStore
from pystoryfix.stories import Story, story
from pystoryfix.suite import ComponentMountFn, StoryMountFn, SuiteFixtureSet, SuiteUtils, generate_suite


def _suite(button: Any) -> dict[str, Any]:
    def render(args: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        return {"component": button, "props": args, "arg_types": context["arg_types"]}

    @story(args={"size": "lg"})
    def primary(args: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        return render(args, context)

    @story(parameters={"router": {"routes": [{"path": "/pay"}]}})
    def checkout(args: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        return render(args, context)

    return {
        "default": {
            "component": button,
            "args": {"color": "red"},
            "parameters": {"layout": "centered"},
            "render": render,
        },
        "primary": primary,
        "checkout": checkout,
        "outlined": {"args": {"variant": "outlined"}},
    }


@pytest.fixture
def fixtures_set(engine: Any, augmenter: HandleAugmenter, environment: MountEnvironment) -> SuiteFixtureSet:
    return SuiteFixtureSet(engine, augmenter=augmenter, environment=environment)


def test_call_props_override_story_and_default_args(
    fixtures_set: SuiteFixtureSet, engine: Any, button: Any
) -> None:
    fixtures = fixtures_set.build(_suite(button))

    handle = fixtures.primary(props={"color": "blue"})

    assert handle.props == {"color": "blue", "size": "lg"}
    assert handle.renderable["props"] == {"color": "blue", "size": "lg"}
    assert engine.calls[-1][0] == "mount"


def test_build_exposes_every_story_plus_utils_and_component(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    suite = _suite(button)
    fixtures = fixtures_set.build(suite)

    assert sorted(fixtures) == ["checkout", "component", "outlined", "primary", "utils"]
    assert isinstance(fixtures["primary"], StoryMountFn)
    assert isinstance(fixtures.component, ComponentMountFn)
    assert fixtures.utils == SuiteUtils(
        component=button,
        default_export=suite["default"],
        args={"color": "red"},
        parameters={"layout": "centered"},
    )
    with pytest.raises(AttributeError):
        fixtures.missing  # noqa: B018


def test_record_story_uses_default_render(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    fixtures = fixtures_set.build(_suite(button))

    handle = fixtures.outlined()

    assert handle.props == {"color": "red", "variant": "outlined"}
    assert handle.renderable["component"] is button


def test_variants_share_the_merge_pipeline(fixtures_set: SuiteFixtureSet, engine: Any, button: Any) -> None:
    fixtures = fixtures_set.build(_suite(button))

    shallow = fixtures.primary.shallow_mount(props={"color": "green"})
    markup = fixtures.primary.render({"props": {"color": "green"}})

    assert [call[0] for call in engine.calls] == ["shallow_mount", "render"]
    assert shallow.props == {"color": "green", "size": "lg"}
    assert engine.calls[-1][2]["props"] == {"color": "green", "size": "lg"}
    assert markup == "<markup props=['color', 'size']>"


def test_suite_wide_router_appends_story_routes(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    fixtures = fixtures_set.mock_router({"routes": [{"path": "/"}]}).build(_suite(button))

    checkout = fixtures.checkout()
    primary = fixtures.primary()

    assert isinstance(checkout.router, MemoryRouter)
    assert checkout.router.route_paths == ["/", "/pay"]
    assert primary.router.route_paths == ["/"]
    assert checkout.router is not primary.router


def test_router_is_a_plugin_of_the_mount(fixtures_set: SuiteFixtureSet, engine: Any, button: Any) -> None:
    fixtures = fixtures_set.mock_router().build(_suite(button))

    handle = fixtures.primary()

    global_options = engine.last_options["global"]
    assert global_options["plugins"] == [handle.router]
    assert global_options["stubs"]["NuxtLink"] == {"name": "nuxt-link", "extends": "RouterLink"}


def test_no_router_without_mocking(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    fixtures = fixtures_set.build(_suite(button))

    assert fixtures.primary().router is None


def test_story_router_parameters_activate_router_without_suite_toggle(
    fixtures_set: SuiteFixtureSet, button: Any
) -> None:
    fixtures = fixtures_set.build(_suite(button))

    handle = fixtures.checkout()

    assert handle.router.route_paths == ["/pay"]


def test_call_supplied_router_bypasses_mocking(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    fixtures = fixtures_set.mock_router({"routes": [{"path": "/"}]}).build(_suite(button))
    router = MemoryRouter({"routes": [{"path": "/own"}]})

    handle = fixtures.checkout(router=router)

    assert handle.router is router
    assert router.route_paths == ["/own"]


def test_mounts_do_not_leak_configuration(fixtures_set: SuiteFixtureSet, engine: Any, button: Any) -> None:
    fixtures = fixtures_set.mock_router().build(_suite(button))

    first = fixtures.primary(props={"color": "blue"}, stubs={"Icon": True})
    second = fixtures.primary()

    assert second.props == {"color": "red", "size": "lg"}
    assert "Icon" not in engine.calls[-1][2]["global"]["stubs"]
    assert first.router is not second.router
    assert fixtures.primary.story.args == {"color": "red", "size": "lg"}


def test_rebuilding_suite_reuses_decoration(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    suite = _suite(button)

    first = fixtures_set.build(suite)
    second = fixtures_set.build(suite)

    assert first.primary.story is second.primary.story
    assert second.primary().props == {"color": "red", "size": "lg"}
    assert not hasattr(suite["primary"], "parameters") or suite["primary"].parameters == {}


def test_store_mocking_suite_wide_and_per_call(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    fixtures = fixtures_set.build(_suite(button))
    assert fixtures.primary().store is None

    per_call = fixtures.primary(store={"initial_state": {"cart": []}})
    assert isinstance(per_call.store, TestingStore)
    assert per_call.store.state == {"cart": []}

    fixtures = fixtures_set.mock_store({"initial_state": {"user": "ada"}}).build(_suite(button))
    first, second = fixtures.primary(), fixtures.primary()
    assert first.store.state == {"user": "ada"}
    assert first.store is not second.store


def test_passthrough_options_reach_the_engine(fixtures_set: SuiteFixtureSet, engine: Any, button: Any) -> None:
    plugin = object()
    fixtures = fixtures_set.build(_suite(button))

    fixtures.primary({"attach_to": "#app", "global": {"provide": {"theme": "dark"}, "plugins": [plugin]}})

    options = engine.last_options
    assert options["attach_to"] == "#app"
    assert options["global"]["provide"] == {"theme": "dark"}
    assert options["global"]["plugins"] == [plugin]


def test_environment_and_extend_layers(
    fixtures_set: SuiteFixtureSet, engine: Any, environment: MountEnvironment, button: Any
) -> None:
    environment.set_stubs({"Icon": {"template": "<i/>"}})
    environment.setup_plugins(["i18n"])
    fixtures = fixtures_set.build(_suite(button))

    def extend(local: MountEnvironment) -> None:
        local.mock_components({"Tooltip": True})

    fixtures.primary(extend=extend, stubs={"Icon": True}, plugins=["pinia"])
    options = engine.last_options["global"]

    assert options["stubs"]["Icon"] is True
    assert options["components"] == {"Tooltip": {}}
    assert options["plugins"] == ["i18n", "pinia"]
    assert environment.components == {}


def test_component_entry_mounts_base_component(fixtures_set: SuiteFixtureSet, engine: Any, button: Any) -> None:
    fixtures = fixtures_set.build(_suite(button))

    handle = fixtures.component(props={"size": "sm"})
    fixtures.component.render()

    assert handle.renderable is button
    assert handle.props == {"color": "red", "size": "sm"}
    assert [call[0] for call in engine.calls] == ["mount", "render"]


def test_reserved_story_names_are_rejected(fixtures_set: SuiteFixtureSet) -> None:
    with pytest.raises(StoryConfigError):
        fixtures_set.build({"default": {}, "utils": Story(render=lambda a, c: None)})


def test_story_named_stories_is_reachable_as_attribute(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    suite = {"default": {"component": button}, "stories": Story(render=lambda args, context: {"name": context["name"]})}

    fixtures = fixtures_set.build(suite)

    assert isinstance(fixtures.stories, StoryMountFn)
    assert fixtures.stories is fixtures["stories"]
    assert list(fixtures) == ["stories", "component", "utils"]


def test_shared_story_object_keeps_each_suite_name(fixtures_set: SuiteFixtureSet, button: Any) -> None:
    shared = Story(render=lambda args, context: {"name": context["name"]})

    fixtures = fixtures_set.build({"default": {"component": button}, "first": shared, "second": shared})

    assert fixtures.first.story.name == "first"
    assert fixtures.second.story.name == "second"
    assert fixtures.second().renderable == {"name": "second"}
    assert repr(fixtures.second) == "StoryMountFn('second')"


def test_misconfigured_story_fails_at_build_time(fixtures_set: SuiteFixtureSet, engine: Any) -> None:
    with pytest.raises(StoryConfigError):
        fixtures_set.build({"default": {"component": "X"}, "broken": {"args": {}}})
    assert engine.calls == []


def test_handles_are_augmented(fixtures_set: SuiteFixtureSet, button: Any, node: Any) -> None:
    suite = {
        "default": {"component": button},
        "form": Story(render=lambda args, ctx: node("form", {"data-testid": "form"})),
    }

    handle = fixtures_set.build(suite).form()

    assert handle.find_by_test_id("form").tag == "form"


def test_generate_suite_shortcut(engine: Any, button: Any) -> None:
    fixtures = generate_suite(_suite(button), engine, environment=MountEnvironment())

    assert fixtures.primary().props == {"color": "red", "size": "lg"}
