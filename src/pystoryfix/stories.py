"""Story definitions and their merged ("decorated") form.

A story is either a render function carrying ``args`` / ``argTypes`` /
``parameters`` attributes, or a record (mapping, :class:`Story`, or any
object) exposing a ``render`` function next to the same fields. Both are
resolved once, at suite-build time, into an immutable
:class:`DecoratedStory`.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pystoryfix.exceptions import StoryConfigError
from pystoryfix.merge import merge

_logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"

RenderFn = Callable[[dict[str, Any], dict[str, Any]], Any]

# Field name -> accepted spellings, first match wins.
_FIELD_SPELLINGS: dict[str, tuple[str, ...]] = {
    "args": ("args",),
    "arg_types": ("arg_types", "argTypes"),
    "parameters": ("parameters",),
    "render": ("render",),
    "component": ("component",),
    "name": ("name", "story_name", "storyName"),
}


@dataclass(frozen=True)
class Story:
    """Record form of a story."""

    render: RenderFn | None = None
    args: dict[str, Any] = field(default_factory=dict)
    arg_types: dict[str, Any] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)
    name: str | None = None
    component: Any = None


def story(
    *,
    args: Mapping[str, Any] | None = None,
    arg_types: Mapping[str, Any] | None = None,
    parameters: Mapping[str, Any] | None = None,
    name: str | None = None,
) -> Callable[[RenderFn], RenderFn]:
    """Attach story metadata to a render function."""

    def decorator(render: RenderFn) -> RenderFn:
        render.args = dict(args or {})  # type: ignore[attr-defined]
        render.arg_types = dict(arg_types or {})  # type: ignore[attr-defined]
        render.parameters = dict(parameters or {})  # type: ignore[attr-defined]
        if name is not None:
            render.story_name = name  # type: ignore[attr-defined]
        return render

    return decorator


def story_field(entry: Any, name: str, default: Any = None) -> Any:
    """Read a story field from a mapping, record or function attribute."""
    for spelling in _FIELD_SPELLINGS.get(name, (name,)):
        if isinstance(entry, Mapping):
            if spelling in entry:
                return entry[spelling]
        elif hasattr(entry, spelling):
            return getattr(entry, spelling)
    return default


def _is_record(entry: Any) -> bool:
    return isinstance(entry, (Mapping, Story)) or not callable(entry)


@dataclass(frozen=True)
class DecoratedStory:
    """A story with its render function resolved and suite defaults merged in."""

    name: str
    render: RenderFn
    args: dict[str, Any]
    arg_types: dict[str, Any]
    parameters: dict[str, Any]
    source: Any = field(repr=False, compare=False, default=None)

    def render_context(self, args: Mapping[str, Any]) -> dict[str, Any]:
        arg_types = merge(self.arg_types, args)
        return {"arg_types": arg_types, "argTypes": arg_types, "name": self.name}

    def materialize(self, args: Mapping[str, Any]) -> Any:
        """Produce the renderable description for *args*."""
        return self.render(dict(args), self.render_context(args))


def resolve_render(name: str, entry: Any, default: Any = None) -> RenderFn:
    """Pick the render function of *entry*.

    Callable stories render themselves; records use their own ``render``
    and fall back to the default entry's ``render``.
    """
    if not _is_record(entry):
        return entry
    render = story_field(entry, "render")
    if render is None and default is not None:
        render = story_field(default, "render")
    if render is None:
        raise StoryConfigError(
            f"Story {name!r} has no render function and the suite default declares none",
            story=name,
        )
    if not callable(render):
        raise StoryConfigError(f"Story {name!r} render is not callable: {render!r}", story=name)
    return render


_decorated: dict[tuple[int, int, str], tuple[Any, Any, DecoratedStory]] = {}


def decorate(default: Any, entry: Any, *, name: str = "") -> DecoratedStory:
    """Merge the suite *default* into *entry*, memoized per (default, entry, name).

    Repeated builds of the same suite reuse the cached value, so defaults
    are applied exactly once. The story object itself is left untouched.
    """
    key = (id(default), id(entry), name)
    cached = _decorated.get(key)
    # Identity is only meaningful while both objects are alive; holding
    # them in the cache guarantees ids are not recycled.
    if cached is not None and cached[0] is default and cached[1] is entry:
        return cached[2]

    label = name or story_field(entry, "name") or getattr(entry, "__name__", "") or "story"
    decorated = DecoratedStory(
        name=label,
        render=resolve_render(label, entry, default),
        args=merge(story_field(default, "args"), story_field(entry, "args")),
        arg_types=merge(story_field(default, "arg_types"), story_field(entry, "arg_types")),
        parameters=merge(story_field(default, "parameters"), story_field(entry, "parameters")),
        source=entry,
    )
    _decorated[key] = (default, entry, decorated)
    _logger.debug("Decorated story %s with args %s", label, sorted(decorated.args))
    return decorated


def clear_decorations() -> None:
    """Drop every memoized decoration."""
    _decorated.clear()


def _looks_like_story(value: Any) -> bool:
    if isinstance(value, Story):
        return True
    return callable(value) and not isinstance(value, type) and hasattr(value, "args")


def suite_entries(suite: Any) -> tuple[Any, dict[str, Any]]:
    """Split *suite* into its default entry and named story entries.

    *suite* is a mapping with a ``default`` key, or a module whose
    ``default`` attribute is the baseline.
    """
    if isinstance(suite, Mapping):
        entries = dict(suite)
    elif isinstance(suite, types.ModuleType):
        names = getattr(suite, "__all__", None)
        if names is None:
            names = [n for n, v in vars(suite).items() if not n.startswith("_") and _looks_like_story(v)]
        entries = {n: getattr(suite, n) for n in names}
        if hasattr(suite, DEFAULT_KEY):
            entries[DEFAULT_KEY] = getattr(suite, DEFAULT_KEY)
    else:
        raise StoryConfigError(f"Suite must be a mapping or module, got {type(suite).__name__}")

    if DEFAULT_KEY not in entries:
        raise StoryConfigError("Suite has no 'default' entry")
    default = entries.pop(DEFAULT_KEY)
    return default, entries

