"""Deterministic merge of layered fixture configuration.

Every layer of a fixture (suite defaults, story overrides, call-site
overrides) is combined through :func:`merge`. Semantics:

* mappings merge recursively, later sources winning per key
* sequences (``list``/``tuple``) are taken verbatim from the later source,
  never concatenated or merged element-wise
* ``None`` means "no override": it never replaces an earlier value
* any other value is opaque and the later source wins

Inputs are never mutated. Result containers are fresh objects, while leaf
values (components, callables, renderables) are shared by reference.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

ROUTES_KEY = "routes"


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _copy_value(value: Any) -> Any:
    if is_mapping(value):
        return {key: _copy_value(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return tuple(_copy_value(item) for item in value)
    if isinstance(value, list):
        return [_copy_value(item) for item in value]
    return value


def _merge_value(base: Any, override: Any) -> Any:
    if override is None:
        return base
    if is_sequence(override):
        return _copy_value(override)
    if is_mapping(base) and is_mapping(override):
        merged = dict(base)
        _merge_into(merged, override)
        return merged
    return _copy_value(override)


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if key in target:
            target[key] = _merge_value(target[key], value)
        else:
            target[key] = _copy_value(value)


def merge(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge *sources* left to right into a new dict.

    Missing (``None``) and non-mapping sources count as empty mappings.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if not is_mapping(source):
            continue
        _merge_into(merged, source)
    return merged


def merge_routes(
    story_router: Mapping[str, Any] | None,
    suite_router: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Combine a story's router section with the suite-level router config.

    Story fields override suite fields, except ``routes``: the story's
    route list is appended to the suite's, so suite routes stay reachable
    from every story.
    """
    story_router = story_router or {}
    suite_router = suite_router or {}

    merged = merge(
        {k: v for k, v in suite_router.items() if k != ROUTES_KEY},
        {k: v for k, v in story_router.items() if k != ROUTES_KEY},
    )
    merged[ROUTES_KEY] = [
        *_copy_value(list(suite_router.get(ROUTES_KEY) or [])),
        *_copy_value(list(story_router.get(ROUTES_KEY) or [])),
    ]
    return merged
