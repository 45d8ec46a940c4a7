"""Router configuration records."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from pystoryfix.models._base import FixtureModel


class RouteSpec(FixtureModel):
    """One entry of a router's route table."""

    model_config = ConfigDict(extra="allow", frozen=True)

    path: str
    component: Any = None
    name: str | None = None
    children: list[RouteSpec] = Field(default_factory=list)

    @field_validator("path")
    @classmethod
    def _require_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("route path must be non-empty")
        return value


class RouterConfig(FixtureModel):
    """Effective configuration of a mocked router.

    Unknown keys are kept so router factories other than the bundled
    :class:`~pystoryfix.routing.MemoryRouter` can receive their own options.
    """

    model_config = ConfigDict(extra="allow")

    history: str = "history"
    base: str = "/"
    link_active_class: str = "nuxt-link-active"
    link_exact_active_class: str = "nuxt-link-exact-active"
    routes: list[RouteSpec] = Field(default_factory=list)
