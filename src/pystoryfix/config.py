"""Fixture configuration for pystoryfix."""

from __future__ import annotations

import dataclasses
import os
from typing import Any


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class FixtureConfig:
    """Fixture configuration.

    Parameters
    ----------
    test_id_attribute : str
        Attribute that carries the test identifier on rendered nodes.
        Used by the ``find_by_test_id`` family of handle methods and by
        the test-id directive.
    router_history : str
        History mode handed to every mocked router.
    router_base : str
        Base path handed to every mocked router.
    link_active_class : str
        Class applied by router links to active routes.
    link_exact_active_class : str
        Class applied by router links to exactly-active routes.
    router_link_aliases : tuple of str
        Component names stubbed as router links while a router mock is
        active (framework link components that expect a real router).
    stub_store_actions : bool
        Whether testing stores record actions without running them.
    frame_interval : float
        Seconds the asyncio frame scheduler waits before firing a frame.
    """

    test_id_attribute: str = "data-testid"
    router_history: str = "history"
    router_base: str = "/"
    link_active_class: str = "nuxt-link-active"
    link_exact_active_class: str = "nuxt-link-exact-active"
    router_link_aliases: tuple[str, ...] = ("NuxtLink",)
    stub_store_actions: bool = True
    frame_interval: float = 1 / 60

    def router_defaults(self) -> dict[str, Any]:
        """Base layer of every mocked router configuration."""
        return {
            "history": self.router_history,
            "base": self.router_base,
            "link_active_class": self.link_active_class,
            "link_exact_active_class": self.link_exact_active_class,
            "routes": [],
        }

    @classmethod
    def from_env(cls, **overrides: Any) -> FixtureConfig:
        """Create configuration from environment variables.

        Reads optional ``STORYFIX_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        FixtureConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "STORYFIX_TEST_ID_ATTRIBUTE": "test_id_attribute",
            "STORYFIX_ROUTER_HISTORY": "router_history",
            "STORYFIX_ROUTER_BASE": "router_base",
            "STORYFIX_LINK_ACTIVE_CLASS": "link_active_class",
            "STORYFIX_LINK_EXACT_ACTIVE_CLASS": "link_exact_active_class",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        aliases_env = env.get("STORYFIX_ROUTER_LINK_ALIASES")
        if aliases_env is not None and "router_link_aliases" not in overrides:
            config_kwargs["router_link_aliases"] = tuple(
                alias.strip() for alias in aliases_env.split(",") if alias.strip()
            )

        if "stub_store_actions" not in overrides:
            config_kwargs["stub_store_actions"] = _env_bool(env.get("STORYFIX_STUB_STORE_ACTIONS"), True)

        interval_env = env.get("STORYFIX_FRAME_INTERVAL")
        if interval_env is not None and "frame_interval" not in overrides:
            config_kwargs["frame_interval"] = float(interval_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
