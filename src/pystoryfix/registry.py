"""Optional collaborator mocks for a single fixture invocation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pystoryfix._redact import summarize_for_log
from pystoryfix.config import FixtureConfig
from pystoryfix.engine import Router
from pystoryfix.merge import merge, merge_routes
from pystoryfix.models.routing import RouterConfig
from pystoryfix.models.store import StoreConfig
from pystoryfix.routing import MemoryRouter
from pystoryfix.stores import TestingStore

_logger = logging.getLogger(__name__)

RouterFactory = Callable[[RouterConfig], Any]
StoreFactory = Callable[..., Any]


def _kebab(name: str) -> str:
    out: list[str] = []
    for index, char in enumerate(name):
        if char.isupper() and index:
            out.append("-")
        out.append(char.lower())
    return "".join(out)


@dataclass
class MockSet:
    """Collaborators active for one mount. Never shared between mounts."""

    router: Any = None
    store: Any = None
    plugins: list[Any] = field(default_factory=list)
    stubs: dict[str, Any] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return self.router is None and self.store is None


class MockRegistry:
    """Builds router and store mocks into a fresh :class:`MockSet`.

    Create one registry per mount; ``register_*`` calls without
    configuration are no-ops.
    """

    def __init__(
        self,
        config: FixtureConfig | None = None,
        *,
        router_factory: RouterFactory = MemoryRouter,
        store_factory: StoreFactory = TestingStore,
    ) -> None:
        self._config = config or FixtureConfig()
        self._router_factory = router_factory
        self._store_factory = store_factory
        self.mocks = MockSet()

    def register_router(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        story_config: Mapping[str, Any] | None = None,
    ) -> Any:
        """Build (or extend) the router for this mount.

        *config* is the suite-level router configuration, *story_config*
        the story's ``parameters.router`` section. Story routes are
        appended to suite routes. A second call in the same mount adds
        the new routes to the existing router instead of replacing it.
        """
        if config is None and story_config is None:
            return self.mocks.router

        combined = merge_routes(story_config, config)

        if self.mocks.router is not None:
            self.mocks.router.add_routes(combined["routes"])
            return self.mocks.router

        router_config = RouterConfig.model_validate(merge(self._config.router_defaults(), combined))
        _logger.debug("Building router mock: %s", summarize_for_log(router_config.to_options()))
        router = self._router_factory(router_config)

        self.mocks.router = router
        self.mocks.plugins.append(router)
        for alias in self._config.router_link_aliases:
            self.mocks.stubs[alias] = {"name": _kebab(alias), "extends": "RouterLink"}
        return router

    def register_store(self, config: StoreConfig | Mapping[str, Any] | None = None) -> Any:
        """Build the testing store for this mount."""
        if config is None:
            return self.mocks.store
        if self.mocks.store is not None:
            return self.mocks.store

        if not isinstance(config, StoreConfig):
            config = StoreConfig.model_validate(dict(config))
        _logger.debug("Building store mock with actions %s", sorted(config.actions))
        store = self._store_factory(config, stub_actions=self._config.stub_store_actions)

        self.mocks.store = store
        self.mocks.plugins.append(store)
        return store

    def use_router(self, router: Router) -> Router:
        """Install a caller-supplied router instead of building a mock."""
        self.mocks.router = router
        self.mocks.plugins.append(router)
        return router
