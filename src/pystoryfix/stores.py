"""Spy-instrumented testing store.

Every action is wrapped in a spy so tests can assert on dispatches
without running the real side effects. Spies are
:class:`unittest.mock.MagicMock` instances unless the store config
supplies another ``create_spy`` factory.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any
from unittest import mock

from pystoryfix.merge import merge
from pystoryfix.models.store import StoreConfig

_logger = logging.getLogger(__name__)


class TestingStore:
    """State container whose mutations are observable spies."""

    __test__ = False

    def __init__(
        self,
        config: StoreConfig | Mapping[str, Any] | None = None,
        *,
        stub_actions: bool = True,
    ) -> None:
        if not isinstance(config, StoreConfig):
            config = StoreConfig.model_validate(dict(config or {}))
        self.config = config
        self.stub_actions = stub_actions if config.stub_actions is None else config.stub_actions
        self._create_spy: Callable[..., Any] = config.create_spy or mock.MagicMock
        self.state: dict[str, Any] = copy.deepcopy(config.initial_state)
        self.actions: dict[str, Any] = {name: self._spy(name, fn) for name, fn in config.actions.items()}
        self.commit = self._create_spy(name="commit")
        self.patch = self._create_spy(name="patch", side_effect=None if config.stub_patch else self._apply_patch)

    def _spy(self, name: str, action: Callable[..., Any]) -> Any:
        if self.stub_actions:
            return self._create_spy(name=name)

        def run(*args: Any, **kwargs: Any) -> Any:
            return action(self, *args, **kwargs)

        return self._create_spy(name=name, side_effect=run)

    def _apply_patch(self, partial: Mapping[str, Any]) -> None:
        self.state = merge(self.state, partial)

    def dispatch(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke the spy for action *name*, creating one for undeclared actions."""
        spy = self.actions.get(name)
        if spy is None:
            spy = self.actions[name] = self._create_spy(name=name)
        return spy(*args, **kwargs)

    def reset(self) -> None:
        """Restore the initial state and clear every recorded call."""
        self.state = copy.deepcopy(self.config.initial_state)
        for spy in (*self.actions.values(), self.commit, self.patch):
            reset = getattr(spy, "reset_mock", None)
            if reset is not None:
                reset()
        _logger.debug("Testing store reset")

    def install(self, target: Any) -> None:
        """Plugin hook: expose the store on the mount target."""
        setattr(target, "store", self)
