"""Testing-store configuration record."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import Field

from pystoryfix.models._base import FixtureModel


class StoreConfig(FixtureModel):
    """Configuration of a mocked state store.

    ``stub_actions=None`` defers to :attr:`FixtureConfig.stub_store_actions`.
    ``create_spy=None`` uses :class:`unittest.mock.MagicMock`.
    """

    initial_state: dict[str, Any] = Field(default_factory=dict)
    actions: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    stub_actions: bool | None = None
    stub_patch: bool = False
    create_spy: Callable[..., Any] | None = None
