"""Configuration records for pystoryfix."""

from pystoryfix.models._base import FixtureModel
from pystoryfix.models.options import MountOptions
from pystoryfix.models.routing import RouterConfig, RouteSpec
from pystoryfix.models.store import StoreConfig

__all__ = [
    "FixtureModel",
    "MountOptions",
    "RouteSpec",
    "RouterConfig",
    "StoreConfig",
]
