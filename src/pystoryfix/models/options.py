"""Per-call mount options."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ConfigDict, Field

from pystoryfix.models._base import FixtureModel
from pystoryfix.models.store import StoreConfig


class MountOptions(FixtureModel):
    """Options for one mount call.

    Parameters
    ----------
    props : dict
        Prop overrides, merged over the story's args.
    plugins : list
        Extra plugins installed for this mount only.
    stubs, mocks, directives, components : dict
        Merged over the environment's global registrations.
    extend : callable or None
        Receives the per-mount :class:`~pystoryfix.environment.MountEnvironment`
        copy before mounting, to register anything else for this mount only.
    store : StoreConfig or None
        Request a testing store for this mount.
    router : object or None
        A ready router to install instead of building a mock.

    Any other keyword (``attach_to``, ``slots`` ...) is forwarded to the
    mount engine as-is.
    """

    model_config = ConfigDict(extra="allow")

    props: dict[str, Any] = Field(default_factory=dict)
    plugins: list[Any] = Field(default_factory=list)
    stubs: dict[str, Any] = Field(default_factory=dict)
    mocks: dict[str, Any] = Field(default_factory=dict)
    directives: dict[str, Any] = Field(default_factory=dict)
    components: dict[str, Any] = Field(default_factory=dict)
    extend: Callable[[Any], None] | None = None
    store: StoreConfig | None = None
    router: Any = None

    @classmethod
    def coerce(cls, value: MountOptions | Mapping[str, Any] | None = None, **overrides: Any) -> MountOptions:
        """Build options from ``None``, a mapping or an existing instance."""
        if isinstance(value, MountOptions):
            if not overrides:
                return value
            # Raw attributes, so nested models inside props stay the same objects.
            data = {name: getattr(value, name) for name in value.model_fields_set}
            data.update(value.model_extra or {})
        else:
            data = dict(value or {})
        data.update(overrides)
        return cls.model_validate(data)

    def passthrough(self) -> dict[str, Any]:
        """Extra fields forwarded verbatim to the mount engine."""
        return dict(self.model_extra or {})
