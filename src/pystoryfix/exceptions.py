"""Custom exception hierarchy for pystoryfix."""

from __future__ import annotations


class StoryFixError(Exception):
    """Base exception for all pystoryfix errors."""


class StoryConfigError(StoryFixError):
    """A suite or story definition cannot be turned into a fixture.

    Raised at suite-build time, never at mount time, so a broken story
    fails the test module that declares it instead of being silently
    merged away.
    """

    def __init__(self, message: str, *, story: str = "") -> None:
        self.story = story
        super().__init__(message)


class AugmentationError(StoryFixError):
    """The mount engine offers no surface the handle extensions can attach to."""


class TestIdLookupError(StoryFixError):
    """A test-id lookup matched zero or several candidates.

    Lookups report this as a :class:`~pystoryfix.augment.LookupFailure`
    value; the exception only surfaces through ``LookupFailure.unwrap()``.
    """

    __test__ = False

    def __init__(self, message: str, *, test_id: str = "", matches: int = 0) -> None:
        self.test_id = test_id
        self.matches = matches
        super().__init__(message)
