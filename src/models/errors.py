# src/models/errors.py

"""Exception types raised by the feed build pipeline."""


class ConfigError(Exception):
    """Configuration is missing or malformed; the whole run aborts."""


class FeedProcessingError(Exception):
    """A single feed could not be fetched or parsed.

    Raised per feed and caught by the build runner, so other feeds in the
    same run are still produced.
    """

    def __init__(self, message: str, slug: str = "") -> None:
        super().__init__(message)
        self.slug = slug

    @property
    def detail(self) -> str:
        """The message without the slug prefix."""
        return super().__str__()

    def __str__(self) -> str:
        return f"[{self.slug}] {self.detail}" if self.slug else self.detail


class FetchError(FeedProcessingError):
    """Non-2xx response or network failure for a feed source."""

    def __init__(
        self,
        message: str,
        slug: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, slug)
        self.status_code = status_code


class ParseError(FeedProcessingError):
    """Feed markup is unparsable or structurally unexpected."""
