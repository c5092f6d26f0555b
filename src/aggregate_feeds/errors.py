"""Error types for the aggregate_feeds pipeline.

Each error carries the stage label written to the remote error log.
"""


class AggregatorError(Exception):
    """Base class for pipeline errors."""

    stage = "Aggregator error"

    def __init__(self, detail: str, cause: BaseException | str | None = None):
        self.detail = detail
        self.cause = cause
        message = f"{detail}: {cause}" if cause is not None else detail
        super().__init__(message)


class FetchError(AggregatorError):
    """A feed could not be downloaded."""

    stage = "Get RSS error"

    def __init__(self, url: str, cause: BaseException | str):
        self.url = url
        super().__init__(url, cause)


class ParseError(AggregatorError):
    """A feed body is not a recognizable RSS/Atom document."""

    stage = "Parse RSS error"

    def __init__(self, url: str, cause: BaseException | str):
        self.url = url
        super().__init__(url, cause)


class TimestampError(AggregatorError):
    """Neither the published nor the updated date of an entry parses."""

    stage = "Getting article time error"


class DomainError(AggregatorError):
    """The feed's site link has no usable host."""

    stage = "Extract domain error"


class FeedListError(AggregatorError):
    """The list of feed URLs could not be read."""

    stage = "Read RSS feeds error"


class PublishError(AggregatorError):
    """The aggregate could not be written to the store."""

    stage = "Save data error"

    def __init__(self, detail: str, cause: BaseException | str | None = None, backend: str | None = None):
        if backend:
            self.stage = f"Save data to {backend} error"
        self.backend = backend
        super().__init__(detail, cause)


class LogAppendError(AggregatorError):
    """The error log itself could not be written."""

    stage = "Append log error"
