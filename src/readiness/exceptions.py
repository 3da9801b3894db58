"""Errors raised by the readiness analysis."""


class ReadinessError(Exception):
    """Base class for analysis errors."""


class InvalidUrlError(ReadinessError):
    """The subject URL cannot be parsed. Aborts the analysis."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url!r}")


class EmptyContentError(ReadinessError):
    """The scraper returned no HTML. Aborts the analysis."""


class FetchError(ReadinessError):
    """A file-check fetch failed at the network level."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class FetchTimeoutError(FetchError):
    """A file-check fetch did not answer within its timeout."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"no response within {timeout}s")
