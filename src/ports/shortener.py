from typing import Protocol


class ShortenerError(Exception):
    """Raised when a link shortening request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ShortenerPort(Protocol):
    def shorten(self, long_url: str, domain: str, title: str | None = None) -> str:
        """
        Return a short URL for long_url on the given short domain.
        Raises ShortenerError on failure.
        """
        ...
