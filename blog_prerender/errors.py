"""Errors raised by the blog prerender pipeline."""


class PrerenderError(Exception):
    """Base class for fatal pipeline errors."""

    pass


class FetchError(PrerenderError):
    """Raised when the feed cannot be downloaded."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class TemplateError(PrerenderError):
    """Raised when the page is missing its static markers."""

    pass


class FilesystemError(PrerenderError):
    """Raised when the page cannot be read or written."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
