"""Data models for Blog Prerender."""

from dataclasses import dataclass

from .errors import TemplateError

START_MARKER = "<!-- BLOG_STATIC_START -->"
END_MARKER = "<!-- BLOG_STATIC_END -->"


@dataclass(frozen=True)
class FeedItem:
    """Represents a single post extracted from the feed."""

    title: str
    link: str
    excerpt: str  # Max 180 chars, always followed by "..."
    published_date: str


@dataclass(frozen=True)
class PageDocument:
    """Static page split around the replaceable region.

    ``prefix`` ends with the start marker and ``suffix`` begins with the
    end marker, so ``prefix + body + suffix`` is the original text.
    """

    prefix: str
    body: str
    suffix: str

    @classmethod
    def from_text(cls, text: str) -> "PageDocument":
        """Split page text on the static markers.

        Raises:
            TemplateError: If either marker is missing or out of order
        """
        start = text.find(START_MARKER)
        end = text.find(END_MARKER)
        if start == -1 or end == -1:
            raise TemplateError("Static markers not found in page")

        body_start = start + len(START_MARKER)
        if end < body_start:
            raise TemplateError("End marker appears before start marker")

        return cls(
            prefix=text[:body_start],
            body=text[body_start:end],
            suffix=text[end:],
        )

    @property
    def text(self) -> str:
        return self.prefix + self.body + self.suffix
