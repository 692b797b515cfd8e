"""HTML and structured-data rendering for Blog Prerender."""

import json
from typing import Any

from jinja2 import Template

from .config import MAX_SCHEMA_ITEMS
from .logging_config import create_execution_logger
from .models import FeedItem, PageDocument

HEAD_CLOSE = "</head>"

# Values go in verbatim: feed text is already escaped and CDATA titles may carry markup
POSTS_TMPL = Template(
    """
                <div class="blog-grid">
{% for post in items %}
                    <div class="blog-post" onclick="window.open('{{ post.link }}', '_blank')">
                        <h3>{{ post.title }}</h3>
                        <p>{{ post.excerpt }}</p>
                        <div class="blog-meta">
                            <span class="blog-date">{{ post.published_date }}</span>
                            <a href="{{ post.link }}" class="read-more" target="_blank">Read More →</a>
                        </div>
                    </div>
{% endfor %}
                </div>
            """,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_posts_html(items: list[FeedItem]) -> str:
    """Render items as a grid of clickable post cards."""
    return POSTS_TMPL.render(items=items)


def build_item_list(items: list[FeedItem]) -> dict[str, Any]:
    """Build a schema.org ItemList with 1-based positions."""
    return {
        "@context": "https://schema.org",
        "@type": "ItemList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "url": item.link,
                "name": item.title,
            }
            for position, item in enumerate(items, start=1)
        ],
    }


def render_schema_tag(items: list[FeedItem], limit: int = MAX_SCHEMA_ITEMS) -> str:
    """Serialize the first ``limit`` items as a JSON-LD script tag."""
    item_list = build_item_list(items[:limit])
    payload = json.dumps(item_list, ensure_ascii=False, separators=(",", ":"))
    return f'<script type="application/ld+json">{payload}</script>'


class PageRenderer:
    """Splices rendered posts and structured data into a page."""

    def __init__(self, execution_id: str | None = None):
        self.logger = create_execution_logger("renderer", execution_id)

    def render(self, page: PageDocument, items: list[FeedItem]) -> str:
        """Render items and return the updated page text."""
        posts_html = render_posts_html(items)
        schema_tag = render_schema_tag(items)
        self.logger.info(
            f"Rendered {len(items)} posts",
            items_count=len(items),
        )
        return self.splice_page(page, posts_html, schema_tag)

    def splice_page(self, page: PageDocument, posts_html: str, schema_tag: str) -> str:
        """Replace the marked region and add the schema before ``</head>``.

        Only the first ``</head>`` after the end marker is considered.
        """
        suffix = page.suffix
        if HEAD_CLOSE in suffix:
            suffix = suffix.replace(HEAD_CLOSE, f"{schema_tag}\n{HEAD_CLOSE}", 1)
        else:
            self.logger.warning(
                "No </head> after end marker, structured data not inserted"
            )

        return f"{page.prefix}\n{posts_html}\n{suffix}"
