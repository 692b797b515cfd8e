"""Pre-render the latest RSS posts into a static blog page."""

__version__ = "1.0.0"
