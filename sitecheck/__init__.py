"""sitecheck - same-origin crawler that reports broken links."""

__version__ = "0.1.0"
