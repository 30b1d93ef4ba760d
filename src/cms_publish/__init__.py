"""Git publishing for static CMS content."""

__version__ = "0.1.0"
