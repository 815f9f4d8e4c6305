"""Open TortoiseSVN log views from viewsvn:// links."""

__version__ = "0.1.0"
