"""feedsnap - aggregate company news feeds and scraped listings into one snapshot."""

__version__ = "0.3.0"
