"""reelcache - offline-first movie catalog core."""

__version__ = "0.1.0"
