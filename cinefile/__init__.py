"""
Cinefile movie discovery and rating package.

This package contains the local record store, the favorites and ratings
repositories, the authentication session container, the TMDB client and
the REST API built on top of them.
"""

__version__ = "1.0.0"
