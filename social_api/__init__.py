# social_api/__init__.py
"""Fetch public tweets from the syndication endpoint and render them as JSON, HTML or SVG."""

__version__ = "1.0.0"
