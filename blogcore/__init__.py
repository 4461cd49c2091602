"""Content-query core for a localized blog: posts, categories, slugs and navigation."""

__version__ = "0.1.0"
