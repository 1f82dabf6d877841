"""postboard — authorization-aware content service (posts, comments, likes)."""

__version__ = "1.0.0"
