"""Per-locale field translations overlaid on Django model instances."""

__version__ = "0.1.0"
