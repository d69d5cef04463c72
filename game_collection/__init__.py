"""Personal video game collection: catalog, profile, progress tracking and persistence."""

__version__ = "0.1.0"
