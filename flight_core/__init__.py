"""Route planning around restricted airspace and vehicle motion simulation."""

__version__ = "0.1.0"
