"""Route map service: geocode two places and frame a straight-line route."""

__version__ = "1.0.0"
