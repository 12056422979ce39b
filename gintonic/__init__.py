"""URL path cleaning, response renderers, a response writer, run mode, logging and recovery helpers."""

__version__ = "0.1.0"