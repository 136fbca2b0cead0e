"""Site ratings backend: star ratings, summaries and contact email."""

__version__ = "0.1.0"
