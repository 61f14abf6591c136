"""Weather, crypto price and repository dashboard."""

__version__ = "0.1.0"
