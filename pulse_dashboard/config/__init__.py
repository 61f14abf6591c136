"""Configuration."""

from .settings import Settings, COIN_CHOICES

__all__ = ["Settings", "COIN_CHOICES"]
