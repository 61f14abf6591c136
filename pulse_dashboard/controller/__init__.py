"""Refresh orchestration and location acquisition."""

from .location import LocationAcquirer
from .refresh import DashboardController, DashboardInputs

__all__ = ["DashboardController", "DashboardInputs", "LocationAcquirer"]
