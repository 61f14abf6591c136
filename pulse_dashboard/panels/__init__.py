"""Dashboard panels and their completion policies."""

from .base import LastCompletionWins, LatestIssueWins, Panel, PanelView
from .sources import PricePanel, RepositoryPanel, WeatherPanel

__all__ = [
    "LastCompletionWins",
    "LatestIssueWins",
    "Panel",
    "PanelView",
    "PricePanel",
    "RepositoryPanel",
    "WeatherPanel",
]
