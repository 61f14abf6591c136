"""Data models for the dashboard panels."""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar


T = TypeVar("T")


class ErrorKind(Enum):
    """Why a panel load or a location request failed."""

    UNAVAILABLE = "unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    LOCATION_UNAVAILABLE = "location_unavailable"


class PanelStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            try:
                number = float(value)
            except OverflowError as e:
                raise ValueError(f"{name} is out of range") from e
            if not math.isfinite(number):
                raise ValueError(f"{name} must be finite, got {value!r}")
            object.__setattr__(self, name, number)


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions at a location."""

    temperature: float  # deg C
    apparent_temperature: float  # deg C
    relative_humidity: float  # %
    wind_speed: float  # km/h
    coordinates: Coordinates
    retrieved_at: datetime


@dataclass(frozen=True)
class PriceQuote:
    """Spot price for one asset."""

    asset_id: str
    price: float
    currency: str
    change_24h: float | None  # percent, None when the provider has no figure

    @property
    def change_known(self) -> bool:
        return self.change_24h is not None


@dataclass(frozen=True)
class Repository:
    """Single entry of a user's repository list."""

    name: str
    stars: int
    updated_at: datetime
    url: str


@dataclass(frozen=True)
class RepositorySummary:
    """Most recently updated repositories for a user, in server order."""

    handle: str
    repositories: tuple[Repository, ...]

    MAX_ENTRIES = 5

    @property
    def is_empty(self) -> bool:
        return not self.repositories

    def __len__(self) -> int:
        return len(self.repositories)

    def __iter__(self):
        return iter(self.repositories)


@dataclass(frozen=True)
class PanelState(Generic[T]):
    """
    Status of one panel.

    Exactly one of ``data`` (READY) or ``error`` (FAILED) is set; LOADING and
    IDLE carry neither.
    """

    status: PanelStatus
    data: T | None = None
    error: ErrorKind | None = None

    @classmethod
    def idle(cls) -> "PanelState[T]":
        return cls(PanelStatus.IDLE)

    @classmethod
    def loading(cls) -> "PanelState[T]":
        return cls(PanelStatus.LOADING)

    @classmethod
    def ready(cls, data: T) -> "PanelState[T]":
        return cls(PanelStatus.READY, data=data)

    @classmethod
    def failed(cls, error: ErrorKind) -> "PanelState[T]":
        return cls(PanelStatus.FAILED, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status is PanelStatus.LOADING

    @property
    def is_ready(self) -> bool:
        return self.status is PanelStatus.READY

    @property
    def is_failed(self) -> bool:
        return self.status is PanelStatus.FAILED

    @property
    def is_terminal(self) -> bool:
        return self.status in (PanelStatus.READY, PanelStatus.FAILED)
