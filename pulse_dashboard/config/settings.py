"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
from pathlib import Path
import os

from dotenv import load_dotenv


load_dotenv()


# Coins offered in the selectors (CoinGecko ids)
COIN_CHOICES: dict[str, str] = {
    "bitcoin": "Bitcoin",
    "ethereum": "Ethereum",
    "solana": "Solana",
    "cardano": "Cardano",
    "dogecoin": "Dogecoin",
    "litecoin": "Litecoin",
}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    return float(value) if value else default


def _env_optional_float(name: str) -> float | None:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings."""

    weather_base_url: str = field(
        default_factory=lambda: os.getenv("WEATHER_BASE_URL", "https://api.open-meteo.com/v1")
    )
    price_base_url: str = field(
        default_factory=lambda: os.getenv("PRICE_BASE_URL", "https://api.coingecko.com/api/v3")
    )
    github_base_url: str = field(
        default_factory=lambda: os.getenv("GITHUB_BASE_URL", "https://api.github.com")
    )
    github_token: str = field(default_factory=lambda: os.getenv("GITHUB_TOKEN", ""))
    geoip_url: str = field(
        default_factory=lambda: os.getenv("GEOIP_URL", "https://ipapi.co/json/")
    )
    display_currency: str = field(
        default_factory=lambda: os.getenv("DISPLAY_CURRENCY", "usd").lower()
    )
    default_coin: str = field(default_factory=lambda: os.getenv("DEFAULT_COIN", "bitcoin"))
    default_handle: str = field(
        default_factory=lambda: os.getenv("DEFAULT_GITHUB_USER", "octocat")
    )
    request_timeout: float = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT", 10.0))
    # Position requests give up after 8s, accepting a previous fix up to 10 minutes old
    location_timeout: float = field(default_factory=lambda: _env_float("LOCATION_TIMEOUT", 8.0))
    location_max_age: float = field(default_factory=lambda: _env_float("LOCATION_MAX_AGE", 600.0))
    location_high_accuracy: bool = field(
        default_factory=lambda: _env_bool("LOCATION_HIGH_ACCURACY", False)
    )
    location_consent: bool = field(default_factory=lambda: _env_bool("LOCATION_CONSENT", True))
    fixed_latitude: float | None = field(
        default_factory=lambda: _env_optional_float("DASHBOARD_LATITUDE")
    )
    fixed_longitude: float | None = field(
        default_factory=lambda: _env_optional_float("DASHBOARD_LONGITUDE")
    )
    cache_dir: Path = field(
        default_factory=lambda: Path(__file__).parent.parent.parent / "cache"
    )
    db_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "dashboard.db"

    def validate(self) -> None:
        """Validate required settings."""
        if not self.default_coin.strip():
            raise ValueError("DEFAULT_COIN must not be blank")
        if not self.default_handle.strip():
            raise ValueError("DEFAULT_GITHUB_USER must not be blank")
        if self.request_timeout <= 0 or self.location_timeout <= 0:
            raise ValueError("Timeouts must be positive")
        if (self.fixed_latitude is None) != (self.fixed_longitude is None):
            raise ValueError(
                "DASHBOARD_LATITUDE and DASHBOARD_LONGITUDE must be set together"
            )

    def has_fixed_location(self) -> bool:
        """Check if coordinates are pinned in configuration."""
        return self.fixed_latitude is not None and self.fixed_longitude is not None

    def has_github_token(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)
