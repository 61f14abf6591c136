"""Display formatting shared by the front ends."""

from datetime import datetime, timezone

from pulse_dashboard.models import ErrorKind


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNAVAILABLE: "Service unavailable, try again later",
    ErrorKind.MALFORMED_RESPONSE: "Unexpected response from the service",
    ErrorKind.LOCATION_UNAVAILABLE: "Location unavailable",
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "usd": "$",
    "eur": "€",
    "gbp": "£",
    "jpy": "¥",
}


class DisplayFormatter:
    """Formats panel values for display."""

    def __init__(self, currency: str = "usd") -> None:
        self.currency = currency.lower()

    def price(self, value: float) -> str:
        symbol = CURRENCY_SYMBOLS.get(self.currency)
        decimals = 2 if value >= 1 else 6
        if symbol:
            return f"{symbol}{value:,.{decimals}f}"
        return f"{value:,.{decimals}f} {self.currency.upper()}"

    def change(self, value: float | None) -> str:
        """Signed 24h change; unknown is shown as n/a, never as 0."""
        if value is None:
            return "n/a"
        return f"{value:+.2f}%"

    def temperature(self, value: float) -> str:
        return f"{value:.1f}°C"

    def humidity(self, value: float) -> str:
        return f"{value:.0f}%"

    def wind(self, value: float) -> str:
        return f"{value:.1f} km/h"

    def stars(self, value: int) -> str:
        if value >= 1000:
            return f"{value / 1000:.1f}k"
        return str(value)

    def timestamp(self, value: datetime, now: datetime | None = None) -> str:
        """Relative age for recent times, date otherwise."""
        now = now or datetime.now(timezone.utc)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)

        seconds = (now - value).total_seconds()
        if seconds < 60:
            return "just now"
        if seconds < 3600:
            return f"{int(seconds // 60)}m ago"
        if seconds < 86400:
            return f"{int(seconds // 3600)}h ago"
        if seconds < 86400 * 30:
            return f"{int(seconds // 86400)}d ago"
        return value.strftime("%Y-%m-%d")

    def error(self, kind: ErrorKind) -> str:
        return ERROR_MESSAGES.get(kind, "Something went wrong")
