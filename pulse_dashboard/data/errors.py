"""Errors raised by the data layer."""

from pulse_dashboard.models import ErrorKind


class DashboardError(Exception):
    """Base error; ``kind`` is what a panel records when it absorbs it."""

    kind: ErrorKind = ErrorKind.UNAVAILABLE


class ProviderUnavailableError(DashboardError):
    """Provider could not be reached or answered with a non-success status."""

    kind = ErrorKind.UNAVAILABLE


class MalformedResponseError(DashboardError):
    """Provider answered, but the body does not have the expected shape."""

    kind = ErrorKind.MALFORMED_RESPONSE


class LocationUnavailableError(DashboardError):
    """No position: capability missing, permission denied or timed out."""

    kind = ErrorKind.LOCATION_UNAVAILABLE
