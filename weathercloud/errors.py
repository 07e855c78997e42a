# ABOUTME: Error vocabulary for the Weathercloud client.
# ABOUTME: Internal steps raise these; the public operations turn them into QueryError values.

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure a public operation can report."""

    INVALID_ID = "invalid_id"
    FETCH_FAILED = "fetch_failed"
    INVALID_DATA = "invalid_data"
    SESSION_REQUIRED = "session_required"
    PERIOD_REQUIRED = "period_required"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"


class WeathercloudError(Exception):
    """Base class for failures raised inside the client."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class InvalidId(WeathercloudError):
    """Station id is empty or uses the reserved 10-digit form."""

    kind = ErrorKind.INVALID_ID


class FetchFailed(WeathercloudError):
    """An endpoint did not return the data it is expected to return."""

    kind = ErrorKind.FETCH_FAILED


class InvalidData(WeathercloudError):
    """Sensor readings are physically impossible."""

    kind = ErrorKind.INVALID_DATA


class SessionRequired(WeathercloudError):
    kind = ErrorKind.SESSION_REQUIRED


class PeriodRequired(WeathercloudError):
    kind = ErrorKind.PERIOD_REQUIRED
