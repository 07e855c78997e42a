# ABOUTME: Async client for Weathercloud personal weather stations.
# ABOUTME: Re-exports the public operations, the context they run in, and the result records.

__version__ = "0.1.0"

from weathercloud.deps import WeathercloudDeps, create_deps, create_http_client  # noqa: E402
from weathercloud.errors import ErrorKind  # noqa: E402
from weathercloud.models import (  # noqa: E402
    DeviceSummary,
    OwnDevices,
    QueryError,
    StationStatusEntry,
    Statistics,
    WeatherReport,
)
from weathercloud.service import (  # noqa: E402
    fetch_weather,
    get_nearest,
    get_own,
    get_station_status,
    get_statistics,
    get_top,
    login,
    logout,
)
from weathercloud.session import JsonCredentialStore, Session  # noqa: E402

__all__ = [
    "DeviceSummary",
    "ErrorKind",
    "JsonCredentialStore",
    "OwnDevices",
    "QueryError",
    "Session",
    "StationStatusEntry",
    "Statistics",
    "WeatherReport",
    "WeathercloudDeps",
    "create_deps",
    "create_http_client",
    "fetch_weather",
    "get_nearest",
    "get_own",
    "get_station_status",
    "get_statistics",
    "get_top",
    "login",
    "logout",
]
