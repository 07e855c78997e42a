# ABOUTME: Public query operations of the Weathercloud client, one per remote capability.
# ABOUTME: Each operation is an error boundary that returns a QueryError value instead of raising.

import logging
from typing import Any, Literal

import httpx

from weathercloud.deps import WeathercloudDeps
from weathercloud.devices import normalize
from weathercloud.errors import ErrorKind, FetchFailed, PeriodRequired, SessionRequired, WeathercloudError
from weathercloud.models import DeviceSummary, OwnDevices, QueryError, StationStatusEntry, Statistics, WeatherReport
from weathercloud.report import build_weather_report, validate_station_id
from weathercloud.transport import AJAX_HEADERS, fetch_data, has_field

logger = logging.getLogger(__name__)

TopKind = Literal["newest", "followers", "popular"]

# Key each ranking is sorted on.
TOP_SORT_KEYS = {"newest": "age", "followers": "followers", "popular": "views"}


async def fetch_weather(deps: WeathercloudDeps, station_id: str) -> WeatherReport | QueryError:
    """Current weather of a station, with derived indicators, last update and profile."""
    try:
        return await build_weather_report(deps, station_id)
    except Exception as e:
        return _query_error("fetch_weather", e)


async def get_station_status(deps: WeathercloudDeps, station_id: str) -> list[StationStatusEntry | Any] | QueryError:
    """Status history of a station. Requires a logged-in session.

    Only the first entry must carry a date; later entries are passed through as sent.
    """
    try:
        _require_session(deps)
        validate_station_id(station_id)
        data = await fetch_data(
            deps.http_client, deps.session, deps.url("/device/ajaxdevicestats"), data={"device": station_id}
        )
        if not isinstance(data, list) or not data or not has_field(data[0], "date"):
            raise FetchFailed(f"No status for station {station_id}")
        return [StationStatusEntry.model_validate(entry) if isinstance(entry, dict) else entry for entry in data]
    except Exception as e:
        return _query_error("get_station_status", e)


async def get_statistics(deps: WeathercloudDeps, station_id: str) -> Statistics | QueryError:
    try:
        validate_station_id(station_id)
        data = await fetch_data(deps.http_client, deps.session, deps.url("/device/stats"), data={"code": station_id})
        if not has_field(data, "temp_current"):
            raise FetchFailed(f"No statistics for station {station_id}")
        return Statistics.model_validate(data)
    except Exception as e:
        return _query_error("get_statistics", e)


async def get_nearest(
    deps: WeathercloudDeps,
    latitude: float | str,
    longitude: float | str,
    radius: float | str,
) -> list[DeviceSummary] | list[QueryError]:
    """Stations within radius of a point, nearest first.

    Failures come back as a single-element list so the result is always a list.
    """
    try:
        url = deps.url(f"/page/coordinates/latitude/{latitude}/longitude/{longitude}/distance/{radius}")
        data = await fetch_data(deps.http_client, deps.session, url)
        return normalize(_devices(data, "devices"), "distance")
    except Exception as e:
        return [_query_error("get_nearest", e)]


async def get_top(
    deps: WeathercloudDeps,
    kind: TopKind,
    country: str,
    period: str | None = None,
) -> list[DeviceSummary] | QueryError:
    """Station ranking of a country: newest, most followed, or most viewed over a period."""
    try:
        if kind == "popular" and not period:
            raise PeriodRequired("Period required for popular ranking")
        path = f"/page/{kind}/country/{country}"
        if kind == "popular":
            path += f"/period/{period}"
        logger.debug("Fetching ranking %s", path)
        data = await fetch_data(deps.http_client, deps.session, deps.url(path))
        return normalize(_devices(data, "devices"), TOP_SORT_KEYS.get(kind, kind))
    except Exception as e:
        return _query_error("get_top", e)


async def get_own(deps: WeathercloudDeps) -> OwnDevices | QueryError:
    """Devices and favorites of the logged-in account, in the order the service lists them."""
    try:
        _require_session(deps)
        data = await fetch_data(deps.http_client, deps.session, deps.url("/page/own"))
        if not (has_field(data, "devices") and has_field(data, "favorites")):
            raise FetchFailed("No own devices")
        return OwnDevices(devices=normalize(data["devices"]), favorites=normalize(data["favorites"]))
    except Exception as e:
        return _query_error("get_own", e)


async def login(deps: WeathercloudDeps, mail: str, password: str, remember: bool = False) -> bool:
    """Sign in and replace the session cookies with the ones the service hands out.

    With remember=True the credentials are kept in the session and, when a credential
    store is configured, the session is saved to it.
    """
    form = {
        "LoginForm[entity]": mail,
        "LoginForm[password]": password,
        "LoginForm[rememberMe]": "1",
    }
    try:
        resp = await deps.http_client.post(
            deps.url("/signin"), data=form, headers=AJAX_HEADERS, follow_redirects=False
        )
        if resp.status_code != 302:
            logger.info("Login rejected for %s (HTTP %s)", mail, resp.status_code)
            return False

        if remember:
            stored = deps.session.set_cookies(resp.headers.get_list("set-cookie"), mail, password)
        else:
            stored = deps.session.set_cookies(resp.headers.get_list("set-cookie"))
        if not stored:
            logger.warning("Login for %s returned no session cookie", mail)
            return False
    except Exception:
        logger.exception("Login failed for %s", mail)
        return False

    logger.info("Logged in as %s", mail)
    if remember and deps.store is not None:
        try:
            deps.session.save(deps.store)
        except OSError:
            logger.warning("Could not persist session for %s", mail, exc_info=True)
    return True


def logout(deps: WeathercloudDeps) -> None:
    """Forget the session locally, including any persisted copy."""
    deps.session.clear()
    deps.http_client.cookies.clear()
    if deps.store is not None:
        try:
            deps.store.clear()
        except OSError:
            logger.warning("Could not remove persisted session", exc_info=True)


def _require_session(deps: WeathercloudDeps) -> None:
    if not deps.session.cookies:
        raise SessionRequired("Session required")


def _devices(data: Any, key: str) -> list:
    if not has_field(data, key) or not isinstance(data[key], list):
        raise FetchFailed(f"No {key} list in response")
    return data[key]


def _query_error(operation: str, exc: Exception) -> QueryError:
    """Convert an exception caught at an operation boundary into a QueryError."""
    if isinstance(exc, WeathercloudError):
        kind = exc.kind
    elif isinstance(exc, httpx.HTTPError):
        kind = ErrorKind.TRANSPORT
    elif isinstance(exc, ValueError):
        # Undecodable JSON or a payload that does not fit its record
        kind = ErrorKind.FETCH_FAILED
    else:
        logger.exception("%s failed unexpectedly", operation)
        return QueryError(error=ErrorKind.UNEXPECTED, message=str(exc))

    logger.warning("%s failed (%s): %s", operation, kind.value, exc)
    return QueryError(error=kind, message=str(exc))
