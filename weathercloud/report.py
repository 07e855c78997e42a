# ABOUTME: Assembly of a full weather report from the values, last-update and profile endpoints.
# ABOUTME: Fetches the three payloads concurrently, validates them, and merges in the derived indicators.

import asyncio
import math
import re
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from weathercloud.deps import WeathercloudDeps
from weathercloud.derive import derive
from weathercloud.errors import FetchFailed, InvalidData, InvalidId
from weathercloud.models import DerivedIndicators, ProfileInfo, RawSample, UpdateInfo, Weather, WeatherReport
from weathercloud.transport import fetch_data, has_field

RESERVED_ID = re.compile(r"\d{10}")


def validate_station_id(station_id: str) -> str:
    """Reject empty station ids and ids made of exactly ten digits."""
    if not station_id or RESERVED_ID.fullmatch(station_id):
        raise InvalidId(f"Invalid station id: {station_id!r}")
    return station_id


async def build_weather_report(deps: WeathercloudDeps, station_id: str) -> WeatherReport:
    """Fetch and assemble the current weather report of a station.

    Raises InvalidId, FetchFailed or InvalidData; no partial report is ever returned.
    """
    validate_station_id(station_id)

    tasks = [
        asyncio.ensure_future(fetch)
        for fetch in (
            fetch_data(deps.http_client, deps.session, deps.url("/device/values"), params={"code": station_id}),
            fetch_data(deps.http_client, deps.session, deps.url("/device/ajaxupdatedate"), data={"d": station_id}),
            fetch_data(deps.http_client, deps.session, deps.url("/device/ajaxprofile"), data={"d": station_id}),
        )
    ]
    try:
        values, last_update, profile = await asyncio.gather(*tasks)
    except BaseException:
        # The first failure aborts the report; stop the fetches still in flight.
        for task in tasks:
            task.cancel()
        raise

    if not (has_field(values, "temp") and has_field(last_update, "update") and has_field(profile, "observer")):
        raise FetchFailed(f"Incomplete data for station {station_id}")

    try:
        sample = RawSample.model_validate(values)
    except ValidationError as e:
        raise InvalidData(f"Invalid readings for station {station_id}: {e}") from e

    return assemble_report(sample, derive(sample), last_update, profile)


def assemble_report(
    sample: RawSample,
    derived: DerivedIndicators,
    last_update: dict[str, Any],
    profile: dict[str, Any],
) -> WeatherReport:
    """Merge a sample, its derived indicators and the update/profile payloads into a report.

    The sample epoch moves from the weather section to update.update_time.
    """
    try:
        weather = Weather.model_validate(
            {**sample.model_dump(exclude={"epoch"}), **derived.model_dump(by_alias=True)}
        )
    except ValidationError as e:
        raise InvalidData(f"Invalid derived indicators: {e}") from e

    sampled_at = datetime.fromtimestamp(sample.epoch)
    try:
        update = UpdateInfo.model_validate(
            {
                **last_update,
                "time": f"{sampled_at.hour}:{sampled_at.minute}:{sampled_at.second}",
                "lastUpdateMinutes": minutes_since(last_update["update"]),
                "updateTime": sample.epoch,
            }
        )
        profile_info = ProfileInfo.model_validate(profile)
    except (ValueError, TypeError) as e:
        raise FetchFailed(f"Malformed update or profile data: {e}") from e

    return WeatherReport(weather=weather, update=update, profile=profile_info)


def minutes_since(seconds: float) -> int:
    """Age in whole minutes, halves rounded up."""
    return math.floor(float(seconds) / 60 + 0.5)
