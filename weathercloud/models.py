# ABOUTME: Pydantic BaseModels for Weathercloud payloads, derived indicators, and query results.
# ABOUTME: Records built from remote payloads keep unknown fields so nothing the service sends is lost.

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from weathercloud.errors import ErrorKind

_PAYLOAD = ConfigDict(extra="allow", frozen=True, populate_by_name=True)


class _Readings(BaseModel):
    """Instantaneous sensor readings shared by the raw sample and the report's weather section."""

    model_config = _PAYLOAD

    temp: float
    dew: float
    bar: float = Field(ge=0)
    hum: float = Field(ge=0, le=100)
    rainrate: float = Field(ge=0)
    wspd: float


class RawSample(_Readings):
    """Payload of the device values endpoint."""

    epoch: int


class DerivedIndicators(BaseModel):
    """Values computed from a RawSample. A clouds_height of -1 means it could not be computed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    clouds_height: float = Field(alias="cloudsHeight")
    weather_avg: str = Field(alias="weatherAvg")
    feel: float


class Weather(_Readings):
    """Weather section of a report: readings without the epoch, plus derived indicators."""

    clouds_height: float = Field(alias="cloudsHeight", ge=0)
    weather_avg: str = Field(alias="weatherAvg")
    feel: float


class UpdateInfo(BaseModel):
    """Last-update payload with the sample time relocated from the weather section."""

    model_config = _PAYLOAD

    update: float
    time: str
    last_update_minutes: int = Field(alias="lastUpdateMinutes")
    update_time: int = Field(alias="updateTime")


class ProfileInfo(BaseModel):
    """Station profile, passed through as sent."""

    model_config = _PAYLOAD

    observer: Any


class WeatherReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    weather: Weather
    update: UpdateInfo
    profile: ProfileInfo


class DeviceSummary(BaseModel):
    """One station from a device list, annotated with the key the list was sorted on."""

    model_config = ConfigDict(extra="allow")

    sort_key: str | None = None
    sort_value: Any = None


class OwnDevices(BaseModel):
    devices: list[DeviceSummary] = []
    favorites: list[DeviceSummary] = []


class StationStatusEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    date: Any = None


class Statistics(BaseModel):
    model_config = ConfigDict(extra="allow")

    temp_current: Any


class Credentials(BaseModel):
    mail: str
    password: str


class QueryError(BaseModel):
    """Failure value returned by the public operations instead of raising."""

    error: ErrorKind
    message: str = ""
