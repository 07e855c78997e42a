# ABOUTME: Derivation of secondary indicators from an instantaneous station sample.
# ABOUTME: Computes cloud-base height, a qualitative condition label, and the perceived temperature.

import math

from weathercloud.models import DerivedIndicators, RawSample

CLOUDS_HEIGHT_FACTOR = 124.69  # metres per degree of temperature/dew-point spread
CLOUDS_HEIGHT_UNKNOWN = -1
EXTREME_COLD = -40

BAR_THRESHOLDS = ((1005, "cloud"), (1010, "change"), (1015, "few"))
FOG_HEIGHT = 150
RAINRATE_THRESHOLDS = ((2, "light"), (15, "moderate"))

CHILL_BELOW = 10
HEAT_ABOVE = 26


def clouds_height(temp: float, dew: float) -> float:
    """Estimate cloud-base height in metres, or CLOUDS_HEIGHT_UNKNOWN below the extreme-cold cutoff."""
    if temp > EXTREME_COLD and dew > EXTREME_COLD:
        return max(0, CLOUDS_HEIGHT_FACTOR * (temp - dew))
    return CLOUDS_HEIGHT_UNKNOWN


def condition(bar: float, rainrate: float, height: float) -> str:
    """Guess the current condition label from pressure, rain rate and cloud-base height.

    Without rain the label comes from pressure thresholds, with a "-fog" suffix when the
    cloud base is low. With rain the label only reflects its intensity.
    """
    if rainrate == 0:
        label = "clear"
        for threshold, name in BAR_THRESHOLDS:
            if bar < threshold:
                label = name
                break
        if height < FOG_HEIGHT:
            label += "-fog"
        return label

    for threshold, name in RAINRATE_THRESHOLDS:
        if rainrate < threshold:
            return name
    return "heavy"


def wind_chill(temp: float, wspd: float) -> float:
    """Wind chill in Celsius for an air temperature in Celsius and a wind speed in m/s."""
    kmh = wspd * 3.6
    if kmh < 4.8:
        return temp
    factor = kmh**0.16
    return 13.12 + 0.6215 * temp - 11.37 * factor + 0.3965 * temp * factor


def heat_index(temp: float, hum: float) -> float:
    """NWS heat index in Celsius for an air temperature in Celsius and relative humidity in %."""
    f = temp * 9 / 5 + 32
    simple = 0.5 * (f + 61.0 + (f - 68.0) * 1.2 + hum * 0.094)
    if (simple + f) / 2 < 80:
        return (simple - 32) * 5 / 9

    hi = (
        -42.379
        + 2.04901523 * f
        + 10.14333127 * hum
        - 0.22475541 * f * hum
        - 0.00683783 * f * f
        - 0.05481717 * hum * hum
        + 0.00122874 * f * f * hum
        + 0.00085282 * f * hum * hum
        - 0.00000199 * f * f * hum * hum
    )
    if hum < 13 and 80 <= f <= 112:
        hi -= ((13 - hum) / 4) * math.sqrt((17 - abs(f - 95)) / 17)
    elif hum > 85 and 80 <= f <= 87:
        hi += ((hum - 85) / 10) * ((87 - f) / 5)
    return (hi - 32) * 5 / 9


def feel(temp: float, wspd: float, hum: float) -> float:
    """Perceived temperature: wind chill when cold, heat index when hot, the air temperature otherwise."""
    if temp < CHILL_BELOW:
        return wind_chill(temp, wspd)
    if temp > HEAT_ABOVE:
        return heat_index(temp, hum)
    return temp


def derive(sample: RawSample) -> DerivedIndicators:
    height = clouds_height(sample.temp, sample.dew)
    return DerivedIndicators(
        clouds_height=height,
        weather_avg=condition(sample.bar, sample.rainrate, height),
        feel=feel(sample.temp, sample.wspd, sample.hum),
    )
