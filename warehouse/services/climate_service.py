"""
==============================================================================
Climate Service Module
==============================================================================

Warehouse temperature lookup and climate control advice.

This module implements:
- TemperatureService: Reads the current temperature from OpenWeatherMap
- ClimateAdvisor: Maps a reading to a heating/cooling action

Failure Handling:
----------------
The lookup never raises. A missing API key, transport error, non-2xx
status, or a response without ``main.temp`` all produce a reading with
``ok=False``.

==============================================================================
"""

from __future__ import annotations

import enum
import logging
from typing import Optional

import requests
from pydantic import BaseModel, Field

from warehouse.config import Settings, get_settings


# Module logger
logger = logging.getLogger(__name__)


class TemperatureReading(BaseModel):
    """A temperature value and whether it could be read."""

    value: float = Field(default=0.0)
    ok: bool = Field(default=False)

    @classmethod
    def unavailable(cls) -> "TemperatureReading":
        return cls(value=0.0, ok=False)


class ClimateAction(str, enum.Enum):
    """Climate control decision for a reading."""

    COOLING = "cooling"
    HEATING = "heating"
    NONE = "none"
    UNAVAILABLE = "unavailable"

    @property
    def message(self) -> str:
        """Operator message for this action."""
        return {
            ClimateAction.COOLING: (
                "Alert: Excessive heat detected! Activating air conditioning "
                "to maintain optimal product storage conditions."
            ),
            ClimateAction.HEATING: (
                "Alert: Cold temperatures detected! Activating heating "
                "to prevent product damage from freezing."
            ),
            ClimateAction.NONE: (
                "Warehouse temperature is within the optimal range. "
                "No climate control adjustments needed."
            ),
            ClimateAction.UNAVAILABLE: "Warehouse temperature is unavailable.",
        }[self]


class ClimateAdvice(BaseModel):
    """Advice for one reading."""

    reading: TemperatureReading
    action: ClimateAction

    @property
    def message(self) -> str:
        return self.action.message

    def banner(self) -> str:
        """Lines shown at the top of the menu."""
        if not self.reading.ok:
            return self.message
        return (
            f"Warehouse location temperature: {self.reading.value:.2f}°F\n"
            f"{self.message}"
        )


class TemperatureService:
    """
    Current temperature at the warehouse location.

    Attributes:
        _settings: Application settings (API key, location, units, timeout)

    Example:
        >>> service = TemperatureService()
        >>> reading = service.get_reading()
        >>> if reading.ok:
        ...     print(reading.value)
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def get_reading(self) -> TemperatureReading:
        """
        Fetch the current temperature.

        Returns:
            TemperatureReading with ok=False on any failure
        """
        if not self._settings.weather_enabled:
            logger.debug("Weather API key not configured, skipping lookup")
            return TemperatureReading.unavailable()

        try:
            response = requests.get(
                self._settings.weather_api_url,
                params={
                    "q": self._settings.weather_location,
                    "appid": self._settings.weather_api_key,
                    "units": self._settings.weather_units,
                },
                headers={"Accept": "application/json"},
                timeout=self._settings.weather_timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Temperature lookup failed: {e}")
            return TemperatureReading.unavailable()
        except ValueError as e:
            logger.warning(f"Temperature response is not JSON: {e}")
            return TemperatureReading.unavailable()

        try:
            value = float(payload["main"]["temp"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Temperature response has no main.temp field")
            return TemperatureReading.unavailable()

        logger.debug(f"Temperature at {self._settings.weather_location}: {value}")
        return TemperatureReading(value=value, ok=True)


class ClimateAdvisor:
    """
    Heating/cooling decision from configured thresholds.

    Example:
        >>> advisor = ClimateAdvisor()
        >>> advisor.advise(TemperatureReading(value=105.0, ok=True)).action
        <ClimateAction.COOLING: 'cooling'>
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        self._hot_threshold = settings.hot_threshold
        self._cold_threshold = settings.cold_threshold

    def advise(self, reading: TemperatureReading) -> ClimateAdvice:
        """Map a reading to an action."""
        if not reading.ok:
            action = ClimateAction.UNAVAILABLE
        elif reading.value > self._hot_threshold:
            action = ClimateAction.COOLING
        elif reading.value < self._cold_threshold:
            action = ClimateAction.HEATING
        else:
            action = ClimateAction.NONE

        return ClimateAdvice(reading=reading, action=action)
