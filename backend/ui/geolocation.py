"""Browser geolocation through the NiceGUI client."""

from __future__ import annotations

import math
from typing import Protocol

from nicegui import ui

from backend.workout.model import Coordinates

_GEOLOCATION_JS = """
return await new Promise((resolve) => {
  if (!navigator.geolocation) {
    resolve({error: "Geolocation is not supported by this browser"});
    return;
  }
  navigator.geolocation.getCurrentPosition(
    (position) => resolve({
      latitude: position.coords.latitude,
      longitude: position.coords.longitude,
    }),
    (err) => resolve({error: err.message || "Position unavailable"}),
  );
});
"""


class GeolocationUnavailable(RuntimeError):
    """Raised when the current position cannot be determined."""


class Geolocator(Protocol):
    async def current_position(self) -> Coordinates: ...


def parse_position(result: object) -> Coordinates:
    if not isinstance(result, dict):
        raise GeolocationUnavailable("No position returned")
    if "error" in result:
        raise GeolocationUnavailable(str(result["error"]))
    try:
        lat = float(result["latitude"])
        lng = float(result["longitude"])
    except (KeyError, TypeError, ValueError) as exc:
        raise GeolocationUnavailable(f"Malformed position: {result!r}") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise GeolocationUnavailable(f"Malformed position: {result!r}")
    return (lat, lng)


class BrowserGeolocator:
    def __init__(self, timeout_sec: float = 30.0) -> None:
        self._timeout_sec = timeout_sec

    async def current_position(self) -> Coordinates:
        try:
            result = await ui.run_javascript(_GEOLOCATION_JS, timeout=self._timeout_sec)
        except TimeoutError as exc:
            raise GeolocationUnavailable("Timed out waiting for the browser position") from exc
        return parse_position(result)
