# listing_editor/models/geolocation.py

"""Marker position and its resolved address."""

import logging
from dataclasses import dataclass

logger = logging.getLogger("listing_editor.geo")


@dataclass(frozen=True)
class GeoPoint:
    """Coordinates plus the address the map resolved for them."""

    latitude: float = 0.0
    longitude: float = 0.0
    address: str = ""


class GeolocationState:
    """Current marker location, replaced only as a whole.

    Coordinates and address have no individual setters: the map
    delivers all three in one event and they are swapped in together.
    """

    def __init__(self) -> None:
        self._point = GeoPoint()

    def set_from_map_event(self, point: GeoPoint) -> None:
        """Replace latitude, longitude and address in one step."""
        self._point = point
        logger.debug(
            "Marker moved to (%f, %f) '%s'",
            point.latitude,
            point.longitude,
            point.address,
        )

    def reset(self) -> None:
        self._point = GeoPoint()

    @property
    def point(self) -> GeoPoint:
        return self._point

    @property
    def latitude(self) -> float:
        return self._point.latitude

    @property
    def longitude(self) -> float:
        return self._point.longitude

    @property
    def address(self) -> str:
        return self._point.address
