# listing_editor/models/product_form.py

"""Editable product state: scalar fields, location and images."""

import math
from dataclasses import dataclass, field
from typing import Any

from listing_editor.config.settings import Settings
from listing_editor.models.geolocation import GeoPoint, GeolocationState
from listing_editor.models.image_ref import ImageSet
from listing_editor.services.errors import ValidationError


def parse_price(text: str) -> float:
    """Parse the price field into a non-negative number.

    Surrounding whitespace and thousands separators are tolerated
    (``" 10,000 "`` -> ``10000.0``).

    Raises:
        ValidationError: when *text* is not a finite number >= 0.
    """
    cleaned = text.strip().replace(",", "")
    try:
        value = float(cleaned)
    except ValueError:
        raise ValidationError(
            ["price"], f"Price must be a number, got '{text}'."
        ) from None
    if not math.isfinite(value) or value < 0:
        raise ValidationError(
            ["price"], f"Price must be zero or more, got '{text}'."
        )
    return value


def format_price(value: Any) -> str:
    """Render a stored price for editing (``10000.0`` -> ``"10000"``)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class ProductForm:
    """Everything the user edits for one product."""

    title: str = ""
    category: str = ""
    price: str = ""
    description: str = ""
    geo: GeolocationState = field(default_factory=GeolocationState)
    images: ImageSet = field(default_factory=ImageSet)

    def missing_fields(self) -> list[str]:
        """Names of required inputs that are still empty.

        A category outside the selectable list counts as empty.
        """
        missing: list[str] = []
        for name in ("title", "category", "price", "description"):
            value = getattr(self, name)
            if not value or (
                name == "category" and value not in Settings.CATEGORIES
            ):
                missing.append(name)
        if not self.geo.address:
            missing.append("address")
        if len(self.images) == 0:
            missing.append("images")
        return missing

    def to_update_fields(self) -> dict[str, Any]:
        """Column values for the product record update."""
        return {
            "title": self.title,
            "category": self.category,
            "price": parse_price(self.price),
            "contents": self.description,
            "latitude": self.geo.latitude,
            "longitude": self.geo.longitude,
            "address": self.geo.address,
        }

    def populate_from_record(self, record: dict[str, Any]) -> None:
        """Fill scalar fields and location from a stored product row."""
        self.title = record.get("title") or ""
        category = record.get("category") or ""
        self.category = category if category in Settings.CATEGORIES else ""
        self.price = format_price(record.get("price"))
        self.description = record.get("contents") or ""
        self.geo.set_from_map_event(
            GeoPoint(
                latitude=float(record.get("latitude") or 0.0),
                longitude=float(record.get("longitude") or 0.0),
                address=record.get("address") or "",
            )
        )

    def snapshot(self) -> dict[str, Any]:
        """Loggable view of the current state (no image bytes)."""
        return {
            "title": self.title,
            "category": self.category,
            "price": self.price,
            "description": self.description,
            "address": self.geo.address,
            "marker": (self.geo.latitude, self.geo.longitude),
            "images": [r.label for r in self.images.refs],
        }

    def reset(self) -> None:
        """Back to the empty initial values; previews are released."""
        self.title = ""
        self.category = ""
        self.price = ""
        self.description = ""
        self.geo.reset()
        self.images.clear()
