"""
User record models for the table data source.
"""

from typing import Any

from pydantic import BaseModel, Field


class GeoPoint(BaseModel):
    """Coordinates as the remote service sends them (strings)."""

    lat: str = Field(..., description="Latitude")
    lng: str = Field(..., description="Longitude")

    def as_floats(self) -> tuple[float, float]:
        """Return (lat, lng) as floats, e.g. for a map marker."""
        return float(self.lat), float(self.lng)


class UserRecord(BaseModel):
    """One row of the user table."""

    id: int = Field(..., description="Record identifier")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    website: str = Field(default="", description="Website")
    geo: GeoPoint | None = Field(default=None, description="Location of the user's address")

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "UserRecord":
        """
        Build a record from the remote service's user object.

        The service nests coordinates under ``address.geo``; the table
        keeps them flat on the record.
        """
        address = payload.get("address") or {}
        geo = payload.get("geo", address.get("geo"))
        return cls(
            id=payload["id"],
            name=payload["name"],
            email=payload["email"],
            website=payload.get("website", ""),
            geo=geo,
        )
