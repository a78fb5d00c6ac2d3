"""Resolved city location records."""

from dataclasses import dataclass

FLAG_URL_TEMPLATE = "https://flagcdn.com/w40/{code}.png"


@dataclass(frozen=True)
class LocationRecord:
    id: str
    name: str
    country: str
    country_code: str
    region: str
    latitude: float
    longitude: float

    @classmethod
    def from_api(cls, data: dict) -> "LocationRecord":
        """Build a record from a GeoDB ``data`` object.

        Raises KeyError/TypeError/ValueError when required fields are
        missing or not coercible.
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            country=str(data.get("country") or ""),
            country_code=str(data.get("countryCode") or ""),
            region=str(data.get("region") or ""),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
        )

    def to_api(self) -> dict:
        """Inverse of from_api; this is the shape persisted in the cache."""
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "countryCode": self.country_code,
            "region": self.region,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @property
    def display_name(self) -> str:
        if not self.country:
            return self.name
        return f"{self.name}, {self.country}"

    @property
    def flag_url(self) -> str:
        if not self.country_code:
            return ""
        return FLAG_URL_TEMPLATE.format(code=self.country_code.lower())
