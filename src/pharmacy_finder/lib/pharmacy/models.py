"""Pharmacy record as delivered by the roster source, plus resolution annotations."""

from dataclasses import dataclass
from typing import Any

from pharmacy_finder.lib.geocoder.base import Coordinate


@dataclass(frozen=True)
class Pharmacy:
    """A pharmacy from the Izmir roster.

    Coordinates are kept as the decimal strings the source delivers;
    ``coordinate`` parses them on demand. ``distance_in_meters`` and
    ``is_on_duty`` are only set on annotated copies produced during resolution.
    """

    name: str
    address: str
    phone: str
    region_id: int | None
    region_name: str
    region_description: str
    latitude_text: str
    longitude_text: str
    date: str = ""
    distance_in_meters: float | None = None
    is_on_duty: bool | None = None

    @property
    def pharmacy_id(self) -> str:
        """Stable identifier; roster records carry none, so region id and name are combined."""
        return f"{self.region_id if self.region_id is not None else '-'}:{self.name}"

    @property
    def coordinate(self) -> Coordinate | None:
        """Parsed coordinate, or None if the stored strings are not a valid position."""
        try:
            return Coordinate(latitude=float(self.latitude_text), longitude=float(self.longitude_text))
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Pharmacy":
        """Build a Pharmacy from a roster record.

        Roster keys: ``Tarih`` (date), ``LokasyonX`` (latitude), ``LokasyonY``
        (longitude), ``BolgeAciklama``, ``Adi``, ``Telefon``, ``Adres``,
        ``BolgeId``, ``Bolge``.

        Raises:
            ValueError: If the record has no pharmacy name.
        """
        name = str(record.get("Adi") or "").strip()
        if not name:
            msg = "Pharmacy record is missing a name (Adi)"
            raise ValueError(msg)

        region_id = record.get("BolgeId")
        try:
            region_id = int(region_id) if region_id is not None else None
        except (TypeError, ValueError):
            region_id = None

        return cls(
            name=name,
            address=str(record.get("Adres") or "").strip(),
            phone=str(record.get("Telefon") or "").strip(),
            region_id=region_id,
            region_name=str(record.get("Bolge") or "").strip(),
            region_description=str(record.get("BolgeAciklama") or "").strip(),
            latitude_text=str(record.get("LokasyonX") or "").strip(),
            longitude_text=str(record.get("LokasyonY") or "").strip(),
            date=str(record.get("Tarih") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize back to the roster record shape (annotations are not included)."""
        return {
            "Tarih": self.date,
            "LokasyonX": self.latitude_text,
            "LokasyonY": self.longitude_text,
            "BolgeAciklama": self.region_description,
            "Adi": self.name,
            "Telefon": self.phone,
            "Adres": self.address,
            "BolgeId": self.region_id,
            "Bolge": self.region_name,
        }
