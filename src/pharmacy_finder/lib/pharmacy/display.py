"""Display helpers for resolved pharmacies: distances, call and directions links."""

from enum import StrEnum
from urllib.parse import quote

from pharmacy_finder.lib.pharmacy.models import Pharmacy


class Platform(StrEnum):
    """Target platform for map deep links."""

    IOS = "ios"
    ANDROID = "android"


def format_distance(meters: float | None) -> str:
    """Render a distance as "850 m" below one kilometre, else "1.2 km"."""
    if meters is None:
        return "Distance unknown"
    if meters < 1000:
        return f"{meters:.0f} m"
    return f"{meters / 1000:.1f} km"


def phone_url(phone: str) -> str:
    return f"tel:{phone.replace(' ', '')}"


def directions_url(pharmacy: Pharmacy, platform: Platform = Platform.ANDROID) -> str:
    """Deep link opening the platform maps app at the pharmacy."""
    lat_lng = f"{pharmacy.latitude_text},{pharmacy.longitude_text}"
    label = quote(pharmacy.name, safe="")
    if platform is Platform.IOS:
        return f"maps:?q={label}&ll={lat_lng}"
    return f"geo:0,0?q={lat_lng}({label})"


def region_label(pharmacy: Pharmacy) -> str:
    if pharmacy.region_description:
        return f"{pharmacy.region_name} - {pharmacy.region_description}"
    return pharmacy.region_name
