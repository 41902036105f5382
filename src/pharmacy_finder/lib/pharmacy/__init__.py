"""Pharmacy library — roster sources, staleness-bounded cache and nearby resolution.

Public API:
    - Pharmacy: Roster record with optional distance/duty annotations
    - BasePharmacySource / HttpPharmacySource / StaticPharmacySource: Roster sources
    - FetchError: Raised when the roster cannot be fetched
    - PharmacyCache / PharmacyCacheEntry: Persisted roster cache
    - DutyStatusProvider / NoDutyInformation / StaticDutySchedule: Duty schedules
    - NearbyResolver / UnsupportedRegionError: Nearby resolution
    - format_distance / phone_url / directions_url / region_label: Display helpers
"""

from pharmacy_finder.lib.pharmacy.cache import DEFAULT_TTL_SECONDS, PharmacyCache, PharmacyCacheEntry
from pharmacy_finder.lib.pharmacy.display import Platform, directions_url, format_distance, phone_url, region_label
from pharmacy_finder.lib.pharmacy.duty import DutyStatusProvider, NoDutyInformation, StaticDutySchedule
from pharmacy_finder.lib.pharmacy.models import Pharmacy
from pharmacy_finder.lib.pharmacy.resolver import NearbyResolver, UnsupportedRegionError, sort_by_distance
from pharmacy_finder.lib.pharmacy.source import (
    BasePharmacySource,
    FetchError,
    HttpPharmacySource,
    StaticPharmacySource,
    parse_roster,
)

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "BasePharmacySource",
    "DutyStatusProvider",
    "FetchError",
    "HttpPharmacySource",
    "NearbyResolver",
    "NoDutyInformation",
    "Pharmacy",
    "PharmacyCache",
    "PharmacyCacheEntry",
    "Platform",
    "StaticDutySchedule",
    "StaticPharmacySource",
    "UnsupportedRegionError",
    "directions_url",
    "format_distance",
    "parse_roster",
    "phone_url",
    "region_label",
    "sort_by_distance",
]
