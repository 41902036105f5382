"""Pharmacy roster sources.

``HttpPharmacySource`` fetches the roster from a JSON endpoint with httpx;
``StaticPharmacySource`` serves the bundled Izmir roster.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from loguru import logger

from pharmacy_finder.lib.pharmacy.data import IZMIR_PHARMACY_RECORDS
from pharmacy_finder.lib.pharmacy.models import Pharmacy


class FetchError(Exception):
    """Raised when the pharmacy roster could not be fetched."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def parse_roster(records: Any) -> list[Pharmacy]:
    """Turn a decoded roster payload into Pharmacy records.

    Records without a name are skipped with a warning.

    Raises:
        FetchError: If the payload is not a list of objects.
    """
    if not isinstance(records, list):
        msg = f"Expected a JSON array of pharmacies, got {type(records).__name__}"
        raise FetchError(msg)

    pharmacies: list[Pharmacy] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"Skipping roster entry {index}: not an object")
            continue
        try:
            pharmacies.append(Pharmacy.from_record(record))
        except ValueError as e:
            logger.warning(f"Skipping roster entry {index}: {e}")
    return pharmacies


class BasePharmacySource(ABC):
    """Abstract roster source."""

    @abstractmethod
    async def fetch(self) -> list[Pharmacy]:
        """Return the full pharmacy roster.

        Raises:
            FetchError: If the source is unreachable or returned an unusable payload.
        """


class StaticPharmacySource(BasePharmacySource):
    """Serves a fixed list of roster records (the bundled Izmir roster by default)."""

    def __init__(self, records: list[dict] | None = None) -> None:
        self._records = IZMIR_PHARMACY_RECORDS if records is None else records

    async def fetch(self) -> list[Pharmacy]:
        return parse_roster(self._records)


class HttpPharmacySource(BasePharmacySource):
    """Fetches the roster from an HTTP endpoint returning a JSON array.

    Args:
        url: Roster endpoint.
        timeout: Request timeout in seconds.
    """

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self._url = url
        self._timeout = timeout

    async def fetch(self) -> list[Pharmacy]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(self._url, headers={"Accept": "application/json"})
                response.raise_for_status()
        except httpx.TimeoutException as e:
            msg = f"Request to {self._url} timed out"
            raise FetchError(msg) from e
        except httpx.HTTPStatusError as e:
            msg = f"HTTP {e.response.status_code} from {self._url}"
            raise FetchError(msg, status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            msg = f"Failed to connect to {self._url}: {e}"
            raise FetchError(msg) from e

        try:
            payload = response.json()
        except ValueError as e:
            # The municipal endpoint has been observed answering with an HTML page
            msg = f"Response from {self._url} is not valid JSON"
            raise FetchError(msg, status_code=response.status_code) from e

        pharmacies = parse_roster(payload)
        logger.info(f"Fetched {len(pharmacies)} pharmacies from {self._url}")
        return pharmacies
