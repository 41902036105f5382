"""Application state store read by the presentation layer.

Every resolution takes a sequence number from ``begin_request``. A result or
error is applied only when its sequence number is the latest one issued, so
an older request finishing late never overwrites a newer one.
"""

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field

from pharmacy_finder.lib.geocoder.base import Coordinate
from pharmacy_finder.lib.pharmacy.models import Pharmacy
from pharmacy_finder.services.location_session import SessionSnapshot

StateListener = Callable[["AppState"], None]


@dataclass(frozen=True)
class AppState:
    """Snapshot of the resolved location and pharmacy list."""

    address: str | None = None
    coordinates: Coordinate | None = None
    pharmacies: tuple[Pharmacy, ...] = field(default_factory=tuple)
    loading: bool = False
    error: str | None = None
    detected_region: str | None = None
    initialized: bool = False


class AppStateStore:
    """Holds the current AppState and notifies listeners on every change."""

    def __init__(self) -> None:
        self._state = AppState()
        self._latest_request = 0
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def latest_request(self) -> int:
        return self._latest_request

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes: object) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def begin_request(self, coordinates: Coordinate | None = None) -> int:
        """Start a resolution and return its sequence number."""
        self._latest_request += 1
        changes: dict[str, object] = {"loading": True, "error": None, "detected_region": None}
        if coordinates is not None:
            changes["coordinates"] = coordinates
        self._set(**changes)
        return self._latest_request

    def is_current(self, sequence: int) -> bool:
        return sequence == self._latest_request

    def apply_result(self, sequence: int, pharmacies: list[Pharmacy]) -> bool:
        """Store a resolution result. Returns False if a newer request superseded it."""
        if not self.is_current(sequence):
            return False
        self._set(pharmacies=tuple(pharmacies), loading=False, error=None, initialized=True)
        return True

    def apply_error(self, sequence: int, message: str, detected_region: str | None = None) -> bool:
        """Store a resolution failure. Returns False if a newer request superseded it."""
        if not self.is_current(sequence):
            return False
        self._set(pharmacies=(), loading=False, error=message, detected_region=detected_region)
        return True

    def set_error(self, message: str) -> None:
        """Report a failure that happened before any resolution started."""
        self._set(loading=False, error=message)

    def update_address(self, address: str | None) -> None:
        self._set(address=address)

    def update_coordinates(self, coordinates: Coordinate | None) -> None:
        self._set(coordinates=coordinates)

    def load_session(self, snapshot: SessionSnapshot) -> None:
        self._set(address=snapshot.address, coordinates=snapshot.coordinates)

    def reset_pharmacies(self) -> None:
        self._set(pharmacies=(), initialized=False)

    def reset(self) -> None:
        """Forget everything; in-flight results are discarded as well."""
        self._latest_request += 1
        self._state = AppState()
        self._notify()
