"""Device position provider interface.

Wraps the platform's permission prompt and current-position lookup. The
library ships a fixed-position implementation; a device integration
subclasses ``BasePositionProvider``.
"""

from abc import ABC, abstractmethod

from pharmacy_finder.lib.geocoder.base import Coordinate


class PermissionDeniedError(Exception):
    """Raised when the user declined access to the device location."""


class PositionUnavailableError(Exception):
    """Raised when the device could not produce a position fix (hardware or timeout)."""


class BasePositionProvider(ABC):
    """Abstract device geolocation gateway."""

    @abstractmethod
    async def request_permission(self) -> bool:
        """Prompt for location access. Returns True when granted."""

    @abstractmethod
    async def check_permission(self) -> bool:
        """Return True when location access is already granted."""

    @abstractmethod
    async def get_current_position(self) -> Coordinate:
        """Return the current device position.

        Raises:
            PermissionDeniedError: If location access is not granted.
            PositionUnavailableError: If no fix could be obtained.
        """


class FixedPositionProvider(BasePositionProvider):
    """Position provider reporting a preconfigured coordinate.

    Args:
        coordinate: Position to report, or None to simulate a device without a fix.
        granted: Initial permission state.
        grant_on_request: Permission state after ``request_permission()``.
    """

    def __init__(
        self,
        coordinate: Coordinate | None,
        *,
        granted: bool = True,
        grant_on_request: bool = True,
    ) -> None:
        self._coordinate = coordinate
        self._granted = granted
        self._grant_on_request = grant_on_request

    async def request_permission(self) -> bool:
        if not self._granted:
            self._granted = self._grant_on_request
        return self._granted

    async def check_permission(self) -> bool:
        return self._granted

    async def get_current_position(self) -> Coordinate:
        if not self._granted:
            msg = "Location permission has not been granted"
            raise PermissionDeniedError(msg)
        if self._coordinate is None:
            msg = "No position fix available"
            raise PositionUnavailableError(msg)
        return self._coordinate
