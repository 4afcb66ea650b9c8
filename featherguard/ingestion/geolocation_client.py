"""
Geolocation providers for FeatherGuard

Single-shot position lookups. Browsers and phones send their own
coordinates; headless setups fall back to an IP-based lookup.
"""

import logging
from typing import Optional, Protocol

import httpx

from featherguard.core.exceptions import GeolocationError
from featherguard.core.geo_utils import Coordinates

logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    """Source of the device's current position."""

    async def get_current_position(self) -> Coordinates:
        ...


class StaticPosition:
    """Position reported by the client device."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude

    async def get_current_position(self) -> Coordinates:
        try:
            position = Coordinates(latitude=self.latitude, longitude=self.longitude)
        except ValueError as e:
            raise GeolocationError(str(e)) from e

        if position.is_origin:
            raise GeolocationError("Device reported 0/0, no position fix")
        return position


class IPGeolocationClient:
    """
    Approximate position from the public IP address.

    Uses the free ip-api.com JSON endpoint (no key, HTTP only).
    """

    BASE_URL = "http://ip-api.com/json/"

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize IP geolocation client.

        Args:
            timeout: HTTP request timeout in seconds
            client: Pre-built httpx client (tests inject a mock transport)
        """
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_current_position(self) -> Coordinates:
        """
        Look up the current position.

        Returns:
            Coordinates of the IP address

        Raises:
            GeolocationError: If the lookup failed or returned no position
        """
        try:
            response = await self._client.get(
                self.BASE_URL,
                params={"fields": "status,message,lat,lon"},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GeolocationError(f"IP lookup failed: {e}") from e

        if not isinstance(data, dict) or data.get("status") != "success":
            message = data.get("message", "unknown error") if isinstance(data, dict) else "bad payload"
            raise GeolocationError(f"IP lookup failed: {message}")

        try:
            position = Coordinates(latitude=float(data["lat"]), longitude=float(data["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeolocationError(f"IP lookup returned no usable position: {e}") from e

        if position.is_origin:
            raise GeolocationError("IP lookup returned 0/0")

        logger.info(f"IP geolocation: {position.latitude:.4f}, {position.longitude:.4f}")
        return position
