"""
Zone resolution — instance name to API endpoint.

GET https://<host>/instances/<id>/zoneinfo against the primary host, falling
over once to the secondary host.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Sequence
from urllib.parse import quote

import httpx
import pydantic

from xmlmc.errors import DecodeError, NetworkError, ValidationError, XmlmcError
from xmlmc.models.zone import ZoneInfo, ZoneInfoResponse
from xmlmc.transport.http import HttpClient

logger = logging.getLogger(__name__)

ZONE_HOSTS = ("https://files.hornbill.com", "https://files.hornbill.co")
ZONE_TIMEOUT = 30.0


class ZoneResolver:
    def __init__(
        self,
        http: Optional[HttpClient] = None,
        hosts: Sequence[str] = ZONE_HOSTS,
        timeout: float = ZONE_TIMEOUT,
    ):
        self._http = http or HttpClient()
        self._hosts = [h.rstrip("/") for h in hosts]
        self._timeout = timeout

    def zoneinfo_url(self, host: str, instance_id: str) -> str:
        return f"{host}/instances/{quote(instance_id, safe='')}/zoneinfo"

    def resolve(self, instance_id: str) -> ZoneInfo:
        """Look up zone info for an instance. Every call goes to the network."""
        if not instance_id:
            raise ValidationError("instanceid not provided")

        primary, fallback = self._hosts[0], self._hosts[1:2]
        try:
            response = self._fetch(primary, instance_id)
        except NetworkError as e:
            if not fallback:
                logger.error("Error Loading Zone Info File: %s", e)
                raise
            logger.warning("Zone lookup on %s failed (%s), trying %s", primary, e, fallback[0])
            try:
                response = self._fetch(fallback[0], instance_id)
            except NetworkError as e2:
                logger.error("Error Loading Zone Info File: %s", e2)
                raise
        return self._decode(response)

    def _fetch(self, host: str, instance_id: str) -> httpx.Response:
        url = self.zoneinfo_url(host, instance_id)
        logger.debug("GET %s", url)
        response = self._http.get(url, timeout=self._timeout)
        if response.status_code != 200:
            raise NetworkError(f"Invalid HTTP Response: {response.status_code}", response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> ZoneInfo:
        try:
            return ZoneInfoResponse.model_validate(response.json()).zoneinfo
        except (json.JSONDecodeError, UnicodeDecodeError, pydantic.ValidationError) as e:
            logger.error("Error Decoding Zone Info File: %s", e)
            raise DecodeError(f"Error Decoding Zone Info File: {e}", {"body": response.text[:200]}) from e

    def close(self) -> None:
        self._http.close()


def get_endpoint_from_name(instance_id: str, resolver: Optional[ZoneResolver] = None) -> str:
    """Return the endpoint URL for an instance, or "" if it cannot be resolved."""
    if not instance_id:
        return ""
    owned = resolver is None
    resolver = resolver or ZoneResolver()
    try:
        return resolver.resolve(instance_id).endpoint
    except XmlmcError as e:
        logger.debug("No endpoint for %s: %s", instance_id, e)
        return ""
    finally:
        if owned:
            resolver.close()
