"""Upstream gateway for the Brawl Stars public API.

Responsibilities:
- authenticated GET requests for the configured club and for individual players
- tag normalization (`#ABC123`, `ABC123` and `%23ABC123` are the same tag)
- translation of upstream failures into domain errors (`app.errors`)
- a best-effort lookup of this server's public IP via an echo service

Every call is a fresh round trip: no retries and no response caching. Each
request is bounded by the configured timeout.

The gateway owns a single `httpx.Client`; the application factory creates it
on startup and closes it on shutdown. Route handlers receive it through the
`get_gateway` dependency.
"""

import logging
from urllib.parse import quote

import httpx
from fastapi import Request

from .errors import AccessDenied, InvalidRequest, NotFound, TransportError, UpstreamError
from .settings import Settings

logger = logging.getLogger(__name__)

UNKNOWN_ADDRESS = "unknown"


def normalize_tag(tag: str) -> str:
    """Return `tag` without surrounding whitespace or a leading `#` / `%23`.

    Raises:
        InvalidRequest: If nothing is left after normalization.
    """
    tag = (tag or "").strip()
    if tag.startswith("#"):
        tag = tag[1:]
    elif tag[:3].upper() == "%23":
        tag = tag[3:]
    if not tag:
        raise InvalidRequest("Invalid tag")
    return tag


def upstream_tag_path(tag: str) -> str:
    """Return the URL path segment for `tag`, e.g. `%23ABC123`."""
    return "%23" + quote(normalize_tag(tag), safe="")


class BrawlStarsGateway:
    """Thin client for the club and player endpoints of the stats provider."""

    def __init__(self, client: httpx.Client, api_key: str, club_tag: str, ip_echo_url: str):
        self.client = client
        self.api_key = api_key
        self.club_tag = club_tag
        self.ip_echo_url = ip_echo_url

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.BaseTransport | None = None):
        """Build a gateway (and its HTTP client) from service settings.

        Args:
            settings: Service settings.
            transport: Optional transport override, used by tests to stand in
                for the provider.
        """
        client = httpx.Client(
            base_url=settings.brawl_api_base_url,
            timeout=settings.upstream_timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )
        return cls(client, settings.brawl_api_key, settings.club_tag, settings.ip_echo_url)

    def close(self) -> None:
        self.client.close()

    def fetch_club(self) -> dict:
        """Fetch the configured club (roster included).

        Returns:
            dict: The provider's club payload, unchanged.

        Raises:
            AccessDenied: HTTP 403, the caller IP is not allow-listed.
            NotFound: HTTP 404, the club tag does not exist.
            UpstreamError: Any other non-2xx status or an unreadable body.
            TransportError: The provider could not be reached.
        """
        return self._get_json(
            f"/clubs/{upstream_tag_path(self.club_tag)}",
            not_found_message="Club not found",
        )

    def fetch_player(self, tag: str) -> dict:
        """Fetch the detailed profile of one player.

        Args:
            tag: Player tag, with or without the leading `#`.

        Returns:
            dict: The provider's player payload, unchanged.

        Raises:
            InvalidRequest: The tag is empty.
            AccessDenied / NotFound / UpstreamError / TransportError: as for
                `fetch_club`.
        """
        return self._get_json(
            f"/players/{upstream_tag_path(tag)}",
            not_found_message="Player not found",
        )

    def fetch_caller_address(self) -> str:
        """Return this server's public IP as reported by the echo service.

        This is a diagnostic for allow-listing only, so failures are logged and
        reported as `UNKNOWN_ADDRESS` instead of raised. The API key is not
        sent to the echo service.
        """
        try:
            response = self.client.get(self.ip_echo_url)
            response.raise_for_status()
            ip = response.json().get("ip")
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.warning("IP echo lookup failed: %s", exc)
            return UNKNOWN_ADDRESS
        if not isinstance(ip, str) or not ip:
            logger.warning("IP echo service returned no address")
            return UNKNOWN_ADDRESS
        return ip

    def _get_json(self, path: str, not_found_message: str) -> dict:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            response = self.client.get(path, headers=headers)
        except httpx.RequestError as exc:
            logger.error("GET %s failed: %s", path, exc)
            raise TransportError() from exc

        status = response.status_code
        if status == 403:
            raise AccessDenied()
        if status == 404:
            raise NotFound(not_found_message)
        if not response.is_success:
            logger.error("GET %s returned HTTP %s", path, status)
            raise UpstreamError(status)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(status, "Brawl Stars API returned an invalid body") from exc


def get_gateway(request: Request) -> BrawlStarsGateway:
    """FastAPI dependency returning the gateway built at startup."""
    return request.app.state.gateway
