"""Operational diagnostics.

The provider only accepts API keys from allow-listed IP addresses. When the
dashboard reports "Access Denied", the operator opens `/api/meu-ip` to learn
which address to register in the developer portal.
"""

from fastapi import APIRouter, Depends

from ..errors import AppError
from ..gateway import UNKNOWN_ADDRESS, BrawlStarsGateway, get_gateway

router = APIRouter()


@router.get("/meu-ip")
def caller_ip(gateway: BrawlStarsGateway = Depends(get_gateway)):
    """Return this server's public IP address.

    Returns:
        dict: `{"ip": "203.0.113.7"}`.

    Raises:
        AppError: 500 if the echo service could not be reached.
    """
    ip = gateway.fetch_caller_address()
    if ip == UNKNOWN_ADDRESS:
        raise AppError("Failed to fetch IP", 500)
    return {"ip": ip}
