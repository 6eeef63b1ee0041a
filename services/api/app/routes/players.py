"""Player detail endpoints.

Tags may be sent with or without the leading `#`; a browser cannot put a raw
`#` in a path, so the frontend usually strips it.
"""

from fastapi import APIRouter, Depends, Query

from ..gateway import BrawlStarsGateway, get_gateway
from ..settings import Settings, settings_dependency
from ..views import top_brawlers

router = APIRouter()


@router.get("/player/{tag}")
def get_player(tag: str, gateway: BrawlStarsGateway = Depends(get_gateway)):
    """Fetch a player's full profile from the provider.

    Args:
        tag: Player tag, e.g. `ABC123` or `#ABC123`.

    Returns:
        dict: The provider's player payload, unchanged.

    Raises:
        NotFound: 404 if the provider does not know the tag.
        UpstreamError / TransportError: 502.
    """
    return gateway.fetch_player(tag)


@router.get("/player/{tag}/brawlers")
def get_player_brawlers(
    tag: str,
    top: int = Query(10, ge=1, le=100),
    gateway: BrawlStarsGateway = Depends(get_gateway),
    settings: Settings = Depends(settings_dependency),
):
    """Return the player's best brawlers by trophies."""
    player = gateway.fetch_player(tag)
    return {
        "tag": player.get("tag"),
        "brawlers": top_brawlers(player, settings.icon_cdn_base_url, top=top),
    }
