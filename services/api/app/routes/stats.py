"""Club read endpoints.

Responsibilities:
- `/stats`: the merged club snapshot + stored goals used by the dashboard
- `/roster`: filtered, sorted member table with goal progress
- `/overview`: aggregates for the overview charts

Every request fetches the club from the provider; nothing is cached.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..gateway import BrawlStarsGateway, get_gateway
from ..schemas import OverviewResponse, RosterResponse
from ..settings import Settings, settings_dependency
from ..store import GoalStore, get_store
from ..views import build_overview, build_roster, get_club_view

router = APIRouter()


@router.get("/stats")
def club_stats(
    gateway: BrawlStarsGateway = Depends(get_gateway),
    store: GoalStore = Depends(get_store),
):
    """Return the club snapshot and the stored goals.

    Returns:
        dict: `{"club": {...}, "goals": {tag: goal}}`. `club` is the provider
        payload unchanged; `goals` may contain tags of former members.

    Raises:
        AccessDenied: 403, this server's IP is not allow-listed upstream.
        UpstreamError / TransportError: 502.
        StoreError: 500, the goal file is unreadable.
    """
    return get_club_view(gateway, store)


@router.get("/roster", response_model=RosterResponse)
def club_roster(
    search: Optional[str] = Query(
        default=None,
        description="Case-insensitive search across member name and tag.",
    ),
    role: Optional[str] = Query(
        default=None,
        description="Only keep members with this role ('all' keeps everyone).",
    ),
    gateway: BrawlStarsGateway = Depends(get_gateway),
    store: GoalStore = Depends(get_store),
    settings: Settings = Depends(settings_dependency),
):
    """List club members, highest trophies first, with their goal progress.

    Args:
        search: Optional filter on name/tag.
        role: Optional role filter (`president`, `vicePresident`, `senior`, `member`).

    Returns:
        dict: `{"club": {"tag", "name"}, "members": [...]}`.
    """
    view = get_club_view(gateway, store)
    return build_roster(view["club"], view["goals"], settings.icon_cdn_base_url, search=search, role=role)


@router.get("/overview", response_model=OverviewResponse)
def club_overview(
    top: int = Query(10, ge=1, le=50),
    gateway: BrawlStarsGateway = Depends(get_gateway),
    store: GoalStore = Depends(get_store),
):
    """Chart data: top members, role distribution and goal counts."""
    view = get_club_view(gateway, store)
    return build_overview(view["club"], view["goals"], top=top)
