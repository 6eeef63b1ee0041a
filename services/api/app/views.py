"""Read models served to the dashboard.

`get_club_view` is the merged read behind `/api/stats`: the upstream club
snapshot and the locally stored goals, side by side and unmodified. Goals for
tags that are no longer in the club are kept; consumers ignore them.

The remaining helpers derive the roster table, the overview charts and the
top-brawler list from those two inputs. They never mutate what they are given.
"""

from pydantic import BaseModel, ValidationError

from .errors import UpstreamError
from .gateway import BrawlStarsGateway
from .schemas import ROLES, ClubSnapshot, PlayerDetail
from .store import GoalStore


def get_club_view(gateway: BrawlStarsGateway, store: GoalStore) -> dict:
    """Fetch the club and the stored goals.

    Returns:
        dict: `{"club": <upstream club payload>, "goals": {tag: goal}}`.

    Raises:
        AppError: Whatever the gateway or the store raised.
    """
    club = gateway.fetch_club()
    goals = store.read_all()
    return {"club": club, "goals": goals}


def _parse(model: type[BaseModel], payload):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise UpstreamError(200, "Brawl Stars API returned an unexpected payload") from exc


def icon_url(cdn_base: str, icon_id: int) -> str:
    return f"{cdn_base.rstrip('/')}/profile-icons/regular/{icon_id}.png"


def brawler_url(cdn_base: str, brawler_id: int) -> str:
    return f"{cdn_base.rstrip('/')}/brawlers/{brawler_id}.png"


def goal_progress(trophies: int, goal) -> float:
    """Percent of `goal` reached, capped at 100; 0 when no positive goal is set."""
    if not isinstance(goal, (int, float)) or isinstance(goal, bool) or goal <= 0:
        return 0.0
    return round(min(trophies / goal * 100, 100.0), 1)


def _goal_for(goals: dict, tag: str) -> int:
    goal = goals.get(tag, 0)
    if isinstance(goal, bool) or not isinstance(goal, int):
        return 0
    return goal


def build_roster(club: dict, goals: dict, cdn_base: str, search=None, role=None) -> dict:
    """Members filtered by name/tag and role, highest trophies first.

    Args:
        club: Upstream club payload.
        goals: Stored goal mapping.
        cdn_base: Icon CDN base URL.
        search: Case-insensitive substring matched against name and tag.
        role: Role to keep; `None`, empty or "all" keeps every role.

    Returns:
        dict: `{"club": {"tag", "name"}, "members": [...]}`.
    """
    snapshot = _parse(ClubSnapshot, club)
    needle = (search or "").strip().lower()
    members = []
    for m in snapshot.members:
        if needle and needle not in m.name.lower() and needle not in m.tag.lower():
            continue
        if role and role != "all" and m.role != role:
            continue
        goal = _goal_for(goals, m.tag)
        members.append({
            "tag": m.tag,
            "name": m.name,
            "nameColor": m.nameColor,
            "role": m.role,
            "trophies": m.trophies,
            "icon_url": icon_url(cdn_base, m.icon.id),
            "goal": goal,
            "progress": goal_progress(m.trophies, goal),
        })
    members.sort(key=lambda e: e["trophies"], reverse=True)
    return {"club": {"tag": snapshot.tag, "name": snapshot.name}, "members": members}


def build_overview(club: dict, goals: dict, top: int = 10) -> dict:
    """Aggregates for the overview charts.

    Role counts are listed president first; roles with no members are left out.
    A goal counts as reached when the member's trophies are at or above it.
    """
    snapshot = _parse(ClubSnapshot, club)
    ranked = sorted(snapshot.members, key=lambda m: m.trophies, reverse=True)

    counts = {}
    for m in snapshot.members:
        counts[m.role] = counts.get(m.role, 0) + 1
    ordered_roles = [r for r in ROLES if r in counts] + sorted(r for r in counts if r not in ROLES)

    goals_set = 0
    goals_reached = 0
    for m in snapshot.members:
        goal = _goal_for(goals, m.tag)
        if goal > 0:
            goals_set += 1
            if m.trophies >= goal:
                goals_reached += 1

    return {
        "club": {"tag": snapshot.tag, "name": snapshot.name},
        "member_count": len(snapshot.members),
        "total_trophies": snapshot.trophies or sum(m.trophies for m in snapshot.members),
        "top_members": [{"tag": m.tag, "name": m.name, "trophies": m.trophies} for m in ranked[:top]],
        "roles": [{"role": r, "count": counts[r]} for r in ordered_roles],
        "goals_set": goals_set,
        "goals_reached": goals_reached,
    }


def top_brawlers(player: dict, cdn_base: str, top: int = 10) -> list[dict]:
    """The player's `top` brawlers by trophies, each with an image URL."""
    detail = _parse(PlayerDetail, player)
    ranked = sorted(detail.brawlers, key=lambda b: b.trophies, reverse=True)
    return [
        {
            "id": b.id,
            "name": b.name,
            "power": b.power,
            "rank": b.rank,
            "trophies": b.trophies,
            "image_url": brawler_url(cdn_base, b.id),
        }
        for b in ranked[:top]
    ]
