"""API schemas.

Upstream payloads (`/api/stats`, `/api/player/{tag}`) are passed through as
plain dictionaries so the frontend sees exactly what the provider returned.
The models below describe those payloads for the derived read models
(roster, overview) and define the request/response bodies this service owns.

Upstream models allow unknown fields; the provider adds attributes over time
and that must not break parsing here.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

ROLES = ("president", "vicePresident", "senior", "member")


class Icon(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int = 0


class ClubMember(BaseModel):
    model_config = ConfigDict(extra="allow")

    tag: str
    name: str = ""
    nameColor: str = ""
    role: str = "member"
    trophies: int = 0
    icon: Icon = Field(default_factory=Icon)


class ClubSnapshot(BaseModel):
    model_config = ConfigDict(extra="allow")

    tag: str = ""
    name: str = ""
    description: str = ""
    type: str = ""
    badgeId: int = 0
    requiredTrophies: int = 0
    trophies: int = 0
    members: list[ClubMember] = Field(default_factory=list)


class Brawler(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str = ""
    power: int = 0
    rank: int = 0
    trophies: int = 0


class PlayerDetail(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    tag: str
    name: str = ""
    nameColor: str = ""
    icon: Icon = Field(default_factory=Icon)
    trophies: int = 0
    highestTrophies: int = 0
    expLevel: int = 0
    victories_3vs3: int = Field(0, alias="3vs3Victories")
    soloVictories: int = 0
    duoVictories: int = 0
    brawlers: list[Brawler] = Field(default_factory=list)


class SaveMetaRequest(BaseModel):
    """Body of `POST /api/save-meta`.

    Both fields are optional at the schema level so that a missing field is
    reported as a 400 by the handler rather than as a schema error.
    """

    tag: Optional[str] = None
    meta: Any = None


class RosterEntry(BaseModel):
    tag: str
    name: str
    nameColor: str
    role: str
    trophies: int
    icon_url: str
    goal: int
    progress: float


class RosterResponse(BaseModel):
    club: dict
    members: list[RosterEntry]


class RoleCount(BaseModel):
    role: str
    count: int


class TopMember(BaseModel):
    tag: str
    name: str
    trophies: int


class OverviewResponse(BaseModel):
    club: dict
    member_count: int
    total_trophies: int
    top_members: list[TopMember]
    roles: list[RoleCount]
    goals_set: int
    goals_reached: int
