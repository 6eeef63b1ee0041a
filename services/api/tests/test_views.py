"""Unit tests for the dashboard read models."""

import pytest

from app.views import build_overview, build_roster, get_club_view, goal_progress, top_brawlers

from fakes import CLUB_PAYLOAD, PLAYER_PAYLOAD

CDN = "https://cdn.example.test/"


@pytest.mark.parametrize(
    "trophies, goal, expected",
    [
        (500, 1000, 50.0),
        (1000, 1000, 100.0),
        (2500, 1000, 100.0),
        (1, 3, 33.3),
        (500, 0, 0.0),
        (500, -10, 0.0),
        (500, None, 0.0),
    ],
)
def test_goal_progress(trophies, goal, expected):
    assert goal_progress(trophies, goal) == expected


def test_club_view_is_pass_through(gateway, store):
    store.upsert("#GONE", 5)

    view = get_club_view(gateway, store)

    assert view == {"club": CLUB_PAYLOAD, "goals": {"#GONE": 5}}


def test_roster_does_not_mutate_inputs():
    club = {"tag": "#C", "name": "C", "members": [{"tag": "#A", "trophies": 1}, {"tag": "#B", "trophies": 2}]}
    goals = {"#A": 2}

    roster = build_roster(club, goals, CDN)

    assert [m["tag"] for m in roster["members"]] == ["#B", "#A"]
    assert [m["tag"] for m in club["members"]] == ["#A", "#B"]
    assert goals == {"#A": 2}
    assert roster["members"][1]["progress"] == 50.0
    assert roster["members"][0]["icon_url"] == "https://cdn.example.test/profile-icons/regular/0.png"


def test_roster_role_all_keeps_everyone():
    roster = build_roster(CLUB_PAYLOAD, {}, CDN, role="all")

    assert len(roster["members"]) == 3
    assert all(m["goal"] == 0 and m["progress"] == 0.0 for m in roster["members"])


def test_roster_search_matches_tag():
    roster = build_roster(CLUB_PAYLOAD, {}, CDN, search="#cc")

    assert [m["name"] for m in roster["members"]] == ["Carla"]


def test_overview_ignores_stale_and_non_integer_goals():
    goals = {"#GONE": 100, "#AAA": "40000", "#CCC": 30000}

    overview = build_overview(CLUB_PAYLOAD, goals)

    assert overview["goals_set"] == 1
    assert overview["goals_reached"] == 1


def test_overview_orders_roles_and_sums_when_total_missing():
    club = {
        "members": [
            {"tag": "#1", "role": "member", "trophies": 10},
            {"tag": "#2", "role": "vicePresident", "trophies": 20},
            {"tag": "#3", "role": "member", "trophies": 5},
        ]
    }

    overview = build_overview(club, {})

    assert overview["roles"] == [{"role": "vicePresident", "count": 1}, {"role": "member", "count": 2}]
    assert overview["total_trophies"] == 35


def test_top_brawlers():
    brawlers = top_brawlers(PLAYER_PAYLOAD, CDN, top=10)

    assert [b["trophies"] for b in brawlers] == [1000, 800, 650]
    assert brawlers[0]["image_url"] == "https://cdn.example.test/brawlers/16000002.png"
