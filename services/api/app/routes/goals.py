"""Goal annotation write endpoint.

The admin console sets a target trophy count per member. Tags are stored as
sent, minus surrounding whitespace, and are not checked against the current
roster, so goals can be set ahead of a player joining and survive a player
leaving.
"""

from fastapi import APIRouter, Depends

from ..errors import InvalidRequest
from ..schemas import SaveMetaRequest
from ..store import GoalStore, get_store

router = APIRouter()


def parse_goal(meta) -> int:
    """Coerce a submitted goal to a non-negative integer.

    Accepts integers, integral floats and numeric strings (the admin form
    posts whatever the input field held).

    Raises:
        InvalidRequest: For missing, boolean, fractional, negative or
            non-numeric values.
    """
    if meta is None or isinstance(meta, bool):
        raise InvalidRequest()
    if isinstance(meta, str):
        text = meta.strip()
        try:
            meta = int(text)
        except ValueError:
            try:
                meta = float(text)
            except ValueError:
                raise InvalidRequest("Goal must be a number") from None
    if isinstance(meta, float):
        if not meta.is_integer():
            raise InvalidRequest("Goal must be a whole number")
        meta = int(meta)
    if not isinstance(meta, int):
        raise InvalidRequest("Goal must be a number")
    if meta < 0:
        raise InvalidRequest("Goal must not be negative")
    return meta


@router.post("/save-meta")
def save_meta(body: SaveMetaRequest, store: GoalStore = Depends(get_store)):
    """Create or replace the goal of one member.

    Args:
        body: `{"tag": "#ABC123", "meta": 30000}`.

    Returns:
        dict: `{"success": true}`.

    Raises:
        InvalidRequest: 400 if `tag` is missing/empty or `meta` is not a
            non-negative integer. The store is not touched.
        StoreError: 500 if the goal file cannot be read or written.
    """
    tag = (body.tag or "").strip()
    if not tag:
        raise InvalidRequest()
    goal = parse_goal(body.meta)
    store.upsert(tag, goal)
    return {"success": True}
