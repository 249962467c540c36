"""Health endpoint."""

from fastapi import APIRouter

from replayarr.config import get_team_id, get_timezone_str

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "team_id": get_team_id(), "timezone": get_timezone_str()}
