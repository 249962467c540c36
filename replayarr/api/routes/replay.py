"""Replay API endpoints.

- GET /api/replay - Completed game + condensed replay for a date
- GET /api/latest - Date of the most recent completed game
- GET /api/calendar - Month grid with games per day
- GET /api/standings - Franchise division standings
- GET /api/next-game - Next scheduled game

Upstream failures surface as 502 (see api.app); "nothing found" is a
normal 200 response with an empty payload.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from replayarr.api.models import (
    CalendarDayModel,
    CalendarGameModel,
    CalendarResponse,
    GameModel,
    LatestGameResponse,
    NextGameModel,
    NextGameResponse,
    ReplayResponse,
    StandingsResponse,
    StandingsRowModel,
)
from replayarr.providers.mlbstats import is_completed
from replayarr.services.replay import (
    NO_COMPLETED_GAMES_MESSAGE,
    NO_STANDINGS_MESSAGE,
    ReplayService,
    opponent_name,
    redact_spoilers,
)
from replayarr.services.standings import format_winning_percentage, team_display_name
from replayarr.utilities.tz import (
    build_calendar_days,
    format_date,
    now_utc,
    parse_iso_date,
    parse_month,
    previous_day,
    resolve,
    start_of_month,
)

router = APIRouter(prefix="/api")

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def get_service(request: Request) -> ReplayService:
    return request.app.state.replay_service


@router.get("/replay", response_model=ReplayResponse)
async def get_replay(
    date: str | None = Query(None, description="YYYY-MM-DD (default: yesterday)"),
    spoilers: bool = False,
    service: ReplayService = Depends(get_service),
):
    """Completed game and condensed replay for a date."""
    if date is None:
        day = previous_day(now_utc(), service.tz)
    else:
        day = parse_iso_date(date, service.tz)
        if day is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid date '{date}', expected YYYY-MM-DD",
            )

    details = await service.get_game(day)
    if details is None:
        return ReplayResponse(
            date=day.iso, display_date=format_date(day, "full"), status="no_game"
        )

    if not spoilers:
        details = redact_spoilers(details)
    return ReplayResponse(
        date=day.iso,
        display_date=details.display_date,
        status="game",
        game=GameModel(**vars(details)),
    )


@router.get("/latest", response_model=LatestGameResponse)
async def get_latest(service: ReplayService = Depends(get_service)):
    """Most recent completed game date (searches up to a year back)."""
    latest = await service.find_latest_game_date()
    if latest is None:
        return LatestGameResponse(message=NO_COMPLETED_GAMES_MESSAGE)
    return LatestGameResponse(date=latest.iso, display_date=format_date(latest, "full"))


@router.get("/calendar", response_model=CalendarResponse)
async def get_calendar(
    month: str | None = Query(None, description="YYYY-MM (default: current month)"),
    service: ReplayService = Depends(get_service),
):
    """Six-week month grid with the franchise's games on each day."""
    if month is None:
        first = start_of_month(resolve(now_utc(), service.tz))
    else:
        first = parse_month(month, service.tz)
        if first is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid month '{month}', expected YYYY-MM",
            )

    games_by_date = await service.get_month_games(first)

    days = []
    for cell in build_calendar_days(first):
        games = [
            CalendarGameModel(
                game_pk=game.game_pk,
                start_time=game.start_time,
                completed=is_completed(game),
                opponent=opponent_name(game, service.team_id),
                home_away="home" if game.is_home(service.team_id) else "away",
            )
            for game in games_by_date.get(cell.iso, [])
        ]
        days.append(
            CalendarDayModel(
                iso=cell.iso,
                day=cell.date.day.day,
                in_current_month=cell.in_current_month,
                games=games,
            )
        )

    return CalendarResponse(
        month=first.iso[:7],
        label=format_date(first, "month"),
        weekdays=WEEKDAY_LABELS,
        days=days,
    )


@router.get("/standings", response_model=StandingsResponse)
async def get_standings(
    season: int | None = Query(None, ge=1876),
    service: ReplayService = Depends(get_service),
):
    """Division standings, best rank first."""
    if season is None:
        season = resolve(now_utc(), service.tz).day.year

    records = await service.get_division_standings(season)
    rows = [
        StandingsRowModel(
            team_id=record.team.id,
            team=team_display_name(record),
            wins=record.wins,
            losses=record.losses,
            winning_percentage=format_winning_percentage(
                record.winning_percentage, record.wins, record.losses
            ),
            games_back=record.games_back,
            division_rank=record.division_rank,
            is_franchise=record.team.id == service.team_id,
        )
        for record in records
    ]
    return StandingsResponse(
        season=season,
        records=rows,
        message=None if rows else NO_STANDINGS_MESSAGE,
    )


@router.get("/next-game", response_model=NextGameResponse)
async def get_next_game(service: ReplayService = Depends(get_service)):
    """Next scheduled game in the look-ahead window."""
    details = await service.get_next_game()
    if details is None:
        return NextGameResponse()
    return NextGameResponse(game=NextGameModel(**vars(details)))
