# mood router — log emotion events, dashboard stats, and calendar week views
# every endpoint is scoped to the authenticated user's own log

import logging
from datetime import tzinfo

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status

from app.models.mood import (
    DashboardStats,
    EmotionEvent,
    EmotionEventAppendResponse,
    EmotionEventCreate,
    EmotionTableEntry,
    MoodCard,
    WeekResponse,
)
from app.dependencies import (
    get_clock,
    get_current_user,
    get_emotion_table,
    get_mood_repository,
    get_stats_publisher,
    get_timezone,
)
from app.services.emotion_classifier import classify_text
from app.services.emotion_table import EmotionTable, normalize_tag
from app.services.mood_engine import (
    Clock,
    build_mood_cards,
    build_week_view,
    compute_dashboard_stats,
    summarize_week,
)
from app.services.mood_log import MoodEventRepository
from app.services.stats_publisher import StatsPublisher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/mood", tags=["mood"])


def _resolve_emotion(body: EmotionEventCreate) -> str:
    """explicit tag wins; otherwise classify the free text"""
    tag = normalize_tag(body.emotion)
    if tag:
        return tag
    if body.text and body.text.strip():
        return classify_text(body.text)
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Either emotion or text is required",
    )


@router.post("/events", response_model=EmotionEventAppendResponse, status_code=status.HTTP_201_CREATED)
async def log_event(
    body: EmotionEventCreate,
    background_tasks: BackgroundTasks,
    current_user: dict = Depends(get_current_user),
    repository: MoodEventRepository = Depends(get_mood_repository),
    publisher: StatsPublisher = Depends(get_stats_publisher),
    clock: Clock = Depends(get_clock),
):
    """append an emotion event to the user's log, then publish fresh stats in the background"""
    event = EmotionEvent(
        timestamp=body.timestamp if body.timestamp is not None else clock(),
        emotion=_resolve_emotion(body),
    )
    log_size = await repository.append(current_user["id"], event)

    background_tasks.add_task(publisher.publish, current_user["id"])
    return EmotionEventAppendResponse(event=event, logSize=log_size)


@router.get("/events", response_model=list[EmotionEvent])
async def list_events(
    limit: int = Query(50, ge=1, le=500),
    current_user: dict = Depends(get_current_user),
    repository: MoodEventRepository = Depends(get_mood_repository),
):
    """most recent events, oldest first"""
    events = await repository.get(current_user["id"])
    return events[-limit:]


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    current_user: dict = Depends(get_current_user),
    repository: MoodEventRepository = Depends(get_mood_repository),
    clock: Clock = Depends(get_clock),
    table: EmotionTable = Depends(get_emotion_table),
    tz: tzinfo = Depends(get_timezone),
):
    """weekly active days, streak, current mood, and the 7-day preview series"""
    events = await repository.get(current_user["id"])
    return compute_dashboard_stats(events, clock=clock, table=table, tz=tz)


@router.get("/weeks", response_model=WeekResponse)
async def get_week(
    offset: int = Query(0, ge=-52, le=0, description="0 = this week, -1 = last week"),
    current_user: dict = Depends(get_current_user),
    repository: MoodEventRepository = Depends(get_mood_repository),
    clock: Clock = Depends(get_clock),
    tz: tzinfo = Depends(get_timezone),
):
    """mon–sun breakdown of a calendar week with its highs and lows summary"""
    events = await repository.get(current_user["id"])
    week = build_week_view(events, offset, clock=clock, tz=tz)
    return WeekResponse(week=week, summary=summarize_week(week))


@router.get("/cards", response_model=list[MoodCard])
async def get_mood_cards(
    limit: int = Query(6, ge=1, le=30),
    current_user: dict = Depends(get_current_user),
    repository: MoodEventRepository = Depends(get_mood_repository),
    tz: tzinfo = Depends(get_timezone),
):
    """reflection cards for the most recent days with events"""
    events = await repository.get(current_user["id"])
    return build_mood_cards(events, limit=limit, tz=tz)

@router.get("/emotions", response_model=list[EmotionTableEntry])
async def list_emotions(table: EmotionTable = Depends(get_emotion_table)):
    """the emotion -> score / label table currently in use"""
    return [
        EmotionTableEntry(emotion=tag, score=spec.score, label=spec.label, description=spec.description)
        for tag, spec in sorted(table.emotions.items())
    ]
