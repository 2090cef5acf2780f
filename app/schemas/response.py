from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.services.duration import format_duration
from app.services.timer_engine import TimerSnapshot
from app.services.timer_store import SessionRecord


# ── Timer commands ───────────────────────────────────────────────────────────
class TimerCommand(BaseModel):
    # Intercom conversation ids arrive as numbers from some clients
    model_config = ConfigDict(coerce_numbers_to_str=True)

    operator_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("operator_id", "admin_id"),
    )
    conversation_id: str = Field(min_length=1)


class TimerOut(BaseModel):
    operator_id: str
    conversation_id: str
    session_id: str
    status: str
    start_time: int
    elapsed: int
    formatted_elapsed: str
    end_time: int | None = None

    @classmethod
    def from_snapshot(cls, snapshot: TimerSnapshot) -> "TimerOut":
        return cls(
            operator_id=snapshot.operator_id,
            conversation_id=snapshot.conversation_id,
            session_id=snapshot.session_id,
            status=snapshot.status.value,
            start_time=snapshot.start_time,
            elapsed=snapshot.elapsed,
            formatted_elapsed=format_duration(snapshot.elapsed),
            end_time=snapshot.end_time,
        )


class TimerActionResponse(BaseModel):
    # A missing timer is not an error for the inbox client; `found` tells them apart
    success: bool = True
    found: bool
    timer: TimerOut | None = None


# ── History & analytics ──────────────────────────────────────────────────────
class SessionOut(BaseModel):
    session_id: str
    start_time: int
    end_time: int | None
    final_duration: int | None
    formatted_duration: str

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionOut":
        return cls(
            session_id=record.session_id,
            start_time=record.start_time,
            end_time=record.end_time,
            final_duration=record.final_duration,
            formatted_duration=format_duration(record.final_duration or 0),
        )


class HistoryResponse(BaseModel):
    operator_id: str
    conversation_id: str
    sessions: list[SessionOut]


class FormattedAnalytics(BaseModel):
    total_time: str
    average_time: str
    median_time: str


class AnalyticsResponse(BaseModel):
    total_sessions: int
    total_time: int
    average_time: float
    median_time: int
    formatted: FormattedAnalytics


# ── Canvas Kit ───────────────────────────────────────────────────────────────
class CanvasContext(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    location: str | None = None
    conversation_id: str | None = None


class CurrentAdmin(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str | None = None
    name: str | None = None


class InitializeRequest(BaseModel):
    context: CanvasContext | None = None
    current_admin: CurrentAdmin | None = None


# ── Webhooks ─────────────────────────────────────────────────────────────────
class WebhookResponse(BaseModel):
    received: bool = True
    stopped: int = 0


# ── Dashboard ────────────────────────────────────────────────────────────────
class HealthResponse(BaseModel):
    status: str = "ok"
    active_timers: int
    total_sessions: int


class DashboardResponse(BaseModel):
    version: str
    active_timers: int
    total_sessions: int
    timers: list[TimerOut]
