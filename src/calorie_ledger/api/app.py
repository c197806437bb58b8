"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from calorie_ledger.api.hooks import router as hooks_router
from calorie_ledger.api.models import LogEntryRequest, ProfileUpdateRequest
from calorie_ledger.api.serializers import (
    serialize_calendar_day,
    serialize_entry,
    serialize_failure,
    serialize_profile,
    serialize_report,
    serialize_summary,
)
from calorie_ledger.app_logging import configure_logging
from calorie_ledger.containers import AppContainer
from calorie_ledger.domain.errors import (
    CollectionNotFoundError,
    InvalidProfileError,
    LedgerError,
    StoreNotInitializedError,
    StoreUnavailableError,
    UnaddressableRowError,
)
from calorie_ledger.domain.ledger import LogEntry
from calorie_ledger.services.metrics import compute_daily_goal

DEFAULT_ENTRY_LIMIT = 20
DEFAULT_SUMMARY_LIMIT = 30


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    app.include_router(hooks_router)

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(
        request: Request, exc: LedgerError
    ) -> JSONResponse:
        logger.warning(
            "Ledger error on %s %s: %s", request.method, request.url.path, exc
        )
        return JSONResponse(
            status_code=_status_for(exc),
            content={"error": {"kind": exc.kind, "message": exc.message}},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {
            "status": "ok",
            "store": "configured" if container.settings.supabase_url else "missing",
        }

    @app.post("/api/log")
    async def add_log_entry(payload: LogEntryRequest) -> dict[str, object]:
        """Append a log entry and resynchronize the summaries."""
        entry = LogEntry(
            date=payload.date,
            time=payload.time,
            meal_type=payload.meal_type,
            description=payload.description,
            calories=payload.calories,
        )
        saved, report = container.ledger_service.add_entry(entry)
        return {"entry": serialize_entry(saved), "sync": serialize_report(report)}

    @app.get("/api/log")
    async def list_log_entries(limit: int = DEFAULT_ENTRY_LIMIT) -> dict[str, object]:
        """Return recent log entries, most recent first."""
        entries = container.journal_service.recent_entries(limit)
        return {"entries": [serialize_entry(entry) for entry in entries]}

    @app.get("/api/summary")
    async def list_summaries(
        limit: int = DEFAULT_SUMMARY_LIMIT,
    ) -> dict[str, object]:
        """Return recent daily summaries, most recent first."""
        records = container.journal_service.recent_summaries(limit)
        return {"summaries": [serialize_summary(record) for record in records]}

    @app.get("/api/today")
    async def today() -> dict[str, object]:
        """Return today's projection and the last sync failure, if any."""
        orchestrator = container.orchestrator
        record = orchestrator.get_today_summary()
        return {
            "today": serialize_summary(record),
            "failure": serialize_failure(orchestrator.last_failure),
        }

    @app.get("/api/dashboard")
    async def dashboard() -> dict[str, object]:
        """Return today's projection with the decoded profile."""
        orchestrator = container.orchestrator
        profile = orchestrator.load_profile()
        record = orchestrator.get_today_summary()
        return {
            "today": serialize_summary(record),
            "personal": serialize_profile(profile, compute_daily_goal(profile)),
            "failure": serialize_failure(orchestrator.last_failure),
        }

    @app.post("/api/settings")
    async def update_settings(payload: ProfileUpdateRequest) -> dict[str, object]:
        """Update profile fields and recompute every summary."""
        names = container.orchestrator.layout.profile
        values = {
            getattr(names, key): value
            for key, value in payload.model_dump(exclude_none=True).items()
        }
        report = container.ledger_service.update_profile(values)
        return serialize_report(report)

    @app.post("/api/refresh")
    async def refresh() -> dict[str, int]:
        """Recompute every summary from scratch."""
        return container.orchestrator.recompute_all()

    @app.get("/api/journal/calendar")
    async def journal_calendar(
        year: int, month: int | None = None
    ) -> dict[str, object]:
        """Return calendar cells for a month (1-12), or every day."""
        cells = container.journal_service.calendar(year, month)
        return {
            "days": {key: serialize_calendar_day(cell) for key, cell in cells.items()}
        }

    @app.get("/api/journal/date/{day}")
    async def journal_day(day: date) -> dict[str, object]:
        """Return the entries and summary logged on a date."""
        detail = container.journal_service.day(day.isoformat())
        return {
            "date": detail.date,
            "entries": [serialize_entry(entry) for entry in detail.entries],
            "summary": serialize_summary(detail.summary) if detail.summary else None,
        }

    return app


def _status_for(exc: LedgerError) -> int:
    if isinstance(exc, InvalidProfileError):
        return 422
    if isinstance(
        exc,
        CollectionNotFoundError
        | StoreNotInitializedError
        | StoreUnavailableError
        | UnaddressableRowError,
    ):
        return 503
    return 500
