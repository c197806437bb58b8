"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calorie_ledger.adapters.supabase_store import SupabaseTabularStore
from calorie_ledger.config import Settings, build_layout, parse_timezone
from calorie_ledger.services.journal import JournalService
from calorie_ledger.services.ledger import LedgerService
from calorie_ledger.services.store import TabularStore
from calorie_ledger.services.summary import SummaryUpserter
from calorie_ledger.services.sync import SyncOrchestrator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: TabularStore
    orchestrator: SyncOrchestrator
    ledger_service: LedgerService
    journal_service: JournalService


def build_services(settings: Settings, store: TabularStore) -> AppContainer:
    """Wire the engine services around a store."""
    layout = build_layout(settings)
    tz = parse_timezone(settings.ledger_timezone)
    upserter = SummaryUpserter(store=store, layout=layout, tz=tz)
    orchestrator = SyncOrchestrator(
        store=store, layout=layout, tz=tz, upserter=upserter
    )
    return AppContainer(
        settings=settings,
        store=store,
        orchestrator=orchestrator,
        ledger_service=LedgerService(orchestrator),
        journal_service=JournalService(upserter),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return build_services(resolved_settings, SupabaseTabularStore(supabase_client))
