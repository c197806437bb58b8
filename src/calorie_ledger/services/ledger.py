"""Write-side operations on the food log and profile."""

import logging
from dataclasses import dataclass, replace

from calorie_ledger.domain.ledger import LogEntry
from calorie_ledger.domain.signals import EntryChanged, ProfileChanged
from calorie_ledger.services.entries import entry_to_row
from calorie_ledger.services.metrics import decode_profile
from calorie_ledger.services.sync import SyncOrchestrator, SyncReport

logger = logging.getLogger(__name__)


@dataclass
class LedgerService:
    """Appends entries and edits the profile, then resynchronizes."""

    orchestrator: SyncOrchestrator

    def add_entry(self, entry: LogEntry) -> tuple[LogEntry, SyncReport]:
        """Append a log entry and recompute the summaries."""
        store = self.orchestrator.store
        layout = self.orchestrator.layout
        row_index = store.append_row(
            layout.log_collection, entry_to_row(entry, layout.log)
        )
        logger.info("Logged entry", extra={"row_index": row_index})
        saved = replace(entry, row_index=row_index)
        return saved, self.orchestrator.handle(EntryChanged())

    def update_profile(self, values: dict[str, object]) -> SyncReport:
        """Validate and write profile fields, then recompute every summary.

        Raises ``InvalidProfileError`` before writing when the merged profile
        would not decode.
        """
        store = self.orchestrator.store
        layout = self.orchestrator.layout
        known = set(layout.profile.all())
        changes = {name: value for name, value in values.items() if name in known}
        current = store.read_fields(layout.profile_collection, layout.profile.all())
        decode_profile({**current, **changes}, layout.profile)
        store.write_fields(layout.profile_collection, changes)
        return self.orchestrator.handle(ProfileChanged(fields=frozenset(changes)))
