"""Change signals consumed by the sync orchestrator."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EntryChanged:
    """A food log entry was added or edited."""


@dataclass(frozen=True)
class ProfileChanged:
    """One or more biometric profile fields changed."""

    fields: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ExplicitRefresh:
    """A caller asked for a full recomputation."""


ChangeSignal = EntryChanged | ProfileChanged | ExplicitRefresh
