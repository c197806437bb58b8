"""Error types raised by the ledger engine."""


class LedgerError(Exception):
    """Base class for fatal ledger errors."""

    kind = "ledger_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidProfileError(LedgerError):
    """Raised when biometric fields are absent or unparseable."""

    kind = "invalid_profile"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class CollectionNotFoundError(LedgerError):
    """Raised by a store when a named collection does not exist."""

    kind = "collection_not_found"

    def __init__(self, collection: str) -> None:
        self.collection = collection
        super().__init__(f"Collection '{collection}' does not exist")


class StoreNotInitializedError(LedgerError):
    """Raised when the daily summary store has never been created."""

    kind = "store_not_initialized"

    def __init__(self, collection: str) -> None:
        self.collection = collection
        super().__init__(f"Summary store '{collection}' is not initialized")


class StoreUnavailableError(LedgerError):
    """Raised when a store read or write fails for a reason other than absence."""

    kind = "store_unavailable"

    def __init__(self, collection: str, detail: str) -> None:
        self.collection = collection
        super().__init__(f"Store '{collection}' request failed: {detail}")


class UnaddressableRowError(LedgerError):
    """Raised when a stored summary row has no row index to update it by."""

    kind = "unaddressable_row"

    def __init__(self, collection: str, key: str) -> None:
        self.collection = collection
        self.key = key
        super().__init__(f"Summary row for {key} in '{collection}' has no row index")
