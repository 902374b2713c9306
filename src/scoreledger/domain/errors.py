"""Error taxonomy shared by the store, the reconciler and the query boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scoreledger.domain.model import EntityKind


class ScoreLedgerError(RuntimeError):
    """Base class for all domain level failures."""


class FetchError(ScoreLedgerError):
    """Raised when the upstream snapshot cannot be retrieved or decoded.

    Fatal to a whole reconciliation cycle.
    """


class EntityError(ScoreLedgerError):
    """Failure scoped to a single entity; the reconciler skips the entity."""


class CodecError(EntityError):
    """Raised when an entity cannot be encoded or decoded."""


class StoreError(EntityError):
    """Raised when the key-value substrate fails a read or write."""


class NotFoundError(EntityError):
    """Raised when a requested entity is not present in the store."""

    def __init__(self, kind: EntityKind, entity_id: int) -> None:
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class QueryValidationError(ScoreLedgerError):
    """Raised for malformed read requests, e.g. a non-positive id."""


class QueryInternalError(ScoreLedgerError):
    """Raised when a read request fails for reasons other than a missing entity."""
