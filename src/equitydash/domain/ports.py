# src/equitydash/domain/ports.py
from __future__ import annotations

from typing import Any, Protocol

from equitydash.domain.property import (
    OverrideKind,
    Partner,
    PropertyAssumptions,
    Transaction,
    ValueOverride,
)


# ----------------------------
# Property row (single)
# ----------------------------

class PropertyRepository(Protocol):
    def get(self) -> PropertyAssumptions | None:
        ...

    def save(self, prop: PropertyAssumptions) -> PropertyAssumptions:
        """Insert the row, or replace the existing one."""
        ...

    def update_assumptions(self, changes: dict[str, Any]) -> PropertyAssumptions:
        ...


# ----------------------------
# Override history (append-only)
# ----------------------------

class ValueHistoryRepository(Protocol):
    def append(self, entry: ValueOverride) -> ValueOverride:
        ...

    def latest(self, kind: OverrideKind) -> ValueOverride | None:
        ...

    def history(self, kind: OverrideKind) -> list[ValueOverride]:
        ...


# ----------------------------
# Transactions
# ----------------------------

class TransactionRepository(Protocol):
    def add(self, txn: Transaction) -> Transaction:
        ...

    def update(self, txn_id: int, changes: dict[str, Any]) -> Transaction:
        ...

    def delete(self, txn_id: int) -> None:
        ...

    def list_all(self) -> list[Transaction]:
        """Newest first."""
        ...


# ----------------------------
# Partners
# ----------------------------

class PartnerRepository(Protocol):
    def add(self, partner: Partner) -> Partner:
        ...

    def list_all(self) -> list[Partner]:
        ...


class PropertyNotFoundError(LookupError):
    """The store has no `property` row yet."""
