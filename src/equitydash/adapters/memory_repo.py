from typing import Any

from equitydash.domain.ports import (
    PartnerRepository,
    PropertyNotFoundError,
    PropertyRepository,
    TransactionRepository,
    ValueHistoryRepository,
)
from equitydash.domain.property import (
    OverrideKind,
    Partner,
    PropertyAssumptions,
    Transaction,
    ValueOverride,
)


class InMemoryPropertyRepository(PropertyRepository):
    def __init__(self, property: PropertyAssumptions | None = None) -> None:
        self._property = property

    def get(self) -> PropertyAssumptions | None:
        return self._property

    def save(self, prop: PropertyAssumptions) -> PropertyAssumptions:
        self._property = prop
        return prop

    def update_assumptions(self, changes: dict[str, Any]) -> PropertyAssumptions:
        if self._property is None:
            raise PropertyNotFoundError("no property row")
        merged = self._property.model_dump() | changes
        self._property = PropertyAssumptions.model_validate(merged)
        return self._property


class InMemoryValueHistoryRepository(ValueHistoryRepository):
    def __init__(self) -> None:
        self._items: list[ValueOverride] = []

    def append(self, entry: ValueOverride) -> ValueOverride:
        self._items.append(entry)
        return entry

    def latest(self, kind: OverrideKind) -> ValueOverride | None:
        best: ValueOverride | None = None
        for entry in self._items:
            # later insertion wins a same-day tie
            if entry.kind == kind and (best is None or entry.recorded_at >= best.recorded_at):
                best = entry
        return best

    def history(self, kind: OverrideKind) -> list[ValueOverride]:
        items = [e for e in self._items if e.kind == kind]
        return sorted(items, key=lambda e: e.recorded_at, reverse=True)


class InMemoryTransactionRepository(TransactionRepository):
    def __init__(self) -> None:
        self._items: dict[int, Transaction] = {}
        self._next_id = 1

    def add(self, txn: Transaction) -> Transaction:
        rec = txn.model_copy(update={"id": self._next_id})
        self._items[self._next_id] = rec
        self._next_id += 1
        return rec

    def update(self, txn_id: int, changes: dict[str, Any]) -> Transaction:
        current = self._items[txn_id]
        rec = Transaction.model_validate(current.model_dump() | changes | {"id": txn_id})
        self._items[txn_id] = rec
        return rec

    def delete(self, txn_id: int) -> None:
        del self._items[txn_id]

    def list_all(self) -> list[Transaction]:
        return sorted(self._items.values(), key=lambda t: (t.date, t.id or 0), reverse=True)


class InMemoryPartnerRepository(PartnerRepository):
    def __init__(self, partners: list[Partner] | None = None) -> None:
        self._items = list(partners or [])

    def add(self, partner: Partner) -> Partner:
        self._items.append(partner)
        return partner

    def list_all(self) -> list[Partner]:
        return list(self._items)
