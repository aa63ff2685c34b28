# src/equitydash/adapters/sql_repo.py
from __future__ import annotations

import datetime as dt
from typing import Any

from sqlmodel import Field, Session, SQLModel, create_engine, select

from equitydash.domain.ports import PropertyNotFoundError
from equitydash.domain.property import (
    OverrideKind,
    Partner,
    PropertyAssumptions,
    Transaction,
    ValueOverride,
)


def _utcnow() -> dt.datetime:
    # timezone-aware; current sqlmodel rejects naive datetimes on insert
    return dt.datetime.now(dt.timezone.utc)


# ---------- Property (single row) ----------

class PropertyRow(SQLModel, table=True):
    __tablename__ = "property"

    id: int | None = Field(default=None, primary_key=True)
    updated_at: dt.datetime = Field(default_factory=_utcnow)

    home_value: float
    loan_balance: float
    original_loan_amount: float | None = None
    loan_start_date: dt.date | None = None

    interest_rate: float
    loan_term_years: int = 30

    monthly_rent: float = 0.0
    monthly_maintenance: float = 0.0
    monthly_management: float = 0.0
    monthly_escrow: float = 0.0

    property_tax_annual: float = 0.0
    insurance_annual: float = 0.0
    pmi_annual: float = 0.0
    pmi_years: int = 0
    depreciation_annual: float = 0.0

    home_growth_rate: float = 0.0
    rent_growth_rate: float = 0.0
    inflation_rate: float = 0.0
    vacancy_rate: float = 0.0
    effective_tax_rate: float = 0.0


def _to_assumptions(row: PropertyRow) -> PropertyAssumptions:
    return PropertyAssumptions.model_validate(row.model_dump(exclude={"id", "updated_at"}))


class SqlPropertyRepository:
    def __init__(self, uri: str = "sqlite:///equitydash.db"):
        self.engine = create_engine(uri, echo=False)
        SQLModel.metadata.create_all(self.engine)

    def _first(self, session: Session) -> PropertyRow | None:
        return session.exec(select(PropertyRow).order_by(PropertyRow.id)).first()

    def get(self) -> PropertyAssumptions | None:
        with Session(self.engine) as session:
            row = self._first(session)
            return _to_assumptions(row) if row else None

    def save(self, prop: PropertyAssumptions) -> PropertyAssumptions:
        """Insert the property row, or replace every field of the existing one."""
        with Session(self.engine) as session:
            row = self._first(session)
            if row is None:
                row = PropertyRow(**prop.model_dump())
            else:
                for field, value in prop.model_dump().items():
                    setattr(row, field, value)
                row.updated_at = _utcnow()
            session.add(row)
            session.commit()
            session.refresh(row)
            return _to_assumptions(row)

    def update_assumptions(self, changes: dict[str, Any]) -> PropertyAssumptions:
        with Session(self.engine) as session:
            row = self._first(session)
            if row is None:
                raise PropertyNotFoundError("no property row")

            # validate the merged record before touching the row
            merged = _to_assumptions(row).model_dump() | changes
            validated = PropertyAssumptions.model_validate(merged)

            for field in changes:
                if field in PropertyAssumptions.model_fields:
                    setattr(row, field, getattr(validated, field))
            row.updated_at = _utcnow()

            session.add(row)
            session.commit()
            session.refresh(row)
            return _to_assumptions(row)


# ---------- Override history ----------

class HomeValueHistoryRow(SQLModel, table=True):
    __tablename__ = "property_value_history"

    id: int | None = Field(default=None, primary_key=True)
    recorded_at: dt.date = Field(index=True)
    home_value: float
    source: str | None = None
    note: str | None = None


class LoanBalanceHistoryRow(SQLModel, table=True):
    __tablename__ = "loan_balance_history"

    id: int | None = Field(default=None, primary_key=True)
    recorded_at: dt.date = Field(index=True)
    balance: float
    note: str | None = None


class SqlValueHistoryRepository:
    """Both history tables behind one interface, keyed by override kind."""

    def __init__(self, uri: str = "sqlite:///equitydash.db"):
        self.engine = create_engine(uri, echo=False)
        SQLModel.metadata.create_all(self.engine)

    def append(self, entry: ValueOverride) -> ValueOverride:
        row: HomeValueHistoryRow | LoanBalanceHistoryRow
        if entry.kind == "home_value":
            row = HomeValueHistoryRow(
                recorded_at=entry.recorded_at,
                home_value=entry.value,
                source=entry.source,
                note=entry.note,
            )
        else:
            row = LoanBalanceHistoryRow(
                recorded_at=entry.recorded_at,
                balance=entry.value,
                note=entry.note,
            )
        with Session(self.engine) as session:
            session.add(row)
            session.commit()
        return entry

    def _query(self, kind: OverrideKind, limit: int | None = None) -> list[ValueOverride]:
        with Session(self.engine) as session:
            if kind == "home_value":
                stmt = select(HomeValueHistoryRow).order_by(
                    HomeValueHistoryRow.recorded_at.desc(), HomeValueHistoryRow.id.desc()
                )
                if limit:
                    stmt = stmt.limit(limit)
                return [
                    ValueOverride(
                        kind="home_value",
                        recorded_at=r.recorded_at,
                        value=r.home_value,
                        source=r.source,
                        note=r.note,
                    )
                    for r in session.exec(stmt)
                ]

            stmt = select(LoanBalanceHistoryRow).order_by(
                LoanBalanceHistoryRow.recorded_at.desc(), LoanBalanceHistoryRow.id.desc()
            )
            if limit:
                stmt = stmt.limit(limit)
            return [
                ValueOverride(kind="loan_balance", recorded_at=r.recorded_at, value=r.balance, note=r.note)
                for r in session.exec(stmt)
            ]

    def latest(self, kind: OverrideKind) -> ValueOverride | None:
        rows = self._query(kind, limit=1)
        return rows[0] if rows else None

    def history(self, kind: OverrideKind) -> list[ValueOverride]:
        return self._query(kind)


# ---------- Transactions ----------

class TransactionRow(SQLModel, table=True):
    __tablename__ = "transactions"

    id: int | None = Field(default=None, primary_key=True)
    created_at: dt.datetime = Field(default_factory=_utcnow)

    date: dt.date = Field(index=True)
    category: str = Field(index=True)
    amount: float
    note: str | None = None


def _to_transaction(row: TransactionRow) -> Transaction:
    return Transaction.model_validate(row.model_dump(exclude={"created_at"}))


class SqlTransactionRepository:
    def __init__(self, uri: str = "sqlite:///equitydash.db"):
        self.engine = create_engine(uri, echo=False)
        SQLModel.metadata.create_all(self.engine)

    def add(self, txn: Transaction) -> Transaction:
        row = TransactionRow(**txn.model_dump(exclude={"id"}))
        with Session(self.engine) as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return _to_transaction(row)

    def update(self, txn_id: int, changes: dict[str, Any]) -> Transaction:
        with Session(self.engine) as session:
            row = session.get(TransactionRow, txn_id)
            if row is None:
                raise KeyError(txn_id)

            validated = Transaction.model_validate(_to_transaction(row).model_dump() | changes)
            for field in ("date", "category", "amount", "note"):
                setattr(row, field, getattr(validated, field))

            session.add(row)
            session.commit()
            session.refresh(row)
            return _to_transaction(row)

    def delete(self, txn_id: int) -> None:
        with Session(self.engine) as session:
            row = session.get(TransactionRow, txn_id)
            if row is None:
                raise KeyError(txn_id)
            session.delete(row)
            session.commit()

    def list_all(self) -> list[Transaction]:
        with Session(self.engine) as session:
            stmt = select(TransactionRow).order_by(TransactionRow.date.desc(), TransactionRow.id.desc())
            return [_to_transaction(r) for r in session.exec(stmt)]


# ---------- Partners ----------

class PartnerRow(SQLModel, table=True):
    __tablename__ = "partners"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    ownership_share: float


class SqlPartnerRepository:
    def __init__(self, uri: str = "sqlite:///equitydash.db"):
        self.engine = create_engine(uri, echo=False)
        SQLModel.metadata.create_all(self.engine)

    def add(self, partner: Partner) -> Partner:
        with Session(self.engine) as session:
            session.add(PartnerRow(name=partner.name, ownership_share=partner.ownership_share))
            session.commit()
        return partner

    def list_all(self) -> list[Partner]:
        with Session(self.engine) as session:
            stmt = select(PartnerRow).order_by(PartnerRow.id)
            return [Partner(name=r.name, ownership_share=r.ownership_share) for r in session.exec(stmt)]
