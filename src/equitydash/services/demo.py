# src/equitydash/services/demo.py
from __future__ import annotations

from equitydash.adapters.logging_utils import get_logger
from equitydash.adapters.memory_repo import (
    InMemoryPartnerRepository,
    InMemoryPropertyRepository,
    InMemoryTransactionRepository,
    InMemoryValueHistoryRepository,
)
from equitydash.adapters.seed import DEMO_PARTNERS, DEMO_PROPERTY, demo_transactions
from equitydash.services.dashboard import DashboardContext

logger = get_logger(__name__)


def seed_store(ctx: DashboardContext) -> bool:
    """
    Write the sample property, partners and ledger into an empty store.
    Returns False (and writes nothing) when a property row already exists.
    """
    if ctx.properties.get() is not None:
        return False

    ctx.properties.save(DEMO_PROPERTY)
    for partner in DEMO_PARTNERS:
        ctx.partners.add(partner)
    txns = demo_transactions()
    for txn in txns:
        ctx.transactions.add(txn)

    logger.info("store seeded", extra={"context": {"partners": len(DEMO_PARTNERS), "transactions": len(txns)}})
    return True


def demo_context() -> DashboardContext:
    """A seeded in-memory context, for --demo runs and tests."""
    ctx = DashboardContext(
        properties=InMemoryPropertyRepository(),
        history=InMemoryValueHistoryRepository(),
        transactions=InMemoryTransactionRepository(),
        partners=InMemoryPartnerRepository(),
    )
    seed_store(ctx)
    return ctx
