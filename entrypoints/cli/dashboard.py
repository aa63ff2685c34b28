from __future__ import annotations

import json
from datetime import date
from typing import Optional

import typer
from loguru import logger

from equitydash.adapters.config import config
from equitydash.adapters.sql_repo import (
    SqlPartnerRepository,
    SqlPropertyRepository,
    SqlTransactionRepository,
    SqlValueHistoryRepository,
)
from equitydash.adapters.storage import points_to_df, write_df
from equitydash.analysis.scenarios import build_monthly_scenarios, merge_cash_flow_scenarios
from equitydash.services import dashboard as svc
from equitydash.services.dashboard import DashboardContext
from equitydash.services.demo import demo_context, seed_store

app = typer.Typer(help="Property equity dashboard: balances, projections, exports.")


def _context(db: Optional[str], demo: bool) -> DashboardContext:
    if demo:
        return demo_context()
    uri = db or config.DB_URI
    return DashboardContext(
        properties=SqlPropertyRepository(uri),
        history=SqlValueHistoryRepository(uri),
        transactions=SqlTransactionRepository(uri),
        partners=SqlPartnerRepository(uri),
    )


def _as_of(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


DbOpt = typer.Option(None, "--db", help="Store URI (defaults to EQUITYDASH_DB_URI)")
DemoOpt = typer.Option(False, "--demo", help="Use built-in sample data instead of the store")
AsOfOpt = typer.Option(None, "--as-of", help="Evaluation date, YYYY-MM-DD (default: today)")


@app.command("seed")
def seed_cmd(db: Optional[str] = DbOpt) -> None:
    """
    Write the sample property, partner and transactions into the store.
    """
    if not seed_store(_context(db, demo=False)):
        logger.warning("store already has a property row; leaving it alone")
        raise typer.Exit(code=1)
    logger.info("seeded store at {}", db or config.DB_URI)


@app.command("balance")
def balance_cmd(db: Optional[str] = DbOpt, demo: bool = DemoOpt, as_of: Optional[str] = AsOfOpt) -> None:
    """
    Show the resolved current home value and loan balance.
    """
    pos = svc.current_position(_context(db, demo), as_of=_as_of(as_of))
    typer.echo(json.dumps(pos.to_dict(), indent=2, default=str))


@app.command("annual")
def annual_cmd(
    db: Optional[str] = DbOpt,
    demo: bool = DemoOpt,
    as_of: Optional[str] = AsOfOpt,
    offset: float = typer.Option(0.0, help="Home growth rate offset, e.g. 0.02"),
    my_share: bool = typer.Option(False, "--my-share", help="Scale to the partner's share"),
) -> None:
    """
    Print the year 0..10 equity / cash flow projection.
    """
    ctx = _context(db, demo)
    share = svc.resolve_share(ctx) if my_share else None
    points = svc.annual_projection(ctx, rate_offset=offset, share=share, as_of=_as_of(as_of))
    typer.echo(points_to_df(points).to_string(index=False))


@app.command("monthly")
def monthly_cmd(
    db: Optional[str] = DbOpt,
    demo: bool = DemoOpt,
    as_of: Optional[str] = AsOfOpt,
    offset: float = typer.Option(0.0, help="Rent growth / inflation offset, e.g. 0.02"),
    my_share: bool = typer.Option(False, "--my-share", help="Scale to the partner's share"),
    labelled_only: bool = typer.Option(False, "--yearly", help="Only print the labelled (yearly) months"),
) -> None:
    """
    Print the 120-month cash flow projection.
    """
    ctx = _context(db, demo)
    share = svc.resolve_share(ctx) if my_share else None
    points = svc.monthly_projection(ctx, rate_offset=offset, share=share, as_of=_as_of(as_of))
    if labelled_only:
        points = [p for p in points if p.month_label]
    typer.echo(points_to_df(points).to_string(index=False))


@app.command("summary")
def summary_cmd(db: Optional[str] = DbOpt, demo: bool = DemoOpt, as_of: Optional[str] = AsOfOpt) -> None:
    """
    Headline figures (partner's share): equity, monthly equity growth, this month, running balance.
    """
    payload = svc.build_dashboard(_context(db, demo), as_of=_as_of(as_of))
    typer.echo(json.dumps({"ownership_share": payload["ownership_share"], **payload["summary"]}, indent=2))


@app.command("export")
def export_cmd(
    out_dir: str = typer.Argument(..., help="Directory for annual/cash_flow files"),
    db: Optional[str] = DbOpt,
    demo: bool = DemoOpt,
    as_of: Optional[str] = AsOfOpt,
    fmt: str = typer.Option("csv", "--format", help="csv | parquet"),
) -> None:
    """
    Write the base annual series and the three-scenario monthly cash flow to disk.
    """
    if fmt not in ("csv", "parquet"):
        raise typer.BadParameter("format must be csv or parquet")

    ctx = _context(db, demo)
    when = _as_of(as_of)
    annual = svc.annual_projection(ctx, as_of=when)
    pos = svc.current_position(ctx, as_of=when)
    monthly = build_monthly_scenarios(
        svc.load_property(ctx), spread=config.SCENARIO_SPREAD, start_loan_balance=pos.loan_balance
    )

    annual_path = f"{out_dir.rstrip('/')}/annual.{fmt}"
    cash_flow_path = f"{out_dir.rstrip('/')}/cash_flow.{fmt}"
    write_df(points_to_df(annual), annual_path)
    write_df(points_to_df(merge_cash_flow_scenarios(monthly)), cash_flow_path)
    logger.info("wrote {} and {}", annual_path, cash_flow_path)


if __name__ == "__main__":
    app()
