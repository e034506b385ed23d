from __future__ import annotations

from typing import Optional

import typer
from loguru import logger

from halal_deal.adapters.config import config
from halal_deal.adapters.storage import JsonFileAnalyticsStore, build_analytics_store, read_df, write_df
from halal_deal.analysis.finance import evaluate
from halal_deal.analysis.finance_batch import evaluate_frame, summarize_batch
from halal_deal.analysis.report import render_report
from halal_deal.api.schemas import DealResultOut
from halal_deal.services.deal_analyzer import analyze_deal
from halal_deal.services.validation import DealValidationError, prepare_deal_input

app = typer.Typer(help="Check whether a halal-financed property deal stacks up.")


def _default_analytics_path() -> Optional[str]:
    return config.ANALYTICS_PATH


@app.command("evaluate")
def evaluate_cmd(
    price: float = typer.Option(..., "--price", help="Purchase price."),
    rent: float = typer.Option(..., "--rent", help="Expected rent per period."),
    frequency: str = typer.Option("monthly", "--frequency", help="weekly or monthly."),
    method: str = typer.Option(..., "--method", help="musharakah | ijara | murabaha | crowdfunding | cash"),
    deposit: float = typer.Option(0.0, "--deposit", help="Deposit (ignored for cash / crowdfunding)."),
    finance_cost: float = typer.Option(0.0, "--finance-cost", help="Monthly finance payment."),
    operating_costs: float = typer.Option(0.0, "--operating-costs", help="Monthly running costs."),
    appreciation: float = typer.Option(0.0, "--appreciation", help="Annual appreciation in percent."),
    stamp_duty: float = typer.Option(0.0, "--stamp-duty"),
    legal_fees: float = typer.Option(0.0, "--legal-fees"),
    refurb_costs: float = typer.Option(0.0, "--refurb-costs"),
    other_costs: float = typer.Option(0.0, "--other-costs", help="Other one-off upfront costs."),
    property_name: str = typer.Option("Untitled Property", "--property-name"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw result as JSON."),
    skip_validation: bool = typer.Option(
        False, "--skip-validation", help="Evaluate even if the inputs look wrong."
    ),
) -> None:
    """
    Evaluate a single deal and print the report.
    """
    raw = {
        "purchase_price": price,
        "expected_rent": rent,
        "rent_frequency": frequency,
        "deposit": deposit,
        "financing_method": method,
        "monthly_finance_cost": finance_cost,
        "monthly_operating_costs": operating_costs,
        "annual_appreciation": appreciation,
        "stamp_duty": stamp_duty,
        "legal_fees": legal_fees,
        "refurb_costs": refurb_costs,
        "other_upfront_costs": other_costs,
    }
    try:
        deal = prepare_deal_input(raw)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    if skip_validation:
        result = evaluate(deal, savings_account_return=config.SAVINGS_ACCOUNT_RETURN)
    else:
        analytics = build_analytics_store(config.ANALYTICS_PATH) if config.ANALYTICS_PATH else None
        try:
            result = analyze_deal(deal, analytics=analytics)
        except DealValidationError as e:
            typer.echo("Deal failed validation:", err=True)
            for err in e.errors:
                typer.echo(f"  - {err.field}: {err.message}", err=True)
            raise typer.Exit(code=1)

    if json_output:
        typer.echo(DealResultOut.from_result(result).model_dump_json(indent=2))
        return

    typer.echo(render_report(deal, result, property_name, currency_symbol=config.CURRENCY_SYMBOL))


@app.command("batch")
def batch_cmd(
    input_path: str = typer.Argument(..., help="CSV or parquet file, one deal per row."),
    output: Optional[str] = typer.Option(None, "--output", help="Where to write the evaluated rows."),
    validate_rows: bool = typer.Option(True, "--validate/--no-validate", help="Skip rows that fail validation."),
) -> None:
    """
    Evaluate every deal in a table.
    """
    logger.info("Reading deals from {}", input_path)
    df = read_df(input_path)
    out = evaluate_frame(
        df,
        validate_rows=validate_rows,
        savings_account_return=config.SAVINGS_ACCOUNT_RETURN,
    )
    if output:
        write_df(out, output)
        logger.info("Wrote {} rows to {}", len(out), output)

    summary = summarize_batch(out)
    typer.echo(f"Deals: {summary.n_rows}")
    typer.echo(f"Valid: {summary.n_valid}")
    typer.echo(f"Stacking: {summary.n_stacking}")
    for method, count in sorted(summary.stacking_by_method.items()):
        typer.echo(f"  {method}: {count}")


@app.command("analytics")
def analytics_cmd(
    path: Optional[str] = typer.Option(
        default_factory=_default_analytics_path,
        help="Analytics JSON file (env HALAL_DEAL_ANALYTICS_PATH if omitted).",
    ),
    clear: bool = typer.Option(False, "--clear", help="Reset all counters."),
) -> None:
    """
    Show how often each financing method has been evaluated.
    """
    if not path:
        typer.echo("No analytics file configured (set HALAL_DEAL_ANALYTICS_PATH or pass --path).", err=True)
        raise typer.Exit(code=1)

    store = JsonFileAnalyticsStore(path)
    if clear:
        store.clear()
        typer.echo("Analytics cleared.")
        return

    snap = store.snapshot()
    typer.echo(f"Total calculations: {snap['total_calculations']}")
    for method, count in sorted(snap["financing_methods"].items()):
        typer.echo(f"  {method}: {count}")
    typer.echo(f"Last updated: {snap['last_updated']}")


if __name__ == "__main__":
    app()
