# src/halal_deal/analysis/finance_batch.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from loguru import logger

from halal_deal.analysis.finance import evaluate
from halal_deal.domain.financing import FinancingMethod
from halal_deal.domain.rules import DEFAULT_SAVINGS_ACCOUNT_RETURN
from halal_deal.services.validation import (
    normalize_financing_method,
    prepare_deal_input,
    submission_errors,
    validate,
)

RESULT_COLUMNS = [
    "method",
    "is_valid",
    "validation_errors",
    "monthly_rent",
    "net_monthly_profit",
    "annual_profit",
    "annual_appreciation_value",
    "total_annual_return",
    "gross_yield",
    "net_yield",
    "return_on_cash",
    "monthly_roi",
    "total_startup_costs",
    "cash_invested",
    "lender_coverage_ratio",
    "passes_lender_check",
    "break_even_months",
    "savings_account_return",
    "property_vs_savings",
    "deal_stacks",
]


@dataclass
class BatchSummary:
    n_rows: int
    n_valid: int
    n_stacking: int
    stacking_by_method: dict[str, int] = field(default_factory=dict)
    mean_net_yield: float = float("nan")


def _blank_nans(row: dict[str, Any]) -> dict[str, Any]:
    # empty CSV cells come back as NaN; the form treats them as blank
    return {k: (None if not isinstance(v, str) and pd.isna(v) else v) for k, v in row.items()}


def _empty_metrics(method: str, errors: list[str]) -> dict[str, Any]:
    rec: dict[str, Any] = {c: np.nan for c in RESULT_COLUMNS}
    rec.update(
        method=method,
        is_valid=False,
        validation_errors="; ".join(errors),
        passes_lender_check=False,
        deal_stacks=False,
    )
    return rec


def _evaluate_row(row: dict[str, Any], *, validate_rows: bool, savings_account_return: float) -> dict[str, Any]:
    raw = _blank_nans(row)
    method = FinancingMethod.parse(
        normalize_financing_method(raw.get("financing_method") or raw.get("financingMethod"))
    ).value

    try:
        deal = prepare_deal_input(raw)
    except ValueError as e:
        return _empty_metrics(method, [str(e)])

    if validate_rows:
        errors = validate(deal) + submission_errors(deal)
        if errors:
            return _empty_metrics(method, [f"{e.field}: {e.message}" for e in errors])

    result = evaluate(deal, savings_account_return=savings_account_return).to_dict()
    comparison = result.pop("comparison_metrics")
    rec: dict[str, Any] = {"method": method, "is_valid": True, "validation_errors": ""}
    rec.update(result)
    rec.update(comparison)
    for key in ("lender_coverage_ratio", "break_even_months"):
        if rec[key] is None:
            rec[key] = np.nan
    return rec


def evaluate_frame(
    df: pd.DataFrame,
    *,
    validate_rows: bool = True,
    savings_account_return: float = DEFAULT_SAVINGS_ACCOUNT_RETURN,
) -> pd.DataFrame:
    """
    Evaluate one deal per row.

    Input columns may be snake_case or camelCase; missing columns count as
    blank fields. The input columns are kept and the result metrics appended.
    Rows that fail validation (including the financed-purchase checks of
    the analysis flow) keep NaN metrics and never stack.
    """
    records = [
        _evaluate_row(row, validate_rows=validate_rows, savings_account_return=savings_account_return)
        for row in df.to_dict(orient="records")
    ]
    metrics = pd.DataFrame.from_records(records, columns=RESULT_COLUMNS)

    base = df.reset_index(drop=True)
    base = base.drop(columns=[c for c in RESULT_COLUMNS if c in base.columns])
    out = pd.concat([base, metrics], axis=1)

    logger.info(
        "Batch evaluated {} deals ({} valid, {} stacking)",
        len(out),
        int(out["is_valid"].sum()) if len(out) else 0,
        int(out["deal_stacks"].sum()) if len(out) else 0,
    )
    return out


def summarize_batch(out: pd.DataFrame) -> BatchSummary:
    """
    Reduction step over evaluate_frame() output.
    """
    n = int(len(out))
    if n == 0:
        return BatchSummary(n_rows=0, n_valid=0, n_stacking=0)

    valid = out[out["is_valid"].astype(bool)]
    stacking = out[out["deal_stacks"].astype(bool)]
    by_method = stacking.groupby("method").size().to_dict()

    net_yield = valid["net_yield"].replace([np.inf, -np.inf], np.nan)
    mean_net_yield = float(net_yield.mean()) if net_yield.notna().any() else float("nan")

    return BatchSummary(
        n_rows=n,
        n_valid=int(len(valid)),
        n_stacking=int(len(stacking)),
        stacking_by_method={str(k): int(v) for k, v in by_method.items()},
        mean_net_yield=mean_net_yield,
    )
