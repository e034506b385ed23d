# src/halal_deal/api/schemas.py
from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict

from halal_deal.domain.deal import FieldError
from halal_deal.domain.underwriting import DealResult


# --------------------------------------------
# Validation
# --------------------------------------------

class ValidateResponse(BaseModel):
    valid: bool
    errors: list[FieldError]


# --------------------------------------------
# Evaluate / analyze
# --------------------------------------------

class ComparisonMetricsOut(BaseModel):
    savings_account_return: float | None
    property_vs_savings: float | None


class DealResultOut(BaseModel):
    """
    JSON view of a DealResult.

    JSON has no inf/nan, so degenerate figures (zero purchase price) are sent
    as null and named in degenerate_fields.
    """
    model_config = ConfigDict(extra="forbid")

    monthly_rent: float | None
    net_monthly_profit: float | None
    annual_profit: float | None
    annual_appreciation_value: float | None
    total_annual_return: float | None
    gross_yield: float | None
    net_yield: float | None
    return_on_cash: float | None
    monthly_roi: float | None
    total_startup_costs: float | None
    cash_invested: float | None
    lender_coverage_ratio: float | None = None
    passes_lender_check: bool
    break_even_months: float | None = None
    comparison_metrics: ComparisonMetricsOut
    deal_stacks: bool

    degenerate_fields: list[str] = []

    @classmethod
    def from_result(cls, result: DealResult) -> "DealResultOut":
        data = result.to_dict()
        degenerate: list[str] = []

        def _clean(prefix: str, payload: dict[str, Any]) -> dict[str, Any]:
            out: dict[str, Any] = {}
            for key, value in payload.items():
                if isinstance(value, dict):
                    out[key] = _clean(f"{key}.", value)
                elif isinstance(value, float) and not math.isfinite(value):
                    degenerate.append(prefix + key)
                    out[key] = None
                else:
                    out[key] = value
            return out

        cleaned = _clean("", data)
        return cls(**cleaned, degenerate_fields=degenerate)


class AnalyzeResponse(DealResultOut):
    verdict: str
    break_even_label: str


# --------------------------------------------
# Analytics / reference data
# --------------------------------------------

class AnalyticsOut(BaseModel):
    financing_methods: dict[str, int]
    total_calculations: int
    last_updated: str


class FinancingMethodItem(BaseModel):
    method: str
    label: str
    explanation: str
    self_funded: bool
