# src/halal_deal/api/http.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException

from halal_deal.adapters.config import config
from halal_deal.adapters.logging_utils import get_logger
from halal_deal.adapters.storage import build_analytics_store
from halal_deal.analysis.finance import evaluate
from halal_deal.analysis.report import format_months, verdict_headline
from halal_deal.domain.deal import DealInput
from halal_deal.domain.financing import FinancingMethod, financing_explanation
from halal_deal.services.deal_analyzer import analyze_deal
from halal_deal.services.validation import DealValidationError, validate

from .schemas import (
    AnalyticsOut,
    AnalyzeResponse,
    DealResultOut,
    FinancingMethodItem,
    ValidateResponse,
)

logger = get_logger(__name__)

app = FastAPI(title="Halal Deal Checker")

_analytics = build_analytics_store(config.ANALYTICS_PATH)


@app.post("/validate", response_model=ValidateResponse)
def validate_endpoint(payload: DealInput) -> ValidateResponse:
    errors = validate(payload)
    return ValidateResponse(valid=not errors, errors=errors)


@app.post("/evaluate", response_model=DealResultOut)
def evaluate_endpoint(payload: DealInput) -> DealResultOut:
    """
    Raw evaluator for programmatic callers. No validation, no analytics.
    """
    result = evaluate(payload, savings_account_return=config.SAVINGS_ACCOUNT_RETURN)
    return DealResultOut.from_result(result)


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_endpoint(payload: dict[str, Any]) -> AnalyzeResponse:
    """
    Form submission path: prepare -> validate -> evaluate -> count.

    Accepts loosely typed values ("200,000", "3%") like the entry form does.
    """
    try:
        result = analyze_deal(payload, analytics=_analytics)
    except DealValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": "Deal failed validation", "errors": [err.model_dump() for err in e.errors]},
        ) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    out = DealResultOut.from_result(result)
    return AnalyzeResponse(
        **out.model_dump(),
        verdict=verdict_headline(result),
        break_even_label=format_months(result.break_even_months),
    )


# -----------------------------
# Analytics
# -----------------------------
@app.get("/analytics", response_model=AnalyticsOut)
def get_analytics() -> AnalyticsOut:
    return AnalyticsOut(**_analytics.snapshot())


@app.delete("/analytics", response_model=AnalyticsOut)
def clear_analytics() -> AnalyticsOut:
    _analytics.clear()
    logger.info("analytics_cleared")
    return AnalyticsOut(**_analytics.snapshot())


@app.get("/financing-methods", response_model=list[FinancingMethodItem])
def list_financing_methods() -> list[FinancingMethodItem]:
    return [
        FinancingMethodItem(
            method=m.value,
            label=m.label,
            explanation=financing_explanation(m),
            self_funded=m.is_self_funded,
        )
        for m in FinancingMethod
        if m is not FinancingMethod.OTHER
    ]
