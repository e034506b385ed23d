from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from halal_deal.adapters.config import config
from halal_deal.adapters.logging_utils import get_logger
from halal_deal.analysis.finance import evaluate
from halal_deal.domain.deal import DealInput
from halal_deal.domain.ports import AnalyticsStore
from halal_deal.domain.underwriting import DealResult
from halal_deal.services.validation import (
    DealValidationError,
    prepare_deal_input,
    submission_errors,
    validate,
)

logger = get_logger(__name__)


def _track(analytics: AnalyticsStore, method: str) -> None:
    # Counting is a side notification; never let it cost the caller a result.
    try:
        analytics.increment(method)
    except Exception as e:
        logger.warning(
            "analytics_track_failed",
            extra={"context": {"financing_method": method, "error": str(e)}},
        )


def analyze_deal(
    raw_payload: Mapping[str, Any] | DealInput,
    *,
    analytics: AnalyticsStore | None = None,
    savings_account_return: float | None = None,
) -> DealResult:
    """
    The normal "submit" path:

    1) prepare the payload (mappings only)
    2) validate, plus the form's financed-purchase checks; any error stops
       here with DealValidationError
    3) evaluate
    4) bump the analytics counter for the financing method
    """
    deal = raw_payload if isinstance(raw_payload, DealInput) else prepare_deal_input(raw_payload)

    errors = validate(deal) + submission_errors(deal)
    if errors:
        logger.info(
            "deal_rejected",
            extra={
                "context": {
                    "financing_method": deal.financing_method,
                    "fields": sorted({e.field for e in errors}),
                }
            },
        )
        raise DealValidationError(errors)

    benchmark = config.SAVINGS_ACCOUNT_RETURN if savings_account_return is None else savings_account_return
    result = evaluate(deal, savings_account_return=benchmark)

    logger.info(
        "deal_evaluated",
        extra={
            "context": {
                "financing_method": deal.financing_method,
                "deal_stacks": result.deal_stacks,
                "net_monthly_profit": result.net_monthly_profit,
                "gross_yield": result.gross_yield,
                "net_yield": result.net_yield,
            }
        },
    )

    if analytics is not None:
        _track(analytics, deal.financing_method)

    return result
