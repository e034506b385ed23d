import math
from typing import Optional

import numpy as np

from halal_deal.domain.deal import DealInput
from halal_deal.domain.rules import (
    DEFAULT_SAVINGS_ACCOUNT_RETURN,
    deal_stacks,
    passes_lender_check,
)
from halal_deal.domain.underwriting import ComparisonMetrics, DealResult

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12


def round2(value: float) -> float:
    """
    Round to 2dp, halves away from zero, on the value scaled by 100.
    inf / nan are returned untouched.
    """
    if not math.isfinite(value):
        return value
    scaled = math.floor(abs(value) * 100 + 0.5)
    return math.copysign(scaled / 100, value)


def _ieee_div(numerator: float, denominator: float) -> float:
    """
    Plain float division that yields +/-inf or nan on a zero denominator
    instead of raising, same as numpy arrays do.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def _monthly_rent(deal: DealInput) -> float:
    if deal.rent_frequency == "weekly":
        return deal.expected_rent * WEEKS_PER_YEAR / MONTHS_PER_YEAR
    return deal.expected_rent


def _cash_invested(deal: DealInput, detailed_upfront: float) -> float:
    """
    Cash actually put in by the investor.
    - cash / crowdfunding: the whole price plus costs
    - financed: only the equity slice plus costs
    """
    if deal.method.is_self_funded:
        return deal.purchase_price + detailed_upfront
    return deal.deposit + detailed_upfront


def _lender_coverage(deal: DealInput, monthly_rent: float) -> Optional[float]:
    # Lenders only care when there is a finance payment to cover.
    if deal.method.is_self_funded or deal.monthly_finance_cost == 0:
        return None
    return monthly_rent / deal.monthly_finance_cost


def evaluate(
    deal: DealInput,
    *,
    savings_account_return: float = DEFAULT_SAVINGS_ACCOUNT_RETURN,
) -> DealResult:
    """
    Core deal evaluation. Pure and total: bad numbers degrade to
    boundary values (inf yields, zero ROI) rather than raising.
    """

    # --- income ---
    monthly_rent = _monthly_rent(deal)

    # --- upfront costs ---
    detailed_upfront = deal.detailed_upfront_costs
    cash_invested = _cash_invested(deal, detailed_upfront)

    # --- profit ---
    # finance cost is used as supplied; 0 is the "no financing" convention
    net_monthly_profit = monthly_rent - deal.monthly_finance_cost - deal.monthly_operating_costs

    annual_rent = monthly_rent * MONTHS_PER_YEAR
    annual_profit = net_monthly_profit * MONTHS_PER_YEAR

    # --- appreciation (independent of financing) ---
    annual_appreciation_value = deal.purchase_price * (deal.annual_appreciation / 100)
    total_annual_return = annual_profit + annual_appreciation_value

    # --- yields ---
    # A zero price gives inf/nan here on purpose; validation keeps it out of production.
    gross_yield = _ieee_div(annual_rent, deal.purchase_price) * 100
    net_yield = _ieee_div(annual_profit, deal.purchase_price) * 100

    # --- return on cash ---
    # Zero cash in would be an "infinite" ROI; report 0 instead.
    return_on_cash = (total_annual_return / cash_invested) * 100 if cash_invested > 0 else 0.0
    monthly_roi = (net_monthly_profit / cash_invested) * 100 if cash_invested > 0 else 0.0

    # --- lender check ---
    lender_coverage_ratio = _lender_coverage(deal, monthly_rent)
    lender_ok = passes_lender_check(lender_coverage_ratio)

    # --- break even ---
    break_even_months = cash_invested / net_monthly_profit if net_monthly_profit > 0 else None

    # --- benchmark ---
    property_vs_savings = return_on_cash - savings_account_return

    stacks = deal_stacks(
        purchase_price=deal.purchase_price,
        net_monthly_profit=net_monthly_profit,
        gross_yield=gross_yield,
        net_yield=net_yield,
        lender_ok=lender_ok,
    )

    return DealResult(
        monthly_rent=round2(monthly_rent),
        net_monthly_profit=round2(net_monthly_profit),
        annual_profit=annual_profit,
        annual_appreciation_value=annual_appreciation_value,
        total_annual_return=total_annual_return,
        gross_yield=round2(gross_yield),
        net_yield=round2(net_yield),
        return_on_cash=round2(return_on_cash),
        monthly_roi=round2(monthly_roi),
        total_startup_costs=round2(detailed_upfront),
        cash_invested=cash_invested,
        lender_coverage_ratio=lender_coverage_ratio,
        passes_lender_check=lender_ok,
        break_even_months=break_even_months,
        comparison_metrics=ComparisonMetrics(
            savings_account_return=savings_account_return,
            property_vs_savings=round2(property_vs_savings),
        ),
        deal_stacks=stacks,
    )
