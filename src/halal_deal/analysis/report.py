from __future__ import annotations

import math
import re
from typing import Optional

from halal_deal.domain.deal import DealInput
from halal_deal.domain.financing import financing_explanation
from halal_deal.domain.rules import MIN_GROSS_YIELD, MIN_LENDER_COVERAGE, MIN_NET_YIELD
from halal_deal.domain.underwriting import DealResult

NOT_AVAILABLE = "n/a"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_currency(amount: float, symbol: str = "£") -> str:
    if not math.isfinite(amount):
        return NOT_AVAILABLE
    whole = _round_half_away(amount)
    sign = "-" if whole < 0 else ""
    return f"{sign}{symbol}{abs(whole):,}"


def format_percentage(value: float) -> str:
    if not math.isfinite(value):
        return NOT_AVAILABLE
    return f"{value:.2f}%"


def format_months(months: Optional[float]) -> str:
    """
    Human break-even duration.

    None (or a legacy negative sentinel) means the money never comes back.
    """
    if months is None or months < 0:
        return "Never"
    if months < 12:
        return f"{months:.1f} months"
    years = math.floor(months / 12)
    remaining = months % 12
    if remaining < 1:
        return f"{years} year{'s' if years > 1 else ''}"
    return f"{years}y {_round_half_away(remaining)}m"


def format_coverage(ratio: Optional[float]) -> str:
    if ratio is None:
        return "N/A"
    return f"{ratio:.2f}x"


def verdict_headline(result: DealResult) -> str:
    return "This Deal Stacks!" if result.deal_stacks else "This Doesn't Stack"


def report_filename(property_name: str, extension: str = "txt") -> str:
    slug = re.sub(r"[^\w\s-]", "", property_name).strip()
    slug = re.sub(r"\s+", "-", slug).lower()
    return f"{slug or 'property'}-investment-report.{extension}"


def render_report(
    deal: DealInput,
    result: DealResult,
    property_name: str = "Untitled Property",
    *,
    currency_symbol: str = "£",
) -> str:
    def money(v: float) -> str:
        return format_currency(v, currency_symbol)

    method = deal.method

    lines = [
        f"{property_name}",
        "=" * max(len(property_name), 20),
        verdict_headline(result),
        "",
        "Deal inputs",
        f"  Purchase price:        {money(deal.purchase_price)}",
        f"  Expected rent:         {money(deal.expected_rent)} ({deal.rent_frequency})",
        f"  Financing:             {method.label}",
        f"  Deposit:               {money(deal.deposit)}",
        f"  Monthly finance cost:  {money(deal.monthly_finance_cost)}",
        f"  Monthly running costs: {money(deal.monthly_operating_costs)}",
        f"  Annual appreciation:   {format_percentage(deal.annual_appreciation)}",
        "",
        "Key metrics",
        f"  Monthly rent:          {money(result.monthly_rent)}",
        f"  Net monthly profit:    {money(result.net_monthly_profit)}",
        f"  Annual profit:         {money(result.annual_profit)}",
        f"  Gross yield:           {format_percentage(result.gross_yield)} (min {MIN_GROSS_YIELD:g}%)",
        f"  Net yield:             {format_percentage(result.net_yield)} (min {MIN_NET_YIELD:g}%)",
        f"  Return on cash:        {format_percentage(result.return_on_cash)}",
        f"  Monthly ROI:           {format_percentage(result.monthly_roi)}",
        f"  Startup costs:         {money(result.total_startup_costs)}",
        f"  Cash invested:         {money(result.cash_invested)}",
        f"  Break-even:            {format_months(result.break_even_months)}",
    ]

    if deal.annual_appreciation:
        lines += [
            f"  Appreciation (yr):     {money(result.annual_appreciation_value)}",
            f"  Total annual return:   {money(result.total_annual_return)}",
        ]

    lender_status = "PASS" if result.passes_lender_check else "FAIL"
    cmp = result.comparison_metrics
    lines += [
        "",
        "Lender check",
        f"  Coverage ratio:        {format_coverage(result.lender_coverage_ratio)}"
        f" (min {MIN_LENDER_COVERAGE:.2f}x) {lender_status}",
        "",
        "Versus savings",
        f"  Savings account:       {format_percentage(cmp.savings_account_return)}",
        f"  Property advantage:    {format_percentage(cmp.property_vs_savings)}",
        "",
        financing_explanation(method),
    ]
    return "\n".join(lines)
