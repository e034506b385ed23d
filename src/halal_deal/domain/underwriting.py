from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ComparisonMetrics:
    savings_account_return: float  # benchmark, % per year
    property_vs_savings: float     # return_on_cash minus benchmark


@dataclass(frozen=True)
class DealResult:
    # periodic figures
    monthly_rent: float             # normalized to monthly
    net_monthly_profit: float
    annual_profit: float
    annual_appreciation_value: float
    total_annual_return: float      # profit + appreciation

    # ratios, all in percent
    gross_yield: float
    net_yield: float
    return_on_cash: float
    monthly_roi: float

    # costs
    total_startup_costs: float      # stamp duty + legal + refurb + other
    cash_invested: float

    # lender view
    lender_coverage_ratio: Optional[float]  # None when no financier is involved
    passes_lender_check: bool

    break_even_months: Optional[float]      # None means capital is never recovered
    comparison_metrics: ComparisonMetrics
    deal_stacks: bool

    @property
    def recovers_capital(self) -> bool:
        return self.break_even_months is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
