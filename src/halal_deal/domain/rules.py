from typing import Optional

# Verdict policy. These are fixed by the product, not by configuration.
MIN_GROSS_YIELD = 6.0          # %
MIN_NET_YIELD = 4.0            # %
MIN_LENDER_COVERAGE = 1.45     # rent must be 145% of the finance cost

DEFAULT_SAVINGS_ACCOUNT_RETURN = 2.0  # %


def passes_lender_check(lender_coverage_ratio: Optional[float]) -> bool:
    # no ratio means no financier, which passes automatically
    if lender_coverage_ratio is None:
        return True
    return lender_coverage_ratio >= MIN_LENDER_COVERAGE


def deal_stacks(
    *,
    purchase_price: float,
    net_monthly_profit: float,
    gross_yield: float,
    net_yield: float,
    lender_ok: bool,
) -> bool:
    """
    Hard pass/fail: any single failing condition sinks the deal.

    NaN yields compare False, so a degenerate 0/0 yield never stacks.
    """
    return (
        purchase_price > 0
        and net_monthly_profit > 0
        and gross_yield >= MIN_GROSS_YIELD
        and net_yield >= MIN_NET_YIELD
        and lender_ok
    )
