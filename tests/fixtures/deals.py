# tests/fixtures/deals.py

from halal_deal.domain.deal import DealInput


def _base_deal_template() -> dict:
    return dict(
        purchase_price=200_000.0,
        expected_rent=1200.0,
        rent_frequency="monthly",
        deposit=50_000.0,
        financing_method="musharakah",
        monthly_finance_cost=800.0,
        monthly_operating_costs=150.0,
        annual_appreciation=0.0,
        stamp_duty=6000.0,
        legal_fees=2000.0,
        refurb_costs=5000.0,
        other_upfront_costs=1000.0,
    )


def make_deal(**overrides) -> DealInput:
    fields = _base_deal_template()
    fields.update(overrides)
    return DealInput(**fields)


def musharakah_deal() -> DealInput:
    """
    200k house, 1200/mo rent, 25% deposit, 800/mo to the bank.
    Expected: profitable (250/mo) but net yield 1.5% < 4%, so it does not stack.
    """
    return make_deal()


def cash_deal() -> DealInput:
    """
    Same house bought outright. Deposit left at the full price on purpose.
    Expected: 1050/mo profit, 6.3% net yield, stacks.
    """
    return make_deal(financing_method="cash", deposit=200_000.0, monthly_finance_cost=0.0)


def weekly_rent_deal() -> DealInput:
    """
    300/week -> 1300/mo. Expected: 350/mo profit, still below the net yield bar.
    """
    return make_deal(expected_rent=300.0, rent_frequency="weekly")


def zero_price_deal() -> DealInput:
    """
    Degenerate: nothing paid for the property. Yields divide by zero.
    """
    return make_deal(purchase_price=0.0, deposit=0.0)


def payload(**overrides) -> dict:
    """
    JSON-style camelCase payload, as a browser form would send it.
    """
    fields = {
        "purchasePrice": 200_000,
        "expectedRent": 1200,
        "rentFrequency": "monthly",
        "deposit": 50_000,
        "financingMethod": "musharakah",
        "monthlyFinanceCost": 800,
        "monthlyOperatingCosts": 150,
        "annualAppreciation": 0,
        "stampDuty": 6000,
        "legalFees": 2000,
        "refurbCosts": 5000,
        "otherUpfrontCosts": 1000,
    }
    fields.update(overrides)
    return fields
