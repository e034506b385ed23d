# tests/test_deal_analyzer_basic.py
import pytest

from halal_deal.adapters.memory_repo import InMemoryAnalyticsStore
from halal_deal.domain.underwriting import DealResult
from halal_deal.services.deal_analyzer import analyze_deal
from halal_deal.services.validation import DealValidationError
from .fixtures.deals import make_deal, musharakah_deal, payload


class ExplodingAnalyticsStore(InMemoryAnalyticsStore):
    def increment(self, method: str):
        raise RuntimeError("counter unavailable")


def test_analyze_deal_from_form_payload():
    store = InMemoryAnalyticsStore()

    result = analyze_deal(payload(purchasePrice="200,000"), analytics=store)

    assert isinstance(result, DealResult)
    assert result.net_monthly_profit == 250.0
    assert result.deal_stacks is False
    snap = store.snapshot()
    assert snap["financing_methods"] == {"musharakah": 1}
    assert snap["total_calculations"] == 1


def test_analyze_deal_accepts_deal_input():
    result = analyze_deal(musharakah_deal())

    assert result.cash_invested == 64_000.0


def test_invalid_deal_is_rejected_before_evaluation():
    store = InMemoryAnalyticsStore()

    with pytest.raises(DealValidationError) as exc_info:
        analyze_deal(make_deal(deposit=10_000.0), analytics=store)

    errors = exc_info.value.errors
    assert [e.field for e in errors] == ["deposit"]
    assert "15%" in str(exc_info.value)
    assert store.snapshot()["total_calculations"] == 0


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        analyze_deal({})


def test_analytics_failure_does_not_lose_the_result():
    result = analyze_deal(musharakah_deal(), analytics=ExplodingAnalyticsStore())

    assert result.net_monthly_profit == 250.0


def test_savings_benchmark_override():
    result = analyze_deal(musharakah_deal(), savings_account_return=3.0)

    assert result.comparison_metrics.savings_account_return == 3.0
    assert result.comparison_metrics.property_vs_savings == 1.69


def test_counts_are_kept_per_method():
    store = InMemoryAnalyticsStore()

    analyze_deal(musharakah_deal(), analytics=store)
    analyze_deal(payload(financingMethod="cash"), analytics=store)
    analyze_deal(musharakah_deal(), analytics=store)

    snap = store.snapshot()
    assert snap["financing_methods"] == {"musharakah": 2, "cash": 1}
    assert snap["total_calculations"] == 3


def test_financed_deal_without_finance_cost_is_rejected():
    store = InMemoryAnalyticsStore()
    deal = make_deal(purchase_price=100_000.0, expected_rent=1000.0, deposit=20_000.0, monthly_finance_cost=0.0)

    with pytest.raises(DealValidationError) as exc_info:
        analyze_deal(deal, analytics=store)

    assert [e.field for e in exc_info.value.errors] == ["monthly_finance_cost"]
    assert "required for financed purchases" in str(exc_info.value)
    assert store.snapshot()["total_calculations"] == 0


def test_financed_form_without_deposit_is_rejected():
    with pytest.raises(DealValidationError) as exc_info:
        analyze_deal(payload(deposit=""))

    assert [e.field for e in exc_info.value.errors] == ["deposit"]


def test_form_method_is_matched_case_insensitively():
    store = InMemoryAnalyticsStore()

    result = analyze_deal(payload(financingMethod=" Cash ", monthlyFinanceCost=0), analytics=store)

    assert result.cash_invested == 214_000.0
    assert store.snapshot()["financing_methods"] == {"cash": 1}
