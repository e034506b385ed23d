# tests/test_api_analyze_success.py
from .fixtures.deals import payload


def test_analyze_financed_deal(client, analytics):
    r = client.post("/analyze", json=payload())
    assert r.status_code == 200, r.text
    data = r.json()

    assert data["net_monthly_profit"] == 250.0
    assert data["cash_invested"] == 64000.0
    assert data["deal_stacks"] is False
    assert data["verdict"] == "This Doesn't Stack"
    assert data["break_even_label"] == "21y 4m"
    assert data["comparison_metrics"]["savings_account_return"] == 2.0
    assert data["degenerate_fields"] == []
    assert analytics.snapshot()["financing_methods"] == {"musharakah": 1}


def test_analyze_cash_deal_stacks(client, analytics):
    r = client.post("/analyze", json=payload(financingMethod="cash", deposit=200_000, monthlyFinanceCost=0))
    assert r.status_code == 200, r.text
    data = r.json()

    assert data["deal_stacks"] is True
    assert data["verdict"] == "This Deal Stacks!"
    assert data["lender_coverage_ratio"] is None
    assert data["passes_lender_check"] is True


def test_analyze_accepts_form_strings(client, analytics):
    r = client.post("/analyze", json=payload(purchasePrice="200,000", expectedRent="1,200"))
    assert r.status_code == 200, r.text
    assert r.json()["gross_yield"] == 7.2


def test_analytics_endpoints(client, analytics):
    client.post("/analyze", json=payload())
    client.post("/analyze", json=payload(financingMethod="ijara"))

    r = client.get("/analytics")
    assert r.status_code == 200
    data = r.json()
    assert data["total_calculations"] == 2
    assert data["financing_methods"] == {"musharakah": 1, "ijara": 1}

    r = client.delete("/analytics")
    assert r.status_code == 200
    assert r.json()["total_calculations"] == 0


def test_financing_methods_listing(client):
    r = client.get("/financing-methods")
    assert r.status_code == 200
    items = {item["method"]: item for item in r.json()}

    assert set(items) == {"musharakah", "ijara", "murabaha", "crowdfunding", "cash"}
    assert items["cash"]["self_funded"] is True
    assert items["ijara"]["self_funded"] is False
    assert items["crowdfunding"]["label"] == "Musharakah (Equity Crowdfunding)"
