import pytest

from halal_deal.domain.deal import DealInput
from halal_deal.domain.financing import (
    DEFAULT_EXPLANATION,
    FinancingMethod,
    financing_explanation,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("musharakah", FinancingMethod.MUSHARAKAH),
        ("ijara", FinancingMethod.IJARA),
        ("murabaha", FinancingMethod.MURABAHA),
        ("crowdfunding", FinancingMethod.CROWDFUNDING),
        ("cash", FinancingMethod.CASH),
        ("Cash", FinancingMethod.OTHER),
        (" murabaha ", FinancingMethod.OTHER),
        ("tawarruq", FinancingMethod.OTHER),
        ("", FinancingMethod.OTHER),
        (None, FinancingMethod.OTHER),
    ],
)
def test_parse(raw, expected):
    assert FinancingMethod.parse(raw) is expected


def test_self_funded_methods():
    funded = {m for m in FinancingMethod if m.is_self_funded}

    assert funded == {FinancingMethod.CASH, FinancingMethod.CROWDFUNDING}


def test_deal_input_exposes_parsed_method():
    assert DealInput(financing_method="crowdfunding").method is FinancingMethod.CROWDFUNDING

    deal = DealInput(financing_method="Crowdfunding")
    assert deal.method is FinancingMethod.OTHER
    assert deal.financing_method == "Crowdfunding"


def test_deal_input_is_immutable():
    deal = DealInput(purchase_price=1.0)

    with pytest.raises(Exception):
        deal.purchase_price = 2.0


def test_explanations():
    assert "jointly own" in financing_explanation("musharakah")
    assert financing_explanation(FinancingMethod.CASH) == "Full cash purchase with no financing required"
    assert financing_explanation("tawarruq") == DEFAULT_EXPLANATION
    assert financing_explanation(None) == DEFAULT_EXPLANATION
