# src/halal_deal/services/validation.py

from collections.abc import Mapping
from typing import Any

from pydantic.alias_generators import to_camel

from halal_deal.domain.deal import DealInput, FieldError
from halal_deal.domain.financing import FinancingMethod

# Deposit band expected by Islamic financiers (percent of price)
MIN_DEPOSIT_PCT = 15.0
MAX_DEPOSIT_PCT = 50.0

# Gross yield sanity band (percent). Outside it the rent is probably a typo.
MIN_PLAUSIBLE_GROSS_YIELD = 2.0
MAX_PLAUSIBLE_GROSS_YIELD = 20.0

NUMERIC_FIELDS = [
    "purchase_price",
    "expected_rent",
    "deposit",
    "monthly_finance_cost",
    "monthly_operating_costs",
    "annual_appreciation",
    "stamp_duty",
    "legal_fees",
    "refurb_costs",
    "other_upfront_costs",
]

_FALSEY_STRINGS = {"false", "0", "no", "off", "n"}


class DealValidationError(ValueError):
    """Raised by the analysis flow when a deal fails validation."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Deal failed validation: {summary}")


def _lookup(raw: Mapping[str, Any], name: str, default: Any = None) -> Any:
    if name in raw:
        return raw[name]
    return raw.get(to_camel(name), default)


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce form-style values into float:
      - 250000 / 250000.0
      - "250,000"
      - "£250,000"
      - "3.5%"
      - None / "" -> 0.0 (a blank form field)
    """
    if val is None:
        return 0.0
    if isinstance(val, bool):
        raise ValueError(f"Invalid type for {field_name}: {type(val)}")
    if isinstance(val, (int, float)):
        return float(val)
    if isinstance(val, str):
        s = val.strip().replace(",", "").replace("£", "")
        if s.endswith("%"):
            s = s[:-1].strip()
        if not s:
            return 0.0
        try:
            return float(s)
        except ValueError as err:
            raise ValueError(f"Invalid numeric value for {field_name}: {val!r}") from err
    raise ValueError(f"Invalid type for {field_name}: {type(val)}")


def _to_bool(val: Any, default: bool = True) -> bool:
    if val is None:
        return default
    if isinstance(val, str):
        s = val.strip().lower()
        if not s:
            return default
        return s not in _FALSEY_STRINGS
    return bool(val)


def normalize_financing_method(raw: Any) -> str:
    """
    Form-side cleanup of a method name: "  Cash " -> "cash".
    Unknown names are only stripped, so they stay visible as typed.
    """
    s = str(raw or "").strip()
    lowered = s.lower()
    if lowered in {m.value for m in FinancingMethod}:
        return lowered
    return s


def prepare_deal_input(raw: Mapping[str, Any]) -> DealInput:
    """
    Normalize a loosely-typed payload (form, CSV row, JSON) into a DealInput.

    Mirrors what the entry form does before submitting:
      - blank numbers become 0
      - the financing method is matched ignoring case and whitespace
      - appreciation is zeroed when include_appreciation is off
      - deposit and finance cost are cleared for cash / crowdfunding
    """
    cleaned: dict[str, Any] = {}
    for name in NUMERIC_FIELDS:
        cleaned[name] = _to_num(_lookup(raw, name), name)

    freq = str(_lookup(raw, "rent_frequency") or "monthly").strip().lower()
    if freq not in ("weekly", "monthly"):
        raise ValueError(f"Invalid rent_frequency: {freq!r} (expected weekly or monthly)")
    cleaned["rent_frequency"] = freq

    cleaned["financing_method"] = normalize_financing_method(_lookup(raw, "financing_method"))

    if not _to_bool(_lookup(raw, "include_appreciation")):
        cleaned["annual_appreciation"] = 0.0

    if FinancingMethod.parse(cleaned["financing_method"]).is_self_funded:
        cleaned["deposit"] = 0.0
        cleaned["monthly_finance_cost"] = 0.0

    return DealInput(**cleaned)


def validate(deal: DealInput) -> list[FieldError]:
    """
    Collect every field-level problem with a deal. Never raises.

    An empty list means the deal is fit to hand to the evaluator. The deposit
    band below is applied whatever the financing method, including cash and
    crowdfunding where the evaluator ignores the deposit.
    """
    errors: list[FieldError] = []

    def add(field: str, message: str) -> None:
        errors.append(FieldError(field=field, message=message))

    # 1. Required / sign checks
    if not deal.purchase_price > 0:
        add("purchase_price", "Purchase price must be greater than 0")

    if not deal.expected_rent > 0:
        add("expected_rent", "Expected rent must be greater than 0")

    if not deal.deposit >= 0:
        add("deposit", "Deposit cannot be negative")

    if not deal.financing_method:
        add("financing_method", "Please select a financing method")

    if deal.monthly_finance_cost < 0:
        add("monthly_finance_cost", "Monthly finance cost cannot be negative")

    if deal.monthly_operating_costs < 0:
        add("monthly_operating_costs", "Operating costs cannot be negative")

    # 2. Logical checks
    if deal.deposit > deal.purchase_price:
        add("deposit", "Deposit cannot be greater than purchase price")

    if deal.purchase_price > 0 and deal.deposit > 0:
        deposit_pct = deal.deposit / deal.purchase_price * 100
        if deposit_pct < MIN_DEPOSIT_PCT:
            add("deposit", "Deposit should be at least 15% of purchase price for Islamic financing")
        if deposit_pct > MAX_DEPOSIT_PCT:
            add("deposit", "Deposit over 50% is unusually high - please verify")

    # 3. Rent reasonableness
    if deal.purchase_price > 0 and deal.expected_rent > 0:
        monthly_rent = (
            deal.expected_rent * 52 / 12
            if deal.rent_frequency == "weekly"
            else deal.expected_rent
        )
        gross_yield = monthly_rent * 12 / deal.purchase_price * 100
        if gross_yield > MAX_PLAUSIBLE_GROSS_YIELD:
            add("expected_rent", "Rent seems unusually high - please verify")
        if gross_yield < MIN_PLAUSIBLE_GROSS_YIELD:
            add("expected_rent", "Rent seems unusually low - please verify")

    return errors


def submission_errors(deal: DealInput) -> list[FieldError]:
    """
    Extra checks the entry form makes before a deal is submitted.

    A financed purchase needs both a deposit and a finance payment; without
    them the lender check would pass by default. Kept apart from validate()
    so the core validator's rules stay as they are.
    """
    if deal.method.is_self_funded:
        return []

    errors: list[FieldError] = []
    if not deal.deposit > 0:
        errors.append(FieldError(field="deposit", message="Deposit amount is required for financed purchases"))
    if not deal.monthly_finance_cost > 0:
        errors.append(
            FieldError(
                field="monthly_finance_cost",
                message="Monthly finance cost is required for financed purchases",
            )
        )
    return errors


def get_field_error(errors: list[FieldError], field: str) -> str | None:
    for error in errors:
        if error.field == field:
            return error.message
    return None
