from __future__ import annotations

from enum import Enum


class FinancingMethod(str, Enum):
    MUSHARAKAH = "musharakah"
    IJARA = "ijara"
    MURABAHA = "murabaha"
    CROWDFUNDING = "crowdfunding"
    CASH = "cash"
    # anything we don't recognise is underwritten like a financed deal
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str | None) -> "FinancingMethod":
        """
        Map a caller-supplied method string onto the closed set.

        Matching is exact: "Cash" or " cash" are OTHER here. Form input is
        normalized earlier, in services.validation.prepare_deal_input.
        Blank or unknown values fall back to OTHER rather than raising.
        """
        value = str(raw or "")
        for member in cls:
            if member.value == value:
                return member
        return cls.OTHER

    @property
    def is_self_funded(self) -> bool:
        # investor puts up the full price, no financier to pay
        return self in (FinancingMethod.CASH, FinancingMethod.CROWDFUNDING)

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[FinancingMethod, str] = {
    FinancingMethod.MUSHARAKAH: "Musharakah (Bank Partnership)",
    FinancingMethod.CROWDFUNDING: "Musharakah (Equity Crowdfunding)",
    FinancingMethod.IJARA: "Ijara (Islamic Lease)",
    FinancingMethod.MURABAHA: "Murabaha (Cost Plus)",
    FinancingMethod.CASH: "Cash Purchase",
    FinancingMethod.OTHER: "Other Financing",
}

_EXPLANATIONS: dict[FinancingMethod, str] = {
    FinancingMethod.MUSHARAKAH: (
        "Traditional bank partnership where you and the bank jointly own the property. "
        "You share profits and losses according to ownership percentage. "
        "The bank typically provides 70-80% of the property value."
    ),
    FinancingMethod.IJARA: (
        "Islamic lease-to-own arrangement where the bank owns and leases the property to you"
    ),
    FinancingMethod.MURABAHA: (
        "Cost-plus financing where the bank purchases and sells the property to you "
        "at an agreed markup"
    ),
    FinancingMethod.CROWDFUNDING: (
        "A form of Musharakah where multiple investors pool funds to collectively buy a property. "
        "Each investor owns a share proportional to their investment. No bank involvement."
    ),
    FinancingMethod.CASH: "Full cash purchase with no financing required",
}

DEFAULT_EXPLANATION = "Select a financing method for more information"


def financing_explanation(method: str | FinancingMethod | None) -> str:
    parsed = method if isinstance(method, FinancingMethod) else FinancingMethod.parse(method)
    return _EXPLANATIONS.get(parsed, DEFAULT_EXPLANATION)
