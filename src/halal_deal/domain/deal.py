from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from halal_deal.domain.financing import FinancingMethod

RentFrequency = Literal["weekly", "monthly"]


class DealInput(BaseModel):
    """
    One deal as entered by the investor.

    No range checks live here: negative or zero figures must still reach the
    evaluator. Use services.validation.validate() to police them.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    purchase_price: float = Field(0.0, description="Asking or agreed purchase price")
    expected_rent: float = Field(0.0, description="Rent per rent_frequency period")
    rent_frequency: RentFrequency = "monthly"
    deposit: float = Field(0.0, description="Upfront equity; unused for cash/crowdfunding")
    financing_method: str = Field("", description="musharakah | ijara | murabaha | crowdfunding | cash")
    monthly_finance_cost: float = Field(0.0, description="Monthly payment to the financier")
    monthly_operating_costs: float = 0.0
    annual_appreciation: float = Field(0.0, description="Percent per year, 0 disables")

    # upfront one-off costs; there is deliberately no lump-sum field
    stamp_duty: float = 0.0
    legal_fees: float = 0.0
    refurb_costs: float = 0.0
    other_upfront_costs: float = 0.0

    @property
    def method(self) -> FinancingMethod:
        return FinancingMethod.parse(self.financing_method)

    @property
    def detailed_upfront_costs(self) -> float:
        return self.stamp_duty + self.legal_fees + self.refurb_costs + self.other_upfront_costs


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    message: str
