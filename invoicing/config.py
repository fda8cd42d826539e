"""Billing configuration."""

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator


class BillingConfig(BaseModel):
    """
    Billing engine configuration.

    Money is held in minor units internally; the factor says how many minor
    units make one major unit (100 cents per dollar).
    """

    minor_unit_factor: int = Field(
        default=100,
        description="Minor units per major currency unit",
        ge=1,
        le=1000,
    )
    currency: str = Field(
        default="USD",
        description="ISO 4217 code, informational only",
        min_length=3,
        max_length=3,
    )
    invoice_number_prefix: str = Field(
        default="INV",
        description="Prefix for generated invoice numbers",
        min_length=1,
        max_length=10,
    )

    @field_validator("minor_unit_factor")
    @classmethod
    def factor_is_power_of_ten(cls, v: int) -> int:
        if v not in (1, 10, 100, 1000):
            raise ValueError("minor_unit_factor must be a power of ten (1, 10, 100, 1000)")
        return v

    @field_validator("currency")
    @classmethod
    def currency_upper(cls, v: str) -> str:
        return v.upper()


def load_config() -> BillingConfig:
    """
    Build config from BILLING_* environment variables.

    A .env file in the working directory is loaded first; real environment
    variables take precedence over it.
    """
    load_dotenv(find_dotenv(usecwd=True))

    values = {}
    if "BILLING_MINOR_UNIT_FACTOR" in os.environ:
        values["minor_unit_factor"] = os.environ["BILLING_MINOR_UNIT_FACTOR"]
    if "BILLING_CURRENCY" in os.environ:
        values["currency"] = os.environ["BILLING_CURRENCY"]
    if "BILLING_INVOICE_NUMBER_PREFIX" in os.environ:
        values["invoice_number_prefix"] = os.environ["BILLING_INVOICE_NUMBER_PREFIX"]

    return BillingConfig(**values)
