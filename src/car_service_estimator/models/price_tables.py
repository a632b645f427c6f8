from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, Field, field_serializer, field_validator

from .order import CarType, RepairKind, ServiceType, Urgency


class PriceTables(BaseModel):
    """Prices and multipliers the pricing engine reads from.

    Amounts are whole rupees. Multipliers scale the subtotal and never discount it.
    The tables are read-only once built, down to the individual mappings.
    """

    service_prices: Mapping[ServiceType, int] = Field(alias="servicePrices")
    repair_prices: Mapping[RepairKind, int] = Field(alias="repairPrices")
    car_type_multipliers: Mapping[CarType, float] = Field(alias="carTypeMultipliers")
    urgency_multipliers: Mapping[Urgency, float] = Field(alias="urgencyMultipliers")
    gst_rate: float = Field(default=0.18, ge=0.0, alias="gstRate")

    class Config:
        frozen = True
        populate_by_name = True

    @field_validator("service_prices", "repair_prices")
    @classmethod
    def _non_negative_prices(cls, value: Mapping[Enum, int]) -> Mapping[Enum, int]:
        negative = sorted(str(key.value) for key, price in value.items() if price < 0)
        if negative:
            raise ValueError(f"prices must not be negative: {', '.join(negative)}")
        return MappingProxyType(dict(value))

    @field_validator("car_type_multipliers", "urgency_multipliers")
    @classmethod
    def _no_discount_multipliers(cls, value: Mapping[Enum, float]) -> Mapping[Enum, float]:
        below = sorted(str(key.value) for key, multiplier in value.items() if multiplier < 1.0)
        if below:
            raise ValueError(f"multipliers must be at least 1.0: {', '.join(below)}")
        return MappingProxyType(dict(value))

    @field_serializer("service_prices", "repair_prices", "car_type_multipliers", "urgency_multipliers")
    def _plain_mapping(self, value: Mapping[Enum, float]) -> dict:
        return {getattr(key, "value", key): amount for key, amount in value.items()}


__all__ = ["PriceTables"]
