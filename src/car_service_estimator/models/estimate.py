from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, model_validator

from .order import RepairKind


class RepairCharge(BaseModel):
    name: RepairKind
    amount: int

    class Config:
        frozen = True


class CostBreakdown(BaseModel):
    """Itemized result of pricing one order draft.

    Every intermediate is kept so the total can be recomputed from the
    breakdown alone. Only ``total`` is rounded.
    """

    base_service: int
    repairs: tuple[RepairCharge, ...] = ()
    subtotal: int
    car_type_multiplier: float = 1.0
    urgency_multiplier: float = 1.0
    gst_rate: float = 0.18
    pre_tax: Decimal
    gst: Decimal
    total: int
    draft_version: int = 0

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _subtotal_matches_items(self) -> "CostBreakdown":
        expected = self.base_service + sum(charge.amount for charge in self.repairs)
        if self.subtotal != expected:
            raise ValueError(f"subtotal {self.subtotal} does not match itemized amounts {expected}")
        return self

    @property
    def repairs_total(self) -> int:
        return sum(charge.amount for charge in self.repairs)

    @property
    def adjustment_factor(self) -> float:
        return self.car_type_multiplier * self.urgency_multiplier


__all__ = ["RepairCharge", "CostBreakdown"]
