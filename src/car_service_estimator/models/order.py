from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class CarModel(str, Enum):
    maruti_swift = "maruti_swift"
    hyundai_i20 = "hyundai_i20"
    honda_city = "honda_city"
    maruti_dzire = "maruti_dzire"
    tata_nexon = "tata_nexon"
    mahindra_xuv700 = "mahindra_xuv700"
    kia_seltos = "kia_seltos"


class ServiceType(str, Enum):
    basic = "basic"
    standard = "standard"
    comprehensive = "comprehensive"
    premium = "premium"


class RepairKind(str, Enum):
    oil_change = "oilChange"
    brake_service = "brakeService"
    tyre_maintenance = "tyreMaintenance"
    ac_service = "acService"
    engine_tuning = "engineTuning"
    battery_replacement = "batteryReplacement"


class CarType(str, Enum):
    hatchback = "hatchback"
    sedan = "sedan"
    suv = "suv"
    luxury = "luxury"


class Urgency(str, Enum):
    normal = "normal"
    express = "express"


class OrderDraft(BaseModel):
    """A service order as filled in on the estimate form.

    Drafts are immutable. Every edit produces a new draft with ``version``
    bumped by one, so a caller can tell which draft a breakdown was priced from.
    """

    customer_name: str = Field(default="", alias="customerName")
    car_model: CarModel | None = Field(default=None, alias="carModel")
    service_type: ServiceType | None = Field(default=None, alias="serviceType")
    repairs: tuple[RepairKind, ...] = Field(default=(), description="Selected repairs in selection order")
    car_type: CarType | None = Field(default=None, alias="carType")
    urgency: Urgency = Urgency.normal
    version: int = 0

    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "customerName": "Priya Sharma",
                "carModel": "mahindra_xuv700",
                "serviceType": "premium",
                "repairs": ["engineTuning", "brakeService"],
                "carType": "suv",
                "urgency": "express",
            }
        }

    @field_validator("car_model", "service_type", "car_type", mode="before")
    @classmethod
    def _blank_as_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("repairs")
    @classmethod
    def _dedupe_repairs(cls, value: tuple[RepairKind, ...]) -> tuple[RepairKind, ...]:
        return tuple(dict.fromkeys(value))

    def updated(self, **changes: Any) -> "OrderDraft":
        data = self.model_dump()
        data.update(changes)
        data["version"] = self.version + 1
        return type(self).model_validate(data)

    def with_repair(self, kind: RepairKind) -> "OrderDraft":
        return self.updated(repairs=(*self.repairs, RepairKind(kind)))

    def without_repair(self, kind: RepairKind) -> "OrderDraft":
        kind = RepairKind(kind)
        return self.updated(repairs=tuple(repair for repair in self.repairs if repair != kind))


__all__ = ["CarModel", "ServiceType", "RepairKind", "CarType", "Urgency", "OrderDraft"]
