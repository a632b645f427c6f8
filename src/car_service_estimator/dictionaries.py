from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .models.order import CarModel, CarType, RepairKind, ServiceType, Urgency
from .models.price_tables import PriceTables

GST_RATE = 0.18


DEFAULT_PRICE_TABLES = PriceTables(
    service_prices={
        ServiceType.basic: 1500,
        ServiceType.standard: 3500,
        ServiceType.comprehensive: 6500,
        ServiceType.premium: 12000,
    },
    repair_prices={
        RepairKind.oil_change: 800,
        RepairKind.brake_service: 2500,
        RepairKind.tyre_maintenance: 3000,
        RepairKind.ac_service: 2000,
        RepairKind.engine_tuning: 4500,
        RepairKind.battery_replacement: 3500,
    },
    car_type_multipliers={
        CarType.hatchback: 1.0,
        CarType.sedan: 1.2,
        CarType.suv: 1.5,
        CarType.luxury: 2.0,
    },
    urgency_multipliers={
        Urgency.normal: 1.0,
        Urgency.express: 1.5,
    },
    gst_rate=GST_RATE,
)


@dataclass(frozen=True)
class ServicePackage:
    key: ServiceType
    label: str
    description: str


@dataclass(frozen=True)
class OptionLabel:
    key: str
    label: str


SERVICE_PACKAGES: Mapping[ServiceType, ServicePackage] = {
    ServiceType.basic: ServicePackage(ServiceType.basic, "Basic Service", "Oil & Filter"),
    ServiceType.standard: ServicePackage(ServiceType.standard, "Standard Service", "Complete Check-up"),
    ServiceType.comprehensive: ServicePackage(ServiceType.comprehensive, "Comprehensive", "Full Service"),
    ServiceType.premium: ServicePackage(ServiceType.premium, "Premium Service", "Complete Overhaul"),
}


REPAIR_LABELS: Mapping[RepairKind, OptionLabel] = {
    RepairKind.oil_change: OptionLabel("oilChange", "Oil Change"),
    RepairKind.brake_service: OptionLabel("brakeService", "Brake Service"),
    RepairKind.tyre_maintenance: OptionLabel("tyreMaintenance", "Tyre Maintenance"),
    RepairKind.ac_service: OptionLabel("acService", "AC Service"),
    RepairKind.engine_tuning: OptionLabel("engineTuning", "Engine Tuning"),
    RepairKind.battery_replacement: OptionLabel("batteryReplacement", "Battery Replacement"),
}


CAR_TYPE_LABELS: Mapping[CarType, OptionLabel] = {
    CarType.hatchback: OptionLabel("hatchback", "Hatchback (Base Price)"),
    CarType.sedan: OptionLabel("sedan", "Sedan (+20%)"),
    CarType.suv: OptionLabel("suv", "SUV (+50%)"),
    CarType.luxury: OptionLabel("luxury", "Luxury (+100%)"),
}


CAR_MODEL_LABELS: Mapping[CarModel, OptionLabel] = {
    CarModel.maruti_swift: OptionLabel("maruti_swift", "Maruti Swift"),
    CarModel.hyundai_i20: OptionLabel("hyundai_i20", "Hyundai i20"),
    CarModel.honda_city: OptionLabel("honda_city", "Honda City"),
    CarModel.maruti_dzire: OptionLabel("maruti_dzire", "Maruti Dzire"),
    CarModel.tata_nexon: OptionLabel("tata_nexon", "Tata Nexon"),
    CarModel.mahindra_xuv700: OptionLabel("mahindra_xuv700", "Mahindra XUV700"),
    CarModel.kia_seltos: OptionLabel("kia_seltos", "Kia Seltos"),
}


URGENCY_LABELS: Mapping[Urgency, OptionLabel] = {
    Urgency.normal: OptionLabel("normal", "Normal (Standard Timeline)"),
    Urgency.express: OptionLabel("express", "Express Service (+50% charges)"),
}


__all__ = [
    "GST_RATE",
    "DEFAULT_PRICE_TABLES",
    "SERVICE_PACKAGES",
    "REPAIR_LABELS",
    "CAR_TYPE_LABELS",
    "CAR_MODEL_LABELS",
    "URGENCY_LABELS",
    "ServicePackage",
    "OptionLabel",
]
