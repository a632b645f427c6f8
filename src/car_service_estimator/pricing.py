from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from .dictionaries import (
    CAR_MODEL_LABELS,
    CAR_TYPE_LABELS,
    DEFAULT_PRICE_TABLES,
    REPAIR_LABELS,
    SERVICE_PACKAGES,
)
from .models.estimate import CostBreakdown, RepairCharge
from .models.order import OrderDraft, Urgency
from .models.price_tables import PriceTables
from .models.validation import ValidationResult
from .validator import validate

logger = logging.getLogger(__name__)

WHOLE_RUPEE = Decimal("1")


class IncompleteOrderError(ValueError):
    """Raised by a strict engine when asked to price a draft that fails validation."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        fields = ", ".join(result.errors)
        super().__init__(f"Order draft is incomplete: {fields}")


class PricingEngine:
    """Turns an order draft into a cost breakdown using injected price tables.

    By default the engine trusts its caller to have validated the draft: an
    unset service type or car type contributes nothing, and a repair or tier
    missing from the tables prices at zero or at a neutral multiplier. Each
    such fallback is logged. With ``strict=True`` the draft is validated first
    and an incomplete draft raises ``IncompleteOrderError``.
    """

    def __init__(self, *, tables: PriceTables = DEFAULT_PRICE_TABLES, strict: bool = False) -> None:
        self._tables = tables
        self._strict = strict

    @property
    def tables(self) -> PriceTables:
        return self._tables

    def compute(self, draft: OrderDraft) -> CostBreakdown:
        if self._strict:
            result = validate(draft)
            if not result.is_valid:
                raise IncompleteOrderError(result)

        base_service = self._base_service(draft)
        repairs = self._repair_charges(draft)
        subtotal = base_service + sum(charge.amount for charge in repairs)

        car_type_multiplier = self._car_type_multiplier(draft)
        urgency_multiplier = self._urgency_multiplier(draft)
        pre_tax = Decimal(subtotal) * _decimal(car_type_multiplier) * _decimal(urgency_multiplier)
        gst = pre_tax * _decimal(self._tables.gst_rate)
        total = int((pre_tax + gst).quantize(WHOLE_RUPEE, rounding=ROUND_HALF_UP))

        logger.info(
            "Priced draft v%s: subtotal=%s pre_tax=%s total=%s",
            draft.version,
            subtotal,
            pre_tax,
            total,
            extra={
                "fields": {
                    "draft_version": draft.version,
                    "subtotal": subtotal,
                    "car_type_multiplier": car_type_multiplier,
                    "urgency_multiplier": urgency_multiplier,
                    "pre_tax": pre_tax,
                    "gst": gst,
                    "total": total,
                }
            },
        )
        return CostBreakdown(
            base_service=base_service,
            repairs=repairs,
            subtotal=subtotal,
            car_type_multiplier=car_type_multiplier,
            urgency_multiplier=urgency_multiplier,
            gst_rate=self._tables.gst_rate,
            pre_tax=pre_tax,
            gst=gst,
            total=total,
            draft_version=draft.version,
        )

    def _base_service(self, draft: OrderDraft) -> int:
        if draft.service_type is None:
            logger.warning("Draft v%s has no service type; base service priced at 0", draft.version)
            return 0
        price = self._tables.service_prices.get(draft.service_type)
        if price is None:
            logger.warning("No price for service type %s; base service priced at 0", draft.service_type.value)
            return 0
        return price

    def _repair_charges(self, draft: OrderDraft) -> tuple[RepairCharge, ...]:
        charges: list[RepairCharge] = []
        for repair in draft.repairs:
            price = self._tables.repair_prices.get(repair)
            if price is None:
                logger.warning("No price for repair %s; priced at 0", repair.value)
                price = 0
            charges.append(RepairCharge(name=repair, amount=price))
        return tuple(charges)

    def _car_type_multiplier(self, draft: OrderDraft) -> float:
        if draft.car_type is None:
            logger.warning("Draft v%s has no car type; multiplier left at 1.0", draft.version)
            return 1.0
        multiplier = self._tables.car_type_multipliers.get(draft.car_type)
        if multiplier is None:
            logger.warning("No multiplier for car type %s; using 1.0", draft.car_type.value)
            return 1.0
        return multiplier

    def _urgency_multiplier(self, draft: OrderDraft) -> float:
        multiplier = self._tables.urgency_multipliers.get(draft.urgency)
        if multiplier is None:
            if draft.urgency is not Urgency.normal:
                logger.warning("No multiplier for urgency %s; using 1.0", draft.urgency.value)
            return 1.0
        return multiplier


def compute_cost(draft: OrderDraft, tables: PriceTables = DEFAULT_PRICE_TABLES) -> CostBreakdown:
    return PricingEngine(tables=tables).compute(draft)


def render_summary(draft: OrderDraft, breakdown: CostBreakdown) -> str:
    """Render a breakdown as Markdown for display next to the order."""
    lines = [
        "## Cost Breakdown",
        f"- Customer: {draft.customer_name.strip() or '-'}",
    ]
    if draft.car_model is not None:
        lines.append(f"- Car Model: {CAR_MODEL_LABELS[draft.car_model].label}")
    if draft.car_type is not None:
        lines.append(f"- Car Type: {CAR_TYPE_LABELS[draft.car_type].label}")

    package = SERVICE_PACKAGES.get(draft.service_type) if draft.service_type else None
    service_label = f"Base Service ({package.label})" if package else "Base Service"
    lines.append(f"- {service_label}: {format_rupees(breakdown.base_service)}")

    lines.extend(["", "## Repairs"])
    if breakdown.repairs:
        lines.extend(
            f"- {REPAIR_LABELS[charge.name].label}: {format_rupees(charge.amount)}" for charge in breakdown.repairs
        )
    else:
        lines.append("- None")

    lines.extend(["", "## Adjustments", f"- Subtotal: {format_rupees(breakdown.subtotal)}"])
    if breakdown.car_type_multiplier > 1:
        lines.append(f"- Car Type Multiplier: ×{breakdown.car_type_multiplier}")
    if breakdown.urgency_multiplier > 1:
        lines.append(f"- Express Service: ×{breakdown.urgency_multiplier}")
    lines.extend(
        [
            f"- GST ({breakdown.gst_rate:.0%}): ₹{breakdown.gst:,.2f}",
            "",
            f"**Total Amount: {format_rupees(breakdown.total)}**",
        ]
    )
    return "\n".join(lines)


def _decimal(value: float) -> Decimal:
    return Decimal(str(value))


def format_rupees(amount: int) -> str:
    return f"₹{amount:,}"


__all__ = ["PricingEngine", "IncompleteOrderError", "compute_cost", "render_summary", "format_rupees"]
