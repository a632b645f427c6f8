from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from .logging_config import set_estimate_id
from .models.estimate import CostBreakdown
from .models.order import OrderDraft, RepairKind
from .models.validation import ValidationResult
from .pricing import PricingEngine
from .validator import validate

logger = logging.getLogger(__name__)


class EstimateSession:
    """Form state for one customer's estimate.

    The session owns the only mutable copy of the draft. Validation and
    pricing results are replaced wholesale on each submit and cleared on reset.
    """

    def __init__(self, *, engine: PricingEngine | None = None, draft: OrderDraft | None = None) -> None:
        self._engine = engine or PricingEngine()
        self._draft = draft or OrderDraft()
        self._validation: ValidationResult | None = None
        self._breakdown: CostBreakdown | None = None
        self.id = self._generate_id()

    @property
    def draft(self) -> OrderDraft:
        return self._draft

    @property
    def validation(self) -> ValidationResult | None:
        return self._validation

    @property
    def breakdown(self) -> CostBreakdown | None:
        return self._breakdown

    def update(self, **changes: Any) -> OrderDraft:
        self._draft = self._draft.updated(**changes)
        return self._draft

    def toggle_repair(self, kind: RepairKind, checked: bool) -> OrderDraft:
        if checked:
            self._draft = self._draft.with_repair(kind)
        else:
            self._draft = self._draft.without_repair(kind)
        return self._draft

    def submit(self) -> CostBreakdown | None:
        """Validate the current draft and price it when it passes.

        Returns the new breakdown, or ``None`` when validation failed; the
        failing fields are then available on ``validation``.
        """
        set_estimate_id(self.id)
        result = validate(self._draft)
        self._validation = result
        if not result.is_valid:
            self._breakdown = None
            logger.info(
                "Estimate %s rejected: %s",
                self.id,
                ", ".join(result.errors),
                extra={"fields": {"draft_version": self._draft.version, "rejected_fields": list(result.errors)}},
            )
            return None
        self._breakdown = self._engine.compute(self._draft)
        return self._breakdown

    def reset(self) -> None:
        self._draft = OrderDraft(version=self._draft.version + 1)
        self._validation = None
        self._breakdown = None

    def _generate_id(self) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        suffix = uuid.uuid4().hex[:6]
        return f"est_{ts}_{suffix}"


__all__ = ["EstimateSession"]
