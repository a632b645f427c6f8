from __future__ import annotations

import logging

from .models.order import OrderDraft
from .models.validation import FieldError, ValidationCode, ValidationResult

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3

REQUIRED_MESSAGES = {
    "customer_name": "Customer name is required",
    "car_model": "Please select a car model",
    "service_type": "Please select a service type",
    "car_type": "Please select your car type",
    "repairs": "Please select at least one repair service",
}

TOO_SHORT_MESSAGE = f"Name must be at least {MIN_NAME_LENGTH} characters"


def validate(draft: OrderDraft) -> ValidationResult:
    """Check a draft against the required-field rules.

    Every rule runs; the result carries one error per failing field.
    """
    errors: dict[str, FieldError] = {}

    name = draft.customer_name.strip()
    if not name:
        errors["customer_name"] = _required("customer_name")
    elif len(name) < MIN_NAME_LENGTH:
        errors["customer_name"] = FieldError(code=ValidationCode.too_short, message=TOO_SHORT_MESSAGE)

    for field in ("car_model", "service_type", "car_type"):
        if getattr(draft, field) is None:
            errors[field] = _required(field)

    if not draft.repairs:
        errors["repairs"] = _required("repairs")

    if errors:
        logger.debug("Draft v%s failed validation on %s", draft.version, ", ".join(errors))
    return ValidationResult(errors=errors)


def _required(field: str) -> FieldError:
    return FieldError(code=ValidationCode.required, message=REQUIRED_MESSAGES[field])


__all__ = ["validate", "MIN_NAME_LENGTH", "REQUIRED_MESSAGES", "TOO_SHORT_MESSAGE"]
