from __future__ import annotations

from enum import Enum
from typing import Mapping

from pydantic import BaseModel, Field


class ValidationCode(str, Enum):
    required = "Required"
    too_short = "TooShort"


class FieldError(BaseModel):
    code: ValidationCode
    message: str


class ValidationResult(BaseModel):
    errors: Mapping[str, FieldError] = Field(default_factory=dict)

    class Config:
        frozen = True

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def messages(self) -> dict[str, str]:
        return {field: error.message for field, error in self.errors.items()}

    def codes(self) -> dict[str, ValidationCode]:
        return {field: error.code for field, error in self.errors.items()}


__all__ = ["ValidationCode", "FieldError", "ValidationResult"]
