from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .dictionaries import DEFAULT_PRICE_TABLES
from .models.price_tables import PriceTables


class PriceTableRepository(Protocol):
    def get(self, *, name: str) -> PriceTables:
        ...


class LocalPriceTableRepository:
    def __init__(self, *, base_path: Path) -> None:
        self._base_path = base_path

    def get(self, *, name: str) -> PriceTables:
        return read_price_tables(self._base_path / f"{name}.json")


def read_price_tables(file_path: Path) -> PriceTables:
    """Parse one price-table file.

    Malformed JSON and bad values both surface as a pydantic ``ValidationError``;
    a file that is not UTF-8 raises ``UnicodeDecodeError``.
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Price tables not found: {file_path}")
    return PriceTables.model_validate_json(file_path.read_text(encoding="utf-8"))


def load_price_tables(path: Path | None) -> PriceTables:
    """Load price tables from the given file, or the built-in tables when no path is given."""
    if path is None:
        return DEFAULT_PRICE_TABLES
    return read_price_tables(path)


__all__ = ["PriceTableRepository", "LocalPriceTableRepository", "read_price_tables", "load_price_tables"]
