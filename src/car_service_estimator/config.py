from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


@dataclass(frozen=True)
class Settings:
    environment: str = "dev"
    project_id: str | None = None
    price_tables_path: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        tables_path = env.get("PRICE_TABLES_PATH")
        return cls(
            environment=env.get("ENVIRONMENT", "dev"),
            project_id=env.get("PROJECT_ID") or None,
            price_tables_path=Path(tables_path) if tables_path else None,
        )


__all__ = ["Settings"]
