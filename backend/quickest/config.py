"""Runtime settings read from the environment (after loading ``.env`` files)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from quickest.models.estimate import FreightOptions, Markups

if TYPE_CHECKING:
    from collections.abc import Mapping

_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent

ENV_PREFIX = "QUICKEST_"


def load_env_files() -> None:
    """Load ``.env`` from the project root, then from ``backend/``.

    Variables already set in the process environment win.
    """
    load_dotenv(_PROJECT_ROOT / ".env")
    load_dotenv(_BACKEND_DIR / ".env")


class Settings(BaseModel):
    """Deployment settings.

    Every field maps to a ``QUICKEST_``-prefixed variable, e.g.
    ``QUICKEST_MAX_WORKERS=8`` or ``QUICKEST_MARKUP_STEEL=0.12``.
    """

    catalog_path: Path | None = None
    max_workers: int = Field(default=4, ge=1)
    freight_rate: float = Field(default=0.0, ge=0)
    markup_steel: float = 0.0
    markup_panels: float = 0.0
    markup_ssl: float = 0.0
    markup_finance: float = 0.0
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v: object) -> object:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("catalog_path", mode="before")
    @classmethod
    def blank_path_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (the process environment by default).

        Raises:
            pydantic.ValidationError: If a variable holds an unusable value.
        """
        if environ is None:
            load_env_files()
            environ = os.environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)

    @property
    def markups(self) -> Markups:
        return Markups(
            steel=self.markup_steel,
            panels=self.markup_panels,
            ssl=self.markup_ssl,
            finance=self.markup_finance,
        )

    @property
    def freight(self) -> FreightOptions:
        return FreightOptions(freight_rate=self.freight_rate)
