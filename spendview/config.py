import os
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError, field_validator

from .viz import THEMES

ENV_PREFIX = "SPENDVIEW_"


class Settings(BaseModel):
    theme: str = "Default"
    currency_symbol: str = "$"
    min_label_percent: float = 3.0
    chart_title: str = "Spending by Category"
    hole: float = 0.5
    log_level: Optional[str] = None

    @field_validator("theme")
    @classmethod
    def _known_theme(cls, value: str) -> str:
        if value not in THEMES:
            raise ValueError(f"theme must be one of {sorted(THEMES)}")
        return value

    @field_validator("min_label_percent")
    @classmethod
    def _percent_range(cls, value: float) -> float:
        if not 0 <= value <= 100:
            raise ValueError("min_label_percent must be between 0 and 100")
        return value

    @field_validator("hole")
    @classmethod
    def _hole_range(cls, value: float) -> float:
        if not 0 <= value < 1:
            raise ValueError("hole must be in [0, 1)")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from SPENDVIEW_* variables, e.g. SPENDVIEW_THEME=Dark.
        Unknown variables are ignored; bad values raise pydantic.ValidationError.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, str] = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls.model_validate(values)

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> Tuple["Settings", Optional[str]]:
        """from_env() that never raises: bad values give defaults plus the error text, good ones give None."""
        try:
            return cls.from_env(environ), None
        except ValidationError as exc:
            return cls(), str(exc)
