from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EngineConfig:
    """Bounds for engines exposed to untrusted input. ``None`` leaves a bound off."""

    max_expression_length: Optional[int] = None
    max_bracket_depth: Optional[int] = None
    # characters of unmatched input quoted by UnknownTokenError
    preview_length: int = 10

    def __post_init__(self) -> None:
        for name in ("max_expression_length", "max_bracket_depth"):
            limit = getattr(self, name)
            if limit is not None and limit < 0:
                raise ValueError(f"{name} must be non-negative, got {limit}")
        if self.preview_length < 1:
            raise ValueError(f"preview_length must be positive, got {self.preview_length}")


DEFAULT_CONFIG = EngineConfig()
