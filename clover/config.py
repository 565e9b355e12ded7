"""Presentation settings for usage output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["DEFAULT_TARGET_WIDTH", "UsageSettings"]

DEFAULT_TARGET_WIDTH = 100


@dataclass(slots=True)
class UsageSettings:
    """How a caller wants usage text laid out.

    ``program_name`` of ``None`` means "derive it from the running process".
    """

    target_width: int = DEFAULT_TARGET_WIDTH
    program_name: Optional[str] = None
