"""Option descriptor types shared by the parser and the usage renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

__all__ = ["Option", "OptionKind", "Slot"]

T = TypeVar("T")


class OptionKind(Enum):
    NEWLINE = "newline"
    POSITIONAL = "positional"
    FLAG = "flag"
    UINT = "uint"
    STRING = "string"


@dataclass
class Slot(Generic[T]):
    """Caller-owned storage that a registered option writes into."""

    value: T


@dataclass
class Option:
    kind: OptionKind
    name: Optional[str] = None
    value_desc: Optional[str] = None
    description: Optional[str] = None
    slot: Optional[Slot[Any]] = None
    include_in_usage: bool = True
    found: bool = False

    @property
    def is_named(self) -> bool:
        return self.kind in (OptionKind.FLAG, OptionKind.UINT, OptionKind.STRING)
