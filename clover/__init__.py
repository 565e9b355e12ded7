"""Clover: declarative command line option parsing with usage output."""

from __future__ import annotations

from .options import (
    UINT_MAX,
    CommandLineOptions,
    Option,
    OptionKind,
    ParseOutcome,
    ParseResult,
    Slot,
)
from .usage import program_basename, render_usage
from .version import __version__

__all__ = [
    "CommandLineOptions",
    "Option",
    "OptionKind",
    "ParseOutcome",
    "ParseResult",
    "Slot",
    "UINT_MAX",
    "program_basename",
    "render_usage",
    "__version__",
]
