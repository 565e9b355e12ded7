"""Usage text rendering for :class:`clover.options.CommandLineOptions` tables.

Output has the shape::

    usage: EXE_NAME [options] ARGUMENTS
    options:
        --NAME=VALUEDESC DESCRIPTION
        ...

``ARGUMENTS`` lists the positional options in registration order. Rendering
is a pure function of the option table and the program name; only
:func:`default_program_path` looks at the running process.
"""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional

from .descriptors import Option, OptionKind

__all__ = [
    "default_program_path",
    "option_column_width",
    "program_basename",
    "render_usage",
]

COLUMN_GAP = 8
INDENT = "    "


def default_program_path() -> str:
    if sys.argv and sys.argv[0]:
        return sys.argv[0]
    return sys.executable or ""


def program_basename(path: str) -> str:
    """Strip directories and a four character extension such as ``.exe``."""

    name = path
    for sep in ("/", "\\"):
        name = name.rsplit(sep, 1)[-1]
    if len(name) > 4 and name[-4] == ".":
        name = name[:-4]
    return name


def option_column_width(options: Iterable[Option]) -> int:
    width = 0
    for opt in options:
        if not opt.is_named:
            continue
        size = len(opt.name or "")
        if opt.value_desc is not None:
            size += len(opt.value_desc) + 1
        width = max(width, size)
    return width + COLUMN_GAP


def _wrap_description(text: str, x: int, col_width: int, target_width: int) -> str:
    out: List[str] = []
    for ch in text:
        if x > target_width and ch == " ":
            out.append("\n" + " " * col_width)
            x = col_width
        else:
            out.append(ch)
            x += 1
    return "".join(out)


def _render_option(opt: Option, col_width: int, target_width: int) -> str:
    if opt.kind is OptionKind.NEWLINE:
        return ""
    if opt.kind is OptionKind.POSITIONAL:
        line = f"{INDENT}{opt.name or ''}"
    else:
        line = f"{INDENT}--{opt.name}"
    if opt.value_desc is not None:
        line += f"={opt.value_desc}"
    if opt.description is not None:
        line = (line + " ").ljust(col_width)
        line += _wrap_description(opt.description, len(line), col_width, target_width)
    return line


def render_usage(
    options: Iterable[Option],
    *,
    program_name: Optional[str] = None,
    target_width: int = 100,
) -> str:
    """Return the usage text for ``options``.

    When ``program_name`` is omitted it is derived from the running process
    via :func:`program_basename`.
    """

    table = list(options)
    if program_name is None:
        program_name = program_basename(default_program_path())

    col_width = option_column_width(table)
    has_options = any(opt.is_named for opt in table)

    header = f"usage: {program_name}"
    if has_options:
        header += " [options]"
    for opt in table:
        if opt.kind is OptionKind.POSITIONAL:
            header += f" {opt.name or ''}"
    lines = [header]

    if any(opt.is_named and opt.include_in_usage for opt in table):
        lines.append("options:")
        for opt in table:
            if opt.include_in_usage:
                lines.append(_render_option(opt, col_width, target_width))

    return "\n".join(lines) + "\n"
