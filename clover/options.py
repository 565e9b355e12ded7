"""Declarative command line option registry, parser, and usage printer.

Options are registered up front against caller-owned :class:`Slot` cells,
then a complete argument vector is consumed in a single left-to-right pass.

An option matches a command line argument ``-NAME=...``, ``--NAME=...`` or
``/NAME=...``, ignoring case, with two exceptions:

* flags do not take the ``=...`` part;
* string options registered without a value description are positional and
  match any argument not starting with ``-``, ``--`` or ``/``. Positional
  options consume arguments in the order they were added.
"""

from __future__ import annotations

import logging
import re
import sys
from enum import Enum
from typing import Any, Iterator, List, NamedTuple, Optional, Sequence, TextIO, Tuple

from .descriptors import Option, OptionKind, Slot
from .usage import render_usage

__all__ = [
    "CommandLineOptions",
    "Option",
    "OptionKind",
    "ParseOutcome",
    "ParseResult",
    "Slot",
    "UINT_MAX",
]

_LOGGER = logging.getLogger("clover.options")

UINT_MAX = 2**32 - 1
HELP_TOKENS = frozenset({"?", "h", "help"})

# strtoul-style base detection: 0x -> hex, leading 0 -> octal, else decimal.
_UINT_RE = re.compile(r"(?P<hex>0[xX][0-9a-fA-F]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*)")


class ParseResult(Enum):
    OK = "ok"
    HELP_REQUESTED = "help_requested"
    ERROR_ARGUMENT_EXPECTING_VALUE = "argument_expecting_value"
    ERROR_ARGUMENT_VALUE_INVALID = "argument_value_invalid"
    ERROR_UNRECOGNISED_ARGUMENT = "unrecognised_argument"


class ParseOutcome(NamedTuple):
    """Result of :meth:`CommandLineOptions.parse`.

    ``error_index`` is the position in ``argv`` of the argument that caused a
    non-OK result, or ``None`` when parsing succeeded.
    """

    result: ParseResult
    error_index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.result is ParseResult.OK


def _split_prefix(arg: str) -> Tuple[bool, str]:
    if arg.startswith("/"):
        return True, arg[1:]
    if arg.startswith("--"):
        return True, arg[2:]
    if arg.startswith("-"):
        return True, arg[1:]
    return False, arg


def _parse_uint(text: str) -> Optional[int]:
    match = _UINT_RE.fullmatch(text)
    if match is None:
        return None
    if match.group("hex"):
        value = int(text[2:], 16)
    elif match.group("oct"):
        value = int(text, 8)
    else:
        value = int(text, 10)
    if value > UINT_MAX:
        return None
    return value


class CommandLineOptions:
    """Ordered table of option descriptors.

    ``found`` flags accumulate across calls to :meth:`parse`; call
    :meth:`reset` before reusing an instance for another argument vector.
    """

    def __init__(self) -> None:
        self._options: List[Option] = []

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[Option]:
        return iter(self._options)

    @property
    def options(self) -> Tuple[Option, ...]:
        return tuple(self._options)

    # ------------------------------------------------------------------
    # Registration

    def add_flag(
        self,
        slot: Slot[bool],
        name: str,
        description: Optional[str],
        include_in_usage: bool = True,
    ) -> None:
        self._options.append(
            Option(
                kind=OptionKind.FLAG,
                name=name,
                description=description,
                slot=slot,
                include_in_usage=include_in_usage,
            )
        )

    def add_uint(
        self,
        slot: Slot[int],
        name: str,
        value_desc: Optional[str],
        description: Optional[str],
        include_in_usage: bool = True,
    ) -> None:
        self._options.append(
            Option(
                kind=OptionKind.UINT,
                name=name,
                value_desc=value_desc,
                description=description,
                slot=slot,
                include_in_usage=include_in_usage,
            )
        )

    def add_string(
        self,
        slot: Slot[Optional[str]],
        name: str,
        value_desc: Optional[str],
        description: Optional[str],
        include_in_usage: bool = True,
    ) -> None:
        """Register a ``--name=VALUE`` string option.

        Without a ``value_desc`` the option is positional instead: ``name`` is
        then only the label shown in usage and it matches the next bare
        argument.
        """
        kind = OptionKind.POSITIONAL if value_desc is None else OptionKind.STRING
        self._options.append(
            Option(
                kind=kind,
                name=name,
                value_desc=value_desc,
                description=description,
                slot=slot,
                include_in_usage=include_in_usage,
            )
        )

    def add_usage_newline(self) -> None:
        self._options.append(Option(kind=OptionKind.NEWLINE))

    def get_option_count(self, include_newlines: bool = False) -> int:
        if include_newlines:
            return len(self._options)
        return sum(1 for opt in self._options if opt.kind is not OptionKind.NEWLINE)

    # ------------------------------------------------------------------
    # Parsing

    def parse(self, argv: Sequence[str]) -> ParseOutcome:
        """Match ``argv[1:]`` against the registered options.

        Stops at the first argument that requests help or cannot be used and
        reports its index. Slots of options matched before that point keep
        the values written to them.
        """
        for index in range(1, len(argv)):
            arg = argv[index]
            has_prefix, text = _split_prefix(arg)

            if has_prefix and text.casefold() in HELP_TOKENS:
                _LOGGER.debug("help requested by argument %d (%r)", index, arg)
                return ParseOutcome(ParseResult.HELP_REQUESTED, index)

            result = self._consume(arg, text, has_prefix)
            if result is ParseResult.OK:
                continue
            _LOGGER.debug("argument %d (%r) rejected: %s", index, arg, result.value)
            return ParseOutcome(result, index)

        return ParseOutcome(ParseResult.OK)

    def _consume(self, arg: str, text: str, has_prefix: bool) -> ParseResult:
        folded = text.casefold()
        for opt in self._options:
            if opt.kind is OptionKind.NEWLINE:
                continue

            if opt.kind is OptionKind.POSITIONAL:
                if not has_prefix and not opt.found:
                    self._store(opt, arg)
                    return ParseResult.OK
                continue

            if not has_prefix:
                continue

            name = opt.name or ""
            if opt.kind is OptionKind.FLAG:
                if folded == name.casefold():
                    self._store(opt, True)
                    return ParseResult.OK
                continue

            # UINT and STRING take "NAME=VALUE".
            if text[: len(name)].casefold() != name.casefold():
                continue
            rest = text[len(name):]
            if not rest:
                return ParseResult.ERROR_ARGUMENT_EXPECTING_VALUE
            if not rest.startswith("="):
                continue
            raw = rest[1:]
            if opt.kind is OptionKind.UINT:
                value = _parse_uint(raw)
                if value is None:
                    return ParseResult.ERROR_ARGUMENT_VALUE_INVALID
                self._store(opt, value)
            else:
                self._store(opt, raw)
            return ParseResult.OK

        return ParseResult.ERROR_UNRECOGNISED_ARGUMENT

    @staticmethod
    def _store(opt: Option, value: Any) -> None:
        if opt.slot is not None:
            opt.slot.value = value
        opt.found = True

    def reset(self) -> None:
        """Clear every ``found`` flag so the table can parse again."""
        for opt in self._options:
            opt.found = False

    # ------------------------------------------------------------------
    # Queries and usage

    def was_found(self, name: str) -> bool:
        wanted = name.casefold()
        for opt in self._options:
            if opt.name is not None and opt.name.casefold() == wanted:
                return opt.found
        return False

    def format_usage(self, target_width: int = 100, program_name: Optional[str] = None) -> str:
        return render_usage(self._options, program_name=program_name, target_width=target_width)

    def print_usage(
        self,
        output: Optional[TextIO] = None,
        target_width: int = 100,
        program_name: Optional[str] = None,
    ) -> None:
        """Write usage text to ``output`` (standard error by default).

        Descriptions wrap at any space once the line passes ``target_width``.
        """
        stream = output if output is not None else sys.stderr
        stream.write(self.format_usage(target_width=target_width, program_name=program_name))
