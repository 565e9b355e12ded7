"""Caller-side helpers and the ``clover-demo`` entrypoint.

The option parser itself never prints or exits; these helpers turn a
:class:`~clover.options.ParseOutcome` into diagnostics and an exit status the
way a typical program would.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, TextIO

from .colors import color
from .config import UsageSettings
from .options import CommandLineOptions, ParseOutcome, ParseResult, Slot

_LOGGER = logging.getLogger("clover.cli")

MAX_REPEAT = 100

_ERROR_MESSAGES: Dict[ParseResult, str] = {
    ParseResult.ERROR_ARGUMENT_EXPECTING_VALUE: "command line argument expecting value",
    ParseResult.ERROR_ARGUMENT_VALUE_INVALID: "invalid command line argument value",
    ParseResult.ERROR_UNRECOGNISED_ARGUMENT: "unrecognised command line argument",
}


def describe_error(outcome: ParseOutcome, argv: Sequence[str]) -> Optional[str]:
    """Return a one-line diagnostic for a failed parse, or ``None``."""

    message = _ERROR_MESSAGES.get(outcome.result)
    if message is None:
        return None
    index = outcome.error_index
    arg = argv[index] if index is not None and 0 <= index < len(argv) else ""
    return f"error: {message}: {arg}."


def handle_result(
    options: CommandLineOptions,
    outcome: ParseOutcome,
    argv: Sequence[str],
    *,
    stream: Optional[TextIO] = None,
    settings: Optional[UsageSettings] = None,
) -> Optional[int]:
    """Report help or errors on ``stream``.

    Returns the exit status the program should stop with, or ``None`` when
    parsing succeeded and the program should carry on.
    """

    if outcome.ok:
        return None
    out = stream if stream is not None else sys.stderr
    resolved = settings if settings is not None else UsageSettings()

    def _usage() -> None:
        options.print_usage(
            out,
            target_width=resolved.target_width,
            program_name=resolved.program_name,
        )

    if outcome.result is ParseResult.HELP_REQUESTED:
        _usage()
        return 0

    diagnostic = describe_error(outcome, argv)
    _LOGGER.debug("parse failed: %s", diagnostic)
    out.write(color(diagnostic or "error", fg="red", stream=out) + "\n")
    _usage()
    return 1


@dataclass
class DemoArgs:
    verbose: Slot[bool] = field(default_factory=lambda: Slot(False))
    count: Slot[int] = field(default_factory=lambda: Slot(1))
    output: Slot[Optional[str]] = field(default_factory=lambda: Slot(None))
    quiet: Slot[bool] = field(default_factory=lambda: Slot(False))
    source: Slot[Optional[str]] = field(default_factory=lambda: Slot(None))
    target: Slot[Optional[str]] = field(default_factory=lambda: Slot(None))


def build_options(args: DemoArgs) -> CommandLineOptions:
    """Register the demo program's options against ``args``."""
    options = CommandLineOptions()
    options.add_flag(args.verbose, "verbose", "Log a summary of the matched options.")
    options.add_uint(args.count, "count", "N", f"Number of times to repeat the report, at most {MAX_REPEAT} (default: 1).")
    options.add_string(args.output, "output", "PATH", "Write the report to PATH instead of standard output.")
    options.add_flag(args.quiet, "quiet", None, include_in_usage=False)
    options.add_usage_newline()
    options.add_string(args.source, "SOURCE", None, "First positional argument.")
    options.add_string(args.target, "TARGET", None, "Second positional argument.")
    return options


def _report(options: CommandLineOptions, args: DemoArgs) -> str:
    rows = [
        ("verbose", args.verbose.value),
        ("count", args.count.value),
        ("output", args.output.value),
        ("SOURCE", args.source.value),
        ("TARGET", args.target.value),
    ]
    lines = []
    for name, value in rows:
        marker = "*" if options.was_found(name) else " "
        lines.append(f"{marker} {name:<8} {value}")
    return "\n".join(lines) + "\n"


def _write_report(handle: TextIO, report: str, count: int) -> None:
    for _ in range(count):
        handle.write(report)


def main(argv: Optional[Sequence[str]] = None, *, program_name: Optional[str] = None) -> int:
    """Run the demo: parse ``argv`` and echo the resulting values."""
    argv = list(argv) if argv is not None else list(sys.argv)
    args = DemoArgs()
    options = build_options(args)
    settings = UsageSettings(program_name=program_name)

    outcome = options.parse(argv)
    status = handle_result(options, outcome, argv, settings=settings)
    if status is not None:
        return status

    if args.count.value > MAX_REPEAT:
        sys.stderr.write(color(f"error: --count must be at most {MAX_REPEAT}.", fg="red", stream=sys.stderr) + "\n")
        return 1
    if args.quiet.value:
        return 0
    report = _report(options, args)
    if args.verbose.value:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(name)s - %(message)s")
        _LOGGER.info("matched %d of %d options", sum(1 for o in options if o.found), len(options))
    if args.output.value:
        with open(args.output.value, "w", encoding="utf-8") as handle:
            _write_report(handle, report, args.count.value)
        print(color(f"Report written to {args.output.value}", fg="green"))
        return 0
    _write_report(sys.stdout, report, args.count.value)
    return 0


__all__ = ["DemoArgs", "build_options", "describe_error", "handle_result", "main"]
