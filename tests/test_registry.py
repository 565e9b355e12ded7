from __future__ import annotations

from typing import Optional

from clover import CommandLineOptions, OptionKind, Slot


def _sample() -> CommandLineOptions:
    options = CommandLineOptions()
    options.add_flag(Slot(False), "verbose", "be verbose")
    options.add_usage_newline()
    options.add_uint(Slot(0), "count", "N", None)
    options.add_string(Slot[Optional[str]](None), "name", "TEXT", None)
    options.add_usage_newline()
    options.add_string(Slot[Optional[str]](None), "FILE", None, None)
    return options


def test_registration_order_and_kinds() -> None:
    options = _sample()
    assert [opt.kind for opt in options] == [
        OptionKind.FLAG,
        OptionKind.NEWLINE,
        OptionKind.UINT,
        OptionKind.STRING,
        OptionKind.NEWLINE,
        OptionKind.POSITIONAL,
    ]
    assert len(options) == 6
    assert all(opt.found is False for opt in options.options)


def test_string_without_value_desc_is_positional() -> None:
    options = CommandLineOptions()
    options.add_string(Slot[Optional[str]](None), "ARG", None, "desc", include_in_usage=False)
    (opt,) = options.options
    assert opt.kind is OptionKind.POSITIONAL
    assert opt.value_desc is None
    assert opt.include_in_usage is False


def test_option_count_excludes_newlines_by_default() -> None:
    options = _sample()
    assert options.get_option_count() == 4
    assert options.get_option_count(include_newlines=True) == 6


def test_option_count_unaffected_by_parse_and_usage() -> None:
    options = _sample()
    options.parse(["prog", "--verbose", "--count=2", "in.txt"])
    options.format_usage(program_name="p")
    options.parse(["prog", "--bogus"])
    assert options.get_option_count() == 4
    assert options.get_option_count(include_newlines=True) == 6


def test_was_found_before_and_after_parse() -> None:
    options = _sample()
    for name in ("verbose", "count", "name", "FILE"):
        assert not options.was_found(name)

    assert options.parse(["prog", "--verbose", "in.txt", "--count=2"]).ok
    assert options.was_found("VERBOSE")
    assert options.was_found("count")
    assert options.was_found("file")
    assert not options.was_found("name")
    assert not options.was_found("unknown")


def test_was_found_after_partial_parse() -> None:
    options = _sample()
    outcome = options.parse(["prog", "--count=3", "--name", "--verbose"])
    assert not outcome.ok
    assert options.was_found("count")
    assert not options.was_found("name")
    assert not options.was_found("verbose")


def test_found_flags_accumulate_until_reset() -> None:
    file_slot = Slot[Optional[str]](None)
    options = CommandLineOptions()
    options.add_string(file_slot, "FILE", None, None)

    assert options.parse(["prog", "a"]).ok
    # The positional is already used up by the previous parse.
    assert not options.parse(["prog", "b"]).ok

    options.reset()
    assert not options.was_found("FILE")
    assert file_slot.value == "a"
    assert options.parse(["prog", "b"]).ok
    assert file_slot.value == "b"


def test_parser_and_renderer_share_descriptor_types() -> None:
    from clover import descriptors, options, usage

    assert options.Option is usage.Option is descriptors.Option
    assert options.OptionKind is usage.OptionKind is descriptors.OptionKind
    assert options.render_usage is usage.render_usage
