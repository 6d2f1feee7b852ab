"""Tests for chat-style command parsing."""

import pytest

from crackwatch.services.commands import SearchCommand, parse_command
from crackwatch.services.errors import ValidationError


@pytest.mark.parametrize("content, expected", [
    ("!crack doom", SearchCommand("doom", 1)),
    ("!crack   Doom   Eternal ", SearchCommand("doom eternal", 1)),
    ("!crack2 half life", SearchCommand("half life", 2)),
    ("!CRACK12 Witcher", SearchCommand("witcher", 12)),
    ('!crack ivan "ironman" stewart', SearchCommand('ivan "ironman" stewart', 1)),
])
def test_commands_are_parsed(content: str, expected: SearchCommand) -> None:
    assert parse_command(content) == expected


@pytest.mark.parametrize("content", [
    "",
    "!crack",
    "!crack2",
    "hello there",
    "crack doom",
    "doom !crack",
])
def test_non_commands_are_ignored(content: str) -> None:
    assert parse_command(content) is None


def test_bad_page_suffix() -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_command("!crackabc doom")

    assert exc_info.value.message == 'Unable to parse a page number from "abc"'


def test_custom_prefix() -> None:
    assert parse_command("?cw3 doom", prefix="?cw") == SearchCommand("doom", 3)
    assert parse_command("!crack doom", prefix="?cw") is None


@pytest.mark.parametrize("suffix", ["1_0", "٣", "２", "1.5", "0x10", "1e3"])
def test_page_suffix_must_be_ascii_digits(suffix: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_command(f"!crack{suffix} doom")

    assert exc_info.value.message == f'Unable to parse a page number from "{suffix}"'


def test_signed_page_suffix() -> None:
    assert parse_command("!crack+2 doom") == SearchCommand("doom", 2)
