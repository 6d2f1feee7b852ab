"""Parsing of chat-style search commands such as ``!crack2 half life``."""

import re
from dataclasses import dataclass

from .errors import ValidationError

DEFAULT_PREFIX = "!crack"

_PAGE_NUMBER = re.compile(r"[+-]?\d+", re.ASCII)


@dataclass(frozen=True)
class SearchCommand:
    """A search term and the 1-based page the user asked for."""
    term: str
    page: int = 1


def parse_command(content: str, prefix: str = DEFAULT_PREFIX) -> SearchCommand | None:
    """Extract a search command from a message.

    The first word must start with ``prefix``; digits glued to the prefix
    pick the page. Everything after the first word is the search term.
    Messages that are not commands give None.

    Raises:
        ValidationError: If the text glued to the prefix is not a number
    """
    fields = content.lower().split()
    prefix = prefix.lower()
    if len(fields) < 2 or not fields[0].startswith(prefix):
        return None

    page = 1
    page_str = fields[0][len(prefix):]
    if page_str:
        if not _PAGE_NUMBER.fullmatch(page_str):
            raise ValidationError(
                f'Unable to parse a page number from "{page_str}"',
                field="page",
                value=page_str,
            )
        page = int(page_str)

    return SearchCommand(term=" ".join(fields[1:]), page=page)
