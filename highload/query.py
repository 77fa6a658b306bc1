"""Query messages exchanged between client and server, and their display."""

from __future__ import annotations

import re
from dataclasses import dataclass

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class Query:
    """A participant's name together with the number it contributes."""

    name: str
    number: int


def construct_query(query: Query) -> str:
    """Serialise a query as ``name\\nnumber\\n``."""
    return f"{query.name}\n{query.number}\n"


def parse_query(text: str) -> Query:
    """Parse the wire form produced by :func:`construct_query`.

    The first line is the name; the number is the first integer that follows,
    after any whitespace. Trailing text after the digits is ignored.
    Raises ValueError when the name or the number is missing or malformed.
    """
    if not text:
        raise ValueError("Invalid query string")

    name, _, rest = text.partition("\n")
    match = _LEADING_INT.match(rest.lstrip())
    if match is None:
        raise ValueError("Invalid query number")

    number = int(match.group())
    if not _INT_MIN <= number <= _INT_MAX:
        raise ValueError("Invalid query number")

    return Query(name, number)


def print_info(
    client_name: str,
    server_name: str,
    client_number: int,
    server_number: int,
) -> None:
    """Print both parties, their numbers and the sum to standard output."""
    print(
        f"Client: {client_name}\n"
        f"Server: {server_name}\n"
        f"Client number: {client_number}\n"
        f"Server number: {server_number}\n"
        f"Sum: {client_number + server_number}\n",
        flush=True,
    )