"""Group directive scanning for leading message comments using Lark."""

import os

from lark import Lark
from lark.exceptions import LarkError

_g_parser: Lark | None = None


def _parser() -> Lark:
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/directive.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_parser = Lark(grammar, parser="lalr")
    return _g_parser


def parse_directive(line: str) -> str | None:
    """Return the group named by a single directive line, or None if it is not one."""
    line = line.strip()
    if not line.startswith("@group="):
        return None

    try:
        tree = _parser().parse(line)
    except LarkError:
        return None
    return str(tree.children[0])


def extract_group_name(comment: str | None) -> str | None:
    """Find the first ``@group="<name>"`` line in a comment.

    Lines that only resemble a directive (missing closing quote, empty
    name, trailing text) are ordinary documentation and are skipped.
    """
    if not comment:
        return None

    for line in comment.split("\n"):
        group = parse_directive(line)
        if group is not None:
            return group
    return None
