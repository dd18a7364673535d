"""Code names recorded in annotated tag messages.

A release tag may declare a code name on one line of its message:

    v1.2.0 codename(flamingo-dance)

The first line mentioning "codename" is the declaration. Everything between
"codename(" and the last ")" on that line is the name, kept verbatim.
Three outcomes:

    parse_code_name(body) == "flamingo-dance"   # declared
    parse_code_name(body) is None               # not declared
    parse_code_name(body) == ""                 # declared but malformed
"""

from __future__ import annotations

import re

__all__ = ["CODE_NAME_MARKER", "MALFORMED", "SNAPSHOT", "is_malformed", "parse_code_name"]

CODE_NAME_MARKER = "codename"

# Code name of every snapshot build
SNAPSHOT = "snapshot"

# Falsy but distinguishable from None
MALFORMED = ""

_DECLARATION_RE = re.compile(r"codename\((.*)\)")


def parse_code_name(tag_body: str) -> str | None:
    """Extract the code name from an annotated tag body (`git cat-file -p` output)."""
    line = next((ln for ln in tag_body.splitlines() if CODE_NAME_MARKER in ln), None)
    if line is None:
        return None

    m = _DECLARATION_RE.search(line)
    if m is None:
        return MALFORMED
    return m.group(1)


def is_malformed(code_name: str | None) -> bool:
    """True when a declaration was present but unusable."""
    return code_name is not None and not code_name
