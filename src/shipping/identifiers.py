"""Identifier helpers.

Tracking ids, UN/LOCODEs and voyage numbers are plain strings. An empty
string stands for "unspecified", e.g. a Receive event without a voyage.
"""

import re
from uuid import uuid4

UNLOCODE_PATTERN = re.compile(r"^[A-Z]{2}[A-Z2-9]{3}$")


def next_tracking_id() -> str:
    """Return a new, short tracking id such as ``"3F2A9C1B"``."""
    return str(uuid4()).split("-")[0].upper()


def is_valid_unlocode(code: str) -> bool:
    return bool(code) and UNLOCODE_PATTERN.match(code) is not None
