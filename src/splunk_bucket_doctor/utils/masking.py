"""Credential masking for command lines written to logs and audit records.

Splunk CLI calls that talk to splunkd take ``-auth user:password``. The
password must never reach the audit log, so every command is rendered through
``render_command`` before it is recorded.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence

MASK = "***"

# Flags whose following argument is a credential (case-insensitive).
SENSITIVE_FLAGS: frozenset[str] = frozenset({"-auth", "--auth", "-password", "--password"})


def _mask_credential(value: str) -> str:
    user, sep, _ = value.partition(":")
    if sep:
        return f"{user}:{MASK}"
    return MASK


def mask_command(command: Sequence[str]) -> list[str]:
    """Return a copy of ``command`` with credential arguments masked."""
    masked: list[str] = []
    hide_next = False
    for arg in command:
        if hide_next:
            masked.append(_mask_credential(arg))
            hide_next = False
            continue
        flag, sep, value = arg.partition("=")
        if flag.lower() in SENSITIVE_FLAGS:
            if sep:
                masked.append(f"{flag}={_mask_credential(value)}")
            else:
                masked.append(arg)
                hide_next = True
            continue
        masked.append(arg)
    return masked


def render_command(command: Sequence[str]) -> str:
    return shlex.join(mask_command(command))
