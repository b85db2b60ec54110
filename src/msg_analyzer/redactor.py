"""Masking of sensitive substrings before text reaches a rendering surface.

Five passes run in a fixed order, each replacing every non-overlapping match
with a sentinel token.  Sentinels are bracketed upper-case words with no
digits, dots or '@', so no later pass (and no second application) can match
inside one.
"""

from __future__ import annotations

import re
from typing import Any

MASKED_IP = "[MASKED_IP]"
MASKED_TXN_ID = "[MASKED_TXN_ID]"
MASKED_EMAIL = "[MASKED_EMAIL]"
MASKED_PHONE = "[MASKED_PHONE]"
MASKED_HOSTNAME = "[MASKED_HOSTNAME]"

# IPv4 dotted quad, or a full 8-hextet IPv6 address
IP_PATTERN = re.compile(
    r"\b(?:[0-9]{1,3}\.){3}[0-9]{1,3}\b|(?:[A-F0-9]{1,4}:){7}[A-F0-9]{1,4}\b",
    re.IGNORECASE | re.ASCII,
)
# End-to-end / UETR style references: a 20xx year followed by 16+ alphanumerics
TXN_ID_PATTERN = re.compile(r"\b20\d{2}[0-9a-zA-Z]{16,}\b", re.ASCII)
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", re.ASCII)
# 10+ digits with up to two separator characters between digits, or NNN-NNN-NNNN
PHONE_PATTERN = re.compile(
    r"(?<!\w)\+?\(?\d(?:[\s().\-]{0,2}\d){9,}(?!\w)|\b\d{3}[-.]?\d{3}[-.]?\d{4}\b",
    re.ASCII,
)
HOSTNAME_PATTERN = re.compile(r"\b(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}\b", re.ASCII)
BARE_TLD_PATTERN = re.compile(r"^(?:com|org|net|edu|gov|mil)$", re.IGNORECASE)


def _mask_hostname(match: re.Match) -> str:
    host = match.group()
    if BARE_TLD_PATTERN.match(host):
        return host
    return MASKED_HOSTNAME


def redact(text: str) -> str:
    """Mask IPs, transaction IDs, emails, phone numbers and hostnames.

    Pure and idempotent: ``redact(redact(s)) == redact(s)``.
    """
    if not text:
        return ""
    text = IP_PATTERN.sub(MASKED_IP, text)
    text = TXN_ID_PATTERN.sub(MASKED_TXN_ID, text)
    text = EMAIL_PATTERN.sub(MASKED_EMAIL, text)
    text = PHONE_PATTERN.sub(MASKED_PHONE, text)
    text = HOSTNAME_PATTERN.sub(_mask_hostname, text)
    return text


def redact_payload(value: Any) -> Any:
    """Apply ``redact`` to every string leaf of a nested dict/list payload.

    Mapping keys are left alone; they are tag or field names, not data.
    """
    if isinstance(value, str):
        return redact(value)
    if isinstance(value, dict):
        return {k: redact_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact_payload(v) for v in value]
    return value
