"""Analysis orchestrator: one "Analyze" action in, one AnalysisResult out.

The primary text always gets a size estimate, a message type and a
structural decode.  Similarity and diff are computed only when a non-empty
comparison text is supplied; the primary is the "before" side.

No exception escapes ``analyze``.  A component that fails unexpectedly is
logged and its field is left as None.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from msg_analyzer.classifier import classify
from msg_analyzer.compression import Compressor, encode_text, estimate_size
from msg_analyzer.diffing import diff_texts
from msg_analyzer.models import AnalysisResult, MessageType
from msg_analyzer.redactor import redact
from msg_analyzer.similarity import similarity
from msg_analyzer.structure import decode_structure

log = logging.getLogger(__name__)

T = TypeVar("T")


def _safe(step: str, fn: Callable[[], T], default: T) -> T:
    try:
        return fn()
    except Exception:
        log.exception("Analysis step '%s' failed", step)
        return default


def analyze(
    primary: str,
    secondary: str | None = None,
    *,
    compressor: Compressor | None = None,
    mask: bool = False,
) -> AnalysisResult:
    """Analyze ``primary`` and, if given, compare it against ``secondary``.

    With ``mask`` the diff is computed over the redacted texts, so a
    sensitive value is replaced whole before it can be split across
    segments.  Similarity is always scored on the raw texts.
    """
    primary = primary or ""
    fields: dict = {}

    size = _safe("size", lambda: estimate_size(primary, compressor), None)
    if size is not None:
        fields["original_size"] = size.original_size
        fields["compressed_size"] = size.compressed_size
        fields["compression_ratio"] = size.compression_ratio
    else:
        fields["original_size"] = _safe("length", lambda: len(encode_text(primary)), 0)

    fields["message_type"] = _safe("classify", lambda: classify(primary), MessageType.UNKNOWN)
    fields["structural_content"] = _safe("structure", lambda: decode_structure(primary), None)

    if secondary:
        fields["similarity"] = _safe("similarity", lambda: similarity(primary, secondary), None)
        if mask:
            diff = _safe("diff", lambda: diff_texts(redact(primary), redact(secondary)), None)
        else:
            diff = _safe("diff", lambda: diff_texts(primary, secondary), None)
        if diff is not None:
            fields["diff_mode"], fields["differences"] = diff
            fields["diff_masked"] = mask

    log.debug(
        "Analyzed %d bytes (type=%s, compared=%s)",
        fields["original_size"], fields["message_type"].value, bool(secondary),
    )
    return AnalysisResult(**fields)
