"""Presentation helpers for the web, MCP and terminal surfaces.

The core hands back pure data (segment kind + text).  Everything here is
about putting that data in front of a person: masking sensitive values,
escaping for HTML, and formatting a readable report.
"""

from __future__ import annotations

import html
import json
from typing import Any

from msg_analyzer.config import get_config
from msg_analyzer.diffing import diff_texts, reconstruct
from msg_analyzer.models import AnalysisResult, DiffKind, DiffSegment
from msg_analyzer.redactor import redact, redact_payload

# CSS classes used by the analyzer page for coloured diff runs
DIFF_CLASSES: dict[DiffKind, str] = {
    DiffKind.ADDED: "text-green-600",
    DiffKind.REMOVED: "text-red-600",
}


def clean_text(text: str | None) -> str | None:
    """Replace lone surrogates with U+FFFD so the text can be encoded as JSON."""
    if text is None:
        return None
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def mask_segments(segments: list[DiffSegment]) -> list[DiffSegment]:
    """Re-diff both sides of ``segments`` after redaction.

    Redacting segment by segment would leave the pieces of a value that the
    diff split apart (``10.0.0.`` unchanged, ``1``/``2`` changed) in plain
    sight, so each side is rebuilt and redacted whole first.
    """
    before = redact(reconstruct(segments, DiffKind.REMOVED))
    after = redact(reconstruct(segments, DiffKind.ADDED))
    return diff_texts(before, after)[1]


def result_payload(result: AnalysisResult, mask: bool | None = None) -> dict[str, Any]:
    """JSON-ready dict of an analysis, redacted when masking is on."""
    if mask is None:
        mask = get_config().mask_sensitive_data
    payload = result.model_dump(mode="json")
    payload["message_label"] = result.message_type.label
    if not mask:
        return payload
    if payload["structural_content"] is not None:
        payload["structural_content"] = redact_payload(payload["structural_content"])
    if result.differences is not None and not result.diff_masked:
        masked = mask_segments(result.differences)
        payload["differences"] = [s.model_dump(mode="json") for s in masked]
        payload["diff_masked"] = True
    return payload


def render_diff_html(segments: list[DiffSegment]) -> str:
    """Render segments as HTML: escaped text, changed runs wrapped in spans."""
    parts: list[str] = []
    for seg in segments:
        escaped = html.escape(seg.text)
        css = DIFF_CLASSES.get(seg.kind)
        if css:
            parts.append(f'<span class="{css}">{escaped}</span>')
        else:
            parts.append(escaped)
    return "".join(parts)


def _fmt_pct(v: float | None) -> str:
    if v is None:
        return "N/A"
    return f"{v:.2f}%"


def diff_marker(kind: DiffKind) -> str:
    """Line prefix for a segment: "+" added, "-" removed, " " unchanged."""
    return {DiffKind.ADDED: "+", DiffKind.REMOVED: "-"}.get(kind, " ")


def format_report(result: AnalysisResult, mask: bool | None = None) -> str:
    """Plain-text summary of an analysis for terminals and chat replies."""
    if mask is None:
        mask = get_config().mask_sensitive_data
    parts: list[str] = []

    parts.append(f"Original size:     {result.original_size} bytes")
    compressed = "N/A" if result.compressed_size is None else f"{result.compressed_size} bytes"
    parts.append(f"Compressed size:   {compressed}")
    parts.append(f"Compression ratio: {_fmt_pct(result.compression_ratio)}")
    parts.append(f"Message type:      {result.message_type.label}")

    if result.has_comparison:
        parts.append(f"Similarity:        {_fmt_pct(result.similarity)} similar")
        if result.diff_mode is not None:
            parts.append(f"Diff mode:         {result.diff_mode.value}")

    if result.structural_content is not None:
        tree = result.structural_content
        if mask:
            tree = redact_payload(tree)
        parts.append("")
        parts.append("XML STRUCTURE:")
        parts.append(json.dumps(tree, indent=2, ensure_ascii=False))

    if result.differences:
        segments = result.differences
        if mask and not result.diff_masked:
            segments = mask_segments(segments)
        parts.append("")
        parts.append("DIFFERENCES:")
        for seg in segments:
            marker = diff_marker(seg.kind)
            for line in seg.text.splitlines() or [""]:
                parts.append(f"{marker} {line}")

    return "\n".join(parts)
