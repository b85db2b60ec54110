"""msg-analyzer: MCP server for financial message text analysis.

Tool hierarchy
──────────────
  Analysis
    1. analyze_text       — size signal + message type + XML tree (+ comparison)
    2. compare_texts      — similarity + annotated diff between two texts

  Single components
    3. classify_message   — ISO 20022 message type by marker
    4. decode_message     — XML → nested key/value tree
    5. redact_text        — mask IPs, emails, phones, hostnames, txn IDs
"""

from __future__ import annotations

from fastmcp import FastMCP

from msg_analyzer.analyzer import analyze
from msg_analyzer.classifier import classify
from msg_analyzer.config import get_config
from msg_analyzer.diffing import diff_texts
from msg_analyzer.presenter import clean_text, render_diff_html, result_payload
from msg_analyzer.redactor import redact, redact_payload
from msg_analyzer.similarity import similarity
from msg_analyzer.structure import parse_structure

mcp = FastMCP(name="msg-analyzer")


def _check_size(*texts: str | None):
    limit = get_config().max_input_chars
    for text in texts:
        if text and len(text) > limit:
            raise ValueError(f"Input is {len(text)} characters; the limit is {limit}.")


# ═══════════════════════════════════════════════════════════════════════════
#  ANALYSIS
# ═══════════════════════════════════════════════════════════════════════════


@mcp.tool()
def analyze_text(primary: str, secondary: str | None = None) -> dict:
    """Analyze a financial message, optionally against a second version.

    Returns original/compressed size in UTF-8 bytes, the compression ratio,
    the detected message type (PACS.008, PACS.002, CAMT.053, PAIN.001 or
    Unknown) and the decoded XML tree (null if the text is not XML).
    With 'secondary', also returns a 0-100 similarity and diff segments.
    Sensitive values are masked when MASK_SENSITIVE_DATA is on.
    """
    primary, secondary = clean_text(primary), clean_text(secondary)
    _check_size(primary, secondary)
    mask = get_config().mask_sensitive_data
    return result_payload(analyze(primary, secondary, mask=mask), mask=mask)


@mcp.tool()
def compare_texts(before: str, after: str, include_html: bool = False) -> dict:
    """Compare two texts: similarity percentage and annotated diff.

    Single-line XML is diffed character by character; everything else line
    by line. Each segment is {text, kind} with kind 'unchanged', 'added' or
    'removed'. Set include_html to also get a colour-coded HTML rendering.
    """
    before, after = clean_text(before), clean_text(after)
    _check_size(before, after)
    score = similarity(before, after)
    if get_config().mask_sensitive_data:
        before, after = redact(before), redact(after)
    mode, segments = diff_texts(before, after)
    result = {
        "similarity": score,
        "diff_mode": mode.value,
        "differences": [s.model_dump(mode="json") for s in segments],
    }
    if include_html:
        result["html"] = render_diff_html(segments)
    return result


# ═══════════════════════════════════════════════════════════════════════════
#  SINGLE COMPONENTS
# ═══════════════════════════════════════════════════════════════════════════


@mcp.tool()
def classify_message(text: str) -> dict:
    """Detect the ISO 20022 message type of a text by its marker (e.g. 'pacs.008')."""
    message_type = classify(clean_text(text))
    return {"message_type": message_type.value, "label": message_type.label}


@mcp.tool()
def decode_message(text: str, include_attributes: bool = True) -> dict:
    """Decode XML into a nested tree: tags → keys, repeated tags → lists.

    Attributes appear as '@name' keys when include_attributes is true.
    Returns {"tree": null, "error": "..."} when the text is not well-formed.
    """
    text = clean_text(text)
    _check_size(text)
    result = parse_structure(text, attributes=include_attributes)
    payload = result.model_dump()
    if get_config().mask_sensitive_data and payload["tree"] is not None:
        payload["tree"] = redact_payload(payload["tree"])
    return payload


@mcp.tool()
def redact_text(text: str) -> str:
    """Mask IP addresses, transaction IDs, emails, phone numbers and hostnames."""
    return redact(clean_text(text))


# ═══════════════════════════════════════════════════════════════════════════
#  ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import sys

    # Remote hosting:  python -m msg_analyzer.server --sse
    # Default is STDIO (for local MCP clients)
    if "--sse" in sys.argv:
        mcp.run(transport="sse")
    else:
        mcp.run()
