#!/usr/bin/env python3
"""Standalone CLI to run the text analyzer from the terminal.

Sensitive values in the output are masked while MASK_SENSITIVE_DATA is on.

Usage — run any of these from the project root ("-" reads stdin):

  # Size, compression ratio, message type and XML tree
  python analyze_tools.py analyze message.xml

  # Same, plus similarity and diff against a second version
  python analyze_tools.py analyze before.xml after.xml

  # Just the diff
  python analyze_tools.py diff before.xml after.xml

  # Message type only
  python analyze_tools.py classify message.xml

  # Mask IPs, emails, phone numbers, hostnames and transaction IDs
  python analyze_tools.py redact server.log

  # Full result as JSON
  python analyze_tools.py json before.xml after.xml
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

# Ensure the src directory is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _header(title: str):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}\n")


def _mask() -> bool:
    from msg_analyzer.config import get_config

    return get_config().mask_sensitive_data


def cmd_analyze(path: str, other: str | None = None):
    """Analyze one file, optionally against a second."""
    from msg_analyzer.analyzer import analyze
    from msg_analyzer.presenter import format_report

    _header(f"Analyze: {path}" + (f" vs {other}" if other else ""))
    mask = _mask()
    result = analyze(_read(path), _read(other) if other else None, mask=mask)
    print(format_report(result, mask=mask))


def cmd_diff(path: str, other: str):
    """Print the annotated diff between two files."""
    from msg_analyzer.diffing import diff_texts
    from msg_analyzer.presenter import diff_marker
    from msg_analyzer.redactor import redact

    _header(f"Diff: {path} → {other}")
    before, after = _read(path), _read(other)
    if _mask():
        before, after = redact(before), redact(after)
    mode, segments = diff_texts(before, after)
    print(f"  mode: {mode.value}\n")
    for seg in segments:
        for line in seg.text.splitlines() or [""]:
            print(f"{diff_marker(seg.kind)} {line}")


def cmd_classify(path: str):
    from msg_analyzer.classifier import classify

    print(classify(_read(path)).label)


def cmd_redact(path: str):
    from msg_analyzer.redactor import redact

    sys.stdout.write(redact(_read(path)))


def cmd_json(path: str, other: str | None = None):
    from msg_analyzer.analyzer import analyze
    from msg_analyzer.presenter import result_payload

    mask = _mask()
    result = analyze(_read(path), _read(other) if other else None, mask=mask)
    print(json.dumps(result_payload(result, mask=mask), indent=2, ensure_ascii=False))


COMMANDS = {
    "analyze": (cmd_analyze, "file [file2]"),
    "diff": (cmd_diff, "file file2"),
    "classify": (cmd_classify, "file"),
    "redact": (cmd_redact, "file"),
    "json": (cmd_json, "file [file2]"),
}


def main():
    if len(sys.argv) < 3 or sys.argv[1] in ("-h", "--help", "help"):
        print("\nText Analyzer — Standalone CLI")
        print("=" * 32)
        print("\nUsage: python analyze_tools.py <command> <file> [file2]\n")
        print("Commands:")
        for cmd, (_, args) in COMMANDS.items():
            print(f"  {cmd:10s}  {args}")
        print()
        return

    cmd_name = sys.argv[1].lower()
    if cmd_name not in COMMANDS:
        print(f"Unknown command: {cmd_name}")
        print(f"Available: {', '.join(COMMANDS.keys())}")
        return

    fn, _ = COMMANDS[cmd_name]

    if cmd_name == "diff" and len(sys.argv) < 4:
        print("diff needs two files")
        return
    if cmd_name in ("classify", "redact"):
        fn(sys.argv[2])
    else:
        fn(*sys.argv[2:4])


if __name__ == "__main__":
    main()
