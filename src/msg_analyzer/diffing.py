"""Character- or line-level diff rendered into annotated segments.

Mode selection
──────────────
  Both inputs, once stripped, start with "<" and contain no newline
      → single-line markup → character diff of the STRIPPED texts
  Anything else
      → line diff of the ORIGINAL texts (whitespace preserved)

Engine
──────
  diff-match-patch (Myers bisection) with no deadline, so the edit script
  is minimal: the fewest removed plus added units.  Lines are mapped to
  single characters first and keep their trailing "\n".

Segments
────────
  Within one change block removed text comes before added text, and
  adjacent segments of the same kind are merged, so:

      "".join(s.text for s in segs if s.kind != ADDED)   == before
      "".join(s.text for s in segs if s.kind != REMOVED) == after
"""

from __future__ import annotations

from collections.abc import Sequence

from diff_match_patch import diff_match_patch

from msg_analyzer.config import get_config
from msg_analyzer.models import DiffKind, DiffMode, DiffSegment


def select_mode(a: str, b: str) -> DiffMode:
    """Pick the diff granularity for a pair of texts."""
    a, b = a.strip(), b.strip()
    is_markup = a.startswith("<") and b.startswith("<")
    is_single_line = "\n" not in a and "\n" not in b
    if is_markup and is_single_line:
        return DiffMode.CHARS
    return DiffMode.LINES


class _SegmentBuilder:
    """Collects diff units and emits coalesced segments."""

    def __init__(self):
        self.segments: list[DiffSegment] = []
        self._removed: list[str] = []
        self._added: list[str] = []

    def _push(self, text: str, kind: DiffKind):
        if not text:
            return
        if self.segments and self.segments[-1].kind == kind:
            last = self.segments.pop()
            text = last.text + text
        self.segments.append(DiffSegment(text=text, kind=kind))

    def _flush_changes(self):
        self._push("".join(self._removed), DiffKind.REMOVED)
        self._push("".join(self._added), DiffKind.ADDED)
        self._removed.clear()
        self._added.clear()

    def equal(self, units: Sequence[str]):
        self._flush_changes()
        self._push("".join(units), DiffKind.UNCHANGED)

    def removed(self, units: Sequence[str]):
        self._removed.extend(units)

    def added(self, units: Sequence[str]):
        self._added.extend(units)

    def finish(self) -> list[DiffSegment]:
        self._flush_changes()
        return self.segments


def _matcher() -> diff_match_patch:
    dmp = diff_match_patch()
    # 0 disables the deadline and the half-match shortcut, so the
    # Myers bisection always runs to a minimal edit script.
    dmp.Diff_Timeout = get_config().diff_timeout
    return dmp


def _build(diffs: list[tuple[int, str]]) -> list[DiffSegment]:
    builder = _SegmentBuilder()
    for op, text in diffs:
        if op == diff_match_patch.DIFF_EQUAL:
            builder.equal([text])
        elif op == diff_match_patch.DIFF_DELETE:
            builder.removed([text])
        else:
            builder.added([text])
    return builder.finish()


def diff_chars(before: str, after: str) -> list[DiffSegment]:
    """Character diff with the fewest inserted plus deleted characters."""
    return _build(_matcher().diff_main(before, after, False))


def diff_lines(before: str, after: str) -> list[DiffSegment]:
    """Line diff; each line keeps its trailing newline."""
    dmp = _matcher()
    chars1, chars2, line_array = dmp.diff_linesToChars(before, after)
    diffs = dmp.diff_main(chars1, chars2, False)
    dmp.diff_charsToLines(diffs, line_array)
    return _build(diffs)


def diff_texts(a: str, b: str) -> tuple[DiffMode, list[DiffSegment]]:
    """Diff ``a`` (before) against ``b`` (after), returning the mode used."""
    mode = select_mode(a, b)
    if mode is DiffMode.CHARS:
        return mode, diff_chars(a.strip(), b.strip())
    return mode, diff_lines(a, b)


def render_diff(a: str, b: str) -> list[DiffSegment]:
    """Annotated segments turning ``a`` into ``b``."""
    return diff_texts(a, b)[1]


def reconstruct(segments: Sequence[DiffSegment], side: DiffKind) -> str:
    """Rebuild one side of a diff.

    ``side=REMOVED`` gives the "before" text, ``side=ADDED`` the "after" text.
    """
    if side is DiffKind.UNCHANGED:
        raise ValueError("side must be DiffKind.ADDED or DiffKind.REMOVED")
    return "".join(s.text for s in segments if s.kind in (DiffKind.UNCHANGED, side))
