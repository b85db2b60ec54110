"""Tests for diff mode selection and segment rendering."""

import pytest

from msg_analyzer.diffing import diff_texts, reconstruct, render_diff, select_mode
from msg_analyzer.models import DiffKind, DiffMode, DiffSegment

U, A, R = DiffKind.UNCHANGED, DiffKind.ADDED, DiffKind.REMOVED


def seg(text, kind):
    return DiffSegment(text=text, kind=kind)


# --- Mode selection ---


def test_single_line_markup_uses_chars():
    assert select_mode("<a/>", '<a x="1"/>') == DiffMode.CHARS


def test_multi_line_markup_uses_lines():
    assert select_mode("<a>\n<b/>\n</a>", "<a>\n<b x=\"1\"/>\n</a>") == DiffMode.LINES


def test_one_multi_line_side_forces_lines():
    assert select_mode("<a/>", "<a>\n</a>") == DiffMode.LINES


def test_non_markup_uses_lines():
    assert select_mode("hello world", "hello there") == DiffMode.LINES
    assert select_mode("<a/>", "a/>") == DiffMode.LINES


def test_surrounding_whitespace_is_ignored_for_mode():
    assert select_mode("  <a/>\n", "\n\t<b/>  ") == DiffMode.CHARS


# --- Character diffs ---


def test_char_diff_segments():
    assert render_diff("<a/>", '<a x="1"/>') == [
        seg("<a", U),
        seg(' x="1"', A),
        seg("/>", U),
    ]


def test_char_diff_amount_change():
    mode, segments = diff_texts("<Doc><Amt>100</Amt></Doc>", "<Doc><Amt>200</Amt></Doc>")
    assert mode == DiffMode.CHARS
    assert segments == [
        seg("<Doc><Amt>", U),
        seg("1", R),
        seg("2", A),
        seg("00</Amt></Doc>", U),
    ]


def test_char_diff_reconstructs_trimmed_inputs():
    a, b = "  <a>1</a>  ", "\n<a>2</a>\n"
    segments = render_diff(a, b)
    assert reconstruct(segments, R) == "<a>1</a>"
    assert reconstruct(segments, A) == "<a>2</a>"


# --- Line diffs ---


def test_line_diff_segments():
    a = "<a>\n<b/>\n</a>"
    b = '<a>\n<b x="1"/>\n</a>'
    mode, segments = diff_texts(a, b)
    assert mode == DiffMode.LINES
    assert segments == [
        seg("<a>\n", U),
        seg("<b/>\n", R),
        seg('<b x="1"/>\n', A),
        seg("</a>", U),
    ]


def test_line_diff_preserves_whitespace():
    a = "  line1\n\tline2\n"
    b = "  line1\n\tline2 changed\n"
    segments = render_diff(a, b)
    assert reconstruct(segments, R) == a
    assert reconstruct(segments, A) == b
    assert segments[0] == seg("  line1\n", U)


def test_line_diff_coalesces_runs():
    segments = render_diff("x\ny\nz\n", "X\nY\nz\n")
    assert segments == [seg("x\ny\n", R), seg("X\nY\n", A), seg("z\n", U)]


def test_removed_precedes_added_within_block():
    segments = render_diff("a\nold1\nold2\nb\n", "a\nnew\nb\n")
    kinds = [s.kind for s in segments]
    assert kinds == [U, R, A, U]


def test_plain_text_single_line():
    assert render_diff("hello world", "hello there") == [
        seg("hello world", R),
        seg("hello there", A),
    ]


def test_trailing_newline_difference():
    assert render_diff("a\nb", "a\nb\n") == [seg("a\n", U), seg("b", R), seg("b\n", A)]


def test_crlf_stays_in_line_text():
    segments = render_diff("a\r\nb", "a\r\nc")
    assert segments[0] == seg("a\r\n", U)


def test_identical_texts():
    assert render_diff("same\ntext", "same\ntext") == [seg("same\ntext", U)]


def test_empty_sides():
    assert render_diff("", "") == []
    assert render_diff("", "abc") == [seg("abc", A)]
    assert render_diff("abc\n", "") == [seg("abc\n", R)]


# --- Invariants ---

PAIRS = [
    ("<a/>", '<a x="1"/>'),
    ("<Doc><Amt>100</Amt></Doc>", "<Doc><Amt>200</Amt><Ccy>EUR</Ccy></Doc>"),
    ("<a>\n  <b>1</b>\n</a>\n", "<a>\n  <b>2</b>\n  <c/>\n</a>\n"),
    ("first\nsecond\nthird", "zeroth\nfirst\nthird\nfourth"),
    ("\n\n\n", "\n"),
    ("  padded  ", "padded"),
    ("one line", ""),
]


@pytest.mark.parametrize("a, b", PAIRS)
def test_reconstruction(a, b):
    mode, segments = diff_texts(a, b)
    if mode == DiffMode.CHARS:
        a, b = a.strip(), b.strip()
    assert reconstruct(segments, R) == a
    assert reconstruct(segments, A) == b


@pytest.mark.parametrize("a, b", PAIRS)
def test_segments_are_coalesced_and_non_empty(a, b):
    segments = render_diff(a, b)
    assert all(s.text for s in segments)
    for prev, cur in zip(segments, segments[1:]):
        assert prev.kind != cur.kind


def test_reconstruct_rejects_unchanged_side():
    with pytest.raises(ValueError):
        reconstruct([], U)


@pytest.mark.slow
def test_large_statement_reconstructs():
    lines = [f"  <Ntry><Amt Ccy=\"EUR\">{i}.00</Amt></Ntry>\n" for i in range(3000)]
    a = "<Stmt>\n" + "".join(lines) + "</Stmt>\n"
    lines[1500] = '  <Ntry><Amt Ccy="USD">1500.00</Amt></Ntry>\n'
    b = "<Stmt>\n" + "".join(lines) + "</Stmt>\n"
    segments = render_diff(a, b)
    assert reconstruct(segments, R) == a
    assert reconstruct(segments, A) == b
    assert [s.kind for s in segments] == [U, R, A, U]


# --- Minimality ---


def _changed(segments):
    return sum(len(s.text) for s in segments if s.kind != U)


def test_char_diff_is_minimal():
    # The longest common subsequence is "<abcde"; keeping "<LONG" costs two more
    a, b = "<a1b2c3d4e5LONG", "<LONGabcde"
    segments = render_diff(a, b)
    assert _changed(segments) == 13
    assert reconstruct(segments, R) == a
    assert reconstruct(segments, A) == b


def test_line_diff_is_minimal():
    a = "h\n1\n2\n3\n4\n5\nLONG\n"
    b = "h\nLONG\n1\n2\n3\n4\n5\n"
    segments = render_diff(a, b)
    changed_lines = [line for s in segments if s.kind != U for line in s.text.splitlines()]
    assert changed_lines == ["LONG", "LONG"]
    assert reconstruct(segments, R) == a
    assert reconstruct(segments, A) == b
