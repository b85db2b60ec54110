"""Tests for message-type detection."""

import pytest

from msg_analyzer.classifier import classify
from msg_analyzer.models import MessageType


@pytest.mark.parametrize(
    "marker, expected",
    [
        ("pacs.008", MessageType.PACS_008),
        ("pacs.002", MessageType.PACS_002),
        ("camt.053", MessageType.CAMT_053),
        ("pain.001", MessageType.PAIN_001),
    ],
)
def test_each_marker(marker, expected):
    text = f'<Document xmlns="urn:iso:std:iso:20022:tech:xsd:{marker}.001.08"/>'
    assert classify(text) == expected


def test_first_listed_marker_wins():
    assert classify("pacs.008 and pain.001") == MessageType.PACS_008
    # position in the text does not matter, list order does
    assert classify("pain.001 then pacs.008") == MessageType.PACS_008
    assert classify("camt.053 pacs.002") == MessageType.PACS_002


def test_case_sensitive():
    assert classify("PACS.008") == MessageType.UNKNOWN


def test_unknown():
    assert classify("<Doc><Amt>100</Amt></Doc>") == MessageType.UNKNOWN
    assert classify("") == MessageType.UNKNOWN


def test_labels():
    assert MessageType.PACS_008.label == "PACS.008"
    assert MessageType.CAMT_053.label == "CAMT.053"
    assert MessageType.UNKNOWN.label == "Unknown"
