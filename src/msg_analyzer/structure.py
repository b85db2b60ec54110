"""Best-effort decoding of markup text into a nested key/value tree.

The tree is for display, not validation:

    <Doc><Amt Ccy="EUR">100</Amt><Ref>a</Ref><Ref>b</Ref></Doc>

becomes

    {"Doc": {"Amt": {"@Ccy": "EUR", "#text": "100"}, "Ref": ["a", "b"]}}

Namespaces are reduced to local names, values stay strings, and anything
lxml refuses to parse yields no tree at all.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from lxml import etree

from msg_analyzer.config import get_config
from msg_analyzer.models import StructureResult

log = logging.getLogger(__name__)

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"

# lxml rejects str input that declares an encoding, and the text is already decoded
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def _local(name: str) -> str:
    return etree.QName(name).localname


def _element_value(element: etree._Element, attributes: bool) -> Any:
    children = [c for c in element if isinstance(c.tag, str)]

    # Own text only: leading text plus the tails between child elements
    parts = [element.text or ""]
    parts.extend(c.tail or "" for c in children)
    text = "".join(parts).strip()

    attrs: dict[str, Any] = {}
    if attributes:
        for name, value in element.attrib.items():
            attrs[ATTRIBUTE_PREFIX + _local(name)] = value

    if not children and not attrs:
        return text

    node: dict[str, Any] = attrs
    for child in children:
        key = _local(child.tag)
        value = _element_value(child, attributes)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]

    if text:
        node[TEXT_KEY] = text
    return node


def parse_structure(text: str, attributes: bool | None = None) -> StructureResult:
    """Parse ``text`` as XML.  Failure is reported in the result, never raised."""
    if attributes is None:
        attributes = get_config().parse_attributes

    source = _XML_DECLARATION.sub("", text or "", count=1).strip()
    if not source:
        return StructureResult(error="empty document")

    try:
        root = etree.fromstring(source, _make_parser())
    except (etree.XMLSyntaxError, ValueError) as exc:
        log.debug("Structural decode failed: %s", exc)
        return StructureResult(error=str(exc) or type(exc).__name__)

    return StructureResult(tree={_local(root.tag): _element_value(root, attributes)})


def decode_structure(text: str, attributes: bool | None = None) -> dict[str, Any] | None:
    """Return the decoded tree, or None when ``text`` is not well-formed markup."""
    return parse_structure(text, attributes).tree
