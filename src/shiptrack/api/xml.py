# src/shiptrack/api/xml.py
from __future__ import annotations

from typing import Any, Dict

from lxml import etree


class TrackResponseError(ValueError):
    """Raised when a carrier response body is not well-formed XML."""


# Carrier responses never need DTDs or external entities.
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def _local_name(tag: Any) -> str:
    return etree.QName(tag).localname


def element_to_object(el: etree._Element) -> Any:
    """
    Convert an element into the "array-wrapped" shape carrier responses are
    described in:

      - every child element becomes a list under its tag name (even if it
        appears once)
      - attributes live under "$"
      - a leaf without attributes collapses to its text ("" if empty)
      - text of an element that also has attributes/children lives under "_"
    """
    children = [c for c in el if isinstance(c.tag, str)]
    text = (el.text or "").strip()

    if not children and not el.attrib:
        return text

    obj: Dict[str, Any] = {}
    if el.attrib:
        obj["$"] = {_local_name(k): v for k, v in el.attrib.items()}
    if text:
        obj["_"] = text
    for child in children:
        obj.setdefault(_local_name(child.tag), []).append(element_to_object(child))
    return obj


def parse_xml_document(text: str) -> Dict[str, Any]:
    """
    Parse response text into {root_tag: object}.

    An empty body parses to {}. Anything that is not well-formed XML raises
    TrackResponseError.
    """
    if text is None or not text.strip():
        return {}

    # lxml rejects str input that carries an encoding declaration
    raw = text.encode("utf-8") if isinstance(text, str) else text
    try:
        root = etree.fromstring(raw, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise TrackResponseError(f"Malformed tracking response: {e}") from e

    return {_local_name(root.tag): element_to_object(root)}
