"""
Usage API payload parsing.

The API answers with small XML documents of the form::

    <internode><api>
      <services count="1">
        <service type="Personal_ADSL" href="/api/v1.5/123456">123456</service>
      </services>
    </api></internode>

    <internode><api>
      <traffic name="total" rollover="2020-03-15" quota="200000000000"
               unit="bytes">51234567890</traffic>
    </api></internode>

Only the fields the collector needs are extracted.
"""

import re
import xml.etree.ElementTree as ET
from datetime import date
from typing import Optional, Union

from ..models import UsageSnapshot

_ROLLOVER_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class UsageParseError(ValueError):
    """Raised when an API payload is not the XML document we expect."""
    pass


def _parse_document(xml_text: str) -> ET.Element:
    if not xml_text or not xml_text.strip():
        raise UsageParseError("Empty response body")
    try:
        return ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise UsageParseError(f"Malformed XML: {e}") from e


def _find(root: ET.Element, path: str) -> Optional[ET.Element]:
    # Accept documents rooted at <internode> or directly at <api>
    if root.tag == path.split("/")[0]:
        return root.find(path.split("/", 1)[1]) if "/" in path else root
    return root.find(path)


def _field(element: ET.Element, name: str) -> Optional[str]:
    """Read a value from an attribute, falling back to a child element."""
    value = element.get(name)
    if value is None:
        child = element.find(name)
        if child is not None:
            value = child.text
    return value.strip() if value is not None else None


def parse_number(text: Optional[str], field: str) -> Union[int, float]:
    """Parse an integer, or a float when the value has a fractional part."""
    if text is None or not text.strip():
        raise UsageParseError(f"Missing value for '{field}'")
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError as e:
        raise UsageParseError(f"Invalid number for '{field}': {text!r}") from e


def parse_rollover(text: Optional[str]) -> date:
    """Parse a yyyy-mm-dd rollover date."""
    match = _ROLLOVER_RE.match(text or "")
    if not match:
        raise UsageParseError(f"Invalid rollover date: {text!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise UsageParseError(f"Invalid rollover date: {text!r}") from e


def parse_service_href(xml_text: str) -> str:
    """
    Extract the service href from a service listing.

    When the account has several services the first one is used.

    Raises:
        UsageParseError: If the document has no service href
    """
    root = _parse_document(xml_text)
    service = _find(root, "api/services/service")
    if service is None:
        raise UsageParseError("No service element in service listing")
    href = _field(service, "href")
    if not href:
        raise UsageParseError("Service element has no href")
    return href


def parse_traffic(xml_text: str) -> UsageSnapshot:
    """
    Extract quota, usage and rollover date from a traffic report.

    Raises:
        UsageParseError: If any field is missing or malformed
    """
    root = _parse_document(xml_text)
    traffic = _find(root, "api/traffic")
    if traffic is None:
        raise UsageParseError("No traffic element in usage report")

    used_text = traffic.text
    if used_text is None or not used_text.strip():
        content = traffic.find("content")
        used_text = content.text if content is not None else None

    return UsageSnapshot(
        quota=parse_number(_field(traffic, "quota"), "quota"),
        used=parse_number(used_text, "content"),
        rollover=parse_rollover(_field(traffic, "rollover")),
    )
