"""Narrative (text.div) generation for FHIR resources.

FHIR requires the narrative div to be well-formed XHTML in the XHTML namespace.
Patient-supplied values are XML-escaped before they are embedded.
"""

import re
from html import escape as html_escape

from lxml import etree

from fhir_intake.logging_audit import get_logger


logger = get_logger(__name__)

XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"

# Characters not allowed in XML 1.0 documents
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class NarrativeError(ValueError):
    """Raised when a generated narrative is not well-formed XHTML."""


def escape_xml_value(value: str) -> str:
    """Escape special XML characters in a text value.

    Example:
        >>> escape_xml_value("O'Brien & Sons")
        'O&apos;Brien &amp; Sons'
    """
    escaped = html_escape(INVALID_XML_CHARS.sub("", value), quote=True)
    # html.escape converts ' to &#x27;, but XML prefers &apos;
    return escaped.replace("&#x27;", "&apos;")


def validate_xhtml_div(div: str) -> bool:
    """Check that a narrative div is a well-formed XHTML <div> element.

    Args:
        div: Narrative markup

    Returns:
        True if the markup is well-formed and the root is an XHTML div

    Raises:
        NarrativeError: If the markup is malformed or has the wrong root element
    """
    try:
        root = etree.fromstring(div.encode("utf-8"))
    except etree.XMLSyntaxError as e:
        raise NarrativeError(f"Malformed narrative XHTML at line {e.lineno}: {e.msg}") from e

    if root.tag != f"{{{XHTML_NAMESPACE}}}div":
        raise NarrativeError(
            f"Narrative root must be an XHTML div, got {root.tag}"
        )
    return True


def patient_narrative(first_name: str, last_name: str) -> dict[str, str]:
    """Build the generated text element for a Patient resource.

    Args:
        first_name: Patient given name
        last_name: Patient family name

    Returns:
        FHIR Narrative with status "generated" and an XHTML div
    """
    div = (
        f'<div xmlns="{XHTML_NAMESPACE}">'
        f"Patient: {escape_xml_value(first_name)} {escape_xml_value(last_name)}"
        f"</div>"
    )
    validate_xhtml_div(div)
    return {"status": "generated", "div": div}
