"""
XMLMC envelope construction.

<methodCall service="S" method="M" [trace="T"]>[<params>...</params>]</methodCall>
"""

import re
from typing import Optional

_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "'": "&#39;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
})

# Anything outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_escape(text: str) -> str:
    """Escape text for use as element content or an attribute value.

    Characters XML cannot carry at all are replaced with U+FFFD.
    """
    return _INVALID_XML_CHARS.sub("\ufffd", text).translate(_ESCAPES)


def wrap_params(fragment: str) -> str:
    return f"<params>{fragment}</params>"


def build_method_call(service: str, method: str, params: str = "", trace: Optional[str] = None) -> str:
    """Build the request body for one call. The <params> block is omitted when params is empty."""
    opening = f'<methodCall service="{xml_escape(service)}" method="{xml_escape(method)}"'
    if trace:
        opening += f' trace="{xml_escape(trace)}"'
    opening += ">"
    if not params:
        return opening + "</methodCall>"
    return opening + wrap_params(params) + "</methodCall>"
