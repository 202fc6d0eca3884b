"""
Parameter builder — accumulates the XML inside <params> for the next call.

The fragment is flat text. Opened elements are remembered so callers can ask
whether the fragment is balanced, but nothing here enforces it.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Union

from xmlmc.errors import EncodingError, ValidationError
from xmlmc.models.params import ParamAttribute
from xmlmc.transport.envelope import wrap_params, xml_escape

IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9_]*$")

Attributes = Union[Mapping[str, str], Iterable[Union[ParamAttribute, tuple[str, str]]]]


_EMPTY_NAME = {
    "Name": "Name Must contain at least one letter or number",
    "Element": "Element must have at least one letter or number",
}


def _check_name(name: str, kind: str) -> None:
    if not name:
        raise ValidationError(_EMPTY_NAME[kind])
    if not isinstance(name, str) or not IDENTIFIER_RE.fullmatch(name):
        raise ValidationError(f"{kind} invalid only Numbers and letters can be used")


def _clean(value: Any) -> str:
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError("Could not clean the varValue input") from e
    elif not isinstance(value, str):
        value = str(value)
    return xml_escape(value)


def _attribute_pairs(attributes: Attributes) -> list[tuple[str, str]]:
    if isinstance(attributes, Mapping):
        return list(attributes.items())
    pairs = []
    for attr in attributes:
        if isinstance(attr, ParamAttribute):
            pairs.append((attr.name, attr.value))
        else:
            name, value = attr
            pairs.append((name, value))
    return pairs


class ParamBuilder:
    def __init__(self) -> None:
        self._xml = ""
        self._open: list[str] = []
        self._mismatched = False

    @property
    def fragment(self) -> str:
        return self._xml

    def set_param(self, name: str, value: Any) -> None:
        """Append <name>value</name>. The value is XML-escaped."""
        _check_name(name, "Name")
        cleaned = _clean(value)
        self._xml += f"<{name}>{cleaned}</{name}>"

    def set_param_attr(self, name: str, value: Any, attributes: Attributes) -> None:
        """Append <name k="v" ...>value</name>.

        Attributes are written in the order given and their values are NOT
        escaped; quoting them is up to the caller.
        """
        _check_name(name, "Name")
        cleaned = _clean(value)
        attrs = "".join(f' {k}="{v}"' for k, v in _attribute_pairs(attributes))
        self._xml += f"<{name}{attrs}>{cleaned}</{name}>"

    def open_element(self, name: str) -> None:
        _check_name(name, "Element")
        self._xml += f"<{name}>"
        self._open.append(name)

    def close_element(self, name: str) -> None:
        _check_name(name, "Element")
        self._xml += f"</{name}>"
        if self._open and self._open[-1] == name:
            self._open.pop()
        else:
            self._mismatched = True

    def is_balanced(self) -> bool:
        return not self._open and not self._mismatched

    def get_param(self) -> str:
        return wrap_params(self._xml)

    def clear(self) -> None:
        self._xml = ""
        self._open = []
        self._mismatched = False

    def __len__(self) -> int:
        return len(self._xml)
