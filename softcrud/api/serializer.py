"""Entity serialization — pydantic schema dump rendered as JSON or XML."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Sequence
from typing import Any
from xml.etree import ElementTree

from pydantic import BaseModel
from starlette.responses import Response


class UnsupportedFormatError(ValueError):
    """Raised for a serialization format with no registered encoder."""


def _encode_json(payload: Any) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode()


# Characters outside the XML 1.0 Char production (C0 controls other than
# tab/LF/CR, lone surrogates, U+FFFE and U+FFFF).
_XML_ILLEGAL = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _xml_text(value: str) -> str:
    return _XML_ILLEGAL.sub("\ufffd", value)


def _xml_value(parent: ElementTree.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, val in value.items():
            _xml_value(ElementTree.SubElement(parent, str(key)), val)
    elif isinstance(value, list):
        for val in value:
            _xml_value(ElementTree.SubElement(parent, "item"), val)
    elif isinstance(value, bool):
        parent.text = "true" if value else "false"
    elif value is not None:
        parent.text = _xml_text(str(value))


def _encode_xml(payload: Any) -> bytes:
    root = ElementTree.Element("response")
    if isinstance(payload, list):
        _xml_value(ElementTree.SubElement(root, "items"), payload)
    else:
        _xml_value(ElementTree.SubElement(root, "item"), payload)
    return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True)


# format -> (media type, encoder)
FORMATS: dict[str, tuple[str, Callable[[Any], bytes]]] = {
    "json": ("application/json", _encode_json),
    "xml": ("application/xml", _encode_xml),
}


def check_format(fmt: str) -> str:
    """Return *fmt* if an encoder is registered for it."""
    if fmt not in FORMATS:
        raise UnsupportedFormatError(
            f"unsupported serialization format {fmt!r} (expected one of: {', '.join(FORMATS)})"
        )
    return fmt


def to_payload(data: Any, schema: type[BaseModel]) -> Any:
    """Dump one entity or a sequence of entities through *schema*."""
    if isinstance(data, Sequence):
        return [schema.model_validate(item).model_dump(mode="json") for item in data]
    return schema.model_validate(data).model_dump(mode="json")


def serialize(
    data: Any,
    fmt: str,
    schema: type[BaseModel],
    status_code: int = 200,
) -> Response:
    """Render *data* in *fmt* and wrap it in a response."""
    media_type, encoder = FORMATS[check_format(fmt)]
    return Response(
        content=encoder(to_payload(data, schema)),
        status_code=status_code,
        media_type=media_type,
    )
