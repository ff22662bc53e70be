"""
xml_data.py
Save and load plain dataclass records as XML files.

Layout written (RimWorld's own Scribe-style layout, so slot files stay
readable by hand):

  <?xml version='1.0' encoding='utf-8'?>
  <ModsConfigData>
    <buildNumber>3901</buildNumber>
    <activeMods>
      <li>ludeon.rimworld</li>
      <li>brrainz.harmony</li>
    </activeMods>
  </ModsConfigData>

The root tag is the class name unless a root_name is passed. A field's tag
is its name, or field(metadata={"xml": "tagName"}) when the XML spelling
differs. Supported field types: str, int, float, bool, and list/tuple of
those (one <li> per item). Missing elements keep the field's default.
str values are read back verbatim; other scalars are parsed after strip().
"""

from __future__ import annotations

import typing
import xml.etree.ElementTree as ET
from dataclasses import MISSING, fields, is_dataclass
from pathlib import Path
from typing import Any, TypeVar

T = TypeVar("T")

_LIST_ITEM_TAG = "li"
_SCALARS = (str, int, float, bool)


class XmlDataError(Exception):
    """Raised when an XML file cannot be read or does not match the record."""


def _tag_for(f) -> str:
    return f.metadata.get("xml", f.name)


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def _parse_scalar(text: str | None, typ: type, tag: str) -> Any:
    if typ is str:
        return text or ""
    text = (text or "").strip()
    if typ is bool:
        if text.lower() in ("true", "1"):
            return True
        if text.lower() in ("false", "0", ""):
            return False
        raise XmlDataError(f"<{tag}>: not a boolean: {text!r}")
    try:
        return typ(text)
    except ValueError as exc:
        raise XmlDataError(f"<{tag}>: expected {typ.__name__}, got {text!r}") from exc


def _sequence_item_type(hint: Any) -> tuple[type, type] | None:
    """For list[X] / tuple[X, ...] return (container, X); otherwise None."""
    origin = typing.get_origin(hint)
    if origin not in (list, tuple):
        return None
    args = typing.get_args(hint)
    item = args[0] if args else str
    if item not in _SCALARS:
        raise XmlDataError(f"Unsupported sequence item type: {item!r}")
    return origin, item


def to_xml_bytes(obj: Any, root_name: str | None = None) -> bytes:
    """Serialize a dataclass instance to UTF-8 XML bytes."""
    if not is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"Expected a dataclass instance, got {type(obj).__name__}")
    root = ET.Element(root_name or type(obj).__name__)
    for f in fields(obj):
        value = getattr(obj, f.name)
        elem = ET.SubElement(root, _tag_for(f))
        if isinstance(value, (list, tuple)):
            for item in value:
                ET.SubElement(elem, _LIST_ITEM_TAG).text = _format_scalar(item)
        else:
            elem.text = _format_scalar(value)
    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True) + b"\n"


def from_xml_bytes(cls: type[T], data: bytes | str, root_name: str | None = None) -> T:
    """Build an instance of dataclass *cls* from XML text."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise XmlDataError(f"Malformed XML: {exc}") from exc
    expected = root_name or cls.__name__
    if root.tag != expected:
        raise XmlDataError(f"Expected root <{expected}>, found <{root.tag}>")

    hints = typing.get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        tag = _tag_for(f)
        elem = root.find(tag)
        if elem is None:
            if f.default is MISSING and f.default_factory is MISSING:
                raise XmlDataError(f"Missing required element <{tag}>")
            continue
        hint = hints[f.name]
        seq = _sequence_item_type(hint)
        if seq is not None:
            container, item_type = seq
            items = [_parse_scalar(li.text, item_type, tag) for li in elem.findall(_LIST_ITEM_TAG)]
            kwargs[f.name] = container(items)
        elif hint in _SCALARS:
            kwargs[f.name] = _parse_scalar(elem.text, hint, tag)
        else:
            raise XmlDataError(f"Unsupported field type for <{tag}>: {hint!r}")
    return cls(**kwargs)


def save_data_object(obj: Any, path: Path, root_name: str | None = None) -> None:
    """Write *obj* to *path*, overwriting it. Parent directories are created.

    The XML is fully built before the file is opened, so a serialization
    error never leaves a truncated file behind.
    """
    data = to_xml_bytes(obj, root_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def item_from_xml_file(cls: type[T], path: Path, root_name: str | None = None) -> T:
    """Read *path* and return an instance of *cls*.

    Raises FileNotFoundError when the file is absent and XmlDataError when it
    is malformed or does not match *cls*.
    """
    data = path.read_bytes()
    try:
        return from_xml_bytes(cls, data, root_name)
    except XmlDataError as exc:
        raise XmlDataError(f"{path}: {exc}") from exc
