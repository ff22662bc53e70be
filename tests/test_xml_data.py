from dataclasses import dataclass, field

import pytest

from ModListBackup.Handlers.snapshot import SNAPSHOT_ROOT_TAG, Snapshot
from ModListBackup.Utils.xml_data import (
    XmlDataError,
    from_xml_bytes,
    item_from_xml_file,
    save_data_object,
    to_xml_bytes,
)


@dataclass
class _Record:
    name: str
    count: int = 0
    enabled: bool = False
    tags: list[str] = field(default_factory=list)


def test_snapshot_uses_scribe_tags():
    data = to_xml_bytes(Snapshot(3901, ["a", "b"]), SNAPSHOT_ROOT_TAG).decode("utf-8")
    assert "<ModsConfigData>" in data
    assert "<buildNumber>3901</buildNumber>" in data
    assert "<li>a</li>" in data and "<li>b</li>" in data
    assert data.index("<li>a</li>") < data.index("<li>b</li>")


def test_missing_elements_keep_defaults():
    rec = from_xml_bytes(_Record, "<_Record><name>x</name></_Record>")
    assert rec == _Record(name="x")


def test_missing_required_element_raises():
    with pytest.raises(XmlDataError):
        from_xml_bytes(_Record, "<_Record><count>1</count></_Record>")


def test_scalar_types_parse():
    rec = from_xml_bytes(
        _Record,
        "<_Record><name> y </name><count> 7 </count><enabled>True</enabled>"
        "<tags><li>t1</li></tags></_Record>",
    )
    assert rec == _Record(name=" y ", count=7, enabled=True, tags=["t1"])


def test_bad_int_raises():
    with pytest.raises(XmlDataError):
        from_xml_bytes(_Record, "<_Record><name>x</name><count>many</count></_Record>")


def test_wrong_root_raises():
    with pytest.raises(XmlDataError):
        from_xml_bytes(Snapshot, "<Other/>", SNAPSHOT_ROOT_TAG)


def test_to_xml_rejects_non_dataclass():
    with pytest.raises(TypeError):
        to_xml_bytes({"name": "x"})


def test_file_helpers(tmp_path):
    path = tmp_path / "sub" / "rec.xml"
    save_data_object(_Record("z", 2, True, ["q"]), path)
    assert item_from_xml_file(_Record, path) == _Record("z", 2, True, ["q"])

    with pytest.raises(FileNotFoundError):
        item_from_xml_file(_Record, tmp_path / "missing.xml")


def test_unsupported_field_type_raises_on_read(tmp_path):
    @dataclass
    class _Bad:
        thing: object = None

    path = tmp_path / "bad.xml"
    save_data_object(_Bad(), path)
    with pytest.raises(XmlDataError):
        item_from_xml_file(_Bad, path)


def test_string_values_keep_surrounding_whitespace(tmp_path):
    path = tmp_path / "1.xml"
    snap = Snapshot(3901, [" padded.mod ", "plain.mod", ""])
    save_data_object(snap, path, SNAPSHOT_ROOT_TAG)
    assert item_from_xml_file(Snapshot, path, SNAPSHOT_ROOT_TAG) == snap
