import pytest

from ModListBackup.Handlers.slot_store import (
    CorruptOrMissingSlot,
    IOFailure,
    SlotNotFound,
)
from ModListBackup.Handlers.snapshot import Snapshot


def test_slot_path_is_index_plus_extension(store, tmp_path):
    assert store.slot_path(1) == tmp_path / "Backups" / "1.xml"
    assert store.slot_path(12).name == "12.xml"


def test_slot_path_sync_mode_adds_suffix(store, settings):
    settings.sync_to_steam = True
    assert store.slot_path(3).name == "3.xml.rws"
    settings.sync_to_steam = False
    assert store.slot_path(3).name == "3.xml"


def test_slot_path_rejects_non_positive_index(store):
    with pytest.raises(ValueError):
        store.slot_path(0)


def test_write_then_read_preserves_build_and_order(store):
    snap = Snapshot(build_number=3901, active_mods=["z.last", "a.first", "ludeon.rimworld"])
    assert store.write_snapshot(snap, 4).ok

    result = store.read_slot(4)
    assert result.ok
    assert result.value.build_number == 3901
    assert result.value.active_mods == ("z.last", "a.first", "ludeon.rimworld")


def test_empty_mod_list_round_trips(store):
    store.write_snapshot(Snapshot(build_number=-1, active_mods=[]), 1)
    assert store.read_slot(1).value == Snapshot()


def test_exists_lifecycle(store):
    assert not store.slot_exists(2)
    store.write_snapshot(Snapshot(1, ["A"]), 2)
    assert store.slot_exists(2)
    assert store.delete_slot(2).ok
    assert not store.slot_exists(2)


def test_write_overwrites_existing(store):
    store.write_snapshot(Snapshot(1, ["X"]), 1)
    store.write_snapshot(Snapshot(2, ["Y", "Z"]), 1)
    assert store.read_slot(1).value == Snapshot(2, ["Y", "Z"])


def test_read_missing_slot_reports_not_found(store):
    result = store.read_slot(7)
    assert not result.ok
    assert isinstance(result.error, SlotNotFound)
    assert isinstance(result.error, CorruptOrMissingSlot)
    assert result.error.slot == 7
    with pytest.raises(SlotNotFound):
        result.unwrap()


def test_read_malformed_slot_reports_corrupt(store):
    path = store.slot_path(3)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<ModsConfigData><activeMods><li>A</li>", encoding="utf-8")

    result = store.read_slot(3)
    assert isinstance(result.error, CorruptOrMissingSlot)
    assert not isinstance(result.error, SlotNotFound)


def test_read_wrong_root_reports_corrupt(store):
    path = store.slot_path(3)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<Something><buildNumber>1</buildNumber></Something>", encoding="utf-8")
    assert isinstance(store.read_slot(3).error, CorruptOrMissingSlot)


def test_delete_missing_slot_is_reported_not_raised(store):
    result = store.delete_slot(5)
    assert isinstance(result.error, SlotNotFound)


def test_list_slots(store):
    store.write_snapshot(Snapshot(1, ["A"]), 1)
    store.write_snapshot(Snapshot(1, ["A"]), 3)
    assert store.list_slots(5) == [1, 3]


def test_sync_mode_sees_different_files(store, settings):
    store.write_snapshot(Snapshot(1, ["A"]), 1)
    settings.sync_to_steam = True
    assert not store.slot_exists(1)


def test_backup_and_restore_host_config(store, host_config):
    original = host_config.read_bytes()
    assert store.backup_host_config().ok
    assert store.host_config_backup_path.read_bytes() == original

    host_config.write_text("<ModsConfigData/>", encoding="utf-8")
    assert store.restore_host_config().ok
    assert host_config.read_bytes() == original


def test_restore_host_config_without_backup_fails(store):
    result = store.restore_host_config()
    assert isinstance(result.error, IOFailure)
