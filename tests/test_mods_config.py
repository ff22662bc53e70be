import xml.etree.ElementTree as ET

import pytest

from ModListBackup.Utils.mods_config import (
    CORE_MOD_IDENTIFIER,
    ModsConfig,
    ModsConfigError,
    parse_build_number,
)

from conftest import write_mods_config


@pytest.mark.parametrize("version, expected", [
    ("1.4.3901 rev70", 3901),
    ("1.0.2231", 2231),
    ("", -1),
    ("garbage", -1),
])
def test_parse_build_number(version, expected):
    assert parse_build_number(version) == expected


def test_reads_active_mods_in_order(host_config):
    cfg = ModsConfig(host_config)
    assert cfg.active_mods_in_load_order() == ["A", "B"]
    assert cfg.build_number == 3901


def test_legacy_build_number(tmp_path):
    path = tmp_path / "ModsConfig.xml"
    path.write_text(
        "<ModsConfigData><buildNumber>1575</buildNumber>"
        "<activeMods><li>Core</li></activeMods></ModsConfigData>",
        encoding="utf-8",
    )
    assert ModsConfig(path).build_number == 1575


def test_missing_file_is_core_only(tmp_path):
    cfg = ModsConfig(tmp_path / "nope" / "ModsConfig.xml")
    assert cfg.active_mods_in_load_order() == [CORE_MOD_IDENTIFIER]
    assert cfg.build_number == -1


def test_malformed_file_raises(tmp_path):
    path = tmp_path / "ModsConfig.xml"
    path.write_text("<ModsConfigData><activeMods>", encoding="utf-8")
    with pytest.raises(ModsConfigError):
        ModsConfig(path)


def test_set_active_appends_and_removes(host_config):
    cfg = ModsConfig(host_config)
    cfg.set_active("C", True)
    cfg.set_active("a", True)      # already active, different case
    cfg.set_active("B", False)
    assert cfg.active_mods_in_load_order() == ["A", "C"]
    assert cfg.is_active("c")


def test_reset_is_core_only(host_config):
    cfg = ModsConfig(host_config)
    cfg.reset()
    assert cfg.active_mods_in_load_order() == [CORE_MOD_IDENTIFIER]


def test_save_keeps_other_elements(host_config):
    cfg = ModsConfig(host_config)
    cfg.set_active("A", False)
    cfg.set_active("Z", True)
    cfg.save()

    root = ET.parse(host_config).getroot()
    assert [li.text for li in root.find("activeMods")] == ["B", "Z"]
    assert [li.text for li in root.find("knownExpansions")] == ["ludeon.rimworld.royalty"]
    assert root.find("version").text == "1.4.3901 rev70"


def test_changes_stay_in_memory_until_save(host_config):
    cfg = ModsConfig(host_config)
    cfg.set_active("Z", True)
    assert ModsConfig(host_config).active_mods_in_load_order() == ["A", "B"]


def test_load_skips_blank_and_duplicate_entries(tmp_path):
    path = write_mods_config(tmp_path / "ModsConfig.xml", ["A", " ", "a", "B"])
    assert ModsConfig(path).active_mods_in_load_order() == ["A", "B"]
