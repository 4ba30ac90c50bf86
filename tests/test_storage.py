import json

import pytest

from storage import SettingsStore


def test_missing_file_is_an_empty_store(tmp_path):
    store = SettingsStore(str(tmp_path / "nope.json"))
    assert store.get("fullName") is None
    assert store.get("fullName", "") == ""
    assert "fullName" not in store


def test_set_persists_to_disk(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    store = SettingsStore(str(path))
    store.set("nickname", "Pat")

    assert json.loads(path.read_text(encoding="utf-8")) == {"nickname": "Pat"}
    assert SettingsStore(str(path)).get("nickname") == "Pat"


def test_remove(tmp_path):
    path = str(tmp_path / "settings.json")
    store = SettingsStore(path)
    store.set("a", 1)
    store.set("b", 2)
    store.remove("a")
    store.remove("missing")

    reloaded = SettingsStore(path)
    assert "a" not in reloaded
    assert reloaded.get("b") == 2


def test_no_temporary_files_are_left_behind(tmp_path):
    store = SettingsStore(str(tmp_path / "settings.json"))
    for i in range(5):
        store.set("count", i)
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        SettingsStore(str(path))


def test_non_object_file_raises(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        SettingsStore(str(path))


def refuse_writes(monkeypatch):
    def refuse(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("storage.os.replace", refuse)


def test_failed_set_keeps_memory_and_disk_in_step(tmp_path, monkeypatch):
    path = str(tmp_path / "settings.json")
    store = SettingsStore(path)
    store.set("nickname", "Pat")
    refuse_writes(monkeypatch)

    with pytest.raises(OSError):
        store.set("nickname", "Sam")
    with pytest.raises(OSError):
        store.set("fullName", "Sam Doe")

    assert store.get("nickname") == "Pat"
    assert "fullName" not in store
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]


def test_failed_remove_keeps_the_key(settings, monkeypatch):
    settings.set("nickname", "Pat")
    refuse_writes(monkeypatch)

    with pytest.raises(OSError):
        settings.remove("nickname")
    assert settings.get("nickname") == "Pat"
