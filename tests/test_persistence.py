import tempfile
import threading
from pathlib import Path

import pytest
from filelock import FileLock, Timeout

from driveless.persistence import kv
from driveless.persistence.kv import FileKeyValueStore, InMemoryKeyValueStore


def test_file_store_creates_store_directory(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)

    assert store.store_root.exists()
    assert store.store_root.is_dir()
    assert store.store_root == tmp_path.resolve() / "store"


def test_file_store_writes_and_reads_values(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)

    assert store.get("saved_routes") is None
    assert store.compare_and_set("saved_routes", None, '[{"id": "a"}]') is True

    path = tmp_path / "store" / "saved_routes.json"
    assert path.read_text(encoding="utf-8") == '[{"id": "a"}]'
    assert store.get("saved_routes") == '[{"id": "a"}]'
    assert list((tmp_path / "store").glob("*.tmp")) == []


def test_file_store_rejects_stale_expected_value(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)
    store.compare_and_set("saved_routes", None, "[1]")

    assert store.compare_and_set("saved_routes", None, "[2]") is False
    assert store.compare_and_set("saved_routes", "[0]", "[2]") is False
    assert store.get("saved_routes") == "[1]"

    assert store.compare_and_set("saved_routes", "[1]", "[2]") is True
    assert store.get("saved_routes") == "[2]"


def test_file_store_persists_across_instances(tmp_path: Path) -> None:
    FileKeyValueStore(root=tmp_path).compare_and_set("saved_routes", None, "[]")

    assert FileKeyValueStore(root=tmp_path).get("saved_routes") == "[]"


def test_file_store_delete(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)
    store.compare_and_set("saved_routes", None, "[]")

    store.delete("saved_routes")
    store.delete("saved_routes")

    assert store.get("saved_routes") is None


@pytest.mark.parametrize("key", ["../escape", "a/b", "", "with space"])
def test_file_store_rejects_unsafe_keys(tmp_path: Path, key: str) -> None:
    store = FileKeyValueStore(root=tmp_path)

    with pytest.raises(ValueError):
        store.get(key)


def test_in_memory_store_compare_and_set() -> None:
    store = InMemoryKeyValueStore()

    assert store.compare_and_set("k", None, "v1") is True
    assert store.compare_and_set("k", None, "v2") is False
    assert store.compare_and_set("k", "v1", "v2") is True
    store.delete("k")
    assert store.get("k") is None


def test_file_store_serializes_writers_sharing_a_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    first = FileKeyValueStore(root=tmp_path)
    second = FileKeyValueStore(root=tmp_path)
    entered = threading.Event()
    release = threading.Event()
    real_mkstemp = tempfile.mkstemp

    def paused_mkstemp(*args, **kwargs):
        if threading.current_thread().name == "first-writer":
            entered.set()
            release.wait(5)
        return real_mkstemp(*args, **kwargs)

    monkeypatch.setattr(kv.tempfile, "mkstemp", paused_mkstemp)
    results = {}

    def write(name, store, value):
        results[name] = store.compare_and_set("saved_routes", None, value)

    writer = threading.Thread(target=write, args=("first", first, "A-write"), name="first-writer")
    writer.start()
    assert entered.wait(5)

    contender = threading.Thread(target=write, args=("second", second, "B-write"))
    contender.start()
    contender.join(0.3)
    assert contender.is_alive()

    release.set()
    writer.join(5)
    contender.join(5)

    assert results == {"first": True, "second": False}
    assert second.get("saved_routes") == "A-write"


def test_file_store_lock_timeout_surfaces_as_error(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path, lock_timeout=0.1)
    holder = FileLock(str(tmp_path / "store" / "saved_routes.json.lock"))

    def contend():
        try:
            store.compare_and_set("saved_routes", None, "[]")
        except Timeout:
            outcome.append("timeout")

    outcome = []
    with holder:
        thread = threading.Thread(target=contend)
        thread.start()
        thread.join(5)

    assert outcome == ["timeout"]
    assert store.get("saved_routes") is None
