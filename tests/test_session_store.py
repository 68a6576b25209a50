from userclient.storage.session_store import (
    ACTIVE_USER_ID_KEY,
    FileSessionStorage,
    InMemorySessionStorage,
)


def test_in_memory_storage_roundtrip():
    storage = InMemorySessionStorage()

    assert storage.get(ACTIVE_USER_ID_KEY) is None

    storage.set(ACTIVE_USER_ID_KEY, "42")
    assert storage.get(ACTIVE_USER_ID_KEY) == "42"

    storage.set(ACTIVE_USER_ID_KEY, "43")
    assert storage.get(ACTIVE_USER_ID_KEY) == "43"

    storage.remove(ACTIVE_USER_ID_KEY)
    assert storage.get(ACTIVE_USER_ID_KEY) is None


def test_in_memory_remove_missing_key_is_noop():
    storage = InMemorySessionStorage({"other": "x"})

    storage.remove(ACTIVE_USER_ID_KEY)

    assert storage.get("other") == "x"


def test_file_storage_survives_new_instance(tmp_path):
    path = tmp_path / "state" / "session.json"

    FileSessionStorage(path).set(ACTIVE_USER_ID_KEY, "42")

    assert path.exists()
    assert FileSessionStorage(path).get(ACTIVE_USER_ID_KEY) == "42"


def test_file_storage_remove(tmp_path):
    path = tmp_path / "session.json"
    storage = FileSessionStorage(path)
    storage.set(ACTIVE_USER_ID_KEY, "42")
    storage.set("theme", "dark")

    storage.remove(ACTIVE_USER_ID_KEY)

    assert storage.get(ACTIVE_USER_ID_KEY) is None
    assert FileSessionStorage(path).get("theme") == "dark"


def test_file_storage_missing_file_reads_empty(tmp_path):
    storage = FileSessionStorage(tmp_path / "nope.json")

    assert storage.get(ACTIVE_USER_ID_KEY) is None
    storage.remove(ACTIVE_USER_ID_KEY)
    assert not (tmp_path / "nope.json").exists()


def test_file_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    storage = FileSessionStorage(path)

    assert storage.get(ACTIVE_USER_ID_KEY) is None

    storage.set(ACTIVE_USER_ID_KEY, "7")
    assert storage.get(ACTIVE_USER_ID_KEY) == "7"


def test_file_storage_ignores_non_object_json(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert FileSessionStorage(path).get(ACTIVE_USER_ID_KEY) is None


def test_file_storage_leaves_no_temp_files(tmp_path):
    path = tmp_path / "session.json"
    storage = FileSessionStorage(path)

    storage.set(ACTIVE_USER_ID_KEY, "1")
    storage.set(ACTIVE_USER_ID_KEY, "2")
    storage.remove(ACTIVE_USER_ID_KEY)

    assert [p.name for p in tmp_path.iterdir()] == ["session.json"]


def test_file_storage_ignores_stale_temp_file(tmp_path):
    path = tmp_path / "session.json"
    # Leftover from a writer using the old fixed temp name
    (tmp_path / "session.json.tmp").mkdir()

    FileSessionStorage(path).set(ACTIVE_USER_ID_KEY, "42")

    assert FileSessionStorage(path).get(ACTIVE_USER_ID_KEY) == "42"
