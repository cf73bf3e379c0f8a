"""Tests for the key-value stores."""

import pytest

from host import FileStore, MemoryStore, StorageNotification


class TestMemoryStore:
    """Tests for MemoryStore contexts sharing a hub."""

    def test_contexts_share_data(self, hub):
        """A value written in one context is visible in another."""
        a, b = hub.context(), hub.context()
        a.set_item("k", "v")
        assert b.get_item("k") == "v"

    def test_other_contexts_notified(self, hub, recorder):
        """Only contexts other than the writer hear about a write."""
        writer = hub.context()
        own = recorder(writer)
        other = recorder(hub.context())

        writer.set_item("k", "v")

        assert own.notifications == []
        assert other.notifications == [StorageNotification("k", None, "v")]

    def test_identical_write_is_silent(self, hub, recorder):
        """Writing the value already stored notifies no one."""
        writer = hub.context()
        writer.set_item("k", "v")
        other = recorder(hub.context())

        writer.set_item("k", "v")

        assert other.notifications == []

    def test_remove(self, hub, recorder):
        """Removal is reported with new_value None; removing a missing key is a no-op."""
        writer = hub.context()
        writer.set_item("k", "v")
        other = recorder(hub.context())

        writer.remove_item("k")
        writer.remove_item("k")

        assert writer.get_item("k") is None
        assert other.notifications == [StorageNotification("k", "v", None)]

    def test_standalone_store(self):
        """A store without a hub gets a private one."""
        a, b = MemoryStore(), MemoryStore()
        a.set_item("k", "v")
        assert b.get_item("k") is None


class TestFileStore:
    """Tests for FileStore."""

    def test_get_and_set(self, tmp_path):
        """Values are kept as one file per key."""
        store = FileStore(tmp_path / "state")
        assert store.get_item("themesync") is None

        store.set_item("themesync", '{"mode":"dark"}')

        assert store.get_item("themesync") == '{"mode":"dark"}'
        assert (tmp_path / "state" / "themesync").read_text() == '{"mode":"dark"}'

    def test_default_directory_follows_xdg(self, tmp_path, monkeypatch):
        """Without a directory, the XDG state dir is used."""
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
        store = FileStore()
        assert store.directory == tmp_path / "themesync" / "store"

    def test_log_file_is_not_an_entry(self, tmp_path, monkeypatch):
        """The app log lives outside the store directory and is never polled."""
        from app import _get_log_path

        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
        store = FileStore()
        store.set_item("themesync", "{}")

        log_path = _get_log_path()
        log_path.write_text("DEBUG something\n")

        assert log_path.parent != store.directory
        assert store.poll() == []

    def test_undecodable_entry_reads_as_absent(self, tmp_path):
        """Bytes that aren't UTF-8 read as a missing entry instead of raising."""
        (tmp_path / "themesync").write_bytes(b"\xff\xfe{bad")
        store = FileStore(tmp_path)
        assert store.get_item("themesync") is None
        assert store.poll() == []

    def test_entry_becoming_undecodable_is_a_removal(self, tmp_path):
        """An entry overwritten with garbage bytes is reported as removed."""
        store = FileStore(tmp_path)
        store.set_item("themesync", '{"mode":"dark"}')

        (tmp_path / "themesync").write_bytes(b"\xff\xfe")

        assert store.poll() == [StorageNotification("themesync", '{"mode":"dark"}', None)]

    def test_poll_reports_external_edits(self, tmp_path, recorder):
        """Edits made behind the store's back are delivered by poll()."""
        store = FileStore(tmp_path)
        store.set_item("themesync", "old")
        watcher = recorder(store)

        (tmp_path / "themesync").write_text("new")
        delivered = store.poll()

        assert delivered == [StorageNotification("themesync", "old", "new")]
        assert watcher.notifications == delivered
        assert store.poll() == []

    def test_own_writes_not_reported(self, tmp_path, recorder):
        """Writes made through the store are not reported by poll()."""
        store = FileStore(tmp_path)
        watcher = recorder(store)

        store.set_item("themesync", "v")
        store.remove_item("theme")

        assert store.poll() == []
        assert watcher.notifications == []

    def test_external_removal(self, tmp_path):
        """A file deleted elsewhere is reported with new_value None."""
        store = FileStore(tmp_path)
        store.set_item("theme", "dark")

        (tmp_path / "theme").unlink()

        assert store.poll() == [StorageNotification("theme", "dark", None)]

    def test_existing_files_are_not_new(self, tmp_path):
        """Files present when the store opens aren't reported as edits."""
        (tmp_path / "theme").write_text("dark")
        store = FileStore(tmp_path)
        assert store.poll() == []
        assert store.get_item("theme") == "dark"

    @pytest.mark.parametrize("key", ["", "a/b", ".hidden"])
    def test_invalid_key(self, tmp_path, key):
        """Keys that aren't plain file names are rejected."""
        store = FileStore(tmp_path)
        with pytest.raises(ValueError, match="Invalid store key"):
            store.set_item(key, "v")
