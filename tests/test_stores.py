import pytest

from phased_config import int_property, string_property
from phased_config.exceptions import StoreInitError, StoreWriteError
from phased_config.stores import (
    EnvironmentStore,
    FileLocation,
    MemoryStore,
    PropertiesFileStore,
    PropertyStore,
    WritablePropertiesFileStore,
    WritablePropertyStore,
    format_properties,
    parse_properties,
)
from phased_config.stores.env import env_key

HOST = string_property("db.host")
PORT = int_property("db.port")


def test_memory_store_get_put_and_snapshot():
    store = MemoryStore({"db.host": "a"})
    store.init()
    assert store.initialized is True
    assert store.get(HOST) == "a"
    assert store.get(PORT) is None
    store.put(PORT, "5432")
    assert store.get(PORT) == "5432"
    snap = store.snapshot()
    assert snap == {"db.host": "a", "db.port": "5432"}
    with pytest.raises(TypeError):
        snap["x"] = "y"  # type: ignore[index]


def test_capability_protocols():
    assert isinstance(MemoryStore(), WritablePropertyStore)
    assert isinstance(EnvironmentStore(), PropertyStore)
    assert not isinstance(EnvironmentStore(), WritablePropertyStore)
    assert not isinstance(PropertiesFileStore("x.properties"), WritablePropertyStore)
    assert isinstance(WritablePropertiesFileStore("x.properties"), WritablePropertyStore)

    class OnlyGet:
        def get(self, prop):
            return None

    assert not isinstance(OnlyGet(), PropertyStore)


def test_parse_properties_formats_and_comments():
    text = "# comment\n! bang comment\n; semi\ndb.host = example.org\ndb.port: 5432\nCase.Key=Value\n"
    assert parse_properties(text) == {
        "db.host": "example.org",
        "db.port": "5432",
        "Case.Key": "Value",
    }


def test_parse_properties_duplicate_key_is_init_error():
    with pytest.raises(StoreInitError):
        parse_properties("a = 1\na = 2\n")


def test_format_properties_sorted():
    assert format_properties({"b": "2", "a": "1"}) == "a = 1\nb = 2\n"


def test_local_file_store(tmp_path):
    path = tmp_path / "app.properties"
    path.write_text("db.host = filehost\n", encoding="utf-8")
    store = PropertiesFileStore(str(path))
    assert store.get(HOST) is None  # not initialized yet
    store.init()
    assert store.location_type is FileLocation.LOCAL
    assert store.get(HOST) == "filehost"
    assert store.get(PORT) is None


def test_local_file_store_missing_file(tmp_path):
    store = PropertiesFileStore(tmp_path / "missing.properties")
    with pytest.raises(StoreInitError):
        store.init()


def test_resource_store_requires_tuple_location():
    with pytest.raises(ValueError):
        PropertiesFileStore("pkg/file.properties", FileLocation.RESOURCE)


def test_resource_store_reads_packaged_file(tmp_path, monkeypatch):
    pkg = tmp_path / "phased_cfg_store_fixture"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("", encoding="utf-8")
    (pkg / "app.properties").write_text("db.port = 6543\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    store = PropertiesFileStore(("phased_cfg_store_fixture", "app.properties"), FileLocation.RESOURCE)
    store.init()
    assert store.get(PORT) == "6543"


def test_resource_store_unknown_package():
    store = PropertiesFileStore(("no_such_pkg_for_phased_config", "x.properties"), FileLocation.RESOURCE)
    with pytest.raises(StoreInitError):
        store.init()


def test_writable_file_store_creates_and_rewrites(tmp_path):
    path = tmp_path / "out.properties"
    store = WritablePropertiesFileStore(path)
    store.init()
    assert store.get(HOST) is None
    store.put(HOST, "written")
    assert store.get(HOST) == "written"
    assert path.read_text(encoding="utf-8") == "db.host = written\n"

    reread = PropertiesFileStore(path)
    reread.init()
    assert reread.get(HOST) == "written"


def test_writable_file_store_errors(tmp_path):
    store = WritablePropertiesFileStore(tmp_path / "out.properties")
    with pytest.raises(StoreWriteError):
        store.put(HOST, "before-init")
    store.init()
    with pytest.raises(StoreWriteError):
        store.put(HOST, "two\nlines")

    blocked = WritablePropertiesFileStore(tmp_path / "no_dir" / "out.properties")
    blocked.init()
    with pytest.raises(StoreWriteError):
        blocked.put(HOST, "x")
    assert blocked.get(HOST) is None


def test_env_key():
    assert env_key("APP_", "db.host-name") == "APP_DB_HOST_NAME"
    assert env_key("", "port") == "PORT"


def test_environment_store_captures_at_init():
    environ = {"APP_DB_HOST": "envhost", "OTHER": "x"}
    store = EnvironmentStore("APP_", environ=environ)
    store.init()
    environ["APP_DB_PORT"] = "1"
    assert store.get(HOST) == "envhost"
    assert store.get(PORT) is None


def test_environment_store_uses_process_env(monkeypatch):
    monkeypatch.setenv("PHASEDTEST_DB_PORT", "7000")
    store = EnvironmentStore("PHASEDTEST_")
    store.init()
    assert store.get(PORT) == "7000"


def test_parse_properties_ignores_leading_whitespace():
    assert parse_properties("a = 1\n  b = 2\n\tc: 3\n") == {"a": "1", "b": "2", "c": "3"}


def test_parse_properties_rejects_section_headers():
    with pytest.raises(StoreInitError):
        parse_properties("a = 1\n[notes]\nb = 2\n")
    with pytest.raises(StoreInitError):
        parse_properties("  [notes]\n")


def test_local_file_store_undecodable_file(tmp_path):
    path = tmp_path / "latin.properties"
    path.write_bytes(b"a = \xff\xfe\n")
    with pytest.raises(StoreInitError):
        PropertiesFileStore(path).init()


@pytest.mark.parametrize("name", ["jdbc:url", "a=b", "#hidden", "!hidden", "[x]", " padded"])
def test_writable_file_store_rejects_unreadable_keys(tmp_path, name):
    path = tmp_path / "out.properties"
    store = WritablePropertiesFileStore(path)
    store.init()
    with pytest.raises(StoreWriteError):
        store.put(string_property(name), "x")
    assert not path.exists()


def test_writable_file_store_rejects_padded_values(tmp_path):
    store = WritablePropertiesFileStore(tmp_path / "out.properties")
    store.init()
    with pytest.raises(StoreWriteError):
        store.put(HOST, " leading")


def test_writable_file_store_values_survive_reload(tmp_path):
    path = tmp_path / "out.properties"
    store = WritablePropertiesFileStore(path)
    store.init()
    url = string_property("jdbc.url")
    store.put(url, "jdbc:postgresql://host:1234/db?x=1")
    store.put(HOST, "h")

    reread = PropertiesFileStore(path)
    reread.init()
    assert reread.get(url) == "jdbc:postgresql://host:1234/db?x=1"
    assert reread.get(HOST) == "h"
