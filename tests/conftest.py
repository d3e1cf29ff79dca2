import pytest

from phased_config import MemoryStore, PropertyRegistry, int_property, string_property


@pytest.fixture(autouse=True)
def no_default_properties_file(monkeypatch):
    monkeypatch.delenv("PHASED_CONFIG_FILE", raising=False)


@pytest.fixture
def registry():
    reg = PropertyRegistry(bootstrap=None)
    yield reg
    reg.reset()


@pytest.fixture
def max_connections():
    return int_property("maxConnections", 10, bounds=(1, 1000), description="Connection pool size")


@pytest.fixture
def db_host():
    return string_property("dbHost", description="Database host")


@pytest.fixture
def ready(registry, max_connections, db_host):
    """Registry in the use phase backed by a single writable memory store."""
    registry.register(max_connections)
    registry.register(db_host)
    registry.configure()
    registry.add_store(MemoryStore({"dbHost": "db.local"}, label="top"))
    registry.use()
    return registry
