# python
import logging
import sys

from phased_config import (
    ConfigError,
    EnvironmentStore,
    MemoryStore,
    PropertyRegistry,
    bool_property,
    float_property,
    list_property,
    string_property,
)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    # PHASED_CONFIG_FILE=/etc/app.properties adds a file store on configure()
    registry = PropertyRegistry()
    timeout = registry.register(
        float_property("request.timeout", 5.0, bounds=(0.1, 60.0), description="Seconds")
    )
    hosts = registry.register(list_property("cluster.hosts", min_length=1))
    verify = registry.register(bool_property("tls.verify", True))
    user = registry.register(string_property("db.user", "app"))

    registry.configure()
    registry.add_store(EnvironmentStore("APP_"))
    registry.add_store(MemoryStore({"cluster.hosts": "a.example, b.example"}, label="runtime"))

    try:
        registry.use()
    except ConfigError as exc:
        sys.exit(f"configuration incomplete: {exc}")

    print("Timeout:", registry.resolve(timeout))
    print("Hosts:", registry.resolve(hosts))
    print("Verify TLS:", registry.resolve(verify))
    print("DB user:", registry["db.user"])

    registry.assign(timeout, 10.0)
    print("Timeout now:", registry.resolve(timeout))
