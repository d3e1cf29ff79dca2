import logging

from phased_config import MemoryStore, PropertyRegistry, int_property

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    registry = PropertyRegistry()
    max_connections = registry.register(int_property("maxConnections", 10, bounds=(1, 1000)))

    registry.configure()
    registry.add_store(MemoryStore())
    registry.use()

    print("Default:", registry.resolve(max_connections))
    registry.assign(max_connections, 25)
    print("Updated:", registry.resolve(max_connections))
