from .data import (  # noqa: F401
    three_path,
    four_chain,
    disconnected_pair,
    ring_system,
    medium_system,
    large_system,
)
from .database import default_database  # noqa: F401


def pytest_collection_modifyitems(session, config, items):
    # Run all linting-tests *after* the functional tests
    items[:] = sorted(items, key=lambda i: "tests/linting" in i.nodeid)
