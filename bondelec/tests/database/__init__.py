import pytest

from bondelec.database import ParameterDatabase


@pytest.fixture(scope="session")
def default_database():
    return ParameterDatabase.get_default()
