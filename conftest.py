import pytest

from database import open_database
import register_components  # Import to trigger block registration


@pytest.fixture
def db(tmp_path):
    """Fresh page store with the schema applied."""
    database = open_database(str(tmp_path / "docs.db"))
    yield database
    database.close()
