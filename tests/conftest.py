import pytest

from app import app as flask_app
from model_store import ModelStore
from tests.helpers import SCENARIO_ROWS, write_csv


@pytest.fixture
def store(tmp_path):
    return ModelStore(str(tmp_path / "ml_model"))


@pytest.fixture
def scenario_csv(tmp_path):
    return write_csv(tmp_path / "loans.csv", SCENARIO_ROWS)


@pytest.fixture
def client(tmp_path, scenario_csv):
    flask_app.config.update(
        TESTING=True,
        CSV_FILE=str(scenario_csv),
        MODEL_DIR=str(tmp_path / "ml_model"),
    )
    with flask_app.test_client() as client:
        yield client
