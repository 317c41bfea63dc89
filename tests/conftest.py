import importlib.util
import pathlib

import pytest

from felma import config, memory

ROOT = pathlib.Path(__file__).resolve().parent.parent


def _load_service(name):
    """Import <name>/app.py under a unique module name."""
    spec = importlib.util.spec_from_file_location(f"{name}_service", ROOT / name / "app.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def memory_store(monkeypatch):
    monkeypatch.setattr(config, "SUPABASE_URL", "")
    monkeypatch.setattr(config, "SUPABASE_SERVICE_KEY", None)
    memory.reset()
    yield memory
    memory.reset()


@pytest.fixture(scope="session")
def items_service():
    return _load_service("items")


@pytest.fixture(scope="session")
def headline_service():
    return _load_service("headline")


@pytest.fixture
def client(items_service):
    items_service.app.config["TESTING"] = True
    return items_service.app.test_client()


@pytest.fixture
def headline_client(headline_service):
    headline_service.app.config["TESTING"] = True
    return headline_service.app.test_client()
