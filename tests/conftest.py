import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

discovery_registry = importlib.import_module("stylist.discovery.registry")


@pytest.fixture(autouse=True)
def _no_discovery_env(monkeypatch):
    monkeypatch.delenv(discovery_registry.ENV_VAR, raising=False)
