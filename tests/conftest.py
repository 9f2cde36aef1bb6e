import pytest


@pytest.fixture(autouse=True)
def clean_factual_env(monkeypatch):
    """Keep FACTUAL_* variables from the developer's shell out of the tests."""
    for name in ("FACTUAL_BASE_URL", "FACTUAL_TIMEOUT", "FACTUAL_USER_AGENT", "FACTUAL_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)
