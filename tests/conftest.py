import pytest


@pytest.fixture(autouse=True)
def clean_bf_env(monkeypatch):
    for name in ("BF_TAPE_LENGTH", "BF_OPTIMIZE", "BF_MAX_ITERATIONS", "BF_EOF", "BF_STEP_LIMIT"):
        monkeypatch.delenv(name, raising=False)
