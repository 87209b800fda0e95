"""Keep every test away from the user's real config and registry."""

import pytest

from arbor.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in ("ARBOR_STORE_PATH", "ARBOR_STORE_FORMAT", "ARBOR_PRETTY", "ARBOR_INDENT"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()
