import pytest

import config_loader


@pytest.fixture(autouse=True)
def default_config(tmp_path, monkeypatch):
    """Run every test against built-in defaults, whatever the host has configured."""
    config = config_loader.Config(tmp_path / "missing.ini")
    monkeypatch.setattr(config_loader, "CONFIG", config)
    return config
