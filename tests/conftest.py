from __future__ import annotations

import pytest

from polyoffset.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolated_runtime_config(tmp_path, monkeypatch):
    # 利用者の ~/.config や CWD の config.yaml をテストに持ち込まない。
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    set_config_path(None)
    yield
    set_config_path(None)
