#!/usr/bin/env python3

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "tools"))

from notekeep.config import Settings
from notekeep.server import main, run_server


@pytest.mark.asyncio
async def test_test_mode_validates_and_exits(tmp_path, capsys):
    settings = Settings(data_dir=tmp_path, jwt_secret="test-secret-0123456789abcdef0123456789")
    await run_server(settings, test_mode=True)

    out = capsys.readouterr().out
    assert "Config valid" in out
    assert str(tmp_path / "users.json") in out
    assert not (tmp_path / "users.json").exists()


def test_bad_config_exits_with_message(tmp_path, monkeypatch, caplog):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"auth": None}))
    monkeypatch.setattr(sys, "argv", ["notekeep-server", "--config", str(config_path)])

    with pytest.raises(SystemExit) as exit_info:
        main()

    assert exit_info.value.code == 1
    assert "Configuration error" in caplog.text
