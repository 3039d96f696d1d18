"""
Shared fixtures: a temporary unit file and fakes for every external command.
"""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import pytest

import v2ray_setup


UNIT_FILE = """\
[Unit]
Description=V2Ray Service
After=network.target nss-lookup.target

[Service]
User=nobody
ExecStart=/usr/bin/v2ray run -config /etc/v2ray/config.json
Restart=on-failure

[Install]
WantedBy=multi-user.target
"""


class FakeRunner:
    """Records commands passed to run_command / stream_command.

    ``returncodes`` maps a command prefix (tuple) to the exit status to report.
    """

    def __init__(self, returncodes: Optional[Dict[tuple, int]] = None) -> None:
        self.calls: List[List[str]] = []
        self.returncodes = returncodes or {}

    def _returncode(self, cmd: List[str]) -> int:
        for prefix, code in self.returncodes.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                return code
        return 0

    def run(self, cmd, check=True, capture_output=True, timeout=None):
        self.calls.append(list(cmd))
        code = self._returncode(cmd)
        if check and code != 0:
            raise v2ray_setup.ExecutionError(" ".join(cmd), code)
        return subprocess.CompletedProcess(cmd, code, "", "")

    def stream(self, cmd, check=True):
        self.calls.append(list(cmd))
        code = self._returncode(cmd)
        if check and code != 0:
            raise v2ray_setup.ExecutionError(" ".join(cmd), code)
        return code


@pytest.fixture
def unit_file(tmp_path: Path) -> Path:
    path = tmp_path / "v2ray.service"
    path.write_text(UNIT_FILE)
    return path


@pytest.fixture
def config(tmp_path: Path, unit_file: Path) -> v2ray_setup.AppConfig:
    cfg = v2ray_setup.AppConfig(
        SERVICE_FILE=str(unit_file),
        LOG_FILE=str(tmp_path / "setup.log"),
    )
    v2ray_setup.setup_logging(cfg.LOG_FILE)
    return cfg


@pytest.fixture
def runner(monkeypatch) -> FakeRunner:
    fake = FakeRunner()
    monkeypatch.setattr(v2ray_setup, "run_command", fake.run)
    monkeypatch.setattr(v2ray_setup, "stream_command", fake.stream)
    return fake


@pytest.fixture
def as_root(monkeypatch):
    monkeypatch.setattr(v2ray_setup.os, "geteuid", lambda: 0)


@pytest.fixture
def v2ray_installed(monkeypatch):
    monkeypatch.setattr(v2ray_setup, "command_exists", lambda cmd: True)
