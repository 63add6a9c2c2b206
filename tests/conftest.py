"""Shared fixtures for the backup scheduler tests."""

import pytest

from src.config.settings import AppContext, BackupSettings


@pytest.fixture
def save_dir(tmp_path):
    d = tmp_path / "saves"
    d.mkdir()
    return d


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "out"
    d.mkdir()
    return d


@pytest.fixture
def context(tmp_path):
    return AppContext(base_dir=tmp_path)


@pytest.fixture
def settings(save_dir, out_dir):
    return BackupSettings(
        save_path=str(save_dir),
        out_path=str(out_dir),
        interval=10,
        process_name="game.exe",
    )
