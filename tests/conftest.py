"""Pytest configuration and fixtures."""

from pathlib import Path
from unittest.mock import patch

import pytest

from autoupgrade.domain import HandoffEnvelope, UpgradeConfiguration
from autoupgrade.guard import SingleInstanceGuard


class StubCapability:
    """Update capability with a fixed answer that records its calls."""

    def __init__(self, config: UpgradeConfiguration, answer: bool):
        self.config = config
        self.answer = answer
        self.calls = 0

    def detect_new_version(self) -> bool:
        self.calls += 1
        return self.answer


class StubFactory:
    """Capability factory remembering every capability it built."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.built: list[StubCapability] = []

    def __call__(self, config: UpgradeConfiguration) -> StubCapability:
        capability = StubCapability(config, self.answer)
        self.built.append(capability)
        return capability

    @property
    def calls(self) -> int:
        return sum(c.calls for c in self.built)


@pytest.fixture
def lock_dir(tmp_path: Path) -> Path:
    """Private directory for guard lock files."""
    path = tmp_path / "locks"
    path.mkdir()
    return path


@pytest.fixture
def guard(lock_dir: Path):
    """Guard isolated from the real product-wide lock."""
    g = SingleInstanceGuard(lock_dir=lock_dir)
    yield g
    g.release()


@pytest.fixture
def other_guard(lock_dir: Path):
    """A second guard on the same lock, standing in for another process."""
    g = SingleInstanceGuard(lock_dir=lock_dir)
    yield g
    g.release()


@pytest.fixture
def popen():
    """Capture spawned processes instead of starting them."""
    with patch("autoupgrade.updater.process.subprocess.Popen") as mock_popen:
        yield mock_popen


@pytest.fixture
def updater_exe(tmp_path: Path) -> Path:
    """An existing file posing as the updater executable."""
    path = tmp_path / "updater.exe"
    path.write_bytes(b"MZ")
    return path


@pytest.fixture
def managed_exe(tmp_path: Path) -> Path:
    """Managed executable living in its own install folder."""
    install = tmp_path / "app"
    install.mkdir()
    path = install / "app.exe"
    path.write_bytes(b"MZ")
    return path


@pytest.fixture
def envelope(managed_exe: Path) -> HandoffEnvelope:
    """A typical envelope as captured by the managed executable."""
    config = UpgradeConfiguration(
        target_folder=str(managed_exe.parent),
        current_version="1.0.0",
        feed_url="https://example.com/releases/latest",
    )
    return HandoffEnvelope.capture(
        config,
        managed_executable=str(managed_exe),
        arguments=["--profile", "My Documents", "-v"],
    )
