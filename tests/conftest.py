# Sleeve Test Fixtures
# Pytest fixtures for sleeve tests

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from sleeve.utils.platform import HostPlatform


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SLEEVE_CONFIG", raising=False)
    return home


@pytest.fixture
def linux_host() -> HostPlatform:
    return HostPlatform(host_os="Linux", name="linux", windows=False)


@pytest.fixture
def windows_host() -> HostPlatform:
    return HostPlatform(host_os="Windows", name="windows", windows=True)


@pytest.fixture
def sample_config() -> dict:
    """Create sample configuration dict."""
    return {
        "runner": {
            "interpreter": "/usr/bin/python3",
            "sudo": True,
            "verbose": False,
        },
        "properties": {
            "encoding": "latin-1",
        },
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "sleeve"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path


@pytest.fixture
def properties_file(temp_dir: Path) -> Path:
    """Create a sample properties file."""
    path = temp_dir / "build.properties"
    path.write_text(
        "# Build settings\n"
        "name=core\n"
        "version = 1.2.0\n"
        "! legacy comment\n"
        "description=multi \\\n"
        "    line\n"
        "path=C:\\\\tools\\\\bin\n",
        encoding="utf-8",
    )
    return path
