import json
import sys
from pathlib import Path

import pytest

# Add the repository root to sys.path so we can import vedicsvara
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from vedicsvara.aggregator import ProsodyEngine  # noqa: E402
from vedicsvara.config import EngineConfig  # noqa: E402


# Common test fixtures
@pytest.fixture
def config():
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def engine(config):
    """Engine with the default stage pipeline."""
    return ProsodyEngine(config)


@pytest.fixture
def far_vocative():
    """Context for a distant vocative address."""
    return {"case": "vocative", "distanceCategory": "far"}


@pytest.fixture
def config_file(tmp_path: Path):
    """Write a JSON config overlay and return its path."""
    def _write(data) -> Path:
        path = tmp_path / "vedicsvara.json"
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write
