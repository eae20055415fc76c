import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("SCHEDGRAPH_LOG_LEVEL", "SCHEDGRAPH_DATA_DIR", "SCHEDGRAPH_SEED", "SCHEDGRAPH_DEFAULT_WEIGHT"):
        monkeypatch.delenv(name, raising=False)
