import os
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def write_rows(tmp_path):
    """Save rows of RGB tuples as a PNG and return its path."""

    def _write(rows, name="image.png"):
        arr = np.array(rows, dtype=np.uint8)
        path = tmp_path / name
        Image.fromarray(arr).save(path)
        return path

    return _write


@pytest.fixture(autouse=True)
def _clear_config_env(monkeypatch):
    """Keep developer environment overrides out of the tests."""
    for key in list(os.environ):
        if key.startswith("IMAGEPROMPT_"):
            monkeypatch.delenv(key, raising=False)
