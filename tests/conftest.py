from pathlib import Path

import pytest

DATA = Path(__file__).parent / "data"


@pytest.fixture
def ergodox_source_path() -> Path:
    return DATA / "ergodox_keymap.c"


@pytest.fixture
def ergodox_source(ergodox_source_path: Path) -> str:
    return ergodox_source_path.read_text(encoding="utf-8")
