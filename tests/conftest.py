import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'pcp' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from pcp.core.config import clear_all_caches
from pcp.core.logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def isolated_pcp_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every test from an empty working directory with no PCP_* overrides."""
    for key in list(os.environ):
        if key.startswith("PCP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_all_caches()
    reset_logging_for_tests()
    yield tmp_path
    clear_all_caches()
    reset_logging_for_tests()
