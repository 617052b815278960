"""Every entry module imports cleanly in a fresh interpreter.

The test session has already imported the whole package through the app
factory, so import cycles only show up when a module is the first one loaded.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import boundary
import pytest

BACKEND_DIR = Path(boundary.__file__).resolve().parents[1]


@pytest.mark.parametrize(
    "module",
    [
        "boundary.infra.storage",
        "boundary.api.deps",
        "boundary.services",
        "boundary.services.gallery_service",
        "boundary.uow",
        "boundary.factory",
    ],
)
def test_module_imports_first(module):
    env = {**os.environ, "PYTHONPATH": str(BACKEND_DIR)}

    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=BACKEND_DIR,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
