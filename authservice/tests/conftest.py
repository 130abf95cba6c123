from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Settings are read once at import time, so the environment has to be in
# place before any authservice module is imported.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="authservice-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP_DIR / 'test.db'}")
os.environ.setdefault("LOG_FILE", str(_TMP_DIR / "app.log"))
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-entropy-0123456789")
os.environ.setdefault("APP_ENV", "test")
