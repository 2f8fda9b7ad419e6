from __future__ import annotations

import os
import tempfile

# Configuration is read once at import time; point it at throwaway locations
# before any cohort_tools module is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="cohort_tools_tests_")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP_DIR, "test.log"))
os.environ.setdefault("JWT_SECRET", "unit-test-signing-secret-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "test")
