"""Compatibility entrypoint for users running `uvicorn api_main:app`.

Forwards to the canonical FastAPI app at `jobquest.api.main`.
"""

from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from jobquest.api.main import app  # noqa: E402,F401
