from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from jobquest.config import get_settings


def main(argv: Optional[List[str]] = None) -> int:
    """
    Description: Serve the JobQuest API with uvicorn on the configured HOST/PORT.
    Input: optional --host/--port/--reload overrides
    Output: exit code
    """
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="jobquest-api", description="Run the JobQuest API")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args(argv)

    uvicorn.run(
        "jobquest.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
