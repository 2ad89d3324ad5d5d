from __future__ import annotations

import os
import subprocess
import sys
import time
from pathlib import Path

from dotenv import load_dotenv


def main() -> int:
    """
    Description: Launch the FastAPI backend + Streamlit dashboard locally (canonical supervisor).
    Input: .env / environment (DATABASE_URL, HOST, PORT, API_URL)
    Output: exit code
    """
    root = Path(__file__).resolve().parent
    load_dotenv(root / ".env")

    env = os.environ.copy()
    env["PYTHONPATH"] = str(root / "src") + (os.pathsep + env.get("PYTHONPATH", "") if env.get("PYTHONPATH") else "")
    sys.path.insert(0, str(root / "src"))

    from jobquest.config import get_settings

    settings = get_settings()
    # the dashboard must talk to the address the API actually listens on
    env["API_URL"] = settings.api_url

    api_cmd = [
        sys.executable, "-m", "uvicorn",
        "jobquest.api.main:app",
        "--host", settings.HOST,
        "--port", str(settings.PORT),
        "--reload",
    ]

    ui_cmd = [
        sys.executable, "-m", "streamlit",
        "run", "app/ui/dashboard.py",
        "--server.port", "8501",
    ]

    print("\n== JobQuest Local Launcher ==")
    print(f"API: {settings.api_url}/health  | docs: {settings.api_url}/docs")
    print("UI : http://localhost:8501\n")

    print("Starting FastAPI:", " ".join(api_cmd))
    api = subprocess.Popen(api_cmd, cwd=str(root), env=env)

    time.sleep(1.2)

    print("Starting Streamlit:", " ".join(ui_cmd))
    ui = subprocess.Popen(ui_cmd, cwd=str(root), env=env)

    try:
        while True:
            a = api.poll()
            u = ui.poll()

            # If one dies, stop the other and exit with that code
            if a is not None:
                print(f"FastAPI exited with code {a}. Stopping Streamlit…")
                ui.terminate()
                return a
            if u is not None:
                print(f"Streamlit exited with code {u}. Stopping FastAPI…")
                api.terminate()
                return u

            time.sleep(0.5)

    except KeyboardInterrupt:
        print("Stopping…")
        api.terminate()
        ui.terminate()
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
