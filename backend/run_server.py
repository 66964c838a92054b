"""
Run the NEPSE Analyzer API with uvicorn.

Host, port, log level and auto-reload (``DEBUG``) come from the
application settings, so ``.env`` controls them.
"""
import os
import sys

backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)
sys.path.insert(0, backend_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))

import uvicorn

from nepse_analyzer.core.config import settings


def main():
    print(f"Starting {settings.app_name} ({settings.environment})")
    print(f"API Docs: http://{settings.host}:{settings.port}/docs")
    if settings.snapshot_file:
        print(f"Snapshots: {settings.snapshot_file}")
    else:
        print("Snapshots: none configured (set SNAPSHOT_FILE)")

    uvicorn.run(
        "nepse_analyzer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
