"""Run the server: ``python -m racesync``."""
from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "racesync.app:app",
        host=os.environ.get("RACESYNC_HOST", "127.0.0.1"),
        port=int(os.environ.get("RACESYNC_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
