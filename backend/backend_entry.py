"""
Server entrypoint: picks a free local port and starts uvicorn with the FastAPI app.

Run from the backend dir: python backend_entry.py [--host 127.0.0.1] [--port 8000]
Or after installation: highlights-backend
"""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from pathlib import Path

_backend_dir = Path(__file__).resolve().parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))


def _pick_port(host: str) -> int:
    """Return first free port in 8000..8010. Bind test then close."""
    for port in range(8000, 8011):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
                return port
        except OSError:
            continue
    return 8000  # may fail later if all busy


def main() -> int:
    parser = argparse.ArgumentParser(description="Highlights backend server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=None, help="Default: first free port in 8000..8010")
    args = parser.parse_args()

    port = args.port or _pick_port(args.host)
    from main import app, settings
    import uvicorn

    logger = logging.getLogger(__name__)
    logger.info("Backend entry: host=%s port=%s", args.host, port)
    uvicorn.run(app, host=args.host, port=port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
