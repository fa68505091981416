"""
Entry point for the path editor backend.

Running this script with ``python run.py`` starts the FastAPI server
that answers edge hit-testing and selection requests from the editor
canvas.  The application defined in ``backend/pathedit/main.py`` is
imported after adjusting the Python path to include the repository root.

``PATHEDIT_HOST`` and ``PATHEDIT_PORT`` override the bind address.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import logging
import uvicorn

logging.basicConfig(
    level=logging.DEBUG if os.getenv("EDGE_DEBUG") else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the path editor backend."""
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.append(str(repo_root))

    # Import inside main() to avoid modifying sys.path at module import time.
    from backend.pathedit.main import app  # type: ignore

    host = os.getenv("PATHEDIT_HOST", "0.0.0.0")
    port = int(os.getenv("PATHEDIT_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
