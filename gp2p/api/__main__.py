"""
gp2p.api.__main__ — Entry point for ``python -m gp2p.api``
============================================================
"""

from __future__ import annotations

import logging
import os

import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)


def main() -> None:
    """Serve the rewards API."""
    uvicorn.run(
        "gp2p.api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "5000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
