"""
Boss Respawn Notifier — Entry Point.

Single entry point: `python main.py` starts the liveness server and the
once-a-minute notification job.
"""

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from src.server.app import main

if __name__ == "__main__":
    main()
