"""Sprout — main entry point.

Opens the store, loads state into the controller and serves the HTTP app.
"""

import logging

import uvicorn

from sprout.config import DB_PATH, HOST, PORT, summary_api_key
from sprout.controller import AppController
from sprout.storage import SQLiteStore
from sprout.web import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("sprout")


def main():
    """Boot sequence."""
    log.info("Sprout starting up...")

    store = SQLiteStore(DB_PATH)
    log.info("Store ready: %s", DB_PATH)

    if not summary_api_key():
        log.info("No completion API key set, AI summaries will be inert")

    app = create_app(AppController(store))
    uvicorn.run(app, host=HOST, port=PORT, log_level="info")


if __name__ == "__main__":
    main()
