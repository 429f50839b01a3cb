from __future__ import annotations

import logging
import os

import uvicorn

from questledger.core.logging import configure_logging


def main() -> None:
    configure_logging()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logging.getLogger(__name__).info("Starting quest ledger API on %s:%s", host, port)
    uvicorn.run("questledger.api.main:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
