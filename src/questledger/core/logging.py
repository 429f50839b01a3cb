from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

_CONFIGURED = False

LOG_FILE_NAME = "questledger.log"


class JsonFormatter(logging.Formatter):
    """Serialize log records as structured JSON."""

    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03dZ"

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.default_time_format),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            data["stack_info"] = record.stack_info
        return json.dumps(data, ensure_ascii=False)


def configure_logging(level: int = logging.INFO) -> None:
    """Install the file and stream handlers once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    log_dir_env = os.getenv("LOG_DIR")
    log_dir = Path(log_dir_env) if log_dir_env else Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    use_json = os.getenv("LOG_FORMAT", "").strip().lower() == "json"

    if use_json:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    file_handler = logging.FileHandler(
        log_dir / LOG_FILE_NAME, mode="a", encoding="utf-8"
    )
    stream_handler = logging.StreamHandler()
    file_handler.setFormatter(formatter)
    stream_handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[file_handler, stream_handler],
        force=True,
    )

    # uvicorn installs its own handlers; route them through ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    _CONFIGURED = True


__all__ = ["JsonFormatter", "configure_logging"]
