from __future__ import annotations

from pathlib import Path

from .types import Logger


def null_logger(msg: str) -> None:
    pass


def file_logger(path: Path | str) -> Logger:
    log_path = Path(path)

    def logger(msg: str) -> None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("a", encoding="utf-8") as handle:
            handle.write(msg + "\n")

    return logger


def logger_from_config(config: dict) -> Logger:
    if config.get("log_path"):
        return file_logger(config["log_path"])
    return null_logger
