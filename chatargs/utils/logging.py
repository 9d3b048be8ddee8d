import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from rich.logging import RichHandler


class LevelIconFilter(logging.Filter):
    """Adds a level icon to each record for console output."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.ERROR:
            record.level_icon = "✖"
        elif record.levelno >= logging.WARNING:
            record.level_icon = "⚠"
        elif record.levelno >= logging.INFO:
            record.level_icon = "✔"
        else:
            record.level_icon = "ℹ"
        return True


class JsonlFormatter(logging.Formatter):
    """Structured JSONL formatter with a frozen key set."""

    KEYS = (
        "ts",
        "level",
        "name",
        "subsys",
        "guild_id",
        "user_id",
        "msg_id",
        "event",
        "detail",
    )

    def format(self, record: logging.LogRecord) -> str:
        # Local time with millisecond precision
        ts = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .astimezone()
            .strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        )

        # Detail prefers explicit record.detail; otherwise message
        detail: Any = getattr(record, "detail", None)
        if detail is None:
            detail = record.getMessage()

        payload: Dict[str, Any] = {
            "ts": ts,
            "level": record.levelname,
            "name": record.name,
            "subsys": getattr(record, "subsys", None),
            "guild_id": getattr(record, "guild_id", None),
            "user_id": getattr(record, "user_id", None),
            "msg_id": getattr(record, "msg_id", None),
            "event": getattr(record, "event", None),
            "detail": detail,
        }

        # Drop None keys; preserve order of KEYS
        obj = {k: payload[k] for k in self.KEYS if payload.get(k) is not None}
        return json.dumps(obj, ensure_ascii=False)


def init_logging(
    level: Optional[str] = None,
    jsonl_path: Optional[str] = None,
    third_party_level: Optional[str] = None,
) -> None:
    """Configure dual-sink logging: Rich console + JSONL file.

    Arguments left as None fall back to LOG_LEVEL, LOG_JSONL_PATH and
    THIRD_PARTY_LOG_LEVEL from load_config(), which strips inline comments.
    """
    # config logs through this module, so it is imported lazily
    from ..config import load_config

    config = load_config()
    level = (level or config["LOG_LEVEL"]).upper()
    path = Path(jsonl_path or config["LOG_JSONL_PATH"])
    path.parent.mkdir(parents=True, exist_ok=True)

    # Pretty console sink
    pretty = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        show_time=True,
        enable_link_path=False,
        log_time_format="%Y-%m-%d %H:%M:%S.%f",
    )
    pretty.set_name("pretty_handler")
    pretty.addFilter(LevelIconFilter())
    pretty.setFormatter(logging.Formatter(fmt="%(level_icon)s %(message)s"))

    # JSONL sink
    jsonl = logging.FileHandler(str(path), encoding="utf-8")
    jsonl.set_name("jsonl_handler")
    jsonl.setFormatter(JsonlFormatter())

    # force=True clears handlers from a previous init
    logging.basicConfig(
        handlers=[pretty, jsonl], level=level, force=True, format="%(message)s"
    )

    # Tame the discord.py gateway loggers unless explicitly overridden
    third_party_level = (third_party_level or config["THIRD_PARTY_LOG_LEVEL"]).upper()
    for name in ("discord", "discord.client", "discord.gateway", "discord.http"):
        logging.getLogger(name).setLevel(third_party_level)

    logging.getLogger(__name__).info(
        "✔ Logging initialized (dual-sink)", extra={"subsys": "logging"}
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
