import json
import logging
from datetime import datetime, timezone

from sentinel.config import get_settings

# Structured extras copied into the JSON payload when a record carries them.
STRUCTURED_EXTRAS = ("audit", "risk_id")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_EXTRAS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # Audit entries and ORM values may carry datetimes.
        return json.dumps(payload, ensure_ascii=True, default=str)


def setup_logging(level=None) -> None:
    """Install one stream handler on the root logger.

    ``level`` overrides ``LOG_LEVEL``, which the seed script uses for ``--verbose``.
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


__all__ = ["JsonFormatter", "STRUCTURED_EXTRAS", "setup_logging"]
