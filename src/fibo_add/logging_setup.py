import json
import logging
import sys
from logging import Formatter, StreamHandler

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JsonFormatter(Formatter):
    """One JSON object per record.

    Records logged with a dict message (``logger.info({"event": ...})``)
    contribute their keys directly; anything else lands under ``message``.
    json.dumps escapes newlines, so tracebacks stay on a single line.
    """

    def _payload(self, record):
        if isinstance(record.msg, dict):
            return dict(record.msg)
        return {"message": record.getMessage()}

    def format(self, record):
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
        }
        entry.update(self._payload(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(entry, default=str)


def setup_logging(debug=False, json_format=False, level=None):
    """Configures the root logger to write to stderr.

    Args:
        debug: Force DEBUG level, overriding ``level``.
        json_format: Emit JSONL instead of plain text lines.
        level: Level name such as ``"INFO"``; defaults to INFO.
    """
    if debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, str(level or 'INFO').upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates if run multiple times
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = StreamHandler(sys.stderr)
    if json_format:
        formatter = JsonFormatter(datefmt='%Y-%m-%dT%H:%M:%S%z')
    else:
        formatter = Formatter(PLAIN_FORMAT)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.getLogger("fibo_add").setLevel(log_level)
    return handler
