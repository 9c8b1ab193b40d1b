import logging
import sys
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "assessment-engine"
LOG_FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'


class EngineJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON log lines tagged with the service and the engine component that
    emitted them, e.g. "scorer" for services.assessment_engine.scorer.
    """
    def add_fields(self, log_record, record, message_dict):
        super(EngineJsonFormatter, self).add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['service'] = SERVICE_NAME
        log_record['component'] = record.name.rsplit('.', 1)[-1]
        log_record['lineno'] = record.lineno


def _has_json_handler(logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.StreamHandler) and isinstance(h.formatter, EngineJsonFormatter)
        for h in logger.handlers
    )


def setup_logging(log_level_str: str = "INFO", stream=None):
    """
    Configures structured JSON logging on the root logger.

    Safe to call more than once: an existing JSON handler is reused and only
    the level is updated. Log output goes to stderr by default so that stdout
    stays free for command output.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not _has_json_handler(root_logger):
        log_handler = logging.StreamHandler(stream or sys.stderr)
        log_handler.setFormatter(EngineJsonFormatter(LOG_FORMAT))
        root_logger.addHandler(log_handler)
        root_logger.debug(f"Structured JSON logging configured with level: {logging.getLevelName(log_level)}")
    else:
        root_logger.debug(f"Structured JSON logging already configured. Current level: {logging.getLevelName(log_level)}")
