import json
import os
import sys
import traceback
import uuid
from datetime import datetime, timezone

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_MIN_LEVEL = _LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), 20)

_correlation_id = None


def bind_correlation_id(correlation_id=None):
    """Fixa o correlationId usado por todas as linhas da invocação atual."""
    global _correlation_id
    _correlation_id = correlation_id or str(uuid.uuid4())
    return _correlation_id


def get_correlation_id():
    return _correlation_id


def _base(service, level, message, **kwargs):
    """Log estruturado em JSON com payload e stacktrace opcionais"""
    if _LEVELS[level] < _MIN_LEVEL:
        return

    log = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "level": level,
        "service": service,
        "correlationId": kwargs.get("correlationId") or _correlation_id or str(uuid.uuid4()),
        "logCode": kwargs.get("logCode"),
        "logMessage": message,
        "payload": kwargs.get("payload"),
    }

    exc = kwargs.get("exc_info")
    if exc:
        log["stacktrace"] = traceback.format_exception(type(exc), exc, exc.__traceback__)

    # Uma linha por evento (CloudWatch)
    print(json.dumps(log, ensure_ascii=False, default=str))


def log_debug(service, message, **kwargs):
    _base(service, "DEBUG", message, **kwargs)


def log_info(service, message, **kwargs):
    _base(service, "INFO", message, **kwargs)


def log_warn(service, message, **kwargs):
    _base(service, "WARN", message, **kwargs)


def log_error(service, message, **kwargs):
    """Captura automaticamente a exceção corrente, se não for informada"""
    if "exc_info" not in kwargs:
        _, exc_value, _ = sys.exc_info()
        if exc_value:
            kwargs["exc_info"] = exc_value
    _base(service, "ERROR", message, **kwargs)
