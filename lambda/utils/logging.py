import logging as _logging
import os
import uuid
from contextvars import ContextVar

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(_logging.Filter):
    def filter(self, record):
        record.request_id = _request_id.get()
        return True


logger = _logging.getLogger("wordforthis")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    _handler = _logging.StreamHandler()
    _handler.setFormatter(_logging.Formatter("%(asctime)s [%(levelname)s] [%(request_id)s] %(message)s"))
    _handler.addFilter(RequestIdFilter())
    logger.addHandler(_handler)
    logger.propagate = False


def set_request_id(request_id: str = None) -> str:
    request_id = request_id or uuid.uuid4().hex[:12]
    _request_id.set(request_id)
    return request_id


def get_request_id() -> str:
    return _request_id.get()


def clear_request_id():
    _request_id.set("-")


def debug(msg, *args, **kwargs):
    logger.debug(msg, *args, **kwargs)


def info(msg, *args, **kwargs):
    logger.info(msg, *args, **kwargs)


def warning(msg, *args, **kwargs):
    logger.warning(msg, *args, **kwargs)


def error(msg, *args, **kwargs):
    logger.error(msg, *args, **kwargs)


def exception(msg, *args, **kwargs):
    logger.exception(msg, *args, **kwargs)
