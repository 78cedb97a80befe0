# tests/test_log.py
import logging

from loguru import logger

from app import log
from app.config import Settings


def test_setup_logging_routes_stdlib_into_loguru(monkeypatch):
    monkeypatch.setattr(log, "_configured", False)
    log.setup_logging(Settings(log_level="DEBUG", _env_file=None))

    messages = []
    sink_id = logger.add(lambda m: messages.append((m.record["level"].name, m.record["message"])))
    try:
        logging.getLogger("uvicorn.error").warning("port %s busy", 5000)
    finally:
        logger.remove(sink_id)

    assert ("WARNING", "port 5000 busy") in messages


def test_setup_logging_runs_once(monkeypatch):
    monkeypatch.setattr(log, "_configured", True)
    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]))
    try:
        log.setup_logging(Settings(_env_file=None))
        logger.info("still here")
    finally:
        logger.remove(sink_id)

    assert messages == ["still here"]
