import logging

from desktop_notes.logging_setup import SESSION_ID, log, setup_logging
from desktop_notes.settings import APP_NAME


def test_setup_logging_writes_session_tagged_file(tmp_path):
    logger = logging.getLogger(APP_NAME)
    saved_handlers = logger.handlers[:]
    logger.handlers.clear()
    log_path = tmp_path / "logs" / "notes.log"
    try:
        setup_logging(log_path, console=False)
        assert len(logger.handlers) == 1

        # second call keeps the existing handlers
        setup_logging(tmp_path / "other.log", console=False)
        assert len(logger.handlers) == 1

        log.info("hello from the test")
        for h in logger.handlers:
            h.flush()
    finally:
        for h in logger.handlers:
            h.close()
        logger.handlers[:] = saved_handlers
        logger.propagate = True

    text = log_path.read_text(encoding="utf-8")
    assert "hello from the test" in text
    assert f"sid={SESSION_ID}" in text
    assert not (tmp_path / "other.log").exists()
