# sunshadow/tests/test_logging_config.py

import logging

from sunshadow.logging_config import setup_logging


def test_repeated_setup_does_not_duplicate_handlers(tmp_path):
    log_file = tmp_path / "sunshadow.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.INFO, log_file=str(log_file))
    assert logger.name == "sunshadow"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2

    logging.getLogger("sunshadow.models").info("shape added")
    for handler in logger.handlers:
        handler.flush()
    assert "shape added" in log_file.read_text(encoding="utf-8")

    logger.handlers.clear()
