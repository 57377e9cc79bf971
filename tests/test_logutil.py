# tests/test_logutil.py

import logging
from logging.handlers import RotatingFileHandler

import pytest

from fieldargs.logutil import configure_logging, get_logger


@pytest.fixture()
def logger_name(request):
	name = f"fieldargs_tests.{request.node.name}"
	yield name
	log = logging.getLogger(name)
	for handler in list(log.handlers):
		handler.close()
		log.removeHandler(handler)


def test_get_logger_adds_single_console_handler(logger_name):
	first = get_logger(logger_name)
	second = get_logger(logger_name)
	assert first is second
	assert len(first.handlers) == 1
	assert first.level == logging.INFO


def test_configure_logging_with_file(tmp_path, logger_name):
	path = tmp_path / "logs" / "run.log"
	log = configure_logging(name=logger_name, console_level="WARNING", file_path=path, file_level="DEBUG")
	configure_logging(name=logger_name, console_level="WARNING", file_path=path, file_level="DEBUG")

	assert log.level == logging.DEBUG
	assert log.propagate is False
	file_handlers = [h for h in log.handlers if isinstance(h, logging.FileHandler)]
	assert len(file_handlers) == 1

	log.debug("resolved %d values", 3)
	file_handlers[0].flush()
	assert "resolved 3 values" in path.read_text(encoding="utf-8")


def test_configure_logging_rotating(tmp_path, logger_name):
	log = configure_logging(name=logger_name, file_path=tmp_path / "r.log", rotate=True, max_bytes=1024)
	assert any(isinstance(h, RotatingFileHandler) for h in log.handlers)


def test_unknown_level_name(logger_name):
	with pytest.raises(ValueError, match="console_level"):
		configure_logging(name=logger_name, console_level="LOUD")
