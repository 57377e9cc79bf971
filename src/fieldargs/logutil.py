# src/fieldargs/logutil.py
"""
Package logging.

Modules log through ``logging.getLogger(__name__)``; every name is a child of
:data:`PACKAGE_LOGGER`, so configuring that one logger controls the library.
The engine itself only logs at DEBUG; the printer writes INFO lines.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal, Optional, Union

PathLike = Union[str, Path]
LevelName = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]
LevelLike = Union[int, LevelName]

PACKAGE_LOGGER = "fieldargs"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _level(value: LevelLike, *, param_name: str) -> int:
	if isinstance(value, int):
		return value
	resolved = logging.getLevelName(str(value).upper())
	if isinstance(resolved, int):
		return resolved
	raise ValueError(f"Unknown logging level name for {param_name}: {value}")


def _console_handler(log: logging.Logger) -> Optional[logging.Handler]:
	# FileHandler subclasses StreamHandler; only a plain stream counts
	for handler in log.handlers:
		if type(handler) is logging.StreamHandler:
			return handler
	return None


def _has_file_handler(log: logging.Logger, path: Path) -> bool:
	target = path.resolve()
	return any(
		Path(handler.baseFilename).resolve() == target
		for handler in log.handlers
		if isinstance(handler, logging.FileHandler)
	)


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
	"""
	Return a logger with one console handler, INFO unless already configured.

	:param name: Logger name.
	:return: The logger.
	"""
	log = logging.getLogger(name)
	if _console_handler(log) is None:
		handler = logging.StreamHandler()
		handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
		log.addHandler(handler)
	if log.level == logging.NOTSET:
		log.setLevel(logging.INFO)
	return log


def configure_logging(
		*,
		name: str = PACKAGE_LOGGER,
		console_level: LevelLike = "INFO",
		file_path: Optional[PathLike] = None,
		file_level: Optional[LevelLike] = None,
		mode: str = "a",
		rotate: bool = False,
		max_bytes: int = 1_000_000,
		backup_count: int = 3,
		propagate: bool = False
) -> logging.Logger:
	"""
	Set console verbosity and optionally mirror the package log into a file.

	Calling it again reconfigures the console handler and never duplicates a
	file handler for the same path.

	:param name: Logger name (the package logger by default).
	:param console_level: Console level, e.g. ``"DEBUG"`` to trace resolution.
	:param file_path: Log file; parent directories are created.
	:param file_level: File level (defaults to *console_level*).
	:param mode: ``"a"`` to append, ``"w"`` to overwrite.
	:param rotate: Use :class:`RotatingFileHandler`.
	:param max_bytes: Rotation threshold.
	:param backup_count: Rotated files to keep.
	:param propagate: Pass records on to the root logger.
	:return: The configured logger.
	:raises ValueError: On an unknown level name.
	"""
	console_value = _level(console_level, param_name="console_level")
	file_value = console_value if file_level is None else _level(file_level, param_name="file_level")

	log = get_logger(name)
	log.setLevel(min(console_value, file_value) if file_path else console_value)
	log.propagate = propagate

	console = _console_handler(log)
	console.setLevel(console_value)

	if file_path:
		path = Path(file_path)
		path.parent.mkdir(parents=True, exist_ok=True)
		if not _has_file_handler(log, path):
			if rotate:
				handler: logging.Handler = RotatingFileHandler(
					path, mode=mode, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
				)
			else:
				handler = logging.FileHandler(path, mode=mode, encoding="utf-8")
			handler.setLevel(file_value)
			handler.setFormatter(logging.Formatter(FILE_FORMAT))
			log.addHandler(handler)

	return log


__all__ = ["PACKAGE_LOGGER", "get_logger", "configure_logging"]
