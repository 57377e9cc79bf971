# src/fieldargs/pipeline.py
"""
Public entry points.

:func:`parse` resolves defaults, command-line arguments and environment
variables for a dataclass instance, assigns the merged result and validates
it. Precedence is fixed: environment over argument over default.

	@dataclass
	class Settings:
		port: int = option(arg="port", env="PORT", default="8080")

	settings = parse(Settings())
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional, Sequence

from .errors import ConfigError
from .fields import describe_fields
from .merge import assign_values, merge_values
from .printer import print_arguments
from .sources.args import resolve_arguments
from .sources.defaults import resolve_defaults
from .sources.env import Environ, resolve_environment
from .validate import check_required, validate_has_validation

LOG = logging.getLogger(__name__)


def _resolve(target: Any, argv: Optional[Sequence[str]], environ: Optional[Environ], exit_on_error: bool) -> None:
	descriptors = describe_fields(target, include_bare=True)
	argument = resolve_arguments(
		descriptors,
		sys.argv[1:] if argv is None else argv,
		exit_on_error=exit_on_error
	)
	environment = resolve_environment(descriptors, os.environ if environ is None else environ)
	default = resolve_defaults(descriptors)
	merged = merge_values(default, argument, environment)
	LOG.debug(
		"%s: %d default, %d argument, %d environment value(s)",
		type(target).__name__, len(default), len(argument), len(environment)
	)
	assign_values(target, descriptors, merged)


def _validate(target: Any, ctx: Any) -> None:
	try:
		check_required(target, describe_fields(target))
	except ConfigError as exc:
		raise exc.with_prefix("validate required failed") from exc
	try:
		validate_has_validation(target, ctx)
	except ConfigError as exc:
		raise exc.with_prefix("validate failed") from exc


def parse(
		target: Any,
		argv: Optional[Sequence[str]] = None,
		environ: Optional[Environ] = None,
		*,
		ctx: Any = None,
		exit_on_error: bool = False
) -> Any:
	"""
	Resolve, assign and validate all sources for *target*.

	:param target: Dataclass instance (mutated in place, possibly partially on error).
	:param argv: Argument vector; ``sys.argv[1:]`` when omitted.
	:param environ: ``NAME=value`` list or mapping; ``os.environ`` when omitted.
	:param ctx: Context handed unchanged to ``validate(ctx)`` hooks.
	:param exit_on_error: Exit with status 2 on an unknown flag instead of raising.
	:return: The same *target*.
	:raises ConfigError: Subclass naming the failing stage and field.
	"""
	try:
		_resolve(target, argv, environ, exit_on_error)
	except ConfigError as exc:
		raise exc.with_prefix("parse failed") from exc
	_validate(target, ctx)
	LOG.debug("%s parsed", type(target).__name__)
	return target


def parse_and_print(
		target: Any,
		argv: Optional[Sequence[str]] = None,
		environ: Optional[Environ] = None,
		*,
		ctx: Any = None,
		exit_on_error: bool = False,
		logger: Optional[logging.Logger] = None
) -> Any:
	"""
	Like :func:`parse`, but log the resolved values before validating them.

	:param logger: Logger for the printed lines (see :func:`print_arguments`).
	:return: The same *target*.
	"""
	try:
		_resolve(target, argv, environ, exit_on_error)
	except ConfigError as exc:
		raise exc.with_prefix("parse failed") from exc
	print_arguments(target, logger=logger)
	_validate(target, ctx)
	return target


def parse_args(target: Any, argv: Optional[Sequence[str]] = None, *, exit_on_error: bool = False) -> Any:
	"""
	Apply only the command-line source (with its defaults); no validation.

	:return: The same *target*.
	"""
	descriptors = describe_fields(target, include_bare=True)
	try:
		values = resolve_arguments(descriptors, sys.argv[1:] if argv is None else argv, exit_on_error=exit_on_error)
		assign_values(target, descriptors, values)
	except ConfigError as exc:
		raise exc.with_prefix("parse args failed") from exc
	return target


def parse_env(target: Any, environ: Optional[Environ] = None) -> Any:
	"""
	Apply only the environment source; no defaults, no validation.

	:return: The same *target*.
	"""
	descriptors = describe_fields(target, include_bare=True)
	try:
		values = resolve_environment(descriptors, os.environ if environ is None else environ)
		assign_values(target, descriptors, values)
	except ConfigError as exc:
		raise exc.with_prefix("parse env failed") from exc
	return target


__all__ = ["parse", "parse_and_print", "parse_args", "parse_env"]
