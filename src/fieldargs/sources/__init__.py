# src/fieldargs/sources/__init__.py
from .args import argument_values, format_usage, resolve_arguments
from .defaults import default_values, resolve_defaults
from .env import environment_values, resolve_environment, split_environ

__all__ = [
	"argument_values",
	"format_usage",
	"resolve_arguments",
	"default_values",
	"resolve_defaults",
	"environment_values",
	"resolve_environment",
	"split_environ",
]
