"""
fieldargs - typed configuration from defaults, environment and command line.

Declare a dataclass, describe each field's sources, and resolve it:

    from dataclasses import dataclass
    from fieldargs import option, parse

    @dataclass
    class Settings:
        listen: str = option(arg="listen", env="LISTEN", default=":8080")
        password: str = option(env="PASSWORD", required=True, display="length")

    settings = parse(Settings())

Environment variables override command-line arguments, which override
defaults. Names are imported lazily from their submodules.
"""

from importlib import import_module
from importlib.metadata import version, PackageNotFoundError as _PNF
from typing import TYPE_CHECKING

try:
	__version__ = version("fieldargs")
except _PNF:
	__version__ = "0.0.0+local"

# --- lazy maps ---------------------------------------------------------------
_EXPORTS = {
	# pipeline
	"parse": "pipeline", "parse_and_print": "pipeline", "parse_args": "pipeline", "parse_env": "pipeline",
	# declaration
	"option": "fields", "Display": "fields", "FieldDescriptor": "fields",
	"describe_fields": "fields", "DEFAULT_SEPARATOR": "fields",
	# types
	"Kind": "kinds", "SemanticType": "kinds", "classify": "kinds",
	"Int32": "kinds", "Int64": "kinds", "UInt": "kinds", "UInt32": "kinds", "UInt64": "kinds",
	"HasValidation": "kinds", "TextDecodable": "kinds", "TextEncodable": "kinds",
	"UnixTime": "timeparse", "parse_duration": "timeparse", "format_duration": "timeparse",
	"convert_text": "convert",
	# stages
	"default_values": "sources", "environment_values": "sources", "argument_values": "sources",
	"format_usage": "sources",
	"merge_values": "merge", "fill": "merge",
	"validate_required": "validate", "validate_has_validation": "validate",
	"format_arguments": "printer", "print_arguments": "printer",
	# logging
	"get_logger": "logutil", "configure_logging": "logutil",
	# errors
	"ConfigError": "errors", "TargetError": "errors", "ParseFieldError": "errors",
	"UnsupportedTypeError": "errors", "ArgumentsError": "errors", "FillError": "errors",
	"RequiredFieldError": "errors", "FieldValidationError": "errors",
}

__all__ = ["__version__", *_EXPORTS]


def __getattr__(name: str):
	module = _EXPORTS.get(name)
	if module is not None:
		return getattr(import_module(f"fieldargs.{module}"), name)
	raise AttributeError(f"module 'fieldargs' has no attribute {name!r}")


# Help type-checkers without eager imports
if TYPE_CHECKING:
	from .pipeline import parse, parse_and_print, parse_args, parse_env  # noqa: F401
	from .fields import option, Display, FieldDescriptor, describe_fields, DEFAULT_SEPARATOR  # noqa: F401
	from .kinds import (  # noqa: F401
		Kind, SemanticType, classify, Int32, Int64, UInt, UInt32, UInt64,
		HasValidation, TextDecodable, TextEncodable,
	)
	from .timeparse import UnixTime, parse_duration, format_duration  # noqa: F401
	from .convert import convert_text  # noqa: F401
	from .sources import default_values, environment_values, argument_values, format_usage  # noqa: F401
	from .merge import merge_values, fill  # noqa: F401
	from .validate import validate_required, validate_has_validation  # noqa: F401
	from .printer import format_arguments, print_arguments  # noqa: F401
	from .logutil import get_logger, configure_logging  # noqa: F401
	from .errors import (  # noqa: F401
		ConfigError, TargetError, ParseFieldError, UnsupportedTypeError,
		ArgumentsError, FillError, RequiredFieldError, FieldValidationError,
	)
