#
#    LinOTP - the open source solution for two factor authentication
#    Copyright (C) 2010-2019 KeyIdentity GmbH
#    Copyright (C) 2019-     netgo software GmbH
#
#    This file is part of LinOTP otpengine.
#
#    This program is free software: you can redistribute it and/or
#    modify it under the terms of the GNU Affero General Public
#    License, version 3, as published by the Free Software Foundation.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the
#               GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#
#
#    E-mail: info@linotp.de
#    Contact: www.linotp.org
#    Support: www.linotp.de
#

"""
otpengine settings

Settings are described by a `ConfigSchema` of `ConfigItem` entries and
read from `OTPENGINE_*` environment variables. Values arrive as strings,
are converted to the item type and validated before they are used to
build the algorithm and verifier configuration.
"""

import json
import logging
import os
import textwrap
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from logging.config import dictConfig as logging_dictConfig
from typing import Any, Callable, Type

import click

from otpengine.lib.clock import UNIX_EPOCH, as_utc
from otpengine.lib.crypto.utils import HmacAlgorithm
from otpengine.lib.options import AlgorithmConfig, VerifierConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "OTPENGINE_"

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


# Validation functions for configuration items. The `ConfigItem.validate`
# attribute is supposed to contain a function that takes `key` and `value`
# arguments, and raises an exception if the `value` is invalid for the item
# in question. The `key` argument is used to make the exception message
# prettier.
#
# The functions here are factory functions; the returned function's doc
# string contains a summary of what the function does, which is shown by
# the `otpengine config explain` command.


class OtpEngineConfigKeyError(KeyError):
    """Used for configuration items with invalid names."""


class OtpEngineConfigValueError(ValueError):
    """Used for out-of-range errors etc. with configuration items."""


def check_int_in_range(min=None, max=None):
    """Factory function that will return a function that ensures that `min
    <= value <= max`. If `min` or `max` are not given, they practically
    default to “negative infinity” and “positive infinity”, respectively.
    """

    def f(key, value):
        result = int(value)
        if min is not None and result < min:
            raise OtpEngineConfigValueError(
                f"{key} is {result} but must be at least {min}"
            )
        if max is not None and result > max:
            raise OtpEngineConfigValueError(
                f"{key} is {result} but must be at most {max}"
            )

    if min is None and max is not None:
        f.__doc__ = f"value <= {max}"
    elif min is not None and max is None:
        f.__doc__ = f"value >= {min}"
    elif min is not None and max is not None:
        f.__doc__ = f"{min} <= value <= {max}"
    return f


def check_membership(allowed=frozenset()):
    """Factory function that will return a function that ensures that
    `value` is contained in `allowed` (the set of allowed values).
    """
    allowed_values = ", ".join(repr(s) for s in sorted(allowed))

    def f(key, value):
        if value not in allowed:
            raise OtpEngineConfigValueError(
                f"{key} is {value} but must be one of {allowed_values}."
            )

    f.__doc__ = f"value in {{{allowed_values}}}"
    return f


def to_algorithm(value: str) -> str:
    """normalize hmac algorithm descriptions like 'HMACSHA256'"""

    name = value.strip().lower().replace("-", "")
    if name.startswith("hmac"):
        name = name[len("hmac") :]
    return name


def to_datetime(value: str) -> datetime:
    """accept an iso 8601 date or unix seconds"""

    value = value.strip()
    try:
        seconds = int(value)
    except ValueError:
        return as_utc(datetime.fromisoformat(value))

    try:
        return datetime.fromtimestamp(seconds, UNIX_EPOCH.tzinfo)
    except (OverflowError, OSError) as exx:
        raise ValueError(f"unix time {value} is out of range") from exx


@dataclass
class ConfigItem:
    """This class represents individual configuration settings. A
    `ConfigSchema` is basically a dictionary of `ConfigItem` instances.
    """

    name: str  # Name of the item
    type: Type = str  # Type of the item
    convert: Callable[[str], Any] | None = None  # Converts strings to type
    validate: Callable[[str, Any], None] | None = None  # Checks value
    default: Any = None  # Default value of item
    help: str = ""  # Help message string


class ConfigSchema:
    """This class represents a complete schema of configuration settings."""

    def __init__(self, schema=None, refuse_unknown=False):
        """Start a `ConfigSchema` instance. The `schema` passed into the
        constructor should be an iterable even though we store the schema
        internally as a dictionary in order to be able to find individual
        items more efficiently. If `refuse_unknown` is `True`, any items
        that are not in the schema will not validate.
        """
        self.schema = {}
        if schema is not None:
            for s in schema:
                self.schema[s.name] = s
        self.refuse_unknown = refuse_unknown

    def find_item(self, key):
        """Returns the `ConfigItem` instance for the configuration item
        called `key` if it exists, otherwise `None`.
        """
        return self.schema.get(key, None)

    def check_item(self, key, value):
        """Converts a new value for a configuration item to the proper type
        (according to the `ConfigItem` data structure for the item) and
        also applies the validate function if one is defined for the item.
        We're only doing the type conversion if the type of the `value`
        parameter is `str`.
        """

        item = self.schema.get(key, None)
        if item is None:
            if self.refuse_unknown:
                raise OtpEngineConfigKeyError(
                    f"Unknown configuration item '{key}'"
                )
            return value

        if item.type != str and isinstance(value, str):
            try:
                value = (
                    item.convert(value)
                    if item.convert is not None
                    else item.type(value)
                )
            except ValueError as exx:
                raise OtpEngineConfigValueError(
                    f"{key}: cannot convert {value!r} to {item.type.__name__}"
                ) from exx
        elif item.convert is not None and isinstance(value, str):
            value = item.convert(value)

        if item.validate is not None:
            try:
                item.validate(key, value)
            except (TypeError, ValueError) as exx:
                if isinstance(exx, OtpEngineConfigValueError):
                    raise
                raise OtpEngineConfigValueError(
                    f"{key}: invalid value {value!r}"
                ) from exx
        return value

    def as_dict(self):
        """Return the names and default values of the schema as a
        dictionary.
        """
        return {item.name: item.default for item in self.schema.values()}

    def items(self):
        return self.schema.items()


_config_schema = ConfigSchema(
    [
        ConfigItem(
            "ALGORITHM",
            str,
            convert=to_algorithm,
            validate=check_membership({a.value for a in HmacAlgorithm}),
            default=HmacAlgorithm.SHA1.value,
            help=(
                "The HMAC algorithm. Counter based passwords are only "
                "defined for 'sha1'; time based passwords support all."
            ),
        ),
        ConfigItem(
            "DIGITS",
            int,
            validate=check_int_in_range(min=6, max=10),
            default=6,
            help="Number of decimal digits of a password.",
        ),
        ConfigItem(
            "TIME_STEP",
            int,
            validate=check_int_in_range(min=1),
            default=30,
            help="Length of a time step in seconds for time based passwords.",
        ),
        ConfigItem(
            "EPOCH",
            datetime,
            convert=to_datetime,
            default=UNIX_EPOCH,
            help=(
                "Start of the first time step, as ISO 8601 date or unix "
                "seconds. Naive dates are taken as UTC."
            ),
        ),
        ConfigItem(
            "PAST_STEPS",
            int,
            validate=check_int_in_range(min=0),
            default=2,
            help="Time steps behind the current one accepted on verification.",
        ),
        ConfigItem(
            "FUTURE_STEPS",
            int,
            validate=check_int_in_range(min=0),
            default=2,
            help="Time steps ahead of the current one accepted on verification.",
        ),
        ConfigItem(
            "COUNTER_WINDOW_SIZE",
            int,
            validate=check_int_in_range(min=0),
            default=10,
            help=(
                "Number of counters, starting with the stored counter, "
                "searched when verifying counter based passwords."
            ),
        ),
        ConfigItem(
            "LOG_LEVEL",
            str,
            validate=check_membership(VALID_LOG_LEVELS),
            default="WARNING",
            help="Messages below this level are not logged.",
        ),
        ConfigItem(
            "LOG_CONSOLE_LINE_FORMAT",
            str,
            default="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            help="Format of log messages written to the console.",
        ),
        ConfigItem(
            "LOG_CONFIG",
            dict,
            convert=json.loads,
            default=None,
            help=(
                "Complete logging configuration dictionary (JSON). If set, "
                "the `LOG_*` parameters are ignored."
            ),
        ),
    ],
    refuse_unknown=True,
)


def get_schema() -> ConfigSchema:
    return _config_schema


def load_settings(environ: Mapping | None = None, **overrides) -> dict:
    """
    build the settings from their defaults, the `OTPENGINE_*` environment
    variables and explicit overrides (in increasing priority)

    :raises OtpEngineConfigValueError: for invalid values
    :raises OtpEngineConfigKeyError: for unknown override names
    """

    if environ is None:
        environ = os.environ

    settings = _config_schema.as_dict()

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX) :]
        if _config_schema.find_item(name) is None:
            log.warning("ignoring unknown setting %s", key)
            continue
        settings[name] = _config_schema.check_item(name, value)

    for name, value in overrides.items():
        if value is None:
            continue
        settings[name] = _config_schema.check_item(name, value)

    return settings


def algorithm_config(settings: Mapping) -> AlgorithmConfig:
    return AlgorithmConfig(
        algorithm=settings["ALGORITHM"],
        digits=settings["DIGITS"],
        time_step=settings["TIME_STEP"],
        epoch=settings["EPOCH"],
    )


def verifier_config(settings: Mapping) -> VerifierConfig:
    return VerifierConfig(
        past_steps=settings["PAST_STEPS"],
        future_steps=settings["FUTURE_STEPS"],
        counter_window_size=settings["COUNTER_WINDOW_SIZE"],
    )


def init_logging(settings: Mapping, level: str | None = None):
    """Sets up logging for otpengine."""

    log_config = settings.get("LOG_CONFIG")

    if log_config is None:
        log_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "otpengine_console",
                },
            },
            "formatters": {
                "otpengine_console": {
                    "format": settings["LOG_CONSOLE_LINE_FORMAT"],
                },
            },
            "loggers": {
                "otpengine": {
                    "handlers": ["console"],
                    "level": level or settings["LOG_LEVEL"],
                    "propagate": True,
                },
            },
        }

    logging_dictConfig(log_config)


# ----------------------------------------------------------------------
# CLI commands
# ----------------------------------------------------------------------


@click.group("config", help="Show and explain the configuration settings.")
def config_cmds():
    pass


@config_cmds.command("show", help="Output current configuration settings.")
@click.option(
    "--modified",
    "-m",
    is_flag=True,
    help="Show only items whose values differ from their defaults.",
)
@click.option(
    "--values",
    "-V",
    is_flag=True,
    help="Show only values of items, not their names.",
)
@click.argument("items", nargs=-1)
@click.pass_obj
def config_show_cmd(obj, modified, values, items=None):
    """Show the current configuration settings."""

    settings = obj["settings"]
    for k, v in sorted(settings.items()):
        display = not items or k in items
        if modified and display:
            item = _config_schema.find_item(k)
            display = item is not None and v != item.default
        if display:
            click.echo(("" if values else f"{k}=") + str(v))


@config_cmds.command(
    "explain", help="Describe configuration settings in detail."
)
@click.argument("items", nargs=-1)
def config_explain_cmd(items=None):
    """Explain configuration settings in the schema."""

    if not items:
        items = _config_schema.as_dict().keys()
    for name in items:
        item = _config_schema.find_item(name)
        if item is None:
            click.echo(f"No information on {name}")
            continue
        click.echo(f"{ENV_PREFIX}{item.name}:")
        click.echo(
            textwrap.fill(
                item.help, initial_indent="    ", subsequent_indent="    "
            )
        )
        click.echo(f"    Default: {item.default}")
        if item.validate is not None and item.validate.__doc__:
            click.echo(f"    Constraints: {item.validate.__doc__}")


# eof #
