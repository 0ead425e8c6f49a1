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

"""otpengine commands to create secrets, generate and verify passwords

Secrets on the command line are base32 text. The verify commands exit
with status 0 if the password matched and 1 if it did not; invalid
input results in exit status 2.
"""

import functools
import logging

import click

from otpengine.lib.clock import FixedClock
from otpengine.lib.error import OtpEngineError
from otpengine.lib.generator import PasswordGenerator
from otpengine.lib.verifier import PasswordVerifier
from otpengine.settings import (
    OtpEngineConfigKeyError,
    OtpEngineConfigValueError,
    algorithm_config,
    get_schema,
    to_datetime,
    verifier_config,
)

log = logging.getLogger(__name__)

EXIT_NOT_VERIFIED = 1


class OtpCommandError(click.ClickException):
    exit_code = 2


def handle_errors(func):
    """turn configuration and input errors into an OtpCommandError"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (
            OtpEngineError,
            OtpEngineConfigValueError,
            OtpEngineConfigKeyError,
        ) as exx:
            log.debug("command failed: %r", exx)
            raise OtpCommandError(str(exx)) from exx

    return wrapper


def apply_overrides(settings, **overrides):
    """a copy of the settings with the given command line overrides"""

    schema = get_schema()
    result = dict(settings)
    for name, value in overrides.items():
        if value is not None:
            result[name] = schema.check_item(name, value)
    return result


def make_generator(settings, at=None):
    clock = None
    if at is not None:
        try:
            clock = FixedClock(to_datetime(at))
        except (ValueError, OverflowError, OSError) as exx:
            raise OtpEngineConfigValueError(
                f"--at: cannot read {at!r} as a point in time"
            ) from exx

    return PasswordGenerator(algorithm_config(settings), clock=clock)


at_option = click.option(
    "--at",
    default=None,
    help="Use this time (ISO 8601 or unix seconds) instead of the clock.",
)
digits_option = click.option(
    "--digits", "-d", type=int, default=None, help="Number of digits."
)
algorithm_option = click.option(
    "--algorithm",
    "-a",
    default=None,
    help="HMAC algorithm: sha1, sha256 or sha512.",
)


@click.command("secret", help="Create a new random base32 shared secret.")
@click.option(
    "--size",
    "-s",
    type=int,
    default=20,
    show_default=True,
    help="Secret size in bytes, a multiple of 5.",
)
@click.pass_obj
@handle_errors
def secret_cmd(obj, size):
    generator = PasswordGenerator(algorithm_config(obj["settings"]))
    obj["echo"](generator.generate_secret(size), err=False)


@click.command("hotp", help="Generate the counter based password.")
@click.argument("secret")
@click.argument("counter", type=int)
@digits_option
@click.pass_obj
@handle_errors
def hotp_cmd(obj, secret, counter, digits):
    settings = apply_overrides(obj["settings"], DIGITS=digits)
    generator = make_generator(settings)

    obj["echo"](generator.generate_counter_password(secret, counter), err=False)


@click.command("totp", help="Generate the time based password.")
@click.argument("secret")
@digits_option
@algorithm_option
@click.option(
    "--time-step", "-t", type=int, default=None, help="Time step in seconds."
)
@at_option
@click.pass_obj
@handle_errors
def totp_cmd(obj, secret, digits, algorithm, time_step, at):
    settings = apply_overrides(
        obj["settings"], DIGITS=digits, ALGORITHM=algorithm, TIME_STEP=time_step
    )
    generator = make_generator(settings, at)

    echo = obj["echo"]
    echo(generator.generate_time_password(secret), err=False)
    echo(f"valid for {generator.seconds_remaining()} seconds", v=1)


@click.group("verify", help="Verify a one time password.")
def verify_cmds():
    pass


@verify_cmds.command("hotp", help="Verify a counter based password.")
@click.argument("password")
@click.argument("secret")
@click.argument("counter", type=int)
@digits_option
@click.option(
    "--window",
    "-w",
    type=int,
    default=None,
    help="Number of counters to search, starting with COUNTER.",
)
@click.pass_obj
@handle_errors
def verify_hotp_cmd(obj, password, secret, counter, digits, window):
    settings = apply_overrides(
        obj["settings"], DIGITS=digits, COUNTER_WINDOW_SIZE=window
    )
    verifier = PasswordVerifier(
        make_generator(settings), verifier_config(settings)
    )

    result = verifier.verify_counter_password(password, secret, counter)

    echo = obj["echo"]
    if not result.matched:
        echo("not verified", err=False)
        raise SystemExit(EXIT_NOT_VERIFIED)

    echo(f"verified at counter {result.value}", err=False)
    echo(f"next counter: {result.next_counter}", v=1)


@verify_cmds.command("totp", help="Verify a time based password.")
@click.argument("password")
@click.argument("secret")
@digits_option
@algorithm_option
@click.option(
    "--past", type=int, default=None, help="Accepted past time steps."
)
@click.option(
    "--future", type=int, default=None, help="Accepted future time steps."
)
@at_option
@click.pass_obj
@handle_errors
def verify_totp_cmd(obj, password, secret, digits, algorithm, past, future, at):
    settings = apply_overrides(
        obj["settings"],
        DIGITS=digits,
        ALGORITHM=algorithm,
        PAST_STEPS=past,
        FUTURE_STEPS=future,
    )
    verifier = PasswordVerifier(
        make_generator(settings, at), verifier_config(settings)
    )

    result = verifier.verify_time_password(password, secret)

    echo = obj["echo"]
    if not result.matched:
        echo("not verified", err=False)
        raise SystemExit(EXIT_NOT_VERIFIED)

    echo(f"verified with time step drift {result.value:+d}", err=False)
