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

"""Entry point for the otpengine CLI.

The `main()` function in this file is installed as a console entry point
in `setup.py`, so that the shell command `otpengine` calls that function.
"""

import logging
import sys

import click

from otpengine import __version__
from otpengine.cli.otp_cmd import hotp_cmd, secret_cmd, totp_cmd, verify_cmds
from otpengine.settings import (
    OtpEngineConfigKeyError,
    OtpEngineConfigValueError,
    config_cmds,
    init_logging,
    load_settings,
)


class Echo:
    """Echo class, which extends `click.echo()` to respect verbosity.

    The verbosity of the respective line is expressed by an additional
    parameter, `v` or `verbosity`.

    - 0 is used for results, error messages and warnings (always displayed)
    - 1 is used for informational messages  (seen with `-v`)
    - 2 is used for more detailed information (seen with `-vv`)

    If the verbosity level is set to `-1`, no messages will be output at
    all; this is used by the `--quiet` option.

    Unlike `click.echo()`, messages go to `stderr` by default. Use
    `err=False` to redirect them to `stdout` instead.
    """

    log_levels = {
        -1: "CRITICAL",  # -q
        0: None,  # default, taken from the settings
        1: "INFO",  # -v
        2: "DEBUG",  # -vv
    }

    def __init__(self, verbosity=0):
        self.verbosity = verbosity

    @property
    def log_level(self):
        return self.log_levels.get(self.verbosity, "DEBUG")

    def __call__(self, message, **kwargs):
        verbosity = kwargs.pop("v", kwargs.pop("verbosity", 0))
        if verbosity <= self.verbosity:
            err = kwargs.pop("err", True)
            click.echo(message, err=err, **kwargs)


# Main command group for the application. Here's where we end up when
# the user gives the `otpengine` command on the command line.


@click.version_option(version=__version__, message="otpengine %(version)s")
@click.group(name="otpengine")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help=(
        "Increase amount of output from the command "
        "(can be specified several times)."
    ),
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Don't generate any output at all (check exit code for the result).",
)
@click.pass_context
def main(ctx, verbose, quiet):
    echo = Echo(-1 if quiet else verbose)

    try:
        settings = load_settings()
    except (OtpEngineConfigValueError, OtpEngineConfigKeyError) as exx:
        click.echo("Failed to initialize configuration", err=True)
        click.echo(f"Error: {exx}", err=True)
        sys.exit(2)

    init_logging(settings, level=echo.log_level)
    logging.getLogger(__name__).debug("settings: %r", settings)

    ctx.obj = {"settings": settings, "echo": echo}


main.add_command(config_cmds)
main.add_command(secret_cmd)
main.add_command(hotp_cmd)
main.add_command(totp_cmd)
main.add_command(verify_cmds)


if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
