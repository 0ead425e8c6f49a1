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
the password verifier - searches a synchronization window of counters or
time steps for a matching one time password
"""

import hmac
import logging
from datetime import timedelta
from typing import NamedTuple

from otpengine.lib.clock import ClockLike, read_clock
from otpengine.lib.HMAC import MAX_COUNTER, check_counter
from otpengine.lib.generator import PasswordGenerator
from otpengine.lib.options import VerifierConfig

log = logging.getLogger(__name__)


class VerificationResult(NamedTuple):
    """
    outcome of a verification

    `value` is the matching counter for counter based passwords (or the
    unchanged counter floor if nothing matched) and the signed time step
    drift for time based passwords (0 if nothing matched)
    """

    matched: bool
    value: int

    @property
    def next_counter(self) -> int:
        """the counter floor to store after a counter based match"""
        return self.value + 1


def _compare_otp(password, expected: str) -> bool:
    if not isinstance(password, str):
        return False
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


class PasswordVerifier:
    def __init__(
        self,
        generator: PasswordGenerator,
        config: VerifierConfig | None = None,
    ):
        if generator is None:
            raise TypeError("a PasswordGenerator is required")

        self._generator = generator
        self._config = config if config is not None else VerifierConfig()

    def __repr__(self):
        return "PasswordVerifier(generator=%r, config=%r)" % (
            self._generator,
            self._config,
        )

    @property
    def generator(self) -> PasswordGenerator:
        return self._generator

    @property
    def config(self) -> VerifierConfig:
        return self._config

    @property
    def past_steps(self) -> int:
        return self._config.past_steps

    @property
    def future_steps(self) -> int:
        return self._config.future_steps

    @property
    def counter_window_size(self) -> int:
        return self._config.counter_window_size

    def verify_counter_password(
        self, password, secret, counter: int, digits: int | None = None
    ) -> VerificationResult:
        """
        verify a counter based password

        The counters [counter, counter + window size) are checked in
        increasing order - a counter below the floor never matches, so a
        password can't be replayed once the caller has stored the new
        floor.

        :param password: the password entered by the user
        :param secret: the shared secret as bytes or base32 text
        :param counter: the counter floor, the next expected counter
        :param digits: number of digits, defaults to the configured value

        :return: VerificationResult with the matching counter or the
                 unchanged floor
        """

        check_counter(counter)

        end = min(counter + self.counter_window_size, MAX_COUNTER + 1)

        for current in range(counter, end):
            otp = self._generator.generate_counter_password(
                secret, current, digits
            )

            if _compare_otp(password, otp):
                log.debug(
                    "counter based password matched at counter %d "
                    "(floor %d)",
                    current,
                    counter,
                )
                return VerificationResult(True, current)

        log.info(
            "counter based password not verified in window [%d, %d)",
            counter,
            end,
        )
        return VerificationResult(False, counter)

    def verify_time_password(
        self,
        password,
        secret,
        clock: ClockLike | None = None,
        digits: int | None = None,
    ) -> VerificationResult:
        """
        verify a time based password

        The time step offsets from -past_steps to +future_steps are
        checked in ascending order, the first match wins.

        Offsets that land before the epoch have no password and are
        skipped, they do not raise. Only a current time before the epoch
        raises InvalidEpochOrder.

        :param password: the password entered by the user
        :param secret: the shared secret as bytes or base32 text
        :param clock: Clock, callable or datetime - defaults to the
                      generator clock, naive datetimes are taken as utc
        :param digits: number of digits, defaults to the configured value

        :return: VerificationResult with the signed time step drift
        """

        generator = self._generator
        now = read_clock(generator.clock if clock is None else clock)

        # raises InvalidEpochOrder for a current time before the epoch
        generator.time_counter(clock=now)

        time_step = generator.time_step

        for drift in range(-self.past_steps, self.future_steps + 1):
            shifted = now + timedelta(seconds=drift * time_step)

            # there are no passwords before the epoch
            if shifted < generator.epoch:
                continue

            otp = generator.generate_time_password(
                secret, clock=shifted, digits=digits
            )

            if _compare_otp(password, otp):
                log.debug("time based password matched with drift %d", drift)
                return VerificationResult(True, drift)

        log.info(
            "time based password not verified in window [-%d, +%d]",
            self.past_steps,
            self.future_steps,
        )
        return VerificationResult(False, 0)


# eof #
