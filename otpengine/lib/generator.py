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
the password generator for counter based (HOTP, RFC 4226) and time based
(TOTP, RFC 6238) one time passwords
"""

import logging
from datetime import datetime, timedelta

from otpengine.lib.clock import (
    ClockLike,
    SystemClock,
    check_time_step,
    read_clock,
    time2counter,
)
from otpengine.lib.crypto.utils import (
    HmacAlgorithm,
    encode_base32,
    get_secret_key,
    geturandom,
)
from otpengine.lib.error import InvalidSecretSize, UnsupportedAlgorithmForMode
from otpengine.lib.HMAC import HmacOtp, check_digits
from otpengine.lib.options import AlgorithmConfig

log = logging.getLogger(__name__)

# base32 encodes 5 bytes into 8 characters without padding
SECRET_SIZE_MULTIPLE = 5


class PasswordGenerator:
    """
    generate one time passwords from a shared secret

    The generator is immutable after construction and can be shared
    between threads. The clock is used for time based passwords if the
    caller does not provide one per call.
    """

    def __init__(
        self,
        config: AlgorithmConfig | None = None,
        clock: ClockLike | None = None,
    ):
        self._config = config if config is not None else AlgorithmConfig()
        self._clock = clock if clock is not None else SystemClock()

    def __repr__(self):
        return "PasswordGenerator(config=%r, clock=%r)" % (
            self._config,
            self._clock,
        )

    @property
    def config(self) -> AlgorithmConfig:
        return self._config

    @property
    def algorithm(self) -> HmacAlgorithm:
        return self._config.algorithm

    @property
    def digits(self) -> int:
        return self._config.digits

    @property
    def time_step(self) -> int:
        return self._config.time_step

    @property
    def epoch(self) -> datetime:
        return self._config.epoch

    @property
    def clock(self):
        return self._clock

    # ---------------------------------------------------------------------- --

    def generate_counter_password(
        self, secret, counter: int, digits: int | None = None
    ) -> str:
        """
        generate the counter based password (HOTP)

        :param secret: the shared secret as bytes or base32 text
        :param counter: the unsigned 64 bit counter
        :param digits: number of digits, defaults to the configured value

        :return: the password as zero padded decimal string
        :raises UnsupportedAlgorithmForMode: if not configured for sha1
        """

        if self.algorithm is not HmacAlgorithm.SHA1:
            raise UnsupportedAlgorithmForMode(
                "HMAC-SHA-1 is the only supported algorithm when generating "
                "counter based passwords (RFC 4226 section 5)."
            )

        return self._generate(secret, counter, digits)

    def generate_time_password(
        self,
        secret,
        clock: ClockLike | None = None,
        digits: int | None = None,
        time_step: int | None = None,
    ) -> str:
        """
        generate the time based password (TOTP)

        :param secret: the shared secret as bytes or base32 text
        :param clock: Clock, callable or datetime - defaults to the
                      generator clock. A naive datetime is taken as utc,
                      so pass aware datetimes rather than `datetime.now`
        :param digits: number of digits, defaults to the configured value
        :param time_step: time step in seconds, defaults to the configured
                          value

        :return: the password as zero padded decimal string
        """

        counter = self.time_counter(clock=clock, time_step=time_step)
        return self._generate(secret, counter, digits)

    def time_counter(
        self, clock: ClockLike | None = None, time_step: int | None = None
    ) -> int:
        """the counter of the time step the given instant falls into"""

        time_step = check_time_step(
            self.time_step if time_step is None else time_step
        )
        now = read_clock(self._clock if clock is None else clock)

        return time2counter(now, self.epoch, time_step)

    def seconds_remaining(self, clock: ClockLike | None = None) -> int:
        """seconds until the current time step is over"""

        now = read_clock(self._clock if clock is None else clock)
        counter = time2counter(now, self.epoch, self.time_step)

        step_end = self.epoch + timedelta(
            seconds=(counter + 1) * self.time_step
        )
        return int((step_end - now).total_seconds())

    def generate_secret(self, size: int = 20) -> str:
        """
        create a new random shared secret

        :param size: the secret size in bytes, a positive multiple of 5
        :return: the base32 encoded secret
        """

        if (
            isinstance(size, bool)
            or not isinstance(size, int)
            or size < SECRET_SIZE_MULTIPLE
            or size % SECRET_SIZE_MULTIPLE != 0
        ):
            raise InvalidSecretSize(
                "The size must be a multiple of 40 bits, due to base32 "
                "encoding requirements (RFC 4648 section 6)."
            )

        log.debug("generating secret of size %d", size)
        return encode_base32(geturandom(size))

    # ---------------------------------------------------------------------- --

    def _generate(self, secret, counter: int, digits: int | None) -> str:
        digits = check_digits(self.digits if digits is None else digits)
        key = get_secret_key(secret)

        hmac2Otp = HmacOtp(key, digits, self.algorithm.hashfunc)
        return hmac2Otp.generate(counter)


# eof #
