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
immutable configuration values of the password generator and verifier
"""

from dataclasses import dataclass, field
from datetime import datetime

from otpengine.lib.clock import UNIX_EPOCH, as_utc, check_time_step
from otpengine.lib.crypto.utils import HmacAlgorithm
from otpengine.lib.error import InvalidWindowSize
from otpengine.lib.HMAC import check_digits


@dataclass(frozen=True)
class AlgorithmConfig:
    """
    the otp algorithm parameters

    :param algorithm: the hmac variant, a HmacAlgorithm or its description
    :param digits: number of password digits, 6 to 10
    :param time_step: time step size in seconds for time based passwords
    :param epoch: the start of the first time step
    """

    algorithm: HmacAlgorithm = HmacAlgorithm.SHA1
    digits: int = 6
    time_step: int = 30
    epoch: datetime = field(default=UNIX_EPOCH)

    def __post_init__(self):
        # frozen dataclass - normalize via object.__setattr__
        object.__setattr__(
            self, "algorithm", HmacAlgorithm.from_description(self.algorithm)
        )
        object.__setattr__(self, "epoch", as_utc(self.epoch))

        check_digits(self.digits)
        check_time_step(self.time_step)


@dataclass(frozen=True)
class VerifierConfig:
    """
    the synchronization windows of the verifier

    :param past_steps: time steps accepted behind the current one
    :param future_steps: time steps accepted ahead of the current one
    :param counter_window_size: number of counters searched from the floor
    """

    past_steps: int = 2
    future_steps: int = 2
    counter_window_size: int = 10

    def __post_init__(self):
        for name in ("past_steps", "future_steps", "counter_window_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidWindowSize("%s must be an integer" % name)
            if value < 0:
                raise InvalidWindowSize(
                    "%s must not be negative, got %d" % (name, value)
                )


# eof #
