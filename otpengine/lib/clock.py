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
clock abstraction and the time / counter conversion of RFC 6238

   TOTP = HOTP(K, T) where T is an integer and represents the number of
   time steps between the initial counter time T0 and the current time:

       T = (Current Unix time - T0) / X

   - X represents the time step in seconds (default value X = 30
   seconds) and is a system parameter;

   - T0 is the Unix time to start counting time steps (default value is
   0, Unix epoch) and is also a system parameter;

   - The default floor function is used in the computation.  For
   example, with T0 = 0 and time step X = 30, T = 1 if the current Unix
   time is 59 seconds and T = 2 if the current Unix time is 60 seconds.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Protocol, Union

from otpengine.lib.error import InvalidEpochOrder, InvalidTimeStep

log = logging.getLogger(__name__)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """reads the current utc wall clock time"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self):
        return "SystemClock()"


class FixedClock:
    """always returns the same instant"""

    def __init__(self, instant: datetime):
        self.instant = as_utc(instant)

    def now(self) -> datetime:
        return self.instant

    def __repr__(self):
        return "FixedClock(%r)" % self.instant


class SteppedClock:
    """
    returns an instant which advances by `step` seconds on every call,
    starting with `start`
    """

    def __init__(self, start: datetime, step: int = 1):
        self.start = as_utc(start)
        self.step = step
        self._calls = 0

    def now(self) -> datetime:
        instant = self.start + timedelta(seconds=self._calls * self.step)
        self._calls += 1
        return instant


ClockLike = Union[Clock, datetime, Callable[[], datetime]]


def as_utc(instant: datetime) -> datetime:
    """naive datetimes are taken as utc"""

    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def read_clock(clock: ClockLike) -> datetime:
    """
    get the current instant from a clock like object

    A naive datetime, whether given directly or returned by the clock, is
    taken as utc. `datetime.now` returns naive local time, so pass
    `SystemClock()` or a callable returning aware datetimes instead.

    :param clock: a Clock, a callable returning a datetime or a datetime
    :return: timezone aware datetime
    """

    if isinstance(clock, datetime):
        instant = clock
    elif hasattr(clock, "now"):
        instant = clock.now()
    elif callable(clock):
        instant = clock()
    else:
        raise TypeError("unsupported clock %r" % (clock,))

    if instant.tzinfo is None:
        log.debug("taking naive time %s as utc", instant.isoformat())

    return as_utc(instant)


def check_time_step(time_step) -> int:
    if isinstance(time_step, bool) or not isinstance(time_step, int):
        raise InvalidTimeStep("The time step must be an integer.")

    if time_step < 1:
        raise InvalidTimeStep("The time step value must be a positive value.")

    return time_step


def time2counter(now: datetime, epoch: datetime, time_step: int) -> int:
    """
    calculate the number of whole time steps between epoch and now

    :raises InvalidEpochOrder: if now is before the epoch
    """

    now = as_utc(now)
    epoch = as_utc(epoch)

    if now < epoch:
        raise InvalidEpochOrder(
            "The time %s must not be before the epoch %s."
            % (now.isoformat(), epoch.isoformat())
        )

    return (now - epoch) // timedelta(seconds=check_time_step(time_step))


def counter2time(counter: int, epoch: datetime, time_step: int) -> datetime:
    """the instant at which the time step `counter` starts"""

    return as_utc(epoch) + timedelta(seconds=counter * time_step)


# eof #
