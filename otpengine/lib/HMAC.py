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
HMAC-OTP (RFC 4226)
"""

import hmac
import logging
import struct
from hashlib import sha1

from otpengine.lib.error import InvalidCounter, InvalidDigitCount

log = logging.getLogger(__name__)

MIN_DIGITS = 6
MAX_DIGITS = 10

# the truncated value is a 31 bit unsigned int, so 10 digits is the most
# a password can carry
DIGITS_MODULO = {digits: 10**digits for digits in range(MIN_DIGITS, MAX_DIGITS + 1)}

MAX_COUNTER = 2**64 - 1


def check_digits(digits) -> int:
    """
    verify that the number of password digits is in the range [6, 10]

    :raises InvalidDigitCount: if not
    """

    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidDigitCount("The number of digits must be an integer.")

    if digits < MIN_DIGITS:
        raise InvalidDigitCount(
            "The password value must be at least a %d-digit value "
            "(RFC 4226 section 4)." % MIN_DIGITS
        )

    if digits > MAX_DIGITS:
        raise InvalidDigitCount(
            "The password value is at most a %d-digit value." % MAX_DIGITS
        )

    return digits


def check_counter(counter) -> int:
    """
    verify that the counter is an unsigned 64 bit value

    :raises InvalidCounter: if not
    """

    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidCounter("The counter must be an integer.")

    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidCounter(
            "The counter %d is outside the unsigned 64 bit range." % counter
        )

    return counter


class HmacOtp:
    def __init__(self, key: bytes, digits: int = 6, hashfunc=sha1):
        self.key = key
        self.digits = check_digits(digits)
        self.hashfunc = hashfunc

    def hmac(self, counter: int) -> bytes:
        data_input = struct.pack(">Q", check_counter(counter))
        return hmac.new(self.key, data_input, self.hashfunc).digest()

    def truncate(self, digest: bytes) -> int:
        offset = digest[-1] & 0x0F

        binary = (digest[offset + 0] & 0x7F) << 24
        binary |= (digest[offset + 1] & 0xFF) << 16
        binary |= (digest[offset + 2] & 0xFF) << 8
        binary |= digest[offset + 3] & 0xFF

        return binary % DIGITS_MODULO[self.digits]

    def generate(self, counter: int) -> str:
        otp = str(self.truncate(self.hmac(counter)))

        # fill in the leading zeros

        return otp.rjust(self.digits, "0")


# eof##########################################################################
