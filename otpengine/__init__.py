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
otpengine - generation and verification of one time passwords

Counter based passwords follow HOTP (RFC 4226), time based passwords
follow TOTP (RFC 6238):

    >>> from otpengine import PasswordGenerator, PasswordVerifier
    >>> generator = PasswordGenerator()
    >>> secret = generator.generate_secret()
    >>> otp = generator.generate_time_password(secret)
    >>> PasswordVerifier(generator).verify_time_password(otp, secret).matched
    True

The verifier is stateless: for counter based passwords the caller stores
the counter following the matching one as the floor of the next check.
"""

__version__ = "1.0.0"

from otpengine.lib.clock import Clock, FixedClock, SteppedClock, SystemClock
from otpengine.lib.crypto.utils import HmacAlgorithm, decode_base32, encode_base32
from otpengine.lib.error import (
    InvalidCounter,
    InvalidDigitCount,
    InvalidEpochOrder,
    InvalidSecret,
    InvalidSecretSize,
    InvalidTimeStep,
    InvalidWindowSize,
    OtpEngineError,
    UnsupportedAlgorithmForMode,
)
from otpengine.lib.generator import PasswordGenerator
from otpengine.lib.options import AlgorithmConfig, VerifierConfig
from otpengine.lib.verifier import PasswordVerifier, VerificationResult
