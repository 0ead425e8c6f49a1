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

"""definition of the otpengine error classes"""

import logging

log = logging.getLogger(__name__)


class OtpEngineError(Exception):
    def __init__(self, description="OtpEngineError!", id=10):
        self.id = id
        self.message = description
        Exception.__init__(self, description)

    def getId(self):
        return self.id

    def getDescription(self):
        return self.message

    def __str__(self):
        pstr = "ERR%d: %r"
        if isinstance(self.message, str):
            pstr = "ERR%d: %s"
        return pstr % (self.id, self.message)

    def __repr__(self):
        return "%s(description=%r, id=%d)" % (
            type(self).__name__,
            self.message,
            self.id,
        )


class InvalidSecret(OtpEngineError):
    def __init__(self, description="invalid shared secret!", id=901):
        OtpEngineError.__init__(self, description=description, id=id)


class InvalidDigitCount(OtpEngineError):
    def __init__(self, description="invalid number of digits!", id=902):
        OtpEngineError.__init__(self, description=description, id=id)


class InvalidTimeStep(OtpEngineError):
    def __init__(self, description="invalid time step!", id=903):
        OtpEngineError.__init__(self, description=description, id=id)


class InvalidEpochOrder(OtpEngineError):
    def __init__(self, description="time precedes the epoch!", id=904):
        OtpEngineError.__init__(self, description=description, id=id)


class UnsupportedAlgorithmForMode(OtpEngineError):
    def __init__(self, description="unsupported hmac algorithm!", id=905):
        OtpEngineError.__init__(self, description=description, id=id)


class InvalidSecretSize(OtpEngineError):
    def __init__(self, description="invalid secret size!", id=906):
        OtpEngineError.__init__(self, description=description, id=id)


class InvalidCounter(OtpEngineError):
    def __init__(self, description="invalid counter value!", id=907):
        OtpEngineError.__init__(self, description=description, id=id)


class InvalidWindowSize(OtpEngineError):
    def __init__(self, description="invalid verification window!", id=908):
        OtpEngineError.__init__(self, description=description, id=id)


# eof #
