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
crypto helpers: hash algorithm registry, random source and the base32
secret codec
"""

import base64
import binascii
import logging
import secrets
from enum import Enum
from hashlib import sha1, sha256, sha512

from otpengine.lib.error import InvalidSecret, UnsupportedAlgorithmForMode

log = logging.getLogger(__name__)

# minimum shared secret length as demanded by RFC 4226 section 4
MIN_SECRET_LENGTH = 16


class HmacAlgorithm(Enum):
    """The hmac variants supported for otp calculation."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def hashfunc(self):
        return Hashlib_map[self.value]

    @classmethod
    def from_description(cls, description) -> "HmacAlgorithm":
        """
        get the algorithm from its literal description

        accepts the member itself, 'sha256', 'SHA256' or 'HMACSHA256'

        :raises UnsupportedAlgorithmForMode: for unknown descriptions
        """

        if isinstance(description, cls):
            return description

        if not isinstance(description, str):
            raise UnsupportedAlgorithmForMode(
                "unsupported hmac algorithm %r" % (description,)
            )

        name = description.strip().lower().replace("-", "")
        if name.startswith("hmac"):
            name = name[len("hmac") :]

        try:
            return cls(name)
        except ValueError as exx:
            raise UnsupportedAlgorithmForMode(
                "unsupported hmac algorithm %r" % description
            ) from exx


Hashlib_map = {
    "sha1": sha1,
    "sha256": sha256,
    "sha512": sha512,
}


def geturandom(len=20):
    """
    get random bytes from a cryptographically secure source

    :param len: len of the returned bytes - default is 20 bytes
    :return: buffer of bytes
    """

    return secrets.token_bytes(len)


def encode_base32(data: bytes) -> str:
    """encode bytes as base32 text without padding (RFC 4648 section 6)"""

    return base64.b32encode(data).decode("ascii").rstrip("=")


def decode_base32(text: str) -> bytes:
    """
    decode base32 text into bytes

    the text is handled case insensitive, spaces are ignored and the
    padding might be omitted

    :raises binascii.Error: if the text is not valid base32
    """

    normalized = "".join(text.split()).upper().rstrip("=")
    normalized += "=" * (-len(normalized) % 8)

    return base64.b32decode(normalized)


def get_secret_key(secret) -> bytes:
    """
    convert the shared secret into the hmac key

    :param secret: raw bytes or base32 text
    :return: the key bytes
    :raises InvalidSecret: if the secret is missing, not decodable or
                           shorter than 128 bit
    """

    if secret is None:
        raise InvalidSecret("the shared secret is missing")

    if isinstance(secret, str):
        try:
            key = decode_base32(secret)
        except (binascii.Error, ValueError) as exx:
            raise InvalidSecret(
                "the shared secret is not valid base32 text"
            ) from exx

    elif isinstance(secret, (bytes, bytearray, memoryview)):
        key = bytes(secret)

    else:
        raise InvalidSecret(
            "unsupported shared secret type %r" % type(secret).__name__
        )

    if len(key) < MIN_SECRET_LENGTH:
        log.warning("rejecting shared secret of %d bytes", len(key))
        raise InvalidSecret(
            "The length of the shared secret must be at least 128 bits "
            "(RFC 4226 section 4)."
        )

    return key


# eof #
