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
unit tests for the crypto helpers
"""

import base64
from hashlib import sha1, sha256, sha512

import pytest

from otpengine.lib.crypto.utils import (
    MIN_SECRET_LENGTH,
    HmacAlgorithm,
    decode_base32,
    encode_base32,
    get_secret_key,
    geturandom,
)
from otpengine.lib.error import InvalidSecret, UnsupportedAlgorithmForMode


class TestHmacAlgorithm:
    @pytest.mark.parametrize(
        "description,expected",
        [
            ("sha1", HmacAlgorithm.SHA1),
            ("SHA256", HmacAlgorithm.SHA256),
            ("HMACSHA512", HmacAlgorithm.SHA512),
            ("hmac-sha256", HmacAlgorithm.SHA256),
            (" sha1 ", HmacAlgorithm.SHA1),
            (HmacAlgorithm.SHA512, HmacAlgorithm.SHA512),
        ],
    )
    def test_from_description(self, description, expected):
        assert HmacAlgorithm.from_description(description) is expected

    @pytest.mark.parametrize("description", ["md5", "sha384", "", None, 1])
    def test_from_description_unsupported(self, description):
        with pytest.raises(UnsupportedAlgorithmForMode):
            HmacAlgorithm.from_description(description)

    def test_hashfunc(self):
        assert HmacAlgorithm.SHA1.hashfunc is sha1
        assert HmacAlgorithm.SHA256.hashfunc is sha256
        assert HmacAlgorithm.SHA512.hashfunc is sha512


class TestBase32:
    def test_round_trip(self):
        # every length covers all padding variants
        for length in range(0, 41):
            data = geturandom(length)
            text = encode_base32(data)

            assert "=" not in text
            assert decode_base32(text) == data

    def test_encode_rfc4648(self):
        assert encode_base32(b"") == ""
        assert encode_base32(b"f") == "MY"
        assert encode_base32(b"foob") == "MZXW6YQ"
        assert encode_base32(b"foobar") == "MZXW6YTBOI"

    @pytest.mark.parametrize(
        "text",
        ["MZXW6YTBOI", "MZXW6YTBOI======", "mzxw6ytboi", "MZXW 6YTB OI"],
    )
    def test_decode_lenient(self, text):
        assert decode_base32(text) == b"foobar"

    def test_decode_matches_stdlib(self):
        data = b"12345678901234567890"
        assert decode_base32(base64.b32encode(data).decode()) == data

    def test_decode_invalid(self):
        with pytest.raises(ValueError):
            decode_base32("not base32!")


class TestSecretKey:
    def test_bytes(self):
        key = b"12345678901234567890"

        assert get_secret_key(key) == key
        assert get_secret_key(bytearray(key)) == key
        assert get_secret_key(memoryview(key)) == key

    def test_base32_text(self):
        assert (
            get_secret_key("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
            == b"12345678901234567890"
        )

    def test_minimum_length(self):
        assert get_secret_key(b"x" * MIN_SECRET_LENGTH)

        with pytest.raises(InvalidSecret):
            get_secret_key(b"x" * (MIN_SECRET_LENGTH - 1))

        # 10 bytes of base32 text
        with pytest.raises(InvalidSecret):
            get_secret_key("GEZDGNBVGY3TQOJQ")

    @pytest.mark.parametrize("secret", [None, "", "!!!!", 12345, ["a"]])
    def test_invalid(self, secret):
        with pytest.raises(InvalidSecret):
            get_secret_key(secret)


def test_geturandom():
    assert len(geturandom()) == 20
    assert len(geturandom(32)) == 32
    assert geturandom(20) != geturandom(20)
