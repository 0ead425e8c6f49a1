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
Pytest fixtures for otpengine tests
"""

# pylint: disable=redefined-outer-name

from datetime import datetime, timezone

import pytest

from otpengine.lib.clock import FixedClock
from otpengine.lib.generator import PasswordGenerator
from otpengine.lib.options import AlgorithmConfig
from otpengine.lib.verifier import PasswordVerifier

# the shared secrets of the RFC 4226 and RFC 6238 test vectors
RFC_SECRET = b"12345678901234567890"
RFC_SECRET32 = b"12345678901234567890123456789012"
RFC_SECRET64 = (
    b"1234567890123456789012345678901234567890123456789012345678901234"
)


def unix_time(seconds) -> datetime:
    return datetime.fromtimestamp(seconds, timezone.utc)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "rfc_vectors: test against the published RFC test vectors"
    )


@pytest.fixture
def secret():
    return RFC_SECRET


@pytest.fixture
def generator():
    return PasswordGenerator()


@pytest.fixture
def verifier(generator):
    return PasswordVerifier(generator)


@pytest.fixture
def fixed_generator():
    """a generator whose clock stands at 2009-02-13 23:31:30 utc"""

    return PasswordGenerator(
        AlgorithmConfig(), clock=FixedClock(unix_time(1234567890))
    )
