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
unit tests for the configuration values and the error classes
"""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from otpengine.lib.clock import UNIX_EPOCH
from otpengine.lib.crypto.utils import HmacAlgorithm
from otpengine.lib.error import (
    InvalidDigitCount,
    InvalidSecret,
    InvalidTimeStep,
    InvalidWindowSize,
    OtpEngineError,
    UnsupportedAlgorithmForMode,
)
from otpengine.lib.options import AlgorithmConfig, VerifierConfig


class TestAlgorithmConfig:
    def test_defaults(self):
        config = AlgorithmConfig()

        assert config.algorithm is HmacAlgorithm.SHA1
        assert config.digits == 6
        assert config.time_step == 30
        assert config.epoch == UNIX_EPOCH

    def test_normalization(self):
        config = AlgorithmConfig(
            algorithm="HMACSHA256", epoch=datetime(2020, 1, 1)
        )

        assert config.algorithm is HmacAlgorithm.SHA256
        assert config.epoch == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_aware_epoch_kept(self):
        cet = timezone(timedelta(hours=1))
        epoch = datetime(2020, 1, 1, 1, tzinfo=cet)

        assert AlgorithmConfig(epoch=epoch).epoch == datetime(
            2020, 1, 1, tzinfo=timezone.utc
        )

    def test_frozen(self):
        config = AlgorithmConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.digits = 8

    @pytest.mark.parametrize(
        "kwargs,error",
        [
            ({"digits": 5}, InvalidDigitCount),
            ({"digits": 11}, InvalidDigitCount),
            ({"digits": "6"}, InvalidDigitCount),
            ({"time_step": 0}, InvalidTimeStep),
            ({"time_step": -1}, InvalidTimeStep),
            ({"algorithm": "md5"}, UnsupportedAlgorithmForMode),
        ],
    )
    def test_invalid(self, kwargs, error):
        with pytest.raises(error):
            AlgorithmConfig(**kwargs)


class TestVerifierConfig:
    def test_defaults(self):
        config = VerifierConfig()

        assert config.past_steps == 2
        assert config.future_steps == 2
        assert config.counter_window_size == 10

    def test_zero_windows(self):
        config = VerifierConfig(0, 0, 0)
        assert (config.past_steps, config.future_steps) == (0, 0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"past_steps": -1},
            {"future_steps": -1},
            {"counter_window_size": -1},
            {"counter_window_size": 1.5},
            {"past_steps": True},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidWindowSize):
            VerifierConfig(**kwargs)


def test_error_format():
    exx = InvalidSecret("too short")

    assert isinstance(exx, OtpEngineError)
    assert exx.getId() == 901
    assert exx.getDescription() == "too short"
    assert str(exx) == "ERR901: too short"
    assert repr(exx) == "InvalidSecret(description='too short', id=901)"


def test_error_defaults():
    assert str(InvalidWindowSize()) == "ERR908: invalid verification window!"
    assert str(OtpEngineError(["x"], id=1)) == "ERR1: ['x']"
