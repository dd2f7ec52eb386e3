"""
pytest 配置和共享 fixtures

提供底盘模型、模拟底盘和跟踪命令的构造工具。
"""
import copy
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from ramsete_drive.config.default_config import DEFAULT_CONFIG
from ramsete_drive.core.data_types import Pose2D, WheelSpeeds
from ramsete_drive.core.kinematics import DifferentialDriveKinematics
from ramsete_drive.actuation.feedforward import SimpleMotorFeedforward
from ramsete_drive.mock.sim_drivetrain import SimulatedDrivetrain


@pytest.fixture
def config():
    """默认配置的深拷贝"""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def kinematics(config):
    return DifferentialDriveKinematics(config['drive']['track_width'])


@pytest.fixture
def feedforward(config):
    return SimpleMotorFeedforward.from_config(config)


@pytest.fixture
def make_sim(kinematics, feedforward):
    """模拟底盘工厂"""
    def _make(initial_pose=None, initial_speeds=None, max_voltage=None):
        return SimulatedDrivetrain(
            kinematics, feedforward,
            initial_pose=initial_pose or Pose2D(),
            initial_speeds=initial_speeds or WheelSpeeds(),
            max_voltage=max_voltage,
        )
    return _make
