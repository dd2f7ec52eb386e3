"""手动驾驶与原地转向命令测试"""
import math
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from ramsete_drive.core.data_types import Pose2D
from ramsete_drive.core.exceptions import ConfigurationError
from ramsete_drive.commands.manual_drive import (
    apply_deadband, shape_input, desaturate, ArcadeDriveCommand, TankDriveCommand,
)
from ramsete_drive.commands.turn_degrees import TurnDegreesCommand
from ramsete_drive.mock.sim_drivetrain import run_command


class Axis:
    """可修改的输入轴"""

    def __init__(self, value=0.0):
        self.value = value

    def __call__(self):
        return self.value


# =============================================================================
# 输入处理
# =============================================================================

def test_deadband():
    assert apply_deadband(0.01, 0.02) == 0.0
    assert apply_deadband(-0.02, 0.02) == 0.0
    assert apply_deadband(1.0, 0.02) == pytest.approx(1.0)
    assert apply_deadband(-0.51, 0.02) == pytest.approx(-0.5)
    assert apply_deadband(0.5, 0.0) == 0.5


def test_shape_input_squares_and_clamps():
    assert shape_input(0.5, square=True) == pytest.approx(0.25)
    assert shape_input(-0.5, square=True) == pytest.approx(-0.25)
    assert shape_input(1.7) == 1.0
    assert shape_input(-3.0, square=True) == -1.0


def test_desaturate_keeps_ratio():
    left, right = desaturate(1.5, 0.5)
    assert left == pytest.approx(1.0)
    assert right == pytest.approx(1.0 / 3.0)
    assert desaturate(0.4, -0.6) == (0.4, -0.6)


# =============================================================================
# Arcade
# =============================================================================

def test_arcade_forward_and_rotation(make_sim):
    """测试 arcade: 旋转为正时顺时针 (左轮快)"""
    sim = make_sim()
    speed, rotation = Axis(0.5), Axis(0.0)
    command = ArcadeDriveCommand(sim, speed, rotation, max_voltage=10.0,
                                 deadband=0.0, square_inputs=False)
    assert command.calculate() == (pytest.approx(5.0), pytest.approx(5.0))

    rotation.value = 0.25
    left, right = command.calculate()
    assert left == pytest.approx(7.5)
    assert right == pytest.approx(2.5)

    speed.value, rotation.value = 1.0, 1.0
    left, right = command.calculate()
    assert left == pytest.approx(10.0)
    assert right == pytest.approx(0.0)
    print("✓ test_arcade_forward_and_rotation passed")


def test_arcade_lifecycle_stops_once(make_sim):
    sim = make_sim()
    command = ArcadeDriveCommand(sim, Axis(1.0), Axis(0.0))

    command.execute()
    assert sim.volt_history == []

    command.initialize()
    for _ in range(5):
        command.execute()
    assert not command.is_finished()
    assert len(sim.volt_history) == 5
    assert sim.volt_history[0] == (pytest.approx(10.0), pytest.approx(10.0))

    command.end(True)
    command.end(True)
    assert command.stop_count == 1
    assert sim.volt_history[-1] == (0.0, 0.0)
    assert len(sim.volt_history) == 6


def test_arcade_from_config(make_sim, config):
    config['manual_drive']['arcade']['rotation_scale'] = 0.5
    command = ArcadeDriveCommand.from_config(make_sim(), Axis(), Axis(), config)
    assert command.rotation_scale == 0.5
    assert command.max_voltage == config['drive']['max_voltage']
    assert command.deadband == config['manual_drive']['deadband']


# =============================================================================
# Tank 与预设
# =============================================================================

def test_tank_drive(make_sim):
    sim = make_sim()
    command = TankDriveCommand(sim, Axis(0.5), Axis(-0.25), max_voltage=8.0,
                               deadband=0.0, square_inputs=False)
    left, right = command.calculate()
    assert left == pytest.approx(4.0)
    assert right == pytest.approx(-2.0)


@pytest.mark.parametrize('preset,expected', [
    ('start', (-9.0, 0.0)),
    ('back', (0.0, 6.0)),
])
def test_tank_presets_drive_one_side(make_sim, config, preset, expected):
    """测试预设 start/back 只驱动单侧轮子"""
    sim = make_sim()
    command = TankDriveCommand.from_config(sim, Axis(1.0), Axis(1.0), config, preset=preset)
    assert command.name == f"TankDrive[{preset}]"
    command.initialize()
    command.execute()
    left, right = sim.volt_history[-1]
    assert left == pytest.approx(expected[0])
    assert right == pytest.approx(expected[1])


def test_tank_unknown_preset(make_sim, config):
    with pytest.raises(ConfigurationError):
        TankDriveCommand.from_config(make_sim(), Axis(), Axis(), config, preset='missing')


def test_tank_rejects_arcade_preset(make_sim, config):
    config['manual_drive']['presets']['slow'] = {'mode': 'arcade', 'speed_scale': 0.5}
    with pytest.raises(ConfigurationError):
        TankDriveCommand.from_config(make_sim(), Axis(), Axis(), config, preset='slow')


# =============================================================================
# 原地转向
# =============================================================================

@pytest.mark.parametrize('degrees', [90.0, -90.0, 270.0])
def test_turn_degrees_on_sim(make_sim, degrees):
    """测试原地转向: 方向正确，超过 180° 也能正确累计"""
    sim = make_sim()
    command = TurnDegreesCommand(sim, degrees, speed=0.5, max_voltage=10.0, tolerance=0.02)

    ticks = run_command(command, sim)

    assert ticks > 0
    target = math.radians(degrees)
    assert abs(command.turned) >= abs(target) - 0.02
    assert math.copysign(1, command.turned) == math.copysign(1, target)
    first_left, first_right = sim.volt_history[0]
    assert first_right == pytest.approx(math.copysign(5.0, target))
    assert first_left == pytest.approx(-first_right)
    assert command.stop_count == 1
    assert sim.volt_history[-1] == (0.0, 0.0)
    print(f"✓ test_turn_degrees_on_sim passed ({degrees})")


def test_turn_in_wrong_direction_does_not_finish(make_sim):
    """测试反方向转过目标角度不算完成"""
    sim = make_sim()
    command = TurnDegreesCommand(sim, 90.0, tolerance=0.02)
    command.initialize()

    sim.reset_odometry(Pose2D(0.0, 0.0, -math.pi / 2))
    command.execute()
    assert command.turned == pytest.approx(-math.pi / 2)
    assert not command.is_finished()

    # 回到起点后继续逆时针转 90°
    for heading in (0.0, math.pi / 2):
        sim.reset_odometry(Pose2D(0.0, 0.0, heading))
        command.execute()
    assert command.turned == pytest.approx(math.pi / 2)
    assert command.is_finished()


def test_turn_zero_degrees_finishes_immediately(make_sim):
    sim = make_sim()
    command = TurnDegreesCommand(sim, 0.0)
    command.initialize()
    assert command.is_finished()


def test_turn_from_config(make_sim, config):
    config['turn']['speed'] = 0.3
    command = TurnDegreesCommand.from_config(make_sim(), 45.0, config)
    assert command.speed == 0.3
    assert command.target == pytest.approx(math.pi / 4)
    assert command.name == "TurnDegrees(+45)"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
