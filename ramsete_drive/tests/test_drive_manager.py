"""
底盘管理器测试

验证:
1. 调度: 新命令打断旧命令，旧命令停止一次
2. 默认命令在没有其他命令时运行
3. 轨迹文件缺失时命令立即结束
4. 生成轨迹并在模拟底盘上跟踪
5. 手动驾驶预设
"""
import logging
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from ramsete_drive.core.data_types import Pose2D
from ramsete_drive.core.enums import CommandState
from ramsete_drive.core.exceptions import (
    ConfigurationError, ConfigValidationError, InfeasiblePathError,
)
from ramsete_drive.commands.base import Command, SequentialCommand
from ramsete_drive.commands.autonomous import DriveDistanceCommand, DriveTimeCommand
from ramsete_drive.commands.manual_drive import ArcadeDriveCommand, TankDriveCommand
from ramsete_drive.manager.drive_manager import DriveManager
from ramsete_drive.trajectory.io import resolve_path_file, save_trajectory
from ramsete_drive.mock.test_data_generator import create_test_trajectory


class Axis:
    def __init__(self, value=0.0):
        self.value = value

    def __call__(self):
        return self.value


def _run_until_idle(manager, sim, max_ticks=2000):
    ticks = 0
    while manager.active_command is not None and ticks < max_ticks:
        sim.step(manager.period)
        manager.tick()
        ticks += 1
    return ticks


def test_rejects_invalid_config(make_sim):
    with pytest.raises(ConfigValidationError):
        DriveManager(make_sim(), {'ramsete': {'zeta': 1.5}})


def test_partial_config_is_merged(make_sim):
    manager = DriveManager(make_sim(), {'ramsete': {'b': 2.5}})
    assert manager.config['ramsete']['b'] == 2.5
    assert manager.config['ramsete']['zeta'] == 0.7
    assert manager.period == 0.02


# =============================================================================
# 调度
# =============================================================================

def test_schedule_interrupts_previous(make_sim):
    """测试新命令打断旧命令，旧命令停止一次"""
    sim = make_sim()
    manager = DriveManager(sim)
    arcade = manager.arcade_drive_command(Axis(0.5), Axis(0.0))
    manager.schedule(arcade)
    manager.tick()
    assert manager.active_command is arcade
    assert sim.volt_history[-1] != (0.0, 0.0)

    turn = manager.turn_command(90.0)
    manager.schedule(turn)
    assert manager.active_command is turn
    assert arcade.stop_count == 1
    assert sim.volt_history[-1] == (0.0, 0.0)

    # 重复调度同一个命令不会重新初始化
    manager.tick()
    history = len(sim.volt_history)
    manager.schedule(turn)
    assert manager.active_command is turn
    assert len(sim.volt_history) == history
    print("✓ test_schedule_interrupts_previous passed")


def test_default_command_resumes(make_sim):
    """测试默认命令在其他命令结束后恢复"""
    sim = make_sim()
    manager = DriveManager(sim)
    default = manager.arcade_drive_command(Axis(0.0), Axis(0.0))
    manager.set_default_command(default)

    assert manager.tick() is default
    assert manager.active_command is default

    turn = manager.turn_command(45.0)
    manager.schedule(turn)
    assert default.stop_count == 1

    _run_until_idle(manager, sim)
    assert turn.is_finished()
    assert turn.stop_count == 1

    assert manager.tick() is default
    assert default.stop_count == 0


def test_log_level_from_config(make_sim):
    package_logger = logging.getLogger('ramsete_drive')
    previous = package_logger.level
    try:
        DriveManager(make_sim(), {'system': {'log_level': 'debug'}})
        assert package_logger.level == logging.DEBUG
        DriveManager(make_sim())
        assert package_logger.level == logging.INFO
    finally:
        package_logger.setLevel(previous)


def test_tick_without_commands(make_sim):
    manager = DriveManager(make_sim())
    assert manager.tick() is None
    assert manager.tick_count == 1


def test_cancel_active(make_sim):
    sim = make_sim()
    manager = DriveManager(sim)
    command = manager.create_ramsete_command(create_test_trajectory('straight', duration=1.0, speed=0.5))
    manager.schedule(command)
    manager.tick()
    manager.cancel()
    assert manager.active_command is None
    assert command.state == CommandState.CANCELLED
    assert command.stop_count == 1


def test_rejects_command_for_other_drivetrain(make_sim):
    manager = DriveManager(make_sim())
    other = Command(requirements=(make_sim(),))
    with pytest.raises(ConfigurationError):
        manager.schedule(other)
    with pytest.raises(ConfigurationError):
        manager.set_default_command(other)


# =============================================================================
# 轨迹命令
# =============================================================================

def test_missing_path_file_finishes_immediately(make_sim, tmp_path):
    """测试轨迹文件缺失: 命令立即结束，只停止一次"""
    sim = make_sim()
    manager = DriveManager(sim, {'trajectory': {'deploy_dir': str(tmp_path)}})
    command = manager.create_path_command('startTeleopPath')
    assert command.name == 'Ramsete[startTeleopPath]'
    assert command.trajectory is None

    manager.schedule(command)
    assert command.is_finished()
    manager.tick()

    assert manager.active_command is None
    assert command.ticks == 0
    assert sim.volt_history == [(0.0, 0.0)]
    print("✓ test_missing_path_file_finishes_immediately passed")


def test_path_file_command_runs(make_sim, tmp_path):
    trajectory = create_test_trajectory('straight', duration=1.0, dt=0.02, speed=0.5)
    save_trajectory(trajectory, resolve_path_file(str(tmp_path), 'forward'))
    sim = make_sim()
    manager = DriveManager(sim, {'trajectory': {'deploy_dir': str(tmp_path)}})

    command = manager.create_path_command('forward')
    manager.schedule(command)
    ticks = _run_until_idle(manager, sim)

    assert ticks == 50
    assert command.state == CommandState.FINISHED
    assert command.stop_count == 1


def test_generated_command_tracks_on_sim(make_sim):
    """测试生成的 S 形轨迹在模拟底盘上跟踪到终点"""
    sim = make_sim()
    manager = DriveManager(sim)
    end = Pose2D(1.5, 0.0, 0.0)
    command = manager.create_generated_command(Pose2D(), [(0.5, 0.25), (1.0, -0.25)], end)
    manager.schedule(command)

    _run_until_idle(manager, sim)

    assert command.state == CommandState.FINISHED
    assert command.ticks > 0
    assert sim.get_pose().distance_to(end) < 0.05
    assert manager.odometry.pose.distance_to(sim.get_pose()) < 0.01
    print("✓ test_generated_command_tracks_on_sim passed")


def test_generated_reversed_command(make_sim):
    sim = make_sim(initial_pose=Pose2D(1.0, 0.0, 0.0))
    manager = DriveManager(sim)
    command = manager.create_generated_command(
        Pose2D(1.0, 0.0, 0.0), [], Pose2D(0.0, 0.0, 0.0), reversed=True)
    assert all(s.velocity <= 0 for s in command.trajectory)

    manager.schedule(command)
    _run_until_idle(manager, sim)
    assert sim.get_pose().distance_to(Pose2D(0.0, 0.0, 0.0)) < 0.05


def test_infeasible_generated_command(make_sim):
    """测试电压约束无法满足时不创建命令"""
    manager = DriveManager(make_sim(), {'trajectory': {'max_voltage': 0.5}}, validate=False)
    with pytest.raises(InfeasiblePathError):
        manager.create_generated_command(Pose2D(), [(0.5, 0.25)], Pose2D(1.0, 0.0, 0.0))
    assert manager.active_command is None


# =============================================================================
# 自动例程
# =============================================================================

def test_autonomous_time_routine(make_sim):
    sim = make_sim()
    manager = DriveManager(sim)
    routine = manager.autonomous_routine('time')
    assert isinstance(routine, SequentialCommand)
    assert routine.name == 'AutonomousTime'

    manager.schedule(routine)
    ticks = _run_until_idle(manager, sim)

    assert ticks == 330
    assert routine.is_finished()
    assert sim.stop_commands == 4


def test_autonomous_routine_interrupted_by_manual_drive(make_sim):
    """测试手动驾驶打断自动例程，当前子命令停止一次"""
    sim = make_sim()
    manager = DriveManager(sim)
    routine = manager.autonomous_routine('distance')
    manager.schedule(routine)
    for _ in range(3):
        sim.step(manager.period)
        manager.tick()

    manager.schedule(manager.arcade_drive_command(Axis(0.0), Axis(0.0)))
    assert routine.is_finished()
    assert routine.commands[0].stop_count == 1
    assert sim.stop_commands == 1


def test_unknown_autonomous_routine(make_sim):
    manager = DriveManager(make_sim())
    with pytest.raises(ConfigurationError):
        manager.autonomous_routine('chooser')


def test_open_loop_command_factories(make_sim):
    manager = DriveManager(make_sim(), {'autonomous': {'distance_tolerance': 0.01}})
    distance = manager.drive_distance_command(-0.5, 0.3)
    assert isinstance(distance, DriveDistanceCommand)
    assert distance.tolerance == 0.01
    timed = manager.drive_time_command(0.4, 1.0, rotation=0.2)
    assert isinstance(timed, DriveTimeCommand)
    assert timed.period == manager.period
    assert timed.rotation == 0.2


# =============================================================================
# 预设
# =============================================================================

def test_tank_preset(make_sim):
    sim = make_sim()
    manager = DriveManager(sim)
    command = manager.preset_command('back', Axis(1.0), Axis(1.0))
    assert isinstance(command, TankDriveCommand)
    manager.schedule(command)
    manager.tick()
    left, right = sim.volt_history[-1]
    assert left == 0.0
    assert right == pytest.approx(6.0)


def test_arcade_preset(make_sim):
    config = {'manual_drive': {'presets': {
        'slow': {'mode': 'arcade', 'speed_scale': 0.5, 'rotation_scale': 0.25},
    }}}
    manager = DriveManager(make_sim(), config)
    command = manager.preset_command('slow', Axis(), Axis())
    assert isinstance(command, ArcadeDriveCommand)
    assert command.name == 'ArcadeDrive[slow]'
    assert command.speed_scale == 0.5
    assert command.rotation_scale == 0.25
    # 合并后原有预设仍然可用
    assert 'start' in manager.config['manual_drive']['presets']


def test_unknown_preset(make_sim):
    manager = DriveManager(make_sim())
    with pytest.raises(ConfigurationError):
        manager.preset_command('missing', Axis(), Axis())


def test_preset_with_unknown_mode(make_sim):
    config = {'manual_drive': {'presets': {'odd': {'mode': 'swerve'}}}}
    manager = DriveManager(make_sim(), config, validate=False)
    with pytest.raises(ConfigurationError):
        manager.preset_command('odd', Axis(), Axis())


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
