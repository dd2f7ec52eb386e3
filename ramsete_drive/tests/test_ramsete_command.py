"""
Ramsete 跟踪命令测试

验证:
1. D 秒的轨迹在周期 p 下恰好执行 ceil(D / p) 个周期
2. 每次运行只下发一次停止命令 (正常结束、取消、打断、无轨迹)
3. 取消后里程计不再更新
4. 在模型一致的模拟底盘上从偏离位姿出发能收敛到轨迹终点
"""
import copy
import math
import threading
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from ramsete_drive.config.default_config import DEFAULT_CONFIG
from ramsete_drive.core.data_types import Pose2D, WheelSpeeds
from ramsete_drive.core.enums import CommandState
from ramsete_drive.core.kinematics import DifferentialDriveKinematics
from ramsete_drive.estimator.odometry import DifferentialDriveOdometry
from ramsete_drive.tracker.ramsete import RamseteController
from ramsete_drive.actuation.wheel_controller import WheelVoltageController
from ramsete_drive.commands.ramsete_command import RamseteCommand
from ramsete_drive.mock.sim_drivetrain import run_command
from ramsete_drive.mock.test_data_generator import create_test_trajectory


def _make_command(trajectory, drivetrain, period=0.02, reset_odometry_on_start=True,
                  odometry=None):
    config = copy.deepcopy(DEFAULT_CONFIG)
    config['system']['tick_period'] = period
    kinematics = DifferentialDriveKinematics(config['drive']['track_width'])
    if odometry is None:
        odometry = DifferentialDriveOdometry(kinematics, strict_time_order=True)
    return RamseteCommand(
        trajectory,
        drivetrain,
        odometry,
        RamseteController.from_config(config),
        kinematics,
        WheelVoltageController.from_config(config),
        period=period,
        reset_odometry_on_start=reset_odometry_on_start,
    )


# =============================================================================
# 周期数与停止命令
# =============================================================================

@pytest.mark.parametrize('duration,period,expected_ticks', [
    (2.0, 0.02, 100),
    (1.05, 0.1, 11),
    (0.5, 0.02, 25),
    (0.0, 0.02, 0),
])
def test_tick_count_and_single_stop(make_sim, duration, period, expected_ticks):
    """测试周期数为 ceil(D / p)，结束时恰好停止一次"""
    trajectory = create_test_trajectory('straight', duration=duration, dt=0.05, speed=0.5)
    sim = make_sim(initial_speeds=WheelSpeeds(0.5, 0.5))
    command = _make_command(trajectory, sim, period=period)

    ticks = run_command(command, sim, period=period)

    assert ticks == expected_ticks
    assert ticks == math.ceil(duration / period - 1e-9)
    assert command.ticks == expected_ticks
    assert command.state == CommandState.FINISHED
    assert command.stop_count == 1
    assert sim.volt_history[-1] == (0.0, 0.0)
    assert len(sim.volt_history) == expected_ticks + 1
    print(f"✓ test_tick_count_and_single_stop passed ({duration}s @ {period}s)")


def test_final_tick_output_reports_stop(make_sim):
    trajectory = create_test_trajectory('straight', duration=0.1, dt=0.02, speed=0.5)
    sim = make_sim()
    command = _make_command(trajectory, sim)
    command.initialize()

    outputs = []
    while not command.is_finished():
        sim.step(0.02)
        outputs.append(command.step())

    assert [o.stopped for o in outputs] == [False] * 4 + [True]
    assert outputs[-1].state == CommandState.FINISHED
    assert outputs[-1].desired is trajectory[-1]
    assert command.last_output is outputs[-1]


def test_execute_after_finish_is_noop(make_sim):
    trajectory = create_test_trajectory('straight', duration=0.2, dt=0.02, speed=0.5)
    sim = make_sim()
    command = _make_command(trajectory, sim)
    run_command(command, sim)
    volts = list(sim.volt_history)

    for _ in range(5):
        sim.step(0.02)
        command.execute()
    command.end(False)
    command.end(True)

    assert sim.volt_history == volts
    assert command.stop_count == 1
    assert command.state == CommandState.FINISHED


# =============================================================================
# 取消与打断
# =============================================================================

def test_cancel_mid_trajectory(make_sim):
    """测试 1.0s 时取消: 下一周期进入 CANCELLED，停止一次，里程计不再更新"""
    trajectory = create_test_trajectory('straight', duration=2.0, dt=0.02, speed=0.5)
    sim = make_sim(initial_speeds=WheelSpeeds(0.5, 0.5))
    command = _make_command(trajectory, sim)
    command.initialize()

    for _ in range(50):
        sim.step(0.02)
        command.execute()
    assert command.elapsed == pytest.approx(1.0)
    updates = command.odometry.update_count
    pose = command.odometry.pose

    assert command.cancel()
    assert command.state == CommandState.TRACKING

    sim.step(0.02)
    command.execute()
    assert command.state == CommandState.CANCELLED
    assert command.is_finished()
    assert command.stop_count == 1
    assert sim.volt_history[-1] == (0.0, 0.0)
    assert command.odometry.update_count == updates
    assert command.odometry.pose == pose
    assert command.ticks == 50

    # 终止后的所有调用均无作用
    for _ in range(3):
        sim.step(0.02)
        command.execute()
    command.end(True)
    assert command.stop_count == 1
    assert not command.cancel()
    print("✓ test_cancel_mid_trajectory passed")


def test_cancel_from_another_thread(make_sim):
    trajectory = create_test_trajectory('straight', duration=2.0, dt=0.02, speed=0.5)
    sim = make_sim()
    command = _make_command(trajectory, sim)
    command.initialize()
    sim.step(0.02)
    command.execute()

    results = []
    worker = threading.Thread(target=lambda: results.append(command.cancel()))
    worker.start()
    worker.join()

    assert results == [True]
    sim.step(0.02)
    command.execute()
    assert command.state == CommandState.CANCELLED
    assert command.stop_count == 1


def test_cancel_before_initialize_is_ignored(make_sim):
    trajectory = create_test_trajectory('straight', duration=1.0)
    command = _make_command(trajectory, make_sim())
    assert not command.cancel()
    assert command.state == CommandState.IDLE


def test_end_interrupted_while_tracking(make_sim):
    trajectory = create_test_trajectory('straight', duration=2.0, dt=0.02, speed=0.5)
    sim = make_sim()
    command = _make_command(trajectory, sim)
    command.initialize()
    for _ in range(10):
        sim.step(0.02)
        command.execute()

    command.end(True)
    assert command.state == CommandState.CANCELLED
    assert command.stop_count == 1
    assert sim.volt_history[-1] == (0.0, 0.0)

    command.end(False)
    assert command.state == CommandState.CANCELLED
    assert command.stop_count == 1


def test_end_before_initialize_sends_nothing(make_sim):
    sim = make_sim()
    command = _make_command(create_test_trajectory('straight'), sim)
    command.end(True)
    assert sim.volt_history == []
    assert command.state == CommandState.IDLE


# =============================================================================
# 无轨迹
# =============================================================================

def test_missing_trajectory_finishes_immediately(make_sim):
    """测试轨迹不可用时 initialize() 直接结束并停止一次"""
    sim = make_sim()
    command = _make_command(None, sim)

    ticks = run_command(command, sim)

    assert ticks == 0
    assert command.state == CommandState.FINISHED
    assert command.stop_count == 1
    assert sim.volt_history == [(0.0, 0.0)]
    assert command.odometry.update_count == 0


# =============================================================================
# 重复运行与里程计
# =============================================================================

def test_reinitialize_starts_a_new_run(make_sim):
    trajectory = create_test_trajectory('straight', duration=0.4, dt=0.02, speed=0.5)
    sim = make_sim()
    command = _make_command(trajectory, sim)

    assert run_command(command, sim) == 20
    assert run_command(command, sim) == 20
    assert command.stop_count == 1
    assert sim.stop_commands == 2
    assert sim.reset_history == [trajectory.initial_pose, trajectory.initial_pose]


def test_reset_odometry_on_start(make_sim):
    start = Pose2D(1.0, 2.0, 0.5)
    trajectory = create_test_trajectory('straight', duration=1.0, start=start)
    sim = make_sim()
    command = _make_command(trajectory, sim)
    command.initialize()
    assert command.odometry.pose.as_tuple() == pytest.approx(start.as_tuple())
    assert sim.get_pose().as_tuple() == pytest.approx(start.as_tuple())


def test_keep_odometry_when_reset_disabled(make_sim, kinematics):
    odometry = DifferentialDriveOdometry(kinematics, initial_pose=Pose2D(-0.3, 0.1, 0.2))
    trajectory = create_test_trajectory('straight', duration=1.0)
    sim = make_sim(initial_pose=Pose2D(-0.3, 0.1, 0.2))
    command = _make_command(trajectory, sim, reset_odometry_on_start=False, odometry=odometry)
    command.initialize()
    assert odometry.pose == Pose2D(-0.3, 0.1, 0.2)
    assert odometry.last_update_time == 0.0
    assert sim.reset_history == []


# =============================================================================
# 端到端
# =============================================================================

def test_on_model_tracking_from_offset_start(make_sim, kinematics):
    """
    测试端到端收敛

    模拟底盘参数与前馈一致，机器人从轨迹起点后方 0.1m 出发，
    2 秒后应到达轨迹终点附近。
    """
    trajectory = create_test_trajectory('straight', duration=2.0, dt=0.02, speed=1.0)
    start = Pose2D(-0.1, 0.0, 0.0)
    sim = make_sim(initial_pose=start, initial_speeds=WheelSpeeds(1.0, 1.0))
    odometry = DifferentialDriveOdometry(kinematics, initial_pose=start, strict_time_order=True)
    command = _make_command(trajectory, sim, reset_odometry_on_start=False, odometry=odometry)

    ticks = run_command(command, sim)

    assert ticks == 100
    final = trajectory.final_pose
    assert sim.get_pose().distance_to(final) < 0.02
    assert abs(sim.get_pose().heading - final.heading) < 0.02
    assert odometry.pose.distance_to(sim.get_pose()) < 1e-6
    assert command.stop_count == 1
    print("✓ test_on_model_tracking_from_offset_start passed")


def test_on_model_tracking_arc(make_sim):
    """测试在模型一致的底盘上跟踪圆弧"""
    trajectory = create_test_trajectory('arc', duration=2.0, dt=0.02, speed=0.5, radius=0.5)
    sim = make_sim(initial_speeds=WheelSpeeds(
        0.5 * (1 - 0.142072613 / 2 / 0.5), 0.5 * (1 + 0.142072613 / 2 / 0.5)))
    command = _make_command(trajectory, sim)

    run_command(command, sim)

    assert sim.get_pose().distance_to(trajectory.final_pose) < 0.02


def test_from_config(make_sim, config):
    trajectory = create_test_trajectory('straight', duration=0.2)
    sim = make_sim()
    command = RamseteCommand.from_config(trajectory, sim, config, name='Auto')
    assert command.name == 'Auto'
    assert command.period == config['system']['tick_period']
    assert repr(command) == 'Auto()'
    assert run_command(command, sim) == 10


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
