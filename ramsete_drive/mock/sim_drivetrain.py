"""
模拟底盘

用线性电机模型模拟差速底盘，实现 IDrivetrain，用于测试和离线调参。

电机模型 (每个轮子):
    V = kS · sign(v) + kV · v + kA · dv/dt

对速度做隐式欧拉离散:
    V = kS · sign(v') + kV · v' + kA · (v' - v) / dt
    => v' = (V + kA·v/dt - kS·sign(·)) / (kV + kA/dt)
    其中 |V + kA·v/dt| <= kS 时静摩擦使轮子停止 (v' = 0)

模型参数与前馈一致时，前馈电压恰好使轮速在一个周期内到达目标轮速。

典型使用 (tick 顺序: 先推进仿真，再执行命令):
    sim = SimulatedDrivetrain(kinematics, feedforward)
    command.initialize()
    while not command.is_finished():
        sim.step(period)
        command.execute()
"""
from typing import List, Optional, Tuple
import logging

import numpy as np

from ..core.interfaces import IDrivetrain, ICommand
from ..core.data_types import Pose2D, WheelSpeeds
from ..core.kinematics import DifferentialDriveKinematics
from ..actuation.feedforward import SimpleMotorFeedforward

logger = logging.getLogger(__name__)


class SimulatedDrivetrain(IDrivetrain):
    """
    模拟差速底盘

    Attributes:
        volt_history: 每次 tank_drive_volts() 的 (left, right)
        reset_history: 每次 reset_odometry() 的位姿
    """

    def __init__(self, kinematics: DifferentialDriveKinematics,
                 feedforward: SimpleMotorFeedforward,
                 initial_pose: Optional[Pose2D] = None,
                 initial_speeds: Optional[WheelSpeeds] = None,
                 max_voltage: Optional[float] = None):
        """
        Args:
            kinematics: 运动学模型
            feedforward: 电机模型参数 (kS, kV, kA)
            initial_pose: 初始真实位姿
            initial_speeds: 初始轮速，收到第一条电压命令之前保持不变
            max_voltage: 电压饱和值，None 表示不饱和
        """
        self.kinematics = kinematics
        self.motor = feedforward
        self.max_voltage = max_voltage
        self._pose = initial_pose or Pose2D()
        self._speeds = initial_speeds or WheelSpeeds()
        self._volts: Optional[Tuple[float, float]] = None
        self._time = 0.0

        self.volt_history: List[Tuple[float, float]] = []
        self.reset_history: List[Pose2D] = []

    # ==================== IDrivetrain ====================

    def get_pose(self) -> Pose2D:
        return self._pose

    def get_wheel_speeds(self) -> WheelSpeeds:
        return self._speeds

    def tank_drive_volts(self, left: float, right: float) -> None:
        if self.max_voltage is not None:
            left = float(np.clip(left, -self.max_voltage, self.max_voltage))
            right = float(np.clip(right, -self.max_voltage, self.max_voltage))
        self._volts = (left, right)
        self.volt_history.append((left, right))

    def reset_odometry(self, pose: Pose2D) -> None:
        self._pose = pose
        self.reset_history.append(pose)

    # ==================== 仿真 ====================

    @property
    def time(self) -> float:
        return self._time

    @property
    def stop_commands(self) -> int:
        """零电压命令的次数"""
        return sum(1 for left, right in self.volt_history if left == 0.0 and right == 0.0)

    def _wheel_step(self, volts: float, velocity: float, dt: float) -> float:
        ks, kv, ka = self.motor.ks, self.motor.kv, self.motor.ka
        driving = volts + ka * velocity / dt
        if abs(driving) <= ks:
            return 0.0
        return (driving - ks * np.sign(driving)) / (kv + ka / dt)

    def step(self, dt: float) -> Pose2D:
        """
        推进仿真 dt 秒

        已收到电压命令时先更新轮速，再以新轮速积分真实位姿。

        Returns:
            新的真实位姿
        """
        if self._volts is not None:
            left_volts, right_volts = self._volts
            self._speeds = WheelSpeeds(
                left=float(self._wheel_step(left_volts, self._speeds.left, dt)),
                right=float(self._wheel_step(right_volts, self._speeds.right, dt)),
            )

        chassis = self.kinematics.to_chassis_speeds(self._speeds)
        self._pose = self._pose.exp(chassis.linear * dt, 0.0, chassis.angular * dt)
        self._time += dt
        return self._pose


def run_command(command: ICommand, drivetrain: SimulatedDrivetrain,
                period: float = 0.02, max_ticks: int = 10000) -> int:
    """
    在模拟底盘上运行命令直到结束

    Args:
        command: 要运行的命令
        drivetrain: 模拟底盘
        period: 控制周期 (秒)
        max_ticks: 最大周期数，超过时以 interrupted=True 结束命令

    Returns:
        execute() 的调用次数
    """
    command.initialize()
    ticks = 0
    while not command.is_finished():
        if ticks >= max_ticks:
            logger.warning(f"{command!r} did not finish within {max_ticks} ticks")
            command.end(True)
            return ticks
        drivetrain.step(period)
        command.execute()
        ticks += 1
    command.end(False)
    return ticks
