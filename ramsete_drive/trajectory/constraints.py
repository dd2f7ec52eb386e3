"""
轨迹约束

每个约束在路径采样点上给出:
- max_velocity: 允许的最大线速度 (幅值)
- min_max_acceleration: 在当前速度下允许的线加速度区间

时间参数化时对所有约束取交集。

差速底盘上，以线速度 v、曲率 κ 运动时两轮速度为:
    v_left  = v · (1 - κ·W/2)
    v_right = v · (1 + κ·W/2)
下文把 (1 ∓ κ·W/2) 称为轮速系数 f。
"""
from typing import Tuple
import math

from ..core.interfaces import ITrajectoryConstraint
from ..core.data_types import Pose2D
from ..core.kinematics import DifferentialDriveKinematics
from ..core.constants import EPSILON
from ..core.exceptions import ConfigValidationError
from ..actuation.feedforward import SimpleMotorFeedforward

INF = float('inf')


def _wheel_factors(kinematics: DifferentialDriveKinematics, curvature: float) -> Tuple[float, float]:
    """左右轮速度相对于底盘线速度的比例系数"""
    half = curvature * kinematics.track_width / 2.0
    return 1.0 - half, 1.0 + half


class DifferentialDriveVoltageConstraint(ITrajectoryConstraint):
    """
    差速底盘电压约束

    使用电机模型 V = kS·sign(v) + kV·v + kA·a 保证两轮所需电压都不超过 max_voltage:

    - 速度上限: 稳态下 (a = 0) 外侧轮电压不超过 max_voltage
          v <= (max_voltage - kS) / kV / max(|f_left|, |f_right|)
    - 加速度区间: 对每个轮子，
          -max_voltage <= kS·sign(v_w) + kV·v_w + kA·f·a <= max_voltage
      解出 a 的区间 (f < 0 时区间翻转，f ≈ 0 时该轮不约束加速度)，两轮取交集

    max_voltage 越小，所有采样点上的速度上限和加速度区间都只会收紧。
    """

    def __init__(self, feedforward: SimpleMotorFeedforward,
                 kinematics: DifferentialDriveKinematics, max_voltage: float):
        if max_voltage <= 0:
            raise ConfigValidationError(
                f"max_voltage must be > 0, got {max_voltage}",
                [('trajectory.max_voltage', 'must be > 0')])
        self.feedforward = feedforward
        self.kinematics = kinematics
        self.max_voltage = max_voltage

    def max_velocity(self, pose: Pose2D, curvature: float, velocity: float) -> float:
        headroom = self.max_voltage - self.feedforward.ks
        if headroom <= 0:
            return 0.0
        f_left, f_right = _wheel_factors(self.kinematics, curvature)
        return headroom / self.feedforward.kv / max(abs(f_left), abs(f_right))

    def min_max_acceleration(self, pose: Pose2D, curvature: float,
                             velocity: float) -> Tuple[float, float]:
        ff = self.feedforward
        if ff.ka <= 0:
            return -INF, INF

        min_accel, max_accel = -INF, INF
        for factor in _wheel_factors(self.kinematics, curvature):
            if abs(factor) < EPSILON:
                # 该轮静止，加速度对其电压无影响
                continue
            wheel_velocity = velocity * factor
            # 轮加速度 a_w = f·a 的可达区间
            wheel_max = ff.max_achievable_acceleration(self.max_voltage, wheel_velocity)
            wheel_min = ff.min_achievable_acceleration(self.max_voltage, wheel_velocity)
            if factor > 0:
                lo, hi = wheel_min / factor, wheel_max / factor
            else:
                lo, hi = wheel_max / factor, wheel_min / factor
            min_accel = max(min_accel, lo)
            max_accel = min(max_accel, hi)
        return min_accel, max_accel

    def __repr__(self) -> str:
        return f"DifferentialDriveVoltageConstraint(max_voltage={self.max_voltage})"


class DifferentialDriveKinematicsConstraint(ITrajectoryConstraint):
    """单轮最大速度约束"""

    def __init__(self, kinematics: DifferentialDriveKinematics, max_wheel_speed: float):
        if max_wheel_speed <= 0:
            raise ConfigValidationError(
                f"max_wheel_speed must be > 0, got {max_wheel_speed}",
                [('trajectory.max_wheel_speed', 'must be > 0')])
        self.kinematics = kinematics
        self.max_wheel_speed = max_wheel_speed

    def max_velocity(self, pose: Pose2D, curvature: float, velocity: float) -> float:
        f_left, f_right = _wheel_factors(self.kinematics, curvature)
        return self.max_wheel_speed / max(abs(f_left), abs(f_right))

    def min_max_acceleration(self, pose: Pose2D, curvature: float,
                             velocity: float) -> Tuple[float, float]:
        return -INF, INF


class CentripetalAccelerationConstraint(ITrajectoryConstraint):
    """向心加速度约束: v² · |κ| <= max_centripetal"""

    def __init__(self, max_centripetal: float):
        if max_centripetal <= 0:
            raise ConfigValidationError(
                f"max_centripetal must be > 0, got {max_centripetal}",
                [('trajectory.max_centripetal', 'must be > 0')])
        self.max_centripetal = max_centripetal

    def max_velocity(self, pose: Pose2D, curvature: float, velocity: float) -> float:
        if abs(curvature) < EPSILON:
            return INF
        return math.sqrt(self.max_centripetal / abs(curvature))

    def min_max_acceleration(self, pose: Pose2D, curvature: float,
                             velocity: float) -> Tuple[float, float]:
        return -INF, INF


__all__ = [
    'ITrajectoryConstraint',
    'DifferentialDriveVoltageConstraint',
    'DifferentialDriveKinematicsConstraint',
    'CentripetalAccelerationConstraint',
]
