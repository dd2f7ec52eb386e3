"""Ramsete 非线性跟踪控制器

控制律:
    e = desired.pose 在 current 局部坐标系下的表示  (eX, eY, eθ)
    v_d = desired.velocity
    ω_d = v_d · desired.curvature
    k   = 2ζ · sqrt(ω_d² + b · v_d²)

    v = v_d · cos(eθ) + k · eX
    ω = ω_d + k · eθ + b · v_d · sinc(eθ) · eY

误差坐标系:
    误差表示在当前位姿 (机体) 的局部坐标系中，即 desired.pose.relative_to(current)。
    这与 Ramsete 原始推导一致，而不是在期望位姿的局部坐标系中表示
    (current.relative_to(desired) 取反)。两种表示的 eθ 相同，(eX, eY) 相差一个
    eθ 的旋转，eθ = 0 时两者一致。

误差为零时输出精确等于前馈 (v_d, ω_d)。
控制律无状态 (除最近一次误差用于 at_reference)，不会抛出异常。
"""
from typing import Dict, Any
import math

from ..core.data_types import Pose2D, ChassisSpeeds, TrajectoryState, RamseteGains
from ..core.constants import sinc


class RamseteController:
    """Ramsete 控制器"""

    def __init__(self, b: float = 2.0, zeta: float = 0.7, enabled: bool = True):
        """
        Args:
            b: 收敛激进程度，b > 0
            zeta: 阻尼比，0 < zeta < 1
            enabled: False 时只输出前馈

        Raises:
            ConfigValidationError: b 或 zeta 超出范围
        """
        self.gains = RamseteGains(b=b, zeta=zeta)
        self.enabled = enabled
        self._pose_error = Pose2D()
        self._pose_tolerance = Pose2D()
        self._has_error = False

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'RamseteController':
        ramsete_config = config.get('ramsete', config)
        controller = cls(
            b=ramsete_config.get('b', 2.0),
            zeta=ramsete_config.get('zeta', 0.7),
            enabled=ramsete_config.get('enabled', True),
        )
        tolerance = ramsete_config.get('pose_tolerance')
        if tolerance:
            controller.set_tolerance(Pose2D(
                tolerance.get('x', 0.0), tolerance.get('y', 0.0), tolerance.get('heading', 0.0)))
        return controller

    @property
    def b(self) -> float:
        return self.gains.b

    @property
    def zeta(self) -> float:
        return self.gains.zeta

    @property
    def pose_error(self) -> Pose2D:
        """最近一次 calculate() 的误差 (current 局部坐标系)"""
        return self._pose_error

    def set_tolerance(self, pose_tolerance: Pose2D) -> None:
        self._pose_tolerance = pose_tolerance

    def at_reference(self) -> bool:
        """最近一次误差是否在容差内"""
        if not self._has_error:
            return False
        error = self._pose_error
        tolerance = self._pose_tolerance
        return (abs(error.x) < tolerance.x and abs(error.y) < tolerance.y
                and abs(error.heading) < tolerance.heading)

    def calculate_from_reference(self, current: Pose2D, pose_ref: Pose2D,
                                 linear_ref: float, angular_ref: float) -> ChassisSpeeds:
        """
        根据参考位姿和参考速度计算底盘速度

        Args:
            current: 当前位姿 (field)
            pose_ref: 参考位姿 (field)
            linear_ref: 参考线速度 v_d (m/s)
            angular_ref: 参考角速度 ω_d (rad/s)
        """
        self._pose_error = pose_ref.relative_to(current)
        self._has_error = True

        if not self.enabled:
            return ChassisSpeeds(linear_ref, angular_ref)

        e_x = self._pose_error.x
        e_y = self._pose_error.y
        e_theta = self._pose_error.heading
        b = self.gains.b

        k = 2.0 * self.gains.zeta * math.sqrt(angular_ref ** 2 + b * linear_ref ** 2)
        return ChassisSpeeds(
            linear=linear_ref * math.cos(e_theta) + k * e_x,
            angular=angular_ref + k * e_theta + b * linear_ref * sinc(e_theta) * e_y,
        )

    def calculate(self, current: Pose2D, desired: TrajectoryState) -> ChassisSpeeds:
        """根据期望轨迹状态计算底盘速度"""
        return self.calculate_from_reference(
            current, desired.pose, desired.velocity, desired.angular_velocity)

    def reset(self) -> None:
        self._pose_error = Pose2D()
        self._has_error = False

    def __repr__(self) -> str:
        return f"RamseteController(b={self.b}, zeta={self.zeta}, enabled={self.enabled})"
