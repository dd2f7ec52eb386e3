"""差速驱动里程计"""
from typing import Optional
import logging

from ..core.data_types import Pose2D, WheelSpeeds, OdometryState
from ..core.kinematics import DifferentialDriveKinematics
from ..core.constants import angle_difference, normalize_angle
from ..core.exceptions import InvalidTimeOrderError
from ..core.logging_config import ThrottledLogger

logger = logging.getLogger(__name__)


class DifferentialDriveOdometry:
    """差速驱动里程计

    根据左右轮速度积分 field 坐标系下的位姿。

    每次 update() 把 [last_update_time, time] 内的运动视为恒定曲率圆弧，
    用 Pose2D.exp 闭式积分。静止时位姿精确不变。

    航向来源:
    - 默认由左右轮速差计算角速度
    - update() 传入 heading (陀螺仪读数) 时，本周期转角取陀螺仪航向与当前航向之差
    - 陀螺仪读数与 field 航向之间相差一个偏置 offset = pose.heading - gyro，
      在构造和 reset() 时确定；reset() 未给出读数时沿用最近一次读数

    时间顺序:
    - time <= last_update_time 属于调用方的编程错误
    - strict_time_order=True 时抛出 InvalidTimeOrderError
    - 否则记录节流警告，本次更新为 no-op

    线程安全性:
    - 不是线程安全的，由当前活动命令在单一控制线程中独占
    """

    def __init__(self, kinematics: DifferentialDriveKinematics,
                 initial_pose: Optional[Pose2D] = None,
                 strict_time_order: bool = False,
                 warn_interval: float = 5.0,
                 initial_gyro_heading: float = 0.0):
        self.kinematics = kinematics
        self.strict_time_order = strict_time_order
        self._state = OdometryState(pose=initial_pose or Pose2D(), last_update_time=0.0)
        self._update_count = 0
        self._throttled = ThrottledLogger(logger, min_interval=warn_interval)
        self._last_gyro_heading = float(initial_gyro_heading)
        self._gyro_offset = self._state.pose.heading - self._last_gyro_heading

    @classmethod
    def from_config(cls, config: dict, kinematics: DifferentialDriveKinematics,
                    initial_pose: Optional[Pose2D] = None) -> 'DifferentialDriveOdometry':
        odom_config = config.get('odometry', {})
        return cls(
            kinematics,
            initial_pose=initial_pose,
            strict_time_order=odom_config.get('strict_time_order', False),
            warn_interval=odom_config.get('warn_interval', 5.0),
        )

    @property
    def pose(self) -> Pose2D:
        return self._state.pose

    @property
    def state(self) -> OdometryState:
        return self._state

    @property
    def last_update_time(self) -> float:
        return self._state.last_update_time

    @property
    def update_count(self) -> int:
        """自上次 reset() 以来成功积分的次数"""
        return self._update_count

    def reset(self, pose: Pose2D, time: float = 0.0,
              gyro_heading: Optional[float] = None) -> None:
        """
        无条件覆盖位姿和时间基准

        Args:
            pose: 新位姿
            time: 新时间基准 (秒)
            gyro_heading: 此刻的陀螺仪读数 (rad)，None 表示沿用最近一次读数
        """
        if gyro_heading is not None:
            self._last_gyro_heading = float(gyro_heading)
        self._gyro_offset = pose.heading - self._last_gyro_heading
        self._state = OdometryState(pose=pose, last_update_time=float(time))
        self._update_count = 0
        logger.debug(f"Odometry reset to ({pose.x:.3f}, {pose.y:.3f}, {pose.heading:.3f}) at t={time:.3f}")

    def update(self, time: float, wheel_speeds: WheelSpeeds,
               heading: Optional[float] = None) -> Pose2D:
        """
        积分一个时间步

        Args:
            time: 当前时间 (秒)，必须大于上次更新时间
            wheel_speeds: 实测左右轮速度
            heading: 可选的陀螺仪读数 (rad)，加上偏置后作为 field 航向

        Returns:
            更新后的位姿

        Raises:
            InvalidTimeOrderError: strict 模式下 time <= last_update_time
        """
        last_time = self._state.last_update_time
        if time <= last_time:
            if self.strict_time_order:
                raise InvalidTimeOrderError(time, last_time)
            self._throttled.warning(
                f"Odometry update ignored: time {time:.6f}s is not after {last_time:.6f}s",
                key='time_order')
            return self._state.pose

        dt = time - last_time
        chassis = self.kinematics.to_chassis_speeds(wheel_speeds)
        pose = self._state.pose

        if heading is not None:
            self._last_gyro_heading = float(heading)
            field_heading = normalize_angle(heading + self._gyro_offset)
            dtheta = angle_difference(field_heading, pose.heading)
        else:
            dtheta = chassis.angular * dt

        new_pose = pose.exp(chassis.linear * dt, 0.0, dtheta)
        if heading is not None:
            # 以陀螺仪航向为准，消除 exp 中的舍入
            new_pose = Pose2D(new_pose.x, new_pose.y, field_heading)

        self._state.pose = new_pose
        self._state.last_update_time = float(time)
        self._update_count += 1
        return new_pose
