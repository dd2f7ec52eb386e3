"""轨迹生成参数"""
from typing import Dict, Any, List, Optional
import logging

from ..core.interfaces import ITrajectoryConstraint
from ..core.kinematics import DifferentialDriveKinematics
from ..core.exceptions import ConfigValidationError
from ..actuation.feedforward import SimpleMotorFeedforward
from .constraints import (
    DifferentialDriveVoltageConstraint,
    DifferentialDriveKinematicsConstraint,
    CentripetalAccelerationConstraint,
)

logger = logging.getLogger(__name__)


class TrajectoryConfig:
    """
    轨迹生成参数

    Attributes:
        max_velocity: 全局速度上限 (m/s)
        max_acceleration: 全局加速度上限 (m/s²)
        start_velocity: 起点速度幅值 (m/s)
        end_velocity: 终点速度幅值 (m/s)
        reversed: True 表示倒车行驶整条路径
        constraints: 附加约束列表
        sample_spacing: 路径采样间距 (m)
    """

    def __init__(self, max_velocity: float, max_acceleration: float,
                 start_velocity: float = 0.0, end_velocity: float = 0.0,
                 reversed: bool = False,
                 constraints: Optional[List[ITrajectoryConstraint]] = None,
                 sample_spacing: float = 0.01):
        if max_velocity <= 0 or max_acceleration <= 0:
            raise ConfigValidationError(
                f"max_velocity and max_acceleration must be > 0, "
                f"got {max_velocity}, {max_acceleration}")
        if sample_spacing <= 0:
            raise ConfigValidationError(f"sample_spacing must be > 0, got {sample_spacing}")
        self.max_velocity = max_velocity
        self.max_acceleration = max_acceleration
        self.start_velocity = start_velocity
        self.end_velocity = end_velocity
        self.reversed = reversed
        self.constraints: List[ITrajectoryConstraint] = list(constraints or [])
        self.sample_spacing = sample_spacing

    def add_constraint(self, constraint: ITrajectoryConstraint) -> 'TrajectoryConfig':
        self.constraints.append(constraint)
        return self

    def add_constraints(self, constraints: List[ITrajectoryConstraint]) -> 'TrajectoryConfig':
        self.constraints.extend(constraints)
        return self

    def set_kinematics(self, kinematics: DifferentialDriveKinematics) -> 'TrajectoryConfig':
        """添加单轮速度约束，上限取 max_velocity"""
        self.constraints.append(DifferentialDriveKinematicsConstraint(kinematics, self.max_velocity))
        return self

    def set_reversed(self, reversed: bool) -> 'TrajectoryConfig':
        self.reversed = reversed
        return self

    @classmethod
    def from_config(cls, config: Dict[str, Any],
                    kinematics: DifferentialDriveKinematics,
                    feedforward: SimpleMotorFeedforward,
                    reversed: bool = False) -> 'TrajectoryConfig':
        """
        从配置字典创建，并按配置添加约束

        - 电压约束总是启用 (trajectory.max_voltage)
        - trajectory.max_centripetal 非 None 时添加向心加速度约束
        - trajectory.max_wheel_speed 非 None 时添加单轮速度约束
        """
        traj = config.get('trajectory', {})
        result = cls(
            max_velocity=traj.get('max_velocity', 0.8),
            max_acceleration=traj.get('max_acceleration', 0.8),
            reversed=reversed,
            sample_spacing=traj.get('sample_spacing', 0.01),
        )
        result.add_constraint(DifferentialDriveVoltageConstraint(
            feedforward, kinematics, traj.get('max_voltage', 10.0)))

        max_centripetal = traj.get('max_centripetal')
        if max_centripetal is not None:
            result.add_constraint(CentripetalAccelerationConstraint(max_centripetal))

        max_wheel_speed = traj.get('max_wheel_speed')
        if max_wheel_speed is not None:
            result.add_constraint(DifferentialDriveKinematicsConstraint(kinematics, max_wheel_speed))

        logger.debug(f"TrajectoryConfig from config: {result}")
        return result

    def __repr__(self) -> str:
        return (f"TrajectoryConfig(max_velocity={self.max_velocity}, "
                f"max_acceleration={self.max_acceleration}, reversed={self.reversed}, "
                f"constraints={len(self.constraints)})")
