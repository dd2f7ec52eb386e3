"""接口定义"""
from abc import ABC, abstractmethod
from typing import Tuple, FrozenSet

from .data_types import Pose2D, WheelSpeeds


class IDrivetrain(ABC):
    """
    底盘协作者接口

    核心层只通过这四个方法与物理执行器交互，不直接持有电机。
    每个控制周期最多各调用一次。
    """

    @abstractmethod
    def get_pose(self) -> Pose2D:
        """获取底盘自身维护的位姿"""
        pass

    @abstractmethod
    def get_wheel_speeds(self) -> WheelSpeeds:
        """获取左右轮实测速度 (m/s)"""
        pass

    @abstractmethod
    def tank_drive_volts(self, left: float, right: float) -> None:
        """下发左右轮电压 (V)"""
        pass

    @abstractmethod
    def reset_odometry(self, pose: Pose2D) -> None:
        """重置底盘位姿"""
        pass


class ICommand(ABC):
    """
    可调度命令接口

    外部调度器只通过这四个生命周期钩子驱动命令:
    - initialize(): 命令开始时调用一次
    - execute(): 每个控制周期调用一次
    - is_finished(): 每个周期 execute() 之后查询
    - end(interrupted): 正常结束 (False) 或被打断 (True) 时调用一次
    """

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def execute(self) -> None:
        pass

    @abstractmethod
    def is_finished(self) -> bool:
        pass

    @abstractmethod
    def end(self, interrupted: bool) -> None:
        pass

    @property
    def requirements(self) -> FrozenSet[object]:
        """命令独占的资源 (通常是底盘)"""
        return frozenset()


class ITrajectoryConstraint(ABC):
    """
    轨迹约束接口

    在轨迹生成阶段限制每个路径采样点的速度和加速度。
    """

    @abstractmethod
    def max_velocity(self, pose: Pose2D, curvature: float, velocity: float) -> float:
        """
        给定路径点允许的最大线速度 (m/s)

        Args:
            pose: 路径点位姿
            curvature: 路径曲率 (1/m)
            velocity: 当前已知的速度上限
        """
        pass

    @abstractmethod
    def min_max_acceleration(self, pose: Pose2D, curvature: float,
                             velocity: float) -> Tuple[float, float]:
        """
        给定路径点和速度下允许的 (最小, 最大) 线加速度 (m/s²)
        """
        pass
