"""
开环自动命令与自动例程

DriveDistanceCommand: 以固定输出比例直线行驶，直到离开起点的距离达到目标
DriveTimeCommand: 以固定输出比例 (可带旋转) 行驶固定时间

例程:
    autonomous_distance_routine: 后退 → 转向 → 后退 → 转回 (按距离/角度结束)
    autonomous_time_routine: 后退 → 旋转 → 后退 → 反向旋转 (按时间结束)

时间按周期计数 (ticks · period)，不读取挂钟，与轨迹跟踪命令一致。
"""
from typing import Dict, Any, Optional
import logging

from ..core.interfaces import IDrivetrain
from ..core.data_types import Pose2D
from ..core.constants import TIME_TOLERANCE
from .base import DrivetrainCommand, SequentialCommand
from .manual_drive import desaturate
from .turn_degrees import TurnDegreesCommand

logger = logging.getLogger(__name__)


class DriveDistanceCommand(DrivetrainCommand):
    """
    按距离直线行驶

    距离取起点到当前位姿的直线距离，speed < 0 为后退。
    结束条件: 已行驶距离 >= |distance| - tolerance
    """

    def __init__(self, drivetrain: IDrivetrain, speed: float, distance: float,
                 max_voltage: float = 10.0, tolerance: float = 0.005,
                 name: Optional[str] = None):
        super().__init__(drivetrain, name=name or f"DriveDistance({distance:.3f}m)")
        self.speed = speed
        self.distance = abs(distance)
        self.max_voltage = max_voltage
        self.tolerance = tolerance
        self._start = Pose2D()
        self._traveled = 0.0
        self._running = False

    @classmethod
    def from_config(cls, drivetrain: IDrivetrain, speed: float, distance: float,
                    config: Dict[str, Any]) -> 'DriveDistanceCommand':
        return cls(
            drivetrain, speed, distance,
            max_voltage=config.get('drive', {}).get('max_voltage', 10.0),
            tolerance=config.get('autonomous', {}).get('distance_tolerance', 0.005),
        )

    @property
    def traveled(self) -> float:
        """已行驶的直线距离 (m)"""
        return self._traveled

    def initialize(self) -> None:
        self._begin_run()
        self._start = self.drivetrain.get_pose()
        self._traveled = 0.0
        self._running = True
        logger.info(f"{self.name}: driving at {self.speed:+.2f}")

    def execute(self) -> None:
        if not self._running:
            return
        self._traveled = self._start.distance_to(self.drivetrain.get_pose())
        if self.is_finished():
            return
        volts = self.speed * self.max_voltage
        self.drivetrain.tank_drive_volts(volts, volts)

    def is_finished(self) -> bool:
        return self._traveled >= self.distance - self.tolerance

    def end(self, interrupted: bool) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_once()
        logger.info(f"{self.name}: {'interrupted' if interrupted else 'done'} "
                    f"after {self._traveled:.3f} m")


class DriveTimeCommand(DrivetrainCommand):
    """
    按时间行驶

    每个周期下发 arcade 形式的电压: 左 = speed + rotation，右 = speed - rotation
    (rotation > 0 为顺时针)，共 ceil(duration / period) 个周期。
    """

    def __init__(self, drivetrain: IDrivetrain, speed: float, duration: float,
                 rotation: float = 0.0, max_voltage: float = 10.0, period: float = 0.02,
                 name: Optional[str] = None):
        super().__init__(drivetrain, name=name or f"DriveTime({duration:.2f}s)")
        if period <= 0:
            raise ValueError(f"period must be > 0, got {period}")
        self.speed = speed
        self.rotation = rotation
        self.duration = max(0.0, duration)
        self.max_voltage = max_voltage
        self.period = period
        self._ticks = 0
        self._running = False

    @classmethod
    def from_config(cls, drivetrain: IDrivetrain, speed: float, duration: float,
                    config: Dict[str, Any], rotation: float = 0.0) -> 'DriveTimeCommand':
        return cls(
            drivetrain, speed, duration, rotation=rotation,
            max_voltage=config.get('drive', {}).get('max_voltage', 10.0),
            period=config.get('system', {}).get('tick_period', 0.02),
        )

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def elapsed(self) -> float:
        return self._ticks * self.period

    def initialize(self) -> None:
        self._begin_run()
        self._ticks = 0
        self._running = True

    def execute(self) -> None:
        if not self._running or self.is_finished():
            return
        self._ticks += 1
        left, right = desaturate(self.speed + self.rotation, self.speed - self.rotation)
        self.drivetrain.tank_drive_volts(left * self.max_voltage, right * self.max_voltage)

    def is_finished(self) -> bool:
        return self.elapsed >= self.duration - TIME_TOLERANCE

    def end(self, interrupted: bool) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_once()
        logger.info(f"{self.name}: {'interrupted' if interrupted else 'done'} after {self._ticks} ticks")


def autonomous_distance_routine(drivetrain: IDrivetrain,
                                config: Dict[str, Any]) -> SequentialCommand:
    """后退、原地转向、再后退、转回原朝向"""
    routine = config.get('autonomous', {}).get('distance_routine', {})
    speed = routine.get('speed', -0.5)
    distance = routine.get('distance', 0.254)
    degrees = routine.get('turn_degrees', 180.0)
    return SequentialCommand([
        DriveDistanceCommand.from_config(drivetrain, speed, distance, config),
        TurnDegreesCommand.from_config(drivetrain, degrees, config),
        DriveDistanceCommand.from_config(drivetrain, speed, distance, config),
        TurnDegreesCommand.from_config(drivetrain, -degrees, config),
    ], name="AutonomousDistance")


def autonomous_time_routine(drivetrain: IDrivetrain,
                            config: Dict[str, Any]) -> SequentialCommand:
    """后退、旋转、再后退、反向旋转，每段固定时间"""
    routine = config.get('autonomous', {}).get('time_routine', {})
    speed = routine.get('speed', -0.6)
    drive_time = routine.get('drive_time', 2.0)
    rotation = routine.get('rotation', -0.5)
    turn_time = routine.get('turn_time', 1.3)
    return SequentialCommand([
        DriveTimeCommand.from_config(drivetrain, speed, drive_time, config),
        DriveTimeCommand.from_config(drivetrain, 0.0, turn_time, config, rotation=rotation),
        DriveTimeCommand.from_config(drivetrain, speed, drive_time, config),
        DriveTimeCommand.from_config(drivetrain, 0.0, turn_time, config, rotation=-rotation),
    ], name="AutonomousTime")
