"""原地转向命令"""
from typing import Dict, Any, Optional
import logging
import math

from ..core.interfaces import IDrivetrain
from ..core.constants import angle_difference
from .base import DrivetrainCommand

logger = logging.getLogger(__name__)


class TurnDegreesCommand(DrivetrainCommand):
    """
    原地转过指定角度

    使用底盘位姿的航向累计已转过的角度，每周期按最短弧累加，转过 180° 以上也能正确计数。
    degrees > 0 为逆时针。

    结束条件: 沿目标方向已转过的角度 >= |目标角度| - tolerance，反方向转动不计入进度
    """

    def __init__(self, drivetrain: IDrivetrain, degrees: float, speed: float = 0.5,
                 max_voltage: float = 10.0, tolerance: float = 0.02,
                 name: Optional[str] = None):
        super().__init__(drivetrain, name=name or f"TurnDegrees({degrees:+.0f})")
        self.target = math.radians(degrees)
        self.speed = abs(speed)
        self.max_voltage = max_voltage
        self.tolerance = tolerance
        self._turned = 0.0
        self._last_heading = 0.0
        self._running = False

    @classmethod
    def from_config(cls, drivetrain: IDrivetrain, degrees: float,
                    config: Dict[str, Any]) -> 'TurnDegreesCommand':
        turn = config.get('turn', {})
        return cls(
            drivetrain, degrees,
            speed=turn.get('speed', 0.5),
            max_voltage=config.get('drive', {}).get('max_voltage', 10.0),
            tolerance=turn.get('tolerance', 0.02),
        )

    @property
    def turned(self) -> float:
        """已转过的角度 (rad)"""
        return self._turned

    def initialize(self) -> None:
        self._begin_run()
        self._turned = 0.0
        self._last_heading = self.drivetrain.get_pose().heading
        self._running = True
        logger.info(f"{self.name}: turning {math.degrees(self.target):.1f} deg")

    def execute(self) -> None:
        if not self._running:
            return
        heading = self.drivetrain.get_pose().heading
        self._turned += angle_difference(heading, self._last_heading)
        self._last_heading = heading

        if self.is_finished():
            return
        volts = math.copysign(self.speed * self.max_voltage, self.target)
        self.drivetrain.tank_drive_volts(-volts, volts)

    def is_finished(self) -> bool:
        progress = self._turned * math.copysign(1.0, self.target)
        return progress >= abs(self.target) - self.tolerance

    def end(self, interrupted: bool) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_once()
        logger.info(f"{self.name}: {'interrupted' if interrupted else 'done'} "
                    f"after {math.degrees(self._turned):.1f} deg")
