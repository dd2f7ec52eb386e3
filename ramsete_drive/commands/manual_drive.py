"""
手动驾驶命令

操作员输入 (摇杆/扳机，范围 [-1, 1]) 经过:
    1. 死区处理
    2. 平方 (保留符号)，提高低速分辨率
    3. 比例缩放
    4. 乘以电压包络 max_voltage

ArcadeDriveCommand: 速度轴 + 旋转轴，旋转为正时向右 (顺时针) 转
    left  = speed + rotation
    right = speed - rotation
    超出 [-1, 1] 时按比例整体缩小

TankDriveCommand: 左右轴分别控制左右轮

手动命令不会自行结束，被其他命令打断或取消时停止一次。
"""
from typing import Dict, Any, Callable, Optional, Tuple
import math

from ..core.interfaces import IDrivetrain
from ..core.exceptions import ConfigurationError
from .base import DrivetrainCommand

AxisSupplier = Callable[[], float]


def apply_deadband(value: float, deadband: float) -> float:
    """死区处理，死区外的输入重新线性映射到 (0, 1]"""
    if abs(value) <= deadband:
        return 0.0
    if deadband >= 1.0:
        return 0.0
    return math.copysign((abs(value) - deadband) / (1.0 - deadband), value)


def shape_input(value: float, deadband: float = 0.0, square: bool = False) -> float:
    value = max(-1.0, min(1.0, value))
    value = apply_deadband(value, deadband)
    if square:
        value = math.copysign(value * value, value)
    return value


def desaturate(left: float, right: float) -> Tuple[float, float]:
    """任一侧超出 [-1, 1] 时按比例整体缩小"""
    max_magnitude = max(abs(left), abs(right))
    if max_magnitude > 1.0:
        return left / max_magnitude, right / max_magnitude
    return left, right


class ArcadeDriveCommand(DrivetrainCommand):
    """单摇杆 arcade 驾驶"""

    def __init__(self, drivetrain: IDrivetrain,
                 speed_supplier: AxisSupplier, rotation_supplier: AxisSupplier,
                 max_voltage: float = 10.0, deadband: float = 0.02, square_inputs: bool = True,
                 speed_scale: float = 1.0, rotation_scale: float = 1.0,
                 name: Optional[str] = None):
        super().__init__(drivetrain, name=name)
        self.speed_supplier = speed_supplier
        self.rotation_supplier = rotation_supplier
        self.max_voltage = max_voltage
        self.deadband = deadband
        self.square_inputs = square_inputs
        self.speed_scale = speed_scale
        self.rotation_scale = rotation_scale
        self._running = False

    @classmethod
    def from_config(cls, drivetrain: IDrivetrain, speed_supplier: AxisSupplier,
                    rotation_supplier: AxisSupplier, config: Dict[str, Any],
                    name: Optional[str] = None) -> 'ArcadeDriveCommand':
        manual = config.get('manual_drive', {})
        arcade = manual.get('arcade', {})
        return cls(
            drivetrain, speed_supplier, rotation_supplier,
            max_voltage=config.get('drive', {}).get('max_voltage', 10.0),
            deadband=manual.get('deadband', 0.02),
            square_inputs=manual.get('square_inputs', True),
            speed_scale=arcade.get('speed_scale', 1.0),
            rotation_scale=arcade.get('rotation_scale', 1.0),
            name=name,
        )

    def initialize(self) -> None:
        self._begin_run()
        self._running = True

    def calculate(self) -> Tuple[float, float]:
        """读取输入并计算左右轮电压"""
        speed = shape_input(self.speed_supplier(), self.deadband, self.square_inputs) * self.speed_scale
        rotation = shape_input(self.rotation_supplier(), self.deadband, self.square_inputs) * self.rotation_scale
        left, right = desaturate(speed + rotation, speed - rotation)
        return left * self.max_voltage, right * self.max_voltage

    def execute(self) -> None:
        if not self._running:
            return
        left, right = self.calculate()
        self.drivetrain.tank_drive_volts(left, right)

    def end(self, interrupted: bool) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_once()


class TankDriveCommand(DrivetrainCommand):
    """
    双轴 tank 驾驶

    left_scale / right_scale 乘到对应输入上，负值表示反向，0 表示该侧不驱动。
    """

    def __init__(self, drivetrain: IDrivetrain,
                 left_supplier: AxisSupplier, right_supplier: AxisSupplier,
                 max_voltage: float = 10.0, deadband: float = 0.02, square_inputs: bool = True,
                 left_scale: float = 1.0, right_scale: float = 1.0,
                 name: Optional[str] = None):
        super().__init__(drivetrain, name=name)
        self.left_supplier = left_supplier
        self.right_supplier = right_supplier
        self.max_voltage = max_voltage
        self.deadband = deadband
        self.square_inputs = square_inputs
        self.left_scale = left_scale
        self.right_scale = right_scale
        self._running = False

    @classmethod
    def from_config(cls, drivetrain: IDrivetrain, left_supplier: AxisSupplier,
                    right_supplier: AxisSupplier, config: Dict[str, Any],
                    preset: Optional[str] = None,
                    name: Optional[str] = None) -> 'TankDriveCommand':
        """
        按配置创建

        Args:
            preset: manual_drive.presets 中的预设名，None 时使用 manual_drive.tank

        Raises:
            ConfigurationError: 预设不存在或不是 tank 模式
        """
        manual = config.get('manual_drive', {})
        if preset is None:
            scales = manual.get('tank', {})
        else:
            presets = manual.get('presets', {})
            if preset not in presets:
                raise ConfigurationError(
                    f"Unknown manual drive preset {preset!r}, available: {sorted(presets)}")
            scales = presets[preset]
            if scales.get('mode', 'tank') != 'tank':
                raise ConfigurationError(f"Preset {preset!r} is not a tank drive preset")
        return cls(
            drivetrain, left_supplier, right_supplier,
            max_voltage=config.get('drive', {}).get('max_voltage', 10.0),
            deadband=manual.get('deadband', 0.02),
            square_inputs=manual.get('square_inputs', True),
            left_scale=scales.get('left_scale', 1.0),
            right_scale=scales.get('right_scale', 1.0),
            name=name or (f"TankDrive[{preset}]" if preset else None),
        )

    def initialize(self) -> None:
        self._begin_run()
        self._running = True

    def calculate(self) -> Tuple[float, float]:
        left = shape_input(self.left_supplier(), self.deadband, self.square_inputs) * self.left_scale
        right = shape_input(self.right_supplier(), self.deadband, self.square_inputs) * self.right_scale
        left, right = desaturate(left, right)
        return left * self.max_voltage, right * self.max_voltage

    def execute(self) -> None:
        if not self._running:
            return
        left, right = self.calculate()
        self.drivetrain.tank_drive_volts(left, right)

    def end(self, interrupted: bool) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_once()
