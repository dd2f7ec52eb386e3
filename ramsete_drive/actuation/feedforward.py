"""
电机前馈模型

线性电压模型:
    V = kS · sign(v) + kV · v + kA · a

- kS: 克服静摩擦所需电压 (V)
- kV: 维持单位速度所需电压 (V·s/m)
- kA: 产生单位加速度所需电压 (V·s²/m)

同一个模型同时用于轨迹生成阶段的电压约束和执行阶段的前馈项。
"""
import numpy as np

from ..core.exceptions import ConfigValidationError


class SimpleMotorFeedforward:
    """简单电机前馈 (kS, kV, kA)"""

    def __init__(self, ks: float, kv: float, ka: float = 0.0):
        if kv <= 0:
            raise ConfigValidationError(f"kv must be > 0, got {kv}", [('drive.kv', 'must be > 0')])
        if ks < 0 or ka < 0:
            raise ConfigValidationError(
                f"ks and ka must be >= 0, got ks={ks}, ka={ka}",
                [('drive.ks', 'must be >= 0'), ('drive.ka', 'must be >= 0')])
        self.ks = float(ks)
        self.kv = float(kv)
        self.ka = float(ka)

    @classmethod
    def from_config(cls, config: dict) -> 'SimpleMotorFeedforward':
        drive = config.get('drive', config)
        return cls(drive.get('ks', 0.0), drive.get('kv', 1.0), drive.get('ka', 0.0))

    def calculate(self, velocity: float, acceleration: float = 0.0) -> float:
        """给定速度和加速度所需的电压"""
        return float(self.ks * np.sign(velocity) + self.kv * velocity + self.ka * acceleration)

    def max_achievable_velocity(self, max_voltage: float, acceleration: float = 0.0) -> float:
        """在 max_voltage 下、以给定加速度运动时可达到的最大速度"""
        return (max_voltage - self.ks - acceleration * self.ka) / self.kv

    def min_achievable_velocity(self, max_voltage: float, acceleration: float = 0.0) -> float:
        return (-max_voltage + self.ks - acceleration * self.ka) / self.kv

    def max_achievable_acceleration(self, max_voltage: float, velocity: float) -> float:
        """
        在 max_voltage 下、当前速度为 velocity 时可达到的最大加速度

        kA 为 0 时模型没有加速度约束，返回 +inf。
        """
        if self.ka <= 0:
            return float('inf')
        return float((max_voltage - self.ks * np.sign(velocity) - velocity * self.kv) / self.ka)

    def min_achievable_acceleration(self, max_voltage: float, velocity: float) -> float:
        if self.ka <= 0:
            return float('-inf')
        return self.max_achievable_acceleration(-max_voltage, velocity)

    def __repr__(self) -> str:
        return f"SimpleMotorFeedforward(ks={self.ks}, kv={self.kv}, ka={self.ka})"
