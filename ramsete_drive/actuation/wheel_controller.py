"""
轮速电压控制

把目标轮速转换为左右轮电压:

    V = feedforward(target, (target - prev_target) / period)
        + clip(PID(measured -> target), -max_voltage, max_voltage)

前馈中的加速度由相邻两个周期的目标轮速差分得到。
PID 只修正模型误差，其输出限制在电压包络内。

每个周期调用一次 calculate()，不阻塞、不休眠。
"""
from typing import Dict, Any, Optional, Tuple
import numpy as np

from ..core.data_types import WheelSpeeds
from .feedforward import SimpleMotorFeedforward
from .pid import PIDController


class WheelVoltageController:
    """左右轮前馈 + PID 电压控制"""

    def __init__(self, feedforward: SimpleMotorFeedforward,
                 left_pid: PIDController, right_pid: PIDController,
                 max_voltage: float = 10.0, period: float = 0.02):
        if period <= 0:
            raise ValueError(f"period must be > 0, got {period}")
        self.feedforward = feedforward
        self.left_pid = left_pid
        self.right_pid = right_pid
        self.max_voltage = max_voltage
        self.period = period
        self._prev_target = WheelSpeeds()

    @classmethod
    def from_config(cls, config: Dict[str, Any],
                    feedforward: Optional[SimpleMotorFeedforward] = None) -> 'WheelVoltageController':
        drive = config.get('drive', {})
        period = config.get('system', {}).get('tick_period', 0.02)
        if feedforward is None:
            feedforward = SimpleMotorFeedforward.from_config(config)

        def make_pid() -> PIDController:
            return PIDController(
                drive.get('kp', 0.0), drive.get('ki', 0.0), drive.get('kd', 0.0),
                period=period, integrator_limit=drive.get('integrator_limit', 1.0))

        return cls(feedforward, make_pid(), make_pid(),
                   max_voltage=drive.get('max_voltage', 10.0), period=period)

    @property
    def prev_target(self) -> WheelSpeeds:
        return self._prev_target

    def reset(self, initial_speeds: Optional[WheelSpeeds] = None) -> None:
        """
        重置 PID 状态和前馈差分基准

        Args:
            initial_speeds: 跟踪开始时的目标轮速，通常为轨迹首状态对应的轮速
        """
        self._prev_target = initial_speeds or WheelSpeeds()
        self.left_pid.reset()
        self.right_pid.reset()

    def calculate(self, target: WheelSpeeds, measured: WheelSpeeds) -> Tuple[float, float]:
        """
        计算左右轮电压

        Args:
            target: 目标轮速 (m/s)
            measured: 实测轮速 (m/s)

        Returns:
            (left_volts, right_volts)
        """
        left_accel = (target.left - self._prev_target.left) / self.period
        right_accel = (target.right - self._prev_target.right) / self.period

        left_ff = self.feedforward.calculate(target.left, left_accel)
        right_ff = self.feedforward.calculate(target.right, right_accel)

        left_fb = float(np.clip(self.left_pid.calculate(measured.left, target.left),
                                -self.max_voltage, self.max_voltage))
        right_fb = float(np.clip(self.right_pid.calculate(measured.right, target.right),
                                 -self.max_voltage, self.max_voltage))

        self._prev_target = target
        return left_ff + left_fb, right_ff + right_fb
