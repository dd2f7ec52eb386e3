"""离散 PID 控制器"""
from typing import Optional
import numpy as np


class PIDController:
    """
    离散 PID 控制器

    以固定周期 period 调用 calculate()。

    - 积分项带抗饱和限幅: |ki · integral| <= integrator_limit
    - 首次调用时微分项为 0，避免微分冲击
    """

    def __init__(self, kp: float, ki: float = 0.0, kd: float = 0.0,
                 period: float = 0.02, integrator_limit: float = 1.0):
        if period <= 0:
            raise ValueError(f"period must be > 0, got {period}")
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.period = period
        self.integrator_limit = integrator_limit

        self._integral = 0.0
        self._prev_error: Optional[float] = None
        self._last_error = 0.0
        self._tolerance = 0.05

    def set_tolerance(self, tolerance: float) -> None:
        self._tolerance = tolerance

    def calculate(self, measurement: float, setpoint: float) -> float:
        """
        计算控制输出

        Args:
            measurement: 测量值
            setpoint: 目标值

        Returns:
            kp·e + ki·∫e + kd·de/dt
        """
        error = setpoint - measurement

        if self._prev_error is None:
            derivative = 0.0
        else:
            derivative = (error - self._prev_error) / self.period

        if self.ki != 0:
            self._integral += error * self.period
            bound = abs(self.integrator_limit / self.ki)
            self._integral = float(np.clip(self._integral, -bound, bound))

        self._prev_error = error
        self._last_error = error
        return self.kp * error + self.ki * self._integral + self.kd * derivative

    def at_setpoint(self) -> bool:
        """最近一次误差是否在容差内"""
        if self._prev_error is None:
            return False
        return abs(self._last_error) <= self._tolerance

    def reset(self) -> None:
        """清空积分和微分状态"""
        self._integral = 0.0
        self._prev_error = None
        self._last_error = 0.0
