"""执行模块: 前馈、PID 与轮速电压控制"""
from .feedforward import SimpleMotorFeedforward
from .pid import PIDController
from .wheel_controller import WheelVoltageController

__all__ = ['SimpleMotorFeedforward', 'PIDController', 'WheelVoltageController']
