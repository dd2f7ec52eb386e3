"""状态估计模块"""
from .odometry import DifferentialDriveOdometry

__all__ = ['DifferentialDriveOdometry']
