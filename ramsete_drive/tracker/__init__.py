"""轨迹跟踪控制器"""
from .ramsete import RamseteController

__all__ = ['RamseteController']
