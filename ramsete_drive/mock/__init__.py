"""
模拟模块

仅用于测试和离线调参，不应在生产代码中使用。

    from ramsete_drive.mock import SimulatedDrivetrain, run_command, create_test_trajectory
"""
from .sim_drivetrain import SimulatedDrivetrain, run_command
from .test_data_generator import create_test_trajectory

__all__ = ['SimulatedDrivetrain', 'run_command', 'create_test_trajectory']
