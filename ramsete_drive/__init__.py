"""
差速底盘轨迹跟踪 (Ramsete Drive)

版本: v1.0.0

驱动差速底盘沿预先生成的轨迹到达目标位姿，并支持手动驾驶。

特性:
- 轨迹: 样条拟合 + 电压约束时间参数化，或加载 PathWeaver 导出的 JSON 文件
- 里程计: 恒定曲率圆弧闭式积分，可选陀螺仪航向
- 跟踪: Ramsete 非线性控制律
- 执行: 前馈 (kS, kV, kA) + 轮速 PID，电压输出
- 命令: 跟踪命令状态机，单次停止保证，协作式取消
- 手动驾驶: arcade / tank / 配置化预设，原地转向

使用示例:
    from ramsete_drive import DriveManager, Pose2D

    manager = DriveManager(drivetrain, config)
    command = manager.create_generated_command(
        Pose2D(0, 0, 0), [(0.5, 0.25), (1.0, -0.25)], Pose2D(1.5, 0, 0))
    manager.schedule(command)

    # 在控制循环中调用 (每 20ms)
    manager.tick()
"""

__version__ = "1.0.0"
__author__ = "Ramsete Drive Team"

from .manager.drive_manager import DriveManager
from .config.default_config import DEFAULT_CONFIG, get_config_value, validate_config
from .config.loader import load_config
from .core.enums import CommandState, DriveMode
from .core.data_types import (
    Pose2D, ChassisSpeeds, WheelSpeeds, TrajectoryState, Trajectory,
    OdometryState, RamseteGains, TickOutput,
)
from .core.kinematics import DifferentialDriveKinematics
from .core.interfaces import IDrivetrain, ICommand, ITrajectoryConstraint
from .core.exceptions import (
    ControllerError, ConfigurationError, ConfigValidationError,
    TrajectoryError, InvalidTrajectoryError, InfeasiblePathError,
    TrajectoryUnavailableError, ControllerRuntimeError, InvalidTimeOrderError,
)
from .estimator.odometry import DifferentialDriveOdometry
from .tracker.ramsete import RamseteController
from .actuation import SimpleMotorFeedforward, PIDController, WheelVoltageController
from .trajectory import (
    TrajectoryConfig, DifferentialDriveVoltageConstraint, generate_trajectory,
    load_trajectory, save_trajectory,
)
from .commands import (
    RamseteCommand, ArcadeDriveCommand, TankDriveCommand, TurnDegreesCommand,
    DriveDistanceCommand, DriveTimeCommand, SequentialCommand,
)

__all__ = [
    # 版本
    '__version__',
    # 管理器
    'DriveManager',
    # 配置
    'DEFAULT_CONFIG', 'get_config_value', 'validate_config', 'load_config',
    # 枚举
    'CommandState', 'DriveMode',
    # 数据类型
    'Pose2D', 'ChassisSpeeds', 'WheelSpeeds', 'TrajectoryState', 'Trajectory',
    'OdometryState', 'RamseteGains', 'TickOutput',
    # 接口
    'IDrivetrain', 'ICommand', 'ITrajectoryConstraint',
    # 异常
    'ControllerError', 'ConfigurationError', 'ConfigValidationError',
    'TrajectoryError', 'InvalidTrajectoryError', 'InfeasiblePathError',
    'TrajectoryUnavailableError', 'ControllerRuntimeError', 'InvalidTimeOrderError',
    # 组件
    'DifferentialDriveKinematics', 'DifferentialDriveOdometry', 'RamseteController',
    'SimpleMotorFeedforward', 'PIDController', 'WheelVoltageController',
    'TrajectoryConfig', 'DifferentialDriveVoltageConstraint', 'generate_trajectory',
    'load_trajectory', 'save_trajectory',
    # 命令
    'RamseteCommand', 'ArcadeDriveCommand', 'TankDriveCommand', 'TurnDegreesCommand',
    'DriveDistanceCommand', 'DriveTimeCommand', 'SequentialCommand',
]
