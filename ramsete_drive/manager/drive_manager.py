"""
底盘管理器

底盘是独占资源，同一时刻最多只有一个命令持有它。

职责:
- 持有底盘、运动学、前馈模型和里程计
- 按配置创建命令 (轨迹跟踪、手动驾驶、预设、原地转向、开环自动例程)
- 调度: schedule() 打断当前命令；tick() 每个控制周期驱动当前命令一次，
  没有活动命令时回退到默认命令 (通常是手动驾驶)

数据流:
    操作员按键 → create_*_command() → schedule()
    外部周期 → tick() → command.execute() → drivetrain.tank_drive_volts()
"""
from typing import Dict, Any, Optional, Sequence, Tuple
import logging

from ..core.data_types import Pose2D, Trajectory
from ..core.enums import DriveMode
from ..core.interfaces import ICommand, IDrivetrain
from ..core.kinematics import DifferentialDriveKinematics
from ..core.exceptions import ConfigurationError
from ..core.logging_config import set_log_level
from ..config.default_config import create_default_config, validate_config
from ..config.loader import deep_merge
from ..estimator.odometry import DifferentialDriveOdometry
from ..tracker.ramsete import RamseteController
from ..actuation.feedforward import SimpleMotorFeedforward
from ..actuation.wheel_controller import WheelVoltageController
from ..trajectory.config import TrajectoryConfig
from ..trajectory.generator import generate_trajectory
from ..trajectory.io import resolve_path_file, load_trajectory_or_none
from ..commands.ramsete_command import RamseteCommand
from ..commands.manual_drive import ArcadeDriveCommand, TankDriveCommand, AxisSupplier
from ..commands.turn_degrees import TurnDegreesCommand
from ..commands.autonomous import (
    DriveDistanceCommand, DriveTimeCommand,
    autonomous_distance_routine, autonomous_time_routine,
)

logger = logging.getLogger(__name__)


class DriveManager:
    """
    底盘管理器

    线程安全性说明:
        - tick()/schedule()/cancel() 不是线程安全的，应在同一个控制线程中调用
        - RamseteCommand.cancel() 可以从其他线程调用

    使用示例:
        manager = DriveManager(drivetrain, config)
        manager.set_default_command(manager.arcade_drive_command(speed_axis, rotation_axis))

        # 按键触发
        manager.schedule(manager.create_path_command('startTeleopPath'))

        # 在控制循环中调用
        manager.tick()
    """

    def __init__(self, drivetrain: IDrivetrain, config: Optional[Dict[str, Any]] = None,
                 validate: bool = True):
        """
        Args:
            drivetrain: 底盘
            config: 配置字典，缺省的键使用 DEFAULT_CONFIG 中的值
            validate: 是否验证配置

        Raises:
            ConfigValidationError: 配置存在 FATAL/ERROR 级别错误
        """
        self.config = deep_merge(create_default_config(), config or {})
        if validate:
            validate_config(self.config)
        set_log_level(self.config['system'].get('log_level', 'INFO'))

        self.drivetrain = drivetrain
        self.period = self.config['system']['tick_period']
        self.deploy_dir = self.config['trajectory'].get('deploy_dir', 'deploy')

        self.kinematics = DifferentialDriveKinematics(self.config['drive']['track_width'])
        self.feedforward = SimpleMotorFeedforward.from_config(self.config)
        self.odometry = DifferentialDriveOdometry.from_config(
            self.config, self.kinematics, initial_pose=drivetrain.get_pose())

        self._active: Optional[ICommand] = None
        self._default: Optional[ICommand] = None
        self._tick_count = 0

    # ==================== 调度 ====================

    @property
    def active_command(self) -> Optional[ICommand]:
        return self._active

    @property
    def default_command(self) -> Optional[ICommand]:
        return self._default

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def set_default_command(self, command: Optional[ICommand]) -> None:
        """设置默认命令，没有其他命令时运行"""
        self._check_requirements(command)
        self._default = command

    def schedule(self, command: ICommand) -> None:
        """
        调度命令，打断当前持有底盘的命令

        同一个命令重复调度时忽略。
        """
        self._check_requirements(command)
        if command is self._active:
            return
        if self._active is not None:
            logger.info(f"Interrupting {self._active!r} for {command!r}")
            self._active.end(True)
        self._active = command
        command.initialize()
        logger.info(f"Scheduled {command!r}")

    def cancel(self) -> None:
        """取消当前命令"""
        if self._active is None:
            return
        logger.info(f"Cancelling {self._active!r}")
        self._active.end(True)
        self._active = None

    def tick(self) -> Optional[ICommand]:
        """
        执行一个控制周期

        Returns:
            本周期运行的命令，没有命令时为 None
        """
        self._tick_count += 1
        if self._active is None:
            if self._default is None:
                return None
            self._active = self._default
            self._active.initialize()

        command = self._active
        command.execute()
        if command.is_finished():
            command.end(False)
            self._active = None
            logger.info(f"{command!r} finished")
        return command

    def _check_requirements(self, command: Optional[ICommand]) -> None:
        if command is None:
            return
        requirements = command.requirements
        if requirements and self.drivetrain not in requirements:
            raise ConfigurationError(f"{command!r} does not require the managed drivetrain")

    # ==================== 命令工厂 ====================

    def create_ramsete_command(self, trajectory: Optional[Trajectory],
                               name: Optional[str] = None) -> RamseteCommand:
        """为给定轨迹创建跟踪命令，共享本管理器的里程计"""
        return RamseteCommand(
            trajectory,
            self.drivetrain,
            self.odometry,
            RamseteController.from_config(self.config),
            self.kinematics,
            WheelVoltageController.from_config(self.config, self.feedforward),
            period=self.period,
            reset_odometry_on_start=self.config['command'].get('reset_odometry_on_start', True),
            name=name,
        )

    def create_path_command(self, path_name: str) -> RamseteCommand:
        """
        加载 <deploy_dir>/output/<path_name>.wpilib.json 并创建跟踪命令

        文件缺失或损坏时记录错误，返回的命令在 initialize() 时立即结束。
        """
        path = resolve_path_file(self.deploy_dir, path_name)
        trajectory = load_trajectory_or_none(path)
        return self.create_ramsete_command(trajectory, name=f"Ramsete[{path_name}]")

    def create_generated_command(self, start: Pose2D,
                                 interior_waypoints: Sequence[Tuple[float, float]],
                                 end: Pose2D, reversed: bool = False) -> RamseteCommand:
        """
        生成电压约束下的轨迹并创建跟踪命令

        Raises:
            InfeasiblePathError: 约束无法满足，轨迹不会开始执行
        """
        traj_config = TrajectoryConfig.from_config(
            self.config, self.kinematics, self.feedforward, reversed=reversed)
        trajectory = generate_trajectory(start, interior_waypoints, end, traj_config)
        return self.create_ramsete_command(trajectory, name="Ramsete[generated]")

    def arcade_drive_command(self, speed_supplier: AxisSupplier,
                             rotation_supplier: AxisSupplier) -> ArcadeDriveCommand:
        return ArcadeDriveCommand.from_config(
            self.drivetrain, speed_supplier, rotation_supplier, self.config)

    def tank_drive_command(self, left_supplier: AxisSupplier,
                           right_supplier: AxisSupplier) -> TankDriveCommand:
        return TankDriveCommand.from_config(
            self.drivetrain, left_supplier, right_supplier, self.config)

    def preset_command(self, name: str, first_supplier: AxisSupplier,
                       second_supplier: AxisSupplier) -> ICommand:
        """
        按 manual_drive.presets 中的预设创建手动驾驶命令

        tank 预设: first/second 为左/右输入
        arcade 预设: first/second 为速度/旋转输入

        Raises:
            ConfigurationError: 预设不存在
        """
        presets = self.config['manual_drive'].get('presets', {})
        if name not in presets:
            raise ConfigurationError(f"Unknown manual drive preset {name!r}, available: {sorted(presets)}")
        preset = presets[name]
        mode_name = str(preset.get('mode', 'tank')).upper()
        if mode_name not in DriveMode.__members__:
            raise ConfigurationError(f"Preset {name!r} has unknown mode {preset.get('mode')!r}")
        if DriveMode[mode_name] == DriveMode.ARCADE:
            command = ArcadeDriveCommand.from_config(
                self.drivetrain, first_supplier, second_supplier, self.config, name=f"ArcadeDrive[{name}]")
            command.speed_scale = preset.get('speed_scale', command.speed_scale)
            command.rotation_scale = preset.get('rotation_scale', command.rotation_scale)
            return command
        return TankDriveCommand.from_config(
            self.drivetrain, first_supplier, second_supplier, self.config, preset=name)

    def turn_command(self, degrees: float) -> TurnDegreesCommand:
        return TurnDegreesCommand.from_config(self.drivetrain, degrees, self.config)

    def drive_distance_command(self, speed: float, distance: float) -> DriveDistanceCommand:
        return DriveDistanceCommand.from_config(self.drivetrain, speed, distance, self.config)

    def drive_time_command(self, speed: float, duration: float,
                           rotation: float = 0.0) -> DriveTimeCommand:
        return DriveTimeCommand.from_config(
            self.drivetrain, speed, duration, self.config, rotation=rotation)

    def autonomous_routine(self, name: str) -> ICommand:
        """
        按名称创建开环自动例程

        Args:
            name: 'distance' (按距离/角度) 或 'time' (按时间)

        Raises:
            ConfigurationError: 例程不存在
        """
        builders = {
            'distance': autonomous_distance_routine,
            'time': autonomous_time_routine,
        }
        if name not in builders:
            raise ConfigurationError(f"Unknown autonomous routine {name!r}, available: {sorted(builders)}")
        return builders[name](self.drivetrain, self.config)
