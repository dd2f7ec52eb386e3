"""
Ramsete 轨迹跟踪命令

状态转换:
=========

    IDLE --initialize()--> INITIALIZING --(有轨迹)--> TRACKING
    INITIALIZING --(无轨迹或轨迹时长为 0)--> FINISHED (停止一次)

    TRACKING --elapsed >= duration--> FINISHED  (停止一次)
    TRACKING --cancel() / end(True)--> CANCELLED (停止一次)

    FINISHED / CANCELLED 为终止状态，之后的 execute() / end() 不再有任何作用，
    再次调用 initialize() 开始新的一次运行。

单个控制周期:
=============

    1. 处理挂起的取消请求 (取消时不更新里程计)
    2. ticks += 1, elapsed = ticks · period (整数计数，无浮点累加误差)
    3. 里程计用实测轮速积分到 elapsed
    4. 采样期望状态
    5. Ramsete -> 底盘速度 -> 目标轮速
    6. 前馈 + PID -> 左右轮电压
    7. 下发电压；elapsed >= duration 时结束并停止一次

D 秒的轨迹在周期 p 下恰好执行 ceil(D / p) 个周期。
"""
from typing import Dict, Any, Optional, Callable
import logging
import threading

from ..core.data_types import Trajectory, ChassisSpeeds, TickOutput
from ..core.enums import CommandState
from ..core.interfaces import IDrivetrain
from ..core.kinematics import DifferentialDriveKinematics
from ..core.constants import TIME_TOLERANCE
from ..estimator.odometry import DifferentialDriveOdometry
from ..tracker.ramsete import RamseteController
from ..actuation.wheel_controller import WheelVoltageController
from .base import DrivetrainCommand

logger = logging.getLogger(__name__)


class RamseteCommand(DrivetrainCommand):
    """
    Ramsete 轨迹跟踪命令

    线程安全性:
    - initialize()/execute()/end() 应在单个控制线程中调用
    - cancel() 是线程安全的，可以从任何线程调用，实际状态转换在下一个周期开始时进行
    """

    def __init__(self, trajectory: Optional[Trajectory],
                 drivetrain: IDrivetrain,
                 odometry: DifferentialDriveOdometry,
                 controller: RamseteController,
                 kinematics: DifferentialDriveKinematics,
                 wheel_controller: WheelVoltageController,
                 period: float = 0.02,
                 reset_odometry_on_start: bool = True,
                 name: Optional[str] = None):
        super().__init__(drivetrain, name=name)
        if period <= 0:
            raise ValueError(f"period must be > 0, got {period}")
        self.trajectory = trajectory
        self.odometry = odometry
        self.controller = controller
        self.kinematics = kinematics
        self.wheel_controller = wheel_controller
        self.period = period
        self.reset_odometry_on_start = reset_odometry_on_start

        self._state = CommandState.IDLE
        self._ticks = 0
        self._cancel_event = threading.Event()
        self._last_output: Optional[TickOutput] = None

        self._state_handlers: Dict[CommandState, Callable[[], TickOutput]] = {
            CommandState.IDLE: self._handle_inactive,
            CommandState.INITIALIZING: self._handle_inactive,
            CommandState.TRACKING: self._handle_tracking,
            CommandState.FINISHED: self._handle_inactive,
            CommandState.CANCELLED: self._handle_inactive,
        }

    @classmethod
    def from_config(cls, trajectory: Optional[Trajectory], drivetrain: IDrivetrain,
                    config: Dict[str, Any],
                    odometry: Optional[DifferentialDriveOdometry] = None,
                    name: Optional[str] = None) -> 'RamseteCommand':
        """按配置字典创建命令及其协作对象"""
        kinematics = DifferentialDriveKinematics(config.get('drive', {}).get('track_width', 0.142072613))
        if odometry is None:
            odometry = DifferentialDriveOdometry.from_config(config, kinematics)
        return cls(
            trajectory,
            drivetrain,
            odometry,
            RamseteController.from_config(config),
            kinematics,
            WheelVoltageController.from_config(config),
            period=config.get('system', {}).get('tick_period', 0.02),
            reset_odometry_on_start=config.get('command', {}).get('reset_odometry_on_start', True),
            name=name,
        )

    # ==================== 状态查询 ====================

    @property
    def state(self) -> CommandState:
        return self._state

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def elapsed(self) -> float:
        return self._ticks * self.period

    @property
    def last_output(self) -> Optional[TickOutput]:
        return self._last_output

    def is_finished(self) -> bool:
        return self._state.is_terminal()

    # ==================== 生命周期 ====================

    def initialize(self) -> None:
        self._begin_run()
        self._cancel_event.clear()
        self._ticks = 0
        self._last_output = None
        self._transition_to(CommandState.INITIALIZING)

        if self.trajectory is None:
            logger.error(f"{self.name}: no trajectory to follow, finishing immediately")
            self._stop_once()
            self._transition_to(CommandState.FINISHED)
            return

        first = self.trajectory.sample(0.0)
        if self.reset_odometry_on_start:
            self.odometry.reset(first.pose, 0.0)
            self.drivetrain.reset_odometry(first.pose)
        else:
            # 保留当前位姿估计，只重置时间基准
            self.odometry.reset(self.odometry.pose, 0.0)

        initial_speeds = self.kinematics.to_wheel_speeds(
            ChassisSpeeds(first.velocity, first.angular_velocity))
        self.wheel_controller.reset(initial_speeds)
        self.controller.reset()

        # ceil(0 / p) = 0: 单点轨迹不执行任何周期
        if self.trajectory.duration <= TIME_TOLERANCE:
            logger.info(f"{self.name}: zero-duration trajectory, finishing immediately")
            self._stop_once()
            self._transition_to(CommandState.FINISHED)
            return
        self._transition_to(CommandState.TRACKING)

    def execute(self) -> None:
        self.step()

    def step(self) -> TickOutput:
        """执行一个控制周期"""
        output = self._state_handlers[self._state]()
        self._last_output = output
        return output

    def cancel(self) -> bool:
        """
        请求取消

        Returns:
            True: 请求已接受，下一个周期开始时进入 CANCELLED
            False: 命令不在运行中，请求被忽略
        """
        if self._state not in (CommandState.INITIALIZING, CommandState.TRACKING):
            logger.debug(f"{self.name}: cancel ignored in {self._state.name}")
            return False
        self._cancel_event.set()
        logger.info(f"{self.name}: cancel requested")
        return True

    def end(self, interrupted: bool) -> None:
        if self._state.is_terminal() or self._state == CommandState.IDLE:
            return
        self._stop_once()
        self._transition_to(CommandState.CANCELLED if interrupted else CommandState.FINISHED)

    # ==================== 状态处理器 ====================

    def _handle_inactive(self) -> TickOutput:
        return TickOutput(state=self._state, elapsed=self.elapsed)

    def _handle_tracking(self) -> TickOutput:
        if self._cancel_event.is_set():
            self._stop_once()
            self._transition_to(CommandState.CANCELLED)
            return TickOutput(state=self._state, elapsed=self.elapsed, stopped=True)

        self._ticks += 1
        elapsed = self.elapsed

        measured = self.drivetrain.get_wheel_speeds()
        pose = self.odometry.update(elapsed, measured)
        desired = self.trajectory.sample(elapsed)
        chassis = self.controller.calculate(pose, desired)
        target = self.kinematics.to_wheel_speeds(chassis)
        left_volts, right_volts = self.wheel_controller.calculate(target, measured)
        self.drivetrain.tank_drive_volts(left_volts, right_volts)

        logger.debug(
            f"{self.name} tick {self._ticks}: t={elapsed:.3f} v={chassis.linear:.3f} "
            f"omega={chassis.angular:.3f} volts=({left_volts:.2f}, {right_volts:.2f})")

        stopped = False
        if elapsed >= self.trajectory.duration - TIME_TOLERANCE:
            stopped = self._stop_once()
            self._transition_to(CommandState.FINISHED)

        return TickOutput(
            state=self._state,
            elapsed=elapsed,
            desired=desired,
            chassis=chassis,
            target_wheels=target,
            left_volts=left_volts,
            right_volts=right_volts,
            stopped=stopped,
        )

    def _transition_to(self, new_state: CommandState) -> None:
        if new_state == self._state:
            return
        old_state = self._state
        self._state = new_state
        logger.info(f"{self.name}: {old_state.name} -> {new_state.name} (t={self.elapsed:.3f}s)")
