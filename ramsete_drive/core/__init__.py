"""核心模块"""
from .enums import CommandState, DriveMode
from .data_types import (
    Pose2D, ChassisSpeeds, WheelSpeeds, TrajectoryState, Trajectory,
    OdometryState, RamseteGains, TickOutput,
)
from .kinematics import DifferentialDriveKinematics
from .interfaces import IDrivetrain, ICommand, ITrajectoryConstraint
from .constants import (
    EPSILON, EPSILON_ANGLE, EPSILON_VELOCITY, TIME_TOLERANCE,
    normalize_angle, angle_difference, sinc,
)
from .exceptions import (
    ControllerError, ConfigurationError, ConfigValidationError,
    TrajectoryError, InvalidTrajectoryError, InfeasiblePathError,
    TrajectoryUnavailableError, ControllerRuntimeError, InvalidTimeOrderError,
)
