"""可调度命令"""
from .base import Command, DrivetrainCommand, SequentialCommand
from .ramsete_command import RamseteCommand
from .manual_drive import ArcadeDriveCommand, TankDriveCommand
from .turn_degrees import TurnDegreesCommand
from .autonomous import (
    DriveDistanceCommand,
    DriveTimeCommand,
    autonomous_distance_routine,
    autonomous_time_routine,
)

__all__ = [
    'Command',
    'DrivetrainCommand',
    'SequentialCommand',
    'RamseteCommand',
    'ArcadeDriveCommand',
    'TankDriveCommand',
    'TurnDegreesCommand',
    'DriveDistanceCommand',
    'DriveTimeCommand',
    'autonomous_distance_routine',
    'autonomous_time_routine',
]
