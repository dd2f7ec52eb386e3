"""轨迹生成、约束与文件读写"""
from .constraints import (
    ITrajectoryConstraint,
    DifferentialDriveVoltageConstraint,
    DifferentialDriveKinematicsConstraint,
    CentripetalAccelerationConstraint,
)
from .config import TrajectoryConfig
from .parameterizer import PathPoint, time_parameterize
from .generator import fit_path, generate_trajectory
from .io import resolve_path_file, load_trajectory, load_trajectory_or_none, save_trajectory

__all__ = [
    'ITrajectoryConstraint',
    'DifferentialDriveVoltageConstraint',
    'DifferentialDriveKinematicsConstraint',
    'CentripetalAccelerationConstraint',
    'TrajectoryConfig',
    'PathPoint',
    'time_parameterize',
    'fit_path',
    'generate_trajectory',
    'resolve_path_file',
    'load_trajectory',
    'load_trajectory_or_none',
    'save_trajectory',
]
