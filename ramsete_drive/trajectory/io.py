"""
轨迹文件读写

PathWeaver 导出的 *.wpilib.json 是状态记录数组，每条记录:

    {
        "time": 0.0,
        "velocity": 0.0,
        "acceleration": 0.8,
        "curvature": 0.0,
        "pose": {
            "translation": {"x": 0.0, "y": 0.0},
            "rotation": {"radians": 0.0}
        }
    }

文件约定位于 <deploy_dir>/output/<name>.wpilib.json。

加载失败 (文件缺失、JSON 损坏、字段缺失、时间不递增) 统一报告为
TrajectoryUnavailableError，不重试。
"""
from typing import Optional
import json
import logging
import os

from ..core.data_types import Trajectory
from ..core.exceptions import TrajectoryUnavailableError, InvalidTrajectoryError

logger = logging.getLogger(__name__)

PATH_FILE_SUFFIX = '.wpilib.json'
PATH_OUTPUT_DIR = 'output'


def resolve_path_file(deploy_dir: str, name: str) -> str:
    """路径名 -> 轨迹文件路径 (<deploy_dir>/output/<name>.wpilib.json)"""
    return os.path.join(deploy_dir, PATH_OUTPUT_DIR, name + PATH_FILE_SUFFIX)


def load_trajectory(path: str) -> Trajectory:
    """
    加载 PathWeaver 轨迹文件

    Raises:
        TrajectoryUnavailableError: 文件缺失或内容无效
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except OSError as e:
        raise TrajectoryUnavailableError(f"Unable to open trajectory: {path} ({e})", path=path) from e
    except json.JSONDecodeError as e:
        raise TrajectoryUnavailableError(f"Malformed trajectory JSON: {path} ({e})", path=path) from e

    if not isinstance(records, list):
        raise TrajectoryUnavailableError(
            f"Trajectory file must contain a list of states, got {type(records).__name__}: {path}",
            path=path)

    try:
        trajectory = Trajectory.from_records(records)
    except (KeyError, TypeError, ValueError, InvalidTrajectoryError) as e:
        raise TrajectoryUnavailableError(f"Invalid trajectory data in {path}: {e!r}", path=path) from e

    logger.info(f"Loaded trajectory {path}: {trajectory}")
    return trajectory


def load_trajectory_or_none(path: str) -> Optional[Trajectory]:
    """加载轨迹，失败时记录错误并返回 None"""
    try:
        return load_trajectory(path)
    except TrajectoryUnavailableError as e:
        logger.error(str(e))
        return None


def save_trajectory(trajectory: Trajectory, path: str) -> None:
    """以 PathWeaver 格式写出轨迹"""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(trajectory.to_records(), f, indent=2)
    logger.debug(f"Saved {trajectory} to {path}")
