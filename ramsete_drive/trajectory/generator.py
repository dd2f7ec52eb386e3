"""
轨迹生成器

由起点位姿、中间路径点和终点位姿生成时间参数化轨迹。

路径拟合:
    使用 scipy.interpolate.CubicSpline 对 (x, y) 做三次样条插值。
    参数取累计弦长，起点和终点以航向 (cosθ, sinθ) 作为一阶导数边界条件 (clamped)。
    样条按 sample_spacing 等参数间隔采样。

几何量:
    heading   = atan2(y', x')
    curvature = (x'·y'' - y'·x'') / (x'² + y'²)^(3/2)

倒车:
    config.reversed=True 时，样条沿行驶方向拟合 (起止航向各加 π)，
    采样后把机器人航向再加 π，曲率取反，使速度为负时 ω = v·κ 仍然成立。
"""
from typing import List, Sequence, Tuple
import math
import logging

import numpy as np
from scipy.interpolate import CubicSpline

from ..core.data_types import Pose2D, Trajectory
from ..core.constants import EPSILON
from ..core.exceptions import InvalidTrajectoryError
from .config import TrajectoryConfig
from .parameterizer import PathPoint, time_parameterize

logger = logging.getLogger(__name__)


def _remove_duplicate_points(points: np.ndarray) -> np.ndarray:
    keep = [0]
    for i in range(1, len(points)):
        if np.linalg.norm(points[i] - points[keep[-1]]) > EPSILON:
            keep.append(i)
    return points[keep]


def fit_path(start: Pose2D, interior_waypoints: Sequence[Tuple[float, float]], end: Pose2D,
             sample_spacing: float = 0.01, reversed: bool = False) -> List[PathPoint]:
    """
    拟合路径并采样

    Args:
        start: 起点位姿 (机器人朝向)
        interior_waypoints: 中间路径点 (x, y)
        end: 终点位姿 (机器人朝向)
        sample_spacing: 采样间距 (m)
        reversed: 是否倒车

    Returns:
        路径采样点列表，包含起点和终点

    Raises:
        InvalidTrajectoryError: 路径点少于两个不同位置
    """
    points = np.array(
        [[start.x, start.y]] + [[float(x), float(y)] for x, y in interior_waypoints] + [[end.x, end.y]],
        dtype=float)
    points = _remove_duplicate_points(points)
    if len(points) < 2:
        raise InvalidTrajectoryError("Start and end waypoints must be distinct")

    travel_offset = math.pi if reversed else 0.0
    start_heading = start.heading + travel_offset
    end_heading = end.heading + travel_offset

    chords = np.linalg.norm(np.diff(points, axis=0), axis=1)
    u = np.concatenate(([0.0], np.cumsum(chords)))

    spline = CubicSpline(
        u, points,
        bc_type=((1, np.array([math.cos(start_heading), math.sin(start_heading)])),
                 (1, np.array([math.cos(end_heading), math.sin(end_heading)]))),
    )

    num_samples = max(2, int(math.ceil(u[-1] / sample_spacing)) + 1)
    samples = np.linspace(0.0, u[-1], num_samples)
    xy = spline(samples)
    d1 = spline(samples, 1)
    d2 = spline(samples, 2)

    path: List[PathPoint] = []
    heading = start_heading
    for i in range(num_samples):
        dx, dy = d1[i]
        ddx, ddy = d2[i]
        speed_sq = dx * dx + dy * dy
        if speed_sq < EPSILON:
            # 导数退化 (尖点)，沿用上一点的行驶方向
            curvature = 0.0
        else:
            heading = math.atan2(dy, dx)
            curvature = (dx * ddy - dy * ddx) / speed_sq ** 1.5

        if reversed:
            path.append(PathPoint(Pose2D(xy[i][0], xy[i][1], heading + math.pi), -float(curvature)))
        else:
            path.append(PathPoint(Pose2D(xy[i][0], xy[i][1], heading), float(curvature)))

    return path


def generate_trajectory(start: Pose2D, interior_waypoints: Sequence[Tuple[float, float]],
                        end: Pose2D, config: TrajectoryConfig) -> Trajectory:
    """
    生成满足约束的轨迹

    Args:
        start: 起点位姿
        interior_waypoints: 中间路径点 (x, y)，可为空
        end: 终点位姿
        config: 轨迹生成参数

    Returns:
        时间参数化后的轨迹

    Raises:
        InvalidTrajectoryError: 路径点退化
        InfeasiblePathError: 约束无法满足
    """
    path = fit_path(start, interior_waypoints, end, config.sample_spacing, config.reversed)
    trajectory = time_parameterize(path, config)
    logger.info(
        f"Generated trajectory: {len(trajectory)} states, duration {trajectory.duration:.3f}s, "
        f"reversed={config.reversed}")
    return trajectory
