"""
轨迹时间参数化

输入带曲率的路径采样点序列，输出满足约束的 Trajectory。

算法:
=====

1. 前向遍历: 从起点速度出发，按加速度上限推进
       v_i = min(v_max_i, sqrt(v_{i-1}² + 2·a_max_{i-1}·ds))
   若本点的加速度上限小于实际需要的加速度，回退修改前一点的加速度上限后重算。

2. 反向遍历: 从终点速度出发，按减速度上限回推，
   各采样点速度取两次遍历中的较小者。

3. 时间积分: 相邻采样点之间按匀加速运动计算时间
       dt = (v_i - v_{i-1}) / a     (a ≠ 0)
       dt = ds / v_{i-1}            (a ≈ 0)

失败条件 (InfeasiblePathError):
- 某个约束给出的加速度区间为空 (min > max)
- 中间某个采样点的速度上限不大于 0，曲线无法以非零速度通过
"""
from typing import List, NamedTuple, Sequence
import math
import logging

from ..core.data_types import Pose2D, TrajectoryState, Trajectory
from ..core.constants import EPSILON, EPSILON_VELOCITY
from ..core.exceptions import InfeasiblePathError
from .config import TrajectoryConfig

logger = logging.getLogger(__name__)


class PathPoint(NamedTuple):
    """带曲率的路径采样点 (机器人实际朝向与曲率)"""
    pose: Pose2D
    curvature: float


class _ConstrainedState:
    __slots__ = ('point', 'distance', 'max_velocity', 'min_acceleration', 'max_acceleration')

    def __init__(self, point: PathPoint, distance: float, max_velocity: float,
                 min_acceleration: float, max_acceleration: float):
        self.point = point
        self.distance = distance
        self.max_velocity = max_velocity
        self.min_acceleration = min_acceleration
        self.max_acceleration = max_acceleration


def _enforce_acceleration_limits(state: _ConstrainedState, config: TrajectoryConfig,
                                 index: int) -> None:
    """与所有约束给出的加速度区间取交集"""
    sign = -1.0 if config.reversed else 1.0
    for constraint in config.constraints:
        min_accel, max_accel = constraint.min_max_acceleration(
            state.point.pose, state.point.curvature, state.max_velocity * sign)
        if min_accel > max_accel:
            raise InfeasiblePathError(
                f"Constraint {constraint!r} has empty acceleration range "
                f"[{min_accel:.4f}, {max_accel:.4f}] at sample {index}", index=index)
        # 倒车时约束给出的是有符号加速度，取反后变为沿路径方向的加速度
        state.min_acceleration = max(state.min_acceleration,
                                     -max_accel if config.reversed else min_accel)
        state.max_acceleration = min(state.max_acceleration,
                                     -min_accel if config.reversed else max_accel)


def time_parameterize(points: Sequence[PathPoint], config: TrajectoryConfig) -> Trajectory:
    """
    对路径采样点做时间参数化

    Args:
        points: 路径采样点，相邻点不重合
        config: 速度/加速度上限、起止速度与约束

    Returns:
        Trajectory，倒车时速度与加速度为负

    Raises:
        InfeasiblePathError: 约束无法满足
    """
    if len(points) < 2:
        raise InfeasiblePathError("At least two path points are required for time parameterization")

    max_accel = config.max_acceleration
    states: List[_ConstrainedState] = []

    # ------------------------------------------------------------------
    # 前向遍历
    # ------------------------------------------------------------------
    predecessor = _ConstrainedState(points[0], 0.0, abs(config.start_velocity), -max_accel, max_accel)

    for i, point in enumerate(points):
        ds = point.pose.distance_to(predecessor.point.pose)
        state = _ConstrainedState(point, predecessor.distance + ds, 0.0, -max_accel, max_accel)

        while True:
            # 由前一点的加速度上限决定的可达速度
            reachable = predecessor.max_velocity ** 2 + 2.0 * predecessor.max_acceleration * ds
            state.max_velocity = min(config.max_velocity, math.sqrt(max(reachable, 0.0)))
            state.min_acceleration = -max_accel
            state.max_acceleration = max_accel

            for constraint in config.constraints:
                state.max_velocity = min(
                    state.max_velocity,
                    constraint.max_velocity(point.pose, point.curvature, state.max_velocity))

            _enforce_acceleration_limits(state, config, i)

            if ds < EPSILON:
                break

            actual_acceleration = (state.max_velocity ** 2 - predecessor.max_velocity ** 2) / (2.0 * ds)
            if state.max_acceleration < actual_acceleration - EPSILON:
                # 本点无法承受这么大的加速度，降低前一点的加速度上限后重算
                predecessor.max_acceleration = state.max_acceleration
            else:
                if actual_acceleration > predecessor.min_acceleration:
                    predecessor.max_acceleration = actual_acceleration
                break

        states.append(state)
        predecessor = state

    # ------------------------------------------------------------------
    # 反向遍历
    # ------------------------------------------------------------------
    successor = _ConstrainedState(points[-1], states[-1].distance, abs(config.end_velocity),
                                  -max_accel, max_accel)

    for i in range(len(states) - 1, -1, -1):
        state = states[i]
        ds = state.distance - successor.distance   # <= 0

        while True:
            reachable = successor.max_velocity ** 2 + 2.0 * successor.min_acceleration * ds
            new_max_velocity = math.sqrt(max(reachable, 0.0))
            if new_max_velocity >= state.max_velocity:
                break

            state.max_velocity = new_max_velocity
            _enforce_acceleration_limits(state, config, i)

            if abs(ds) < EPSILON:
                break

            actual_acceleration = (state.max_velocity ** 2 - successor.max_velocity ** 2) / (2.0 * ds)
            if state.min_acceleration > actual_acceleration + EPSILON:
                successor.min_acceleration = state.min_acceleration
            else:
                successor.min_acceleration = actual_acceleration
                break

        successor = state

    # 中间点速度为 0 意味着曲线无法通过
    for i in range(1, len(states) - 1):
        if states[i].max_velocity <= EPSILON_VELOCITY:
            raise InfeasiblePathError(
                f"Velocity limit at sample {i} is {states[i].max_velocity:.3g} m/s, "
                f"curvature {states[i].point.curvature:.3f} cannot be taken", index=i)

    # ------------------------------------------------------------------
    # 时间积分
    # ------------------------------------------------------------------
    sign = -1.0 if config.reversed else 1.0
    time = 0.0
    distance = 0.0
    velocity = 0.0
    times: List[float] = []
    accelerations: List[float] = []

    for i, state in enumerate(states):
        ds = state.distance - distance
        accel = 0.0
        dt = 0.0
        if i > 0:
            accel = (state.max_velocity ** 2 - velocity ** 2) / (2.0 * ds)
            accelerations[i - 1] = accel
            if abs(accel) > EPSILON:
                dt = (state.max_velocity - velocity) / accel
            elif abs(velocity) > EPSILON:
                dt = ds / velocity
            else:
                raise InfeasiblePathError(f"Robot cannot move between samples {i - 1} and {i}", index=i)

        velocity = state.max_velocity
        distance = state.distance
        time += dt
        times.append(time)
        accelerations.append(accel)

    result = [
        TrajectoryState(
            t=times[i],
            pose=state.point.pose,
            velocity=sign * state.max_velocity,
            acceleration=sign * accelerations[i],
            curvature=state.point.curvature,
        )
        for i, state in enumerate(states)
    ]
    trajectory = Trajectory(result)
    logger.debug(f"Parameterized {len(points)} points into {trajectory}")
    return trajectory
