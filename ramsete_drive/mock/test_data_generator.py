"""
测试数据生成器

生成用于测试的解析轨迹 (不经过样条拟合和时间参数化)。
"""
import math
from typing import List

from ..core.data_types import Pose2D, TrajectoryState, Trajectory


def create_test_trajectory(
    trajectory_type: str = 'straight',
    duration: float = 2.0,
    dt: float = 0.02,
    speed: float = 1.0,
    **kwargs
) -> Trajectory:
    """
    创建测试轨迹

    Args:
        trajectory_type: 轨迹类型 ('straight', 'arc', 'trapezoid')
        duration: 轨迹时长 (秒)
        dt: 状态间隔 (秒)
        speed: 线速度 (m/s)，负值表示倒车
        **kwargs: 轨迹类型特定参数
            start: 起点位姿 (Pose2D)，默认原点
            radius: 'arc' 的转弯半径 (m)，正值为左转
            accel: 'trapezoid' 的加速度 (m/s²)

    Returns:
        Trajectory 对象，最后一个状态的 t 精确等于 duration
    """
    start = kwargs.get('start', Pose2D())
    if duration <= 0.0:
        # 单点轨迹
        times = [0.0]
    else:
        num_steps = max(1, int(round(duration / dt)))
        times = [duration * i / num_steps for i in range(num_steps + 1)]
    states: List[TrajectoryState] = []

    if trajectory_type == 'straight':
        # 匀速直线
        for t in times:
            states.append(TrajectoryState(
                t=t, pose=start.transform_by(speed * t, 0.0), velocity=speed))

    elif trajectory_type == 'arc':
        # 匀速圆弧
        radius = kwargs.get('radius', 1.0)
        curvature = 1.0 / radius
        for t in times:
            s = speed * t
            theta = s * curvature
            states.append(TrajectoryState(
                t=t,
                pose=start.transform_by(radius * math.sin(theta), radius * (1.0 - math.cos(theta)), theta),
                velocity=speed,
                curvature=curvature,
            ))

    elif trajectory_type == 'trapezoid':
        # 直线梯形速度曲线: 加速 - 匀速 - 减速
        accel = kwargs.get('accel', 1.0)
        ramp = min(abs(speed) / accel, duration / 2.0)
        peak = math.copysign(accel * ramp, speed)
        signed_accel = math.copysign(accel, speed)
        for t in times:
            if t < ramp:
                v, a = signed_accel * t, signed_accel
                s = 0.5 * signed_accel * t * t
            elif t <= duration - ramp:
                v, a = peak, 0.0
                s = 0.5 * peak * ramp + peak * (t - ramp)
            else:
                tr = duration - t
                v, a = signed_accel * tr, -signed_accel
                s = 0.5 * peak * ramp + peak * (duration - 2 * ramp) + (0.5 * peak * ramp - 0.5 * signed_accel * tr * tr)
            states.append(TrajectoryState(t=t, pose=start.transform_by(s, 0.0), velocity=v, acceleration=a))

    else:
        raise ValueError(f"Unknown trajectory type: {trajectory_type}")

    return Trajectory(states)
