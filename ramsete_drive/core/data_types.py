"""
数据类型定义

本模块定义了驱动系统使用的核心数据类型。

坐标系说明:
===========

1. field (场地坐标系)
   - 原点在场地固定点，X 轴朝前，Y 轴朝左，航向逆时针为正
   - 轨迹和里程计位姿都在此坐标系下

2. robot (机体坐标系)
   - 原点在两轮轴线中点，X 轴朝车头方向
   - ChassisSpeeds 在此坐标系下 (线速度沿 X 轴，角速度绕 Z 轴)

数据流:
   Trajectory (field) + Odometry (field) → Ramsete → ChassisSpeeds (robot)
   → 运动学 → WheelSpeeds → 电压命令

关键数据类型:
   - Pose2D: 平面位姿，不可变值类型
   - Trajectory: 按时间排序的期望状态序列，构造后只读
   - OdometryState: 里程计的可变状态，由里程计独占
"""
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple, Iterator, Sequence
import math
import logging

from .constants import normalize_angle, angle_difference, EPSILON_ANGLE
from .enums import CommandState
from .exceptions import InvalidTrajectoryError, ConfigValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# 位姿
# =============================================================================

@dataclass(frozen=True)
class Pose2D:
    """
    平面位姿 (x, y, heading)

    heading 在构造时归一化到 (-π, π]。
    """
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        object.__setattr__(self, 'heading', normalize_angle(self.heading))

    def relative_to(self, other: 'Pose2D') -> 'Pose2D':
        """
        将本位姿表示在 other 的局部坐标系下

        Args:
            other: 参考位姿

        Returns:
            以 other 为原点、other 航向为 X 轴的相对位姿
        """
        dx = self.x - other.x
        dy = self.y - other.y
        cos_h = math.cos(other.heading)
        sin_h = math.sin(other.heading)
        return Pose2D(
            x=cos_h * dx + sin_h * dy,
            y=-sin_h * dx + cos_h * dy,
            heading=self.heading - other.heading,
        )

    def transform_by(self, dx: float, dy: float, dtheta: float = 0.0) -> 'Pose2D':
        """在本位姿的局部坐标系下平移 (dx, dy) 后再旋转 dtheta"""
        cos_h = math.cos(self.heading)
        sin_h = math.sin(self.heading)
        return Pose2D(
            x=self.x + cos_h * dx - sin_h * dy,
            y=self.y + sin_h * dx + cos_h * dy,
            heading=self.heading + dtheta,
        )

    def exp(self, dx: float, dy: float, dtheta: float) -> 'Pose2D':
        """
        沿局部坐标系下的恒定曲率运动 (twist) 积分

        twist (dx, dy, dtheta) 表示一个控制周期内机体系下的位移和转角。
        对恒定曲率圆弧做闭式积分，而不是欧拉法直接相加，
        低更新频率下航向误差不会累积。

        Args:
            dx: 机体系前向位移 (m)
            dy: 机体系侧向位移 (m)，差速车恒为 0
            dtheta: 转角 (rad)

        Returns:
            积分后的新位姿
        """
        if abs(dtheta) < EPSILON_ANGLE:
            # 小角度泰勒展开，避免 sin(θ)/θ 除零
            s = 1.0 - dtheta * dtheta / 6.0
            c = 0.5 * dtheta
        else:
            s = math.sin(dtheta) / dtheta
            c = (1.0 - math.cos(dtheta)) / dtheta
        local_x = dx * s - dy * c
        local_y = dx * c + dy * s
        return self.transform_by(local_x, local_y, dtheta)

    def distance_to(self, other: 'Pose2D') -> float:
        """两位姿平移部分之间的欧氏距离"""
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.heading)


# =============================================================================
# 速度
# =============================================================================

@dataclass(frozen=True)
class ChassisSpeeds:
    """底盘速度 (机体坐标系)"""
    linear: float = 0.0     # 线速度 (m/s)
    angular: float = 0.0    # 角速度 (rad/s)，逆时针为正


@dataclass(frozen=True)
class WheelSpeeds:
    """左右轮线速度 (m/s)"""
    left: float = 0.0
    right: float = 0.0


# =============================================================================
# 轨迹
# =============================================================================

@dataclass(frozen=True)
class TrajectoryState:
    """
    轨迹上的单个期望状态

    Attributes:
        t: 时间 (秒)，轨迹内严格递增
        pose: 期望位姿 (field 坐标系)
        velocity: 期望线速度 (m/s)，倒车为负
        acceleration: 期望线加速度 (m/s²)
        curvature: 路径曲率 (1/m)
    """
    t: float
    pose: Pose2D
    velocity: float = 0.0
    acceleration: float = 0.0
    curvature: float = 0.0

    @property
    def angular_velocity(self) -> float:
        """期望角速度 ω = v·κ"""
        return self.velocity * self.curvature

    def interpolate(self, end: 'TrajectoryState', fraction: float) -> 'TrajectoryState':
        """
        在本状态与 end 之间线性插值

        航向沿最短弧插值，fraction 被限制在 [0, 1]。
        """
        fraction = min(max(fraction, 0.0), 1.0)

        def lerp(a: float, b: float) -> float:
            return a + (b - a) * fraction

        dheading = angle_difference(end.pose.heading, self.pose.heading)
        return TrajectoryState(
            t=lerp(self.t, end.t),
            pose=Pose2D(
                lerp(self.pose.x, end.pose.x),
                lerp(self.pose.y, end.pose.y),
                self.pose.heading + dheading * fraction,
            ),
            velocity=lerp(self.velocity, end.velocity),
            acceleration=lerp(self.acceleration, end.acceleration),
            curvature=lerp(self.curvature, end.curvature),
        )


class Trajectory:
    """
    轨迹

    按时间排序的 TrajectoryState 序列，构造后只读。

    不变量:
        - 序列非空
        - t 严格递增

    采样:
        sample(t) 使用二分查找定位包围 t 的两个状态并线性插值，
        单次采样代价 O(log n)，与已运行时间无关。
    """

    __slots__ = ('_states', '_times')

    def __init__(self, states: Sequence[TrajectoryState]):
        states = tuple(states)
        if not states:
            raise InvalidTrajectoryError("Trajectory must contain at least one state")
        for i in range(1, len(states)):
            if not states[i].t > states[i - 1].t:
                raise InvalidTrajectoryError(
                    f"Trajectory times must be strictly increasing: "
                    f"t[{i - 1}]={states[i - 1].t}, t[{i}]={states[i].t}"
                )
        self._states: Tuple[TrajectoryState, ...] = states
        self._times: Tuple[float, ...] = tuple(s.t for s in states)

    @property
    def states(self) -> Tuple[TrajectoryState, ...]:
        return self._states

    @property
    def duration(self) -> float:
        """总时长 (秒) = 最后一个状态的 t"""
        return self._states[-1].t

    @property
    def initial_pose(self) -> Pose2D:
        return self._states[0].pose

    @property
    def final_pose(self) -> Pose2D:
        return self._states[-1].pose

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[TrajectoryState]:
        return iter(self._states)

    def __getitem__(self, index: int) -> TrajectoryState:
        return self._states[index]

    def __repr__(self) -> str:
        return f"Trajectory(states={len(self._states)}, duration={self.duration:.3f}s)"

    def sample(self, t: float) -> TrajectoryState:
        """
        获取时间 t 处的期望状态

        Args:
            t: 轨迹时间 (秒)

        Returns:
            t <= 首状态时间时返回首状态；t >= 时长时返回末状态；
            否则在两侧状态之间线性插值
        """
        if t <= self._times[0]:
            return self._states[0]
        if t >= self._times[-1]:
            return self._states[-1]

        # bisect_right 返回第一个 t_i > t 的索引，因此 [idx-1, idx] 包围 t
        idx = bisect_right(self._times, t)
        prev_state = self._states[idx - 1]
        next_state = self._states[idx]
        span = next_state.t - prev_state.t
        if span <= 0.0:
            return prev_state
        return prev_state.interpolate(next_state, (t - prev_state.t) / span)

    def to_records(self) -> List[Dict[str, Any]]:
        """转换为 PathWeaver 风格的记录列表"""
        return [
            {
                'time': s.t,
                'velocity': s.velocity,
                'acceleration': s.acceleration,
                'curvature': s.curvature,
                'pose': {
                    'translation': {'x': s.pose.x, 'y': s.pose.y},
                    'rotation': {'radians': s.pose.heading},
                },
            }
            for s in self._states
        ]

    @classmethod
    def from_records(cls, records: Sequence[Dict[str, Any]]) -> 'Trajectory':
        """
        从 PathWeaver 风格的记录列表构造轨迹

        Raises:
            KeyError / TypeError / ValueError: 记录字段缺失或类型错误
            InvalidTrajectoryError: 记录为空或时间不递增
        """
        states = []
        for record in records:
            pose = record['pose']
            states.append(TrajectoryState(
                t=float(record['time']),
                pose=Pose2D(
                    float(pose['translation']['x']),
                    float(pose['translation']['y']),
                    float(pose['rotation']['radians']),
                ),
                velocity=float(record.get('velocity', 0.0)),
                acceleration=float(record.get('acceleration', 0.0)),
                curvature=float(record.get('curvature', 0.0)),
            ))
        return cls(states)


# =============================================================================
# 里程计状态
# =============================================================================

@dataclass
class OdometryState:
    """里程计可变状态，由 DifferentialDriveOdometry 独占"""
    pose: Pose2D = field(default_factory=Pose2D)
    last_update_time: float = 0.0


# =============================================================================
# 控制器增益
# =============================================================================

@dataclass(frozen=True)
class RamseteGains:
    """
    Ramsete 控制律调参常数

    Attributes:
        b: 收敛激进程度，b > 0，越大收敛越快
        zeta: 阻尼比，0 < zeta < 1
    """
    b: float = 2.0
    zeta: float = 0.7

    def __post_init__(self):
        if not self.b > 0:
            raise ConfigValidationError(f"Ramsete b must be > 0, got {self.b}",
                                        [('ramsete.b', 'must be > 0')])
        if not 0.0 < self.zeta < 1.0:
            raise ConfigValidationError(f"Ramsete zeta must be in (0, 1), got {self.zeta}",
                                        [('ramsete.zeta', 'must be in (0, 1)')])


# =============================================================================
# 命令单步输出
# =============================================================================

@dataclass
class TickOutput:
    """
    跟踪命令单个控制周期的输出

    Attributes:
        state: 本周期结束时的命令状态
        elapsed: 已运行时间 (秒)
        desired: 本周期采样的期望状态 (未跟踪时为 None)
        chassis: Ramsete 输出的底盘速度
        target_wheels: 目标轮速
        left_volts, right_volts: 下发的电压
        stopped: 本周期是否下发了停止命令
    """
    state: CommandState
    elapsed: float = 0.0
    desired: Optional[TrajectoryState] = None
    chassis: Optional[ChassisSpeeds] = None
    target_wheels: Optional[WheelSpeeds] = None
    left_volts: float = 0.0
    right_volts: float = 0.0
    stopped: bool = False
