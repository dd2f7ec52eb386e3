"""
差速驱动运动学

底盘速度 (v, ω) 与左右轮速度之间的换算:
    v_left  = v - ω · W / 2
    v_right = v + ω · W / 2

    v = (v_left + v_right) / 2
    ω = (v_right - v_left) / W

其中 W 为轮距 (track width)。两个方向互为精确的代数逆，无状态。
"""
from .data_types import ChassisSpeeds, WheelSpeeds
from .exceptions import ConfigValidationError


class DifferentialDriveKinematics:
    """差速驱动运动学模型"""

    def __init__(self, track_width: float):
        """
        Args:
            track_width: 左右轮接地点之间的距离 (m)，必须 > 0
        """
        if not track_width > 0:
            raise ConfigValidationError(
                f"track_width must be > 0, got {track_width}",
                [('drive.track_width', 'must be > 0')])
        self.track_width = float(track_width)

    def to_wheel_speeds(self, chassis: ChassisSpeeds) -> WheelSpeeds:
        half = self.track_width / 2.0
        return WheelSpeeds(
            left=chassis.linear - chassis.angular * half,
            right=chassis.linear + chassis.angular * half,
        )

    def to_chassis_speeds(self, wheels: WheelSpeeds) -> ChassisSpeeds:
        return ChassisSpeeds(
            linear=(wheels.left + wheels.right) / 2.0,
            angular=(wheels.right - wheels.left) / self.track_width,
        )

    def __repr__(self) -> str:
        return f"DifferentialDriveKinematics(track_width={self.track_width})"
