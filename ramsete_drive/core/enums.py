"""枚举定义"""
from enum import IntEnum


class CommandState(IntEnum):
    """跟踪命令状态枚举"""
    IDLE = 0
    INITIALIZING = 1
    TRACKING = 2
    FINISHED = 3
    CANCELLED = 4

    def is_terminal(self) -> bool:
        return self in (CommandState.FINISHED, CommandState.CANCELLED)


class DriveMode(IntEnum):
    """手动驾驶模式"""
    ARCADE = 0               # 单摇杆: 速度 + 旋转
    TANK = 1                 # 双摇杆: 左轮 + 右轮
