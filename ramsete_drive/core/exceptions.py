"""
自定义异常类

本模块定义了驱动系统使用的自定义异常类。

异常层次结构:
=============

ControllerError (基类)
├── ConfigurationError
│   └── ConfigValidationError
├── TrajectoryError
│   ├── InvalidTrajectoryError
│   ├── InfeasiblePathError
│   └── TrajectoryUnavailableError
└── ControllerRuntimeError
    └── InvalidTimeOrderError

使用指南:
=========

1. 配置错误 (ConfigurationError)
   - 在系统启动时抛出
   - 应该阻止系统启动
   - 示例：track_width <= 0, zeta 不在 (0, 1) 内

2. 轨迹错误 (TrajectoryError)
   - 在轨迹构造、生成或加载时抛出，即跟踪开始之前
   - InfeasiblePathError: 电压约束下某段曲线无法通过，坏轨迹永远不会开始执行
   - TrajectoryUnavailableError: 轨迹文件缺失或损坏，由文件加载层报告，
     跟踪命令将其视为 "无可跟踪内容" 并立即结束

3. 运行时错误 (ControllerRuntimeError)
   - InvalidTimeOrderError: 里程计更新时间不单调，属于编程错误
   - 测试中 (strict 模式) 直接抛出，生产环境下降级为 no-op 并记录警告

注意:
=====

- 跟踪开始后控制律本身不会失败，控制循环中不抛出异常
- 轨迹加载失败不自动重试，需要操作员重新选择
"""


class ControllerError(Exception):
    """控制器错误基类"""
    pass


# =============================================================================
# 配置错误
# =============================================================================

class ConfigurationError(ControllerError):
    """配置错误基类"""
    pass


class ConfigValidationError(ConfigurationError):
    """
    配置验证错误

    当配置参数不满足验证规则时抛出。

    Attributes:
        errors: 错误列表，每个元素为 (key_path, error_message)
    """

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []


# =============================================================================
# 轨迹错误
# =============================================================================

class TrajectoryError(ControllerError):
    """轨迹错误基类"""
    pass


class InvalidTrajectoryError(TrajectoryError):
    """
    轨迹数据无效

    轨迹为空或时间戳不严格递增时抛出。
    """
    pass


class InfeasiblePathError(TrajectoryError):
    """
    路径不可行

    约束处理无法在电压限制内满足某处曲率时抛出。

    Attributes:
        index: 出问题的路径采样点索引 (未知时为 None)
    """

    def __init__(self, message: str, index: int = None):
        super().__init__(message)
        self.index = index


class TrajectoryUnavailableError(TrajectoryError):
    """
    轨迹不可用

    轨迹文件缺失或内容损坏时由加载层抛出。

    Attributes:
        path: 轨迹文件路径
    """

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


# =============================================================================
# 运行时错误
# =============================================================================

class ControllerRuntimeError(ControllerError):
    """
    控制器运行时错误基类

    注意：命名为 ControllerRuntimeError 以避免与内置 RuntimeError 冲突
    """
    pass


class InvalidTimeOrderError(ControllerRuntimeError):
    """
    时间顺序错误

    里程计 update() 的时间戳不大于上次更新时间时抛出 (仅 strict 模式)。
    """

    def __init__(self, time: float, last_update_time: float):
        super().__init__(
            f"Odometry update time {time:.6f}s is not after last update {last_update_time:.6f}s"
        )
        self.time = time
        self.last_update_time = last_update_time


# =============================================================================
# 导出列表
# =============================================================================

__all__ = [
    'ControllerError',
    'ConfigurationError',
    'ConfigValidationError',
    'TrajectoryError',
    'InvalidTrajectoryError',
    'InfeasiblePathError',
    'TrajectoryUnavailableError',
    'ControllerRuntimeError',
    'InvalidTimeOrderError',
]
