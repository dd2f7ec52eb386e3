"""默认配置

本模块合并所有配置子模块，提供统一的配置接口。

配置结构:
- system_config.py: 系统基础配置 (控制周期)
- drive_config.py: 底盘物理参数、执行器模型、里程计
- tracker_config.py: Ramsete 控制律参数
- trajectory_config.py: 轨迹生成约束
- command_config.py: 命令、手动驾驶与自动例程配置
- validation.py: 配置验证

使用示例:
    import copy
    from ramsete_drive.config import DEFAULT_CONFIG

    config = copy.deepcopy(DEFAULT_CONFIG)
    config['ramsete']['b'] = 2.5
"""
from typing import Dict, Any
import copy

from .system_config import SYSTEM_CONFIG, SYSTEM_VALIDATION_RULES
from .drive_config import DRIVE_CONFIG, ODOMETRY_CONFIG, DRIVE_VALIDATION_RULES
from .tracker_config import RAMSETE_CONFIG, TRACKER_VALIDATION_RULES
from .trajectory_config import TRAJECTORY_CONFIG, TRAJECTORY_VALIDATION_RULES
from .command_config import (
    COMMAND_CONFIG,
    MANUAL_DRIVE_CONFIG,
    TURN_CONFIG,
    AUTONOMOUS_CONFIG,
    COMMAND_VALIDATION_RULES,
)
from .validation import (
    ConfigValidationError,
    ValidationSeverity,
    get_config_value,
    validate_full_config,
)


# =============================================================================
# 合并所有配置
# =============================================================================
DEFAULT_CONFIG: Dict[str, Any] = {
    'system': copy.deepcopy(SYSTEM_CONFIG),
    'drive': copy.deepcopy(DRIVE_CONFIG),
    'odometry': copy.deepcopy(ODOMETRY_CONFIG),
    'ramsete': copy.deepcopy(RAMSETE_CONFIG),
    'trajectory': copy.deepcopy(TRAJECTORY_CONFIG),
    'command': copy.deepcopy(COMMAND_CONFIG),
    'manual_drive': copy.deepcopy(MANUAL_DRIVE_CONFIG),
    'turn': copy.deepcopy(TURN_CONFIG),
    'autonomous': copy.deepcopy(AUTONOMOUS_CONFIG),
}


# =============================================================================
# 合并所有验证规则
# =============================================================================
CONFIG_VALIDATION_RULES: Dict[str, tuple] = {}
CONFIG_VALIDATION_RULES.update(SYSTEM_VALIDATION_RULES)
CONFIG_VALIDATION_RULES.update(DRIVE_VALIDATION_RULES)
CONFIG_VALIDATION_RULES.update(TRACKER_VALIDATION_RULES)
CONFIG_VALIDATION_RULES.update(TRAJECTORY_VALIDATION_RULES)
CONFIG_VALIDATION_RULES.update(COMMAND_VALIDATION_RULES)


def validate_config(config: Dict[str, Any], raise_on_error: bool = True) -> list:
    """
    验证配置参数 (范围 + 逻辑一致性)

    Args:
        config: 配置字典
        raise_on_error: 是否在发现 FATAL/ERROR 级别错误时抛出异常

    Returns:
        错误列表，每个元素为 (key_path, error_message, severity)

    Raises:
        ConfigValidationError: 当 raise_on_error=True 且发现错误时

    Example:
        >>> config = copy.deepcopy(DEFAULT_CONFIG)
        >>> config['ramsete']['zeta'] = 1.5
        >>> errors = validate_config(config, raise_on_error=False)
    """
    return validate_full_config(config, CONFIG_VALIDATION_RULES, raise_on_error)


def create_default_config() -> Dict[str, Any]:
    """返回 DEFAULT_CONFIG 的深拷贝，调用方可以自由修改"""
    return copy.deepcopy(DEFAULT_CONFIG)


__all__ = [
    'DEFAULT_CONFIG',
    'CONFIG_VALIDATION_RULES',
    'validate_config',
    'create_default_config',
    'get_config_value',
    'ConfigValidationError',
    'ValidationSeverity',
    'SYSTEM_CONFIG',
    'DRIVE_CONFIG',
    'ODOMETRY_CONFIG',
    'RAMSETE_CONFIG',
    'TRAJECTORY_CONFIG',
    'COMMAND_CONFIG',
    'MANUAL_DRIVE_CONFIG',
    'TURN_CONFIG',
    'AUTONOMOUS_CONFIG',
]
