"""配置模块

提供统一的配置接口，支持：
- 默认配置 (DEFAULT_CONFIG)
- 配置验证 (validate_config)
- YAML 配置文件加载 (load_config)

配置文件结构:
- system_config.py: 系统基础配置
- drive_config.py: 底盘物理参数与里程计配置
- tracker_config.py: Ramsete 控制律配置
- trajectory_config.py: 轨迹生成配置
- command_config.py: 命令与手动驾驶配置
- validation.py: 配置验证逻辑
- loader.py: YAML 加载与合并

使用示例:
    from ramsete_drive.config import create_default_config, validate_config

    config = create_default_config()
    config['ramsete']['zeta'] = 0.8

    errors = validate_config(config, raise_on_error=False)
"""

from .default_config import (
    DEFAULT_CONFIG,
    CONFIG_VALIDATION_RULES,
    validate_config,
    create_default_config,
    get_config_value,
    ConfigValidationError,
    ValidationSeverity,
)

from .default_config import (
    SYSTEM_CONFIG,
    DRIVE_CONFIG,
    ODOMETRY_CONFIG,
    RAMSETE_CONFIG,
    TRAJECTORY_CONFIG,
    COMMAND_CONFIG,
    MANUAL_DRIVE_CONFIG,
    TURN_CONFIG,
    AUTONOMOUS_CONFIG,
)

from .loader import load_config, save_config, deep_merge

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
    'load_config',
    'save_config',
    'deep_merge',
]
