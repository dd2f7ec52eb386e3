"""配置验证模块

提供配置参数的验证功能：
- 范围检查
- 类型检查
- 逻辑一致性检查
- 错误严重级别分类

错误严重级别:
- FATAL: 致命错误，必须阻止启动（如最大电压不超过静摩擦电压）
- ERROR: 严重错误，默认阻止启动
- WARNING: 警告，记录但不阻止启动
"""
from typing import Dict, Any, List, Tuple, Optional
from enum import Enum
import logging

from ..core.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """验证错误严重级别"""
    FATAL = 'fatal'      # 致命错误，必须阻止启动
    ERROR = 'error'      # 严重错误，默认阻止启动
    WARNING = 'warning'  # 警告，记录但不阻止启动


VALID_DRIVE_MODES = ('tank', 'arcade')


def get_config_value(
    config: Dict[str, Any],
    key_path: str,
    default: Any = None,
    fallback_config: Optional[Dict[str, Any]] = None
) -> Any:
    """
    从配置字典中获取值，支持点分隔的路径

    Args:
        config: 配置字典
        key_path: 点分隔的键路径，如 'ramsete.b'
        default: 默认值
        fallback_config: 备选配置字典，当 config 中找不到时从此获取

    Returns:
        配置值或默认值

    Example:
        >>> config = {'ramsete': {'b': 2.0}}
        >>> get_config_value(config, 'ramsete.b')
        2.0
    """
    keys = key_path.split('.')
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            if fallback_config is not None:
                return get_config_value(fallback_config, key_path, default, None)
            return default
    return value


def _is_numeric(value) -> bool:
    """检查值是否为数值类型"""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(
    config: Dict[str, Any],
    validation_rules: Dict[str, Tuple],
    raise_on_error: bool = True
) -> List[Tuple[str, str]]:
    """
    验证配置参数范围

    Args:
        config: 配置字典
        validation_rules: 验证规则字典，格式为 {key_path: (min, max, description)}
        raise_on_error: 是否在发现错误时抛出异常

    Returns:
        错误列表，每个元素为 (key_path, error_message)

    Raises:
        ConfigValidationError: 当 raise_on_error=True 且发现错误时
    """
    errors = []

    for key_path, (min_val, max_val, description) in validation_rules.items():
        value = get_config_value(config, key_path)

        if value is None:
            continue  # 未配置或显式禁用，跳过验证

        if not _is_numeric(value):
            errors.append((key_path, f'{description} 类型错误，期望数值，实际为 {type(value).__name__}'))
            continue

        if min_val is not None and value < min_val:
            errors.append((key_path, f'{description} 值 {value} 小于最小值 {min_val}'))
        elif max_val is not None and value > max_val:
            errors.append((key_path, f'{description} 值 {value} 大于最大值 {max_val}'))

    if errors and raise_on_error:
        error_messages = '\n'.join([f'  - {key}: {msg}' for key, msg in errors])
        raise ConfigValidationError(f'配置验证失败:\n{error_messages}', errors)

    return errors


def validate_logical_consistency(config: Dict[str, Any]) -> List[Tuple[str, str, ValidationSeverity]]:
    """
    验证配置的逻辑一致性

    检查配置参数之间的逻辑关系，返回带严重级别的错误列表。

    Args:
        config: 配置字典

    Returns:
        错误列表，每个元素为 (key_path, error_message, severity)
    """
    errors = []

    def add_error(key: str, msg: str, severity: ValidationSeverity = ValidationSeverity.ERROR):
        errors.append((key, msg, severity))

    # ==========================================================================
    # 致命错误 (FATAL 级别)
    # ==========================================================================

    track_width = get_config_value(config, 'drive.track_width')
    if _is_numeric(track_width) and track_width <= 0:
        add_error('drive.track_width',
                  f'轮距 ({track_width}) 必须大于 0，否则无法计算轮速',
                  ValidationSeverity.FATAL)

    ks = get_config_value(config, 'drive.ks', 0.0)
    kv = get_config_value(config, 'drive.kv')
    drive_max_voltage = get_config_value(config, 'drive.max_voltage')
    if _is_numeric(drive_max_voltage) and _is_numeric(ks) and drive_max_voltage <= ks:
        add_error('drive.max_voltage',
                  f'最大电压 ({drive_max_voltage}V) 不大于静摩擦电压 ({ks}V)，底盘无法移动',
                  ValidationSeverity.FATAL)

    traj_max_voltage = get_config_value(config, 'trajectory.max_voltage')
    if _is_numeric(traj_max_voltage) and _is_numeric(ks) and traj_max_voltage <= ks:
        add_error('trajectory.max_voltage',
                  f'轨迹电压约束 ({traj_max_voltage}V) 不大于静摩擦电压 ({ks}V)，任何路径都不可行',
                  ValidationSeverity.FATAL)

    max_velocity = get_config_value(config, 'trajectory.max_velocity')
    if _is_numeric(max_velocity) and max_velocity <= 0:
        add_error('trajectory.max_velocity',
                  f'最大速度 ({max_velocity}) 必须大于 0',
                  ValidationSeverity.FATAL)

    # ==========================================================================
    # 严重错误 (ERROR 级别)
    # ==========================================================================

    b = get_config_value(config, 'ramsete.b')
    if _is_numeric(b) and b <= 0:
        add_error('ramsete.b', f'Ramsete b ({b}) 必须大于 0', ValidationSeverity.ERROR)

    zeta = get_config_value(config, 'ramsete.zeta')
    if _is_numeric(zeta) and not 0.0 < zeta < 1.0:
        add_error('ramsete.zeta', f'Ramsete zeta ({zeta}) 必须在开区间 (0, 1) 内',
                  ValidationSeverity.ERROR)

    if _is_numeric(traj_max_voltage) and _is_numeric(drive_max_voltage):
        if traj_max_voltage > drive_max_voltage:
            add_error('trajectory.max_voltage',
                      f'轨迹电压约束 ({traj_max_voltage}V) 大于执行器电压包络 ({drive_max_voltage}V)，'
                      f'生成的轨迹可能要求执行器无法输出的电压',
                      ValidationSeverity.ERROR)

    presets = get_config_value(config, 'manual_drive.presets', {})
    if isinstance(presets, dict):
        for name, preset in presets.items():
            key = f'manual_drive.presets.{name}'
            if not isinstance(preset, dict):
                add_error(key, '预设必须是字典', ValidationSeverity.ERROR)
                continue
            mode = preset.get('mode', 'tank')
            if mode not in VALID_DRIVE_MODES:
                add_error(f'{key}.mode', f'未知驾驶模式 {mode!r}，可选 {VALID_DRIVE_MODES}',
                          ValidationSeverity.ERROR)
            for scale_key in ('left_scale', 'right_scale', 'speed_scale', 'rotation_scale'):
                scale = preset.get(scale_key)
                if scale is None:
                    continue
                if not _is_numeric(scale) or not -1.0 <= scale <= 1.0:
                    add_error(f'{key}.{scale_key}', f'比例 ({scale}) 必须在 [-1, 1] 内',
                              ValidationSeverity.ERROR)

    # ==========================================================================
    # 警告 (WARNING 级别)
    # ==========================================================================

    kp = get_config_value(config, 'drive.kp')
    ki = get_config_value(config, 'drive.ki')
    if _is_numeric(kp) and _is_numeric(ki) and kp == 0 and ki == 0:
        add_error('drive.kp', '轮速反馈增益全为 0，执行环退化为纯前馈',
                  ValidationSeverity.WARNING)

    if (_is_numeric(max_velocity) and _is_numeric(traj_max_voltage)
            and _is_numeric(ks) and _is_numeric(kv) and kv > 0):
        steady_state_max = (traj_max_voltage - ks) / kv
        if max_velocity > steady_state_max > 0:
            add_error('trajectory.max_velocity',
                      f'最大速度 ({max_velocity}m/s) 超过电压约束下的稳态速度 ({steady_state_max:.3f}m/s)，'
                      f'实际轨迹速度将被电压约束限制',
                      ValidationSeverity.WARNING)

    log_level = get_config_value(config, 'system.log_level')
    if log_level is not None and not (
            isinstance(log_level, str) and isinstance(logging.getLevelName(log_level.upper()), int)):
        add_error('system.log_level', f'未知日志级别 {log_level!r}，将使用 INFO',
                  ValidationSeverity.WARNING)

    return errors


def validate_full_config(
    config: Dict[str, Any],
    validation_rules: Dict[str, Tuple],
    raise_on_error: bool = True
) -> List[Tuple[str, str, ValidationSeverity]]:
    """
    完整配置验证（包括范围检查和逻辑一致性检查）

    Args:
        config: 配置字典
        validation_rules: 验证规则字典
        raise_on_error: 是否在发现 FATAL/ERROR 级别错误时抛出异常

    Returns:
        错误列表，每个元素为 (key_path, error_message, severity)

    Raises:
        ConfigValidationError: 当 raise_on_error=True 且发现 FATAL/ERROR 级别错误时
    """
    range_errors = validate_config(config, validation_rules, raise_on_error=False)
    errors = [(key, msg, ValidationSeverity.ERROR) for key, msg in range_errors]
    errors.extend(validate_logical_consistency(config))

    fatal_errors = [(k, m) for k, m, s in errors if s == ValidationSeverity.FATAL]
    error_errors = [(k, m) for k, m, s in errors if s == ValidationSeverity.ERROR]
    warning_errors = [(k, m) for k, m, s in errors if s == ValidationSeverity.WARNING]

    for key, msg in warning_errors:
        logger.warning(f"配置警告 [{key}]: {msg}")

    if raise_on_error:
        if fatal_errors:
            fatal_msgs = '\n'.join([f'  - [FATAL] {key}: {msg}' for key, msg in fatal_errors])
            raise ConfigValidationError(f'配置存在致命错误，无法启动:\n{fatal_msgs}', fatal_errors)
        if error_errors:
            error_msgs = '\n'.join([f'  - [ERROR] {key}: {msg}' for key, msg in error_errors])
            raise ConfigValidationError(f'配置验证失败:\n{error_msgs}', error_errors)

    return errors
