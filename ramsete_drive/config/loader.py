"""
配置加载器

从 YAML 文件加载配置，并覆盖到默认配置之上。

YAML 文件只需包含需要修改的键，例如:

    drive:
      track_width: 0.15
    ramsete:
      b: 2.5

加载流程:
    1. 深拷贝 DEFAULT_CONFIG
    2. yaml.safe_load 读取文件
    3. 递归合并 (文件中的值覆盖默认值)
    4. 配置验证 (范围 + 逻辑一致性)
"""
from typing import Dict, Any, Optional
import copy
import logging
import os

import yaml

from .default_config import create_default_config, validate_config
from .validation import ConfigValidationError, ValidationSeverity

logger = logging.getLogger(__name__)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    递归合并两个字典，override 中的值覆盖 base

    base 被原地修改并返回。override 中的嵌套字典会与 base 中同名字典合并，
    其他类型直接替换。
    """
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def load_config(path: Optional[str] = None, validate: bool = True,
                strict: bool = True) -> Dict[str, Any]:
    """
    加载配置

    Args:
        path: YAML 文件路径，None 时返回默认配置
        validate: 是否进行配置验证
        strict: 是否严格模式
               - True: FATAL/ERROR 级别错误会抛出异常
               - False: 只有 FATAL 级别错误会抛出异常

    Returns:
        合并后的配置字典

    Raises:
        ConfigValidationError: 文件无法解析或配置存在错误时
    """
    config = create_default_config()

    if path is not None:
        if not os.path.isfile(path):
            raise ConfigValidationError(f"配置文件不存在: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                overrides = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"配置文件解析失败 {path}: {e}") from e
        if not isinstance(overrides, dict):
            raise ConfigValidationError(
                f"配置文件顶层必须是映射，实际为 {type(overrides).__name__}: {path}")
        deep_merge(config, overrides)

    if validate:
        errors = validate_config(config, raise_on_error=strict)
        if not strict:
            fatal = [(k, m) for k, m, s in errors if s == ValidationSeverity.FATAL]
            for key, msg, severity in errors:
                if severity == ValidationSeverity.ERROR:
                    logger.error(f"Config error [{key}]: {msg}")
            if fatal:
                fatal_msgs = '\n'.join([f'  - {key}: {msg}' for key, msg in fatal])
                raise ConfigValidationError(f'配置存在致命错误，无法启动:\n{fatal_msgs}', fatal)

    drive = config.get('drive', {})
    logger.info(
        f"Loaded config: track_width={drive.get('track_width')}m, "
        f"tick_period={config.get('system', {}).get('tick_period')}s, "
        f"max_voltage={drive.get('max_voltage')}V"
    )
    return config


def save_config(config: Dict[str, Any], path: str) -> None:
    """将配置写入 YAML 文件"""
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
