"""
日志配置

每个模块使用 logging.getLogger(__name__)，handler 和格式由应用层设置。
本模块只提供两件事:

1. set_log_level(): 按配置 system.log_level 设置整个 ramsete_drive 包的日志级别
2. ThrottledLogger: 控制周期内可能每个周期都触发的警告 (例如里程计时间戳乱序)

日志级别约定:
=============

DEBUG:
    - 控制周期内部的数值，例如期望状态、电压命令
    - 示例：logger.debug(f"tick {n}: v={v:.3f} omega={omega:.3f}")

INFO:
    - 命令状态转换、轨迹生成完成、配置加载
    - 示例：logger.info("RamseteCommand: TRACKING -> FINISHED")

WARNING:
    - 里程计时间戳乱序 (生产环境降级为 no-op)、配置警告

ERROR:
    - 轨迹文件缺失或损坏，命令降级为立即结束

不要在控制周期中记录 INFO 或更高级别的日志。
"""
import logging
import time
from typing import Union

PACKAGE_LOGGER = 'ramsete_drive'


def set_log_level(level: Union[int, str]) -> int:
    """
    设置 ramsete_drive 包日志器的级别

    Args:
        level: 日志级别，整数或级别名称 (如 'DEBUG')

    Returns:
        实际设置的级别，无法识别的名称回退为 INFO
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    return level


class ThrottledLogger:
    """
    节流日志器

    同一个 key 的消息在 min_interval 秒内最多记录一次，key 为 None 时不节流。

    使用示例:
        throttled = ThrottledLogger(logger, min_interval=5.0)
        throttled.warning("Odometry time went backwards", key="odom_time")
    """

    def __init__(self, logger: logging.Logger, min_interval: float = 1.0):
        self._logger = logger
        self._min_interval = min_interval
        self._last_log_times: dict = {}

    def _should_log(self, key: str) -> bool:
        current_time = time.monotonic()
        last_time = self._last_log_times.get(key)

        if last_time is None or current_time - last_time >= self._min_interval:
            self._last_log_times[key] = current_time
            return True
        return False

    def warning(self, msg: str, key: str = None):
        if key is None or self._should_log(key):
            self._logger.warning(msg)

    def error(self, msg: str, key: str = None):
        if key is None or self._should_log(key):
            self._logger.error(msg)
