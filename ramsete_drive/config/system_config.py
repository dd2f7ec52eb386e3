"""系统基础配置

包含驱动系统的基础参数：
- 控制周期
- 日志级别
"""

# 系统配置
SYSTEM_CONFIG = {
    'tick_period': 0.02,          # 控制周期 (秒)，外部调度器以此周期调用 execute()
    'log_level': 'INFO',          # 日志级别
}

# 系统配置验证规则
SYSTEM_VALIDATION_RULES = {
    'system.tick_period': (0.001, 1.0, '控制周期 (秒)'),
}
