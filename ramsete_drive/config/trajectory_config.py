"""轨迹配置

轨迹生成与加载相关的配置参数：
- 速度/加速度上限
- 电压约束 (与 drive.max_voltage 独立，通常略小以留出反馈裕度)
- 向心加速度约束
- 样条采样间距
- 轨迹文件目录
"""

# 轨迹配置
TRAJECTORY_CONFIG = {
    'max_velocity': 0.8,          # 最大线速度 (m/s)
    'max_acceleration': 0.8,      # 最大线加速度 (m/s²)
    'max_voltage': 10.0,          # 电压约束上限 (V)
    'max_centripetal': None,      # 最大向心加速度 (m/s²)，None 表示不启用
    'max_wheel_speed': None,      # 单轮最大速度 (m/s)，None 表示不启用
    'sample_spacing': 0.01,       # 样条采样间距 (m)
    'deploy_dir': 'deploy',       # 轨迹文件根目录，文件位于 <deploy_dir>/output/<name>.wpilib.json
}

# 轨迹配置验证规则
TRAJECTORY_VALIDATION_RULES = {
    'trajectory.max_velocity': (0.01, 20.0, '最大线速度 (m/s)'),
    'trajectory.max_acceleration': (0.01, 50.0, '最大线加速度 (m/s²)'),
    'trajectory.max_voltage': (0.1, 24.0, '电压约束上限 (V)'),
    'trajectory.max_centripetal': (0.01, 50.0, '最大向心加速度 (m/s²)'),
    'trajectory.max_wheel_speed': (0.01, 20.0, '单轮最大速度 (m/s)'),
    'trajectory.sample_spacing': (0.001, 1.0, '样条采样间距 (m)'),
}
