"""底盘配置

底盘物理参数和执行器模型：
- 轮距 (运动学)
- 电机线性电压模型 V = kS·sign(v) + kV·v + kA·a (前馈)
- 轮速 PID 增益
- 电压包络
- 里程计行为

默认值为小型差速底盘 (Romi) 的特性辨识结果。
"""

# 底盘配置
DRIVE_CONFIG = {
    'track_width': 0.142072613,   # 轮距 (m)
    'ks': 0.929,                  # 静摩擦电压 (V)
    'kv': 6.33,                   # 速度增益 (V·s/m)
    'ka': 0.0389,                 # 加速度增益 (V·s²/m)
    'kp': 0.085,                  # 轮速 P 增益 (V/(m/s))
    'ki': 0.0,                    # 轮速 I 增益
    'kd': 0.0,                    # 轮速 D 增益
    'integrator_limit': 1.0,      # I 项积分限幅 (V)
    'max_voltage': 10.0,          # 单轮最大电压 (V)，PID 项限幅与轨迹约束共用
}

# 里程计配置
#
# strict_time_order:
#   True  - update() 时间戳不递增时抛出 InvalidTimeOrderError (测试使用)
#   False - 记录节流警告并忽略本次更新 (生产环境)
ODOMETRY_CONFIG = {
    'strict_time_order': False,
    'warn_interval': 5.0,         # 时间乱序警告的最小间隔 (秒)
}

# 底盘配置验证规则
DRIVE_VALIDATION_RULES = {
    'drive.track_width': (0.01, 5.0, '轮距 (m)'),
    'drive.ks': (0.0, 12.0, '静摩擦电压 (V)'),
    'drive.kv': (0.01, 100.0, '速度增益 (V·s/m)'),
    'drive.ka': (0.0, 100.0, '加速度增益 (V·s²/m)'),
    'drive.kp': (0.0, 100.0, '轮速 P 增益'),
    'drive.ki': (0.0, 100.0, '轮速 I 增益'),
    'drive.kd': (0.0, 100.0, '轮速 D 增益'),
    'drive.integrator_limit': (0.0, 24.0, 'I 项积分限幅 (V)'),
    'drive.max_voltage': (0.1, 24.0, '单轮最大电压 (V)'),
    'odometry.warn_interval': (0.0, 60.0, '时间乱序警告间隔 (秒)'),
}
