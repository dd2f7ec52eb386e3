"""命令配置

包含以下命令的配置：
- 轨迹跟踪命令
- 手动驾驶 (arcade / tank)
- 原地转向
- 自动例程 (按距离 / 按时间)

手动驾驶预设说明:
=================

presets 中的每一项对应一个操作员按键绑定，left_scale / right_scale
直接乘到摇杆/扳机输入上，负值表示反向。

'start' 与 'back' 两个预设各自把一侧的比例设为 0，只驱动单侧轮子。
这可能是刻意限制自由度，也可能是遗留问题，目前作为配置保留，不写死在逻辑中。
"""

# 轨迹跟踪命令配置
COMMAND_CONFIG = {
    'reset_odometry_on_start': True,   # 开始跟踪时将里程计重置到轨迹首状态位姿
}

# 手动驾驶配置
MANUAL_DRIVE_CONFIG = {
    'deadband': 0.02,             # 输入死区
    'square_inputs': True,        # 对输入平方以提高低速分辨率
    'arcade': {
        'speed_scale': 1.0,       # 速度轴比例
        'rotation_scale': 1.0,    # 旋转轴比例
    },
    'tank': {
        'left_scale': 1.0,
        'right_scale': 1.0,
    },
    'presets': {
        'start': {'mode': 'tank', 'left_scale': -0.9, 'right_scale': 0.0},
        'back': {'mode': 'tank', 'left_scale': 0.0, 'right_scale': 0.6},
    },
}

# 原地转向配置
TURN_CONFIG = {
    'speed': 0.5,                 # 转向时的输出比例 [0, 1]
    'tolerance': 0.02,            # 到达判定容差 (rad)
}

# 自动例程配置
# distance: 后退 distance 米，原地转 turn_degrees 度，再后退，再转回
# time: 以 speed 后退 drive_time 秒，以 rotation 旋转 turn_time 秒，再后退，再反向旋转
AUTONOMOUS_CONFIG = {
    'distance_tolerance': 0.005,     # 按距离行驶的到达容差 (m)
    'distance_routine': {
        'speed': -0.5,               # 输出比例 [-1, 1]，负值为后退
        'distance': 0.254,           # 每段直线距离 (m)
        'turn_degrees': 180.0,
    },
    'time_routine': {
        'speed': -0.6,
        'drive_time': 2.0,          # 每段直线行驶时间 (秒)
        'rotation': -0.5,           # 旋转比例，正值为顺时针
        'turn_time': 1.3,           # 每段旋转时间 (秒)
    },
}

# 命令配置验证规则
COMMAND_VALIDATION_RULES = {
    'manual_drive.deadband': (0.0, 0.5, '输入死区'),
    'manual_drive.arcade.speed_scale': (-1.0, 1.0, '速度轴比例'),
    'manual_drive.arcade.rotation_scale': (-1.0, 1.0, '旋转轴比例'),
    'manual_drive.tank.left_scale': (-1.0, 1.0, '左侧比例'),
    'manual_drive.tank.right_scale': (-1.0, 1.0, '右侧比例'),
    'turn.speed': (0.01, 1.0, '转向输出比例'),
    'turn.tolerance': (0.0, 1.0, '转向容差 (rad)'),
    'autonomous.distance_tolerance': (0.0, 0.1, '按距离行驶容差 (m)'),
    'autonomous.distance_routine.speed': (-1.0, 1.0, '按距离例程输出比例'),
    'autonomous.distance_routine.distance': (0.0, 10.0, '按距离例程直线距离 (m)'),
    'autonomous.distance_routine.turn_degrees': (-360.0, 360.0, '按距离例程转角 (度)'),
    'autonomous.time_routine.speed': (-1.0, 1.0, '按时间例程输出比例'),
    'autonomous.time_routine.drive_time': (0.0, 60.0, '按时间例程行驶时间 (秒)'),
    'autonomous.time_routine.rotation': (-1.0, 1.0, '按时间例程旋转比例'),
    'autonomous.time_routine.turn_time': (0.0, 60.0, '按时间例程旋转时间 (秒)'),
}
