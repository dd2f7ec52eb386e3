"""跟踪控制器配置

Ramsete 控制律参数：
- b: 收敛激进程度 (b > 0)，类似比例增益
- zeta: 阻尼比 (0 < zeta < 1)
- 到达参考点判断容差
"""

# Ramsete 配置
RAMSETE_CONFIG = {
    'b': 2.0,                     # 收敛激进程度 (rad²/m²)
    'zeta': 0.7,                  # 阻尼比
    'enabled': True,              # False 时退化为纯前馈
    'pose_tolerance': {
        'x': 0.02,                # 纵向误差容差 (m)
        'y': 0.02,                # 横向误差容差 (m)
        'heading': 0.02,          # 航向误差容差 (rad)
    },
}

# 跟踪控制器配置验证规则
# zeta 的开区间约束在 validation.validate_logical_consistency 中检查
TRACKER_VALIDATION_RULES = {
    'ramsete.b': (1e-6, 100.0, 'Ramsete b'),
    'ramsete.zeta': (0.0, 1.0, 'Ramsete zeta'),
    'ramsete.pose_tolerance.x': (0.0, 10.0, '纵向误差容差 (m)'),
    'ramsete.pose_tolerance.y': (0.0, 10.0, '横向误差容差 (m)'),
    'ramsete.pose_tolerance.heading': (0.0, 3.15, '航向误差容差 (rad)'),
}
