"""
通用常量和基础数学函数定义

本模块定义了整个驱动系统使用的通用常量和不依赖其他模块的基础数学函数。

常量分类:
=========

1. 数值稳定性常量 (Numerical Stability)
   - 用于避免除零、判断小角度等问题

2. 时间常量 (Time Constants)
   - 控制周期比较时使用的容差

基础数学函数:
=============

本模块包含不依赖其他模块的基础数学函数（角度归一化、sinc），
这些函数被放在这里以避免循环导入问题。

使用示例:
=========

    from ramsete_drive.core.constants import (
        EPSILON, EPSILON_ANGLE, normalize_angle, angle_difference, sinc
    )

    # 角度归一化
    theta = normalize_angle(theta + delta)

    # 角度差计算
    error = angle_difference(target, current)
"""

import numpy as np


# =============================================================================
# 基础数学函数 (不依赖其他模块，避免循环导入)
# =============================================================================

def normalize_angle(angle: float) -> float:
    """
    将角度归一化到 (-π, π] 范围

    使用 arctan2(sin, cos) 方法，数值稳定且高效。
    arctan2 在 -π 处取值为闭区间端点，这里统一映射到 +π，
    保证同一个朝向只有一种表示。

    Args:
        angle: 输入角度 (弧度)

    Returns:
        归一化后的角度 (弧度)，范围 (-π, π]

    Examples:
        >>> normalize_angle(3 * np.pi)   # 约等于 π
        >>> normalize_angle(-np.pi)      # 等于 π
    """
    result = float(np.arctan2(np.sin(angle), np.cos(angle)))
    if result <= -np.pi:
        result += 2.0 * np.pi
    return result


def angle_difference(angle1: float, angle2: float) -> float:
    """
    计算两个角度之间的最短差值

    结果表示从 angle2 到 angle1 的最短旋转方向和角度。
    正值表示逆时针旋转，负值表示顺时针旋转。

    Args:
        angle1: 目标角度 (弧度)
        angle2: 起始角度 (弧度)

    Returns:
        角度差 (弧度)，范围 (-π, π]
    """
    return normalize_angle(angle1 - angle2)


def sinc(x: float) -> float:
    """
    非归一化 sinc 函数: sin(x) / x，x = 0 时取极限值 1

    注意: np.sinc 是归一化版本 sin(πx)/(πx)，不能直接使用。
    """
    if abs(x) < EPSILON_ANGLE:
        return 1.0 - x * x / 6.0
    return float(np.sin(x) / x)


# =============================================================================
# 数值稳定性常量 (Numerical Stability Constants)
# =============================================================================

# 通用小量阈值
# 用于一般的数值比较和避免除零
EPSILON = 1e-6

# 角度计算阈值
# 小于此值的转角按直线运动处理 (使用泰勒展开)
EPSILON_ANGLE = 1e-9

# 速度计算最小阈值
# 低于此值的轨迹点速度视为 0，用于可行性判断
EPSILON_VELOCITY = 1e-6


# =============================================================================
# 时间常量 (Time Constants)
# =============================================================================

# 控制周期比较容差 (秒)
# elapsed = ticks * period 可能因浮点误差略小于轨迹时长，
# 在判断 "elapsed >= duration" 时使用此容差
TIME_TOLERANCE = 1e-9


# =============================================================================
# 导出列表
# =============================================================================

__all__ = [
    # 数值稳定性常量
    'EPSILON',
    'EPSILON_ANGLE',
    'EPSILON_VELOCITY',
    # 时间常量
    'TIME_TOLERANCE',
    # 基础数学函数
    'normalize_angle',
    'angle_difference',
    'sinc',
]
