#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ramsete Drive 安装脚本

安装方法:
    # 可编辑安装 (推荐开发时使用)
    pip install -e .

    # 安装测试依赖
    pip install -e .[test]
"""

from setuptools import setup, find_packages

setup(
    name='ramsete-drive',
    version='1.0.0',
    author='Ramsete Drive Team',
    description='差速底盘 Ramsete 轨迹跟踪与手动驾驶',

    # 自动查找包
    packages=find_packages(include=['ramsete_drive', 'ramsete_drive.*']),

    # 依赖
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'PyYAML>=5.4.0',
    ],
    extras_require={
        'test': ['pytest'],
    },

    # Python 版本要求
    python_requires='>=3.8',

    # 包含数据文件
    include_package_data=True,
    zip_safe=False,
)
