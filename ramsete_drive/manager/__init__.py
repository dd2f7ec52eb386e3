"""底盘资源管理"""
from .drive_manager import DriveManager

__all__ = ['DriveManager']
