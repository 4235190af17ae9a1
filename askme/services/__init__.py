"""
服务层模块
提供业务逻辑的抽象层，把仓储层的布尔结果转换为异常
"""

from .auth_service import AuthService
from .qa_service import QAService

__all__ = [
    "AuthService",
    "QAService"
]
