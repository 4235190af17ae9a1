"""
记录模型模块
导出所有记录模型和枚举类型
"""

# 用户域模型
from .user import User, UserRole

# 问答域模型
from .question import Question, NO_PARENT

# 基础模型
from .base import RecordModel

# 定义导出的内容
__all__ = [
    # 用户域
    "User", "UserRole",
    # 问答域
    "Question", "NO_PARENT",
    # 基础模型
    "RecordModel"
]
