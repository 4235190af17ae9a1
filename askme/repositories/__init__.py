"""
Repository (DAO) 模块
提供内存映射 + 文件持久化的抽象层，封装 CRUD 逻辑
"""

from .user_directory import UserDirectory
from .question_store import QuestionStore

__all__ = [
    "UserDirectory",
    "QuestionStore"
]
