"""
存储配置模块
从系统环境变量读取用户文件与问题文件的位置
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field


DEFAULT_USERS_FILE = "users.txt"
DEFAULT_QUESTIONS_FILE = "questions.txt"


class StorageConfig(BaseModel):
    """
    存储配置
    核心只依赖两个资源路径，没有网络或时钟依赖
    """
    users_path: Path = Field(description="用户记录文件")
    questions_path: Path = Field(description="问题记录文件")
    encoding: str = Field(default="utf-8", description="文件编码")


def _resolve_path(raw_path: str) -> Path:
    """
    相对路径从当前工作目录解析
    包以普通方式安装时 __file__ 位于 site-packages，不能作为数据目录
    """
    path = Path(raw_path)
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def get_storage_config() -> StorageConfig:
    """
    获取存储配置
    优先使用环境变量，否则使用当前工作目录下的默认文件

    环境变量：
    - ASKME_USERS_PATH: 用户文件路径（默认 users.txt）
    - ASKME_QUESTIONS_PATH: 问题文件路径（默认 questions.txt）
    - ASKME_ENCODING: 文件编码（默认 utf-8）
    """
    users_path = os.environ.get("ASKME_USERS_PATH", DEFAULT_USERS_FILE)
    questions_path = os.environ.get("ASKME_QUESTIONS_PATH", DEFAULT_QUESTIONS_FILE)
    encoding = os.environ.get("ASKME_ENCODING", "utf-8")
    return StorageConfig(
        users_path=_resolve_path(users_path),
        questions_path=_resolve_path(questions_path),
        encoding=encoding
    )
