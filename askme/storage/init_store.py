"""
存储初始化脚本
负责创建资源文件、构建用户目录与问题存储，并写入默认管理员
"""

from pathlib import Path
from typing import Optional, Tuple

from askme.config import StorageConfig, get_storage_config
from askme.models.user import User, UserRole
from askme.repositories.question_store import QuestionStore
from askme.repositories.user_directory import UserDirectory
from askme.storage.file_store import FileStore


DEFAULT_ADMIN_LOGIN = "admin"


def ensure_resource(path: Path) -> None:
    """
    确保资源文件存在
    父目录不存在时一并创建；已存在的文件不做任何修改
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.touch()
        print(f"Created storage file at {path}")


def open_stores(config: Optional[StorageConfig] = None) -> Tuple[UserDirectory, QuestionStore]:
    """
    构建用户目录和问题存储（各自在构造时加载一次）

    Args:
        config: 存储配置，None 时从环境变量读取

    Returns:
        (UserDirectory, QuestionStore)
    """
    config = config or get_storage_config()
    file_store = FileStore(encoding=config.encoding)
    user_directory = UserDirectory(file_store, config.users_path)
    question_store = QuestionStore(file_store, config.questions_path, user_directory)
    return user_directory, question_store


def create_default_admin(user_directory: UserDirectory) -> Optional[User]:
    """
    创建默认管理员
    目录中已有用户时跳过，返回 None
    """
    if user_directory.list_users():
        print("Users already exist, skipping default admin")
        return None

    admin = User(
        id=user_directory.next_id(),
        display_name="Administrator",
        credential="admin",
        login_name=DEFAULT_ADMIN_LOGIN,
        email="admin@localhost",
        allow_anonymous_questions=False,
        role=UserRole.ADMIN
    )
    if not user_directory.add(admin):
        return None
    print(f"Created default admin '{DEFAULT_ADMIN_LOGIN}' (ID: {admin.id})")
    return admin


def init_storage(config: Optional[StorageConfig] = None) -> Tuple[UserDirectory, QuestionStore]:
    """
    完整的存储初始化流程
    1. 创建资源文件
    2. 加载用户目录和问题存储
    3. 创建默认管理员
    """
    print("\n=== Initializing storage ===")

    config = config or get_storage_config()

    # 创建资源文件
    ensure_resource(config.users_path)
    ensure_resource(config.questions_path)

    # 加载存储
    user_directory, question_store = open_stores(config)

    # 创建默认数据
    create_default_admin(user_directory)

    print("=== Storage initialization completed ===\n")
    return user_directory, question_store


if __name__ == "__main__":
    # 直接运行此脚本时，执行存储初始化
    init_storage()
