"""
Pytest 测试配置
提供临时存储文件、用户目录、问题存储和测试用户等测试基础设施
"""

import sys
from pathlib import Path

import pytest

# 添加项目根目录到 sys.path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from askme.config import StorageConfig
from askme.models import User, UserRole
from askme.repositories.question_store import QuestionStore
from askme.repositories.user_directory import UserDirectory
from askme.storage.file_store import FileStore


# ==================== 存储 Fixtures ====================

@pytest.fixture(scope="function")
def storage_config(tmp_path: Path) -> StorageConfig:
    """
    创建测试用的存储配置
    每个测试函数都会获得一组全新的临时文件路径
    """
    return StorageConfig(
        users_path=tmp_path / "users.txt",
        questions_path=tmp_path / "questions.txt"
    )


@pytest.fixture(scope="function")
def file_store() -> FileStore:
    """创建文件读写器"""
    return FileStore()


@pytest.fixture(scope="function")
def user_directory(file_store: FileStore, storage_config: StorageConfig) -> UserDirectory:
    """
    创建空的用户目录
    用户文件尚不存在，加载结果为空
    """
    return UserDirectory(file_store, storage_config.users_path)


@pytest.fixture(scope="function")
def question_store(
    file_store: FileStore,
    storage_config: StorageConfig,
    user_directory: UserDirectory
) -> QuestionStore:
    """创建空的问题存储"""
    return QuestionStore(file_store, storage_config.questions_path, user_directory)


# ==================== 测试数据 Fixtures ====================

@pytest.fixture(scope="function")
def admin_user(user_directory: UserDirectory) -> User:
    """
    创建测试管理员（ID 1）
    """
    user = User(
        id=1,
        display_name="Admin",
        credential="root",
        login_name="admin",
        email="admin@example.com",
        allow_anonymous_questions=False,
        role=UserRole.ADMIN
    )
    assert user_directory.add(user)
    return user


@pytest.fixture(scope="function")
def alice(user_directory: UserDirectory, admin_user: User) -> User:
    """
    创建接受匿名提问的普通用户（ID 2）
    """
    user = User(
        id=2,
        display_name="Alice",
        credential="alice-pw",
        login_name="alice",
        email="alice@example.com",
        allow_anonymous_questions=True
    )
    assert user_directory.add(user)
    return user


@pytest.fixture(scope="function")
def bob(user_directory: UserDirectory, alice: User) -> User:
    """
    创建不接受匿名提问的普通用户（ID 3）
    """
    user = User(
        id=3,
        display_name="Bob",
        credential="bob-pw",
        login_name="bob",
        email="bob@example.com",
        allow_anonymous_questions=False
    )
    assert user_directory.add(user)
    return user


# ==================== Pytest 配置 ====================

def pytest_configure(config):
    """
    Pytest 初始化配置
    """
    # 标记测试分类
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: Slow running tests"
    )
