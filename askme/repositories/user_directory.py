"""
用户目录 Repository
内存中的用户注册表，构造时从用户文件加载一次，每次变更后整体重写文件
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

from askme.errors import MalformedRecordError, NotFoundError
from askme.models.user import User
from askme.storage.codec import decode_record, encode_record
from askme.storage.file_store import FileStore


class UserDirectory:
    """
    用户数据访问对象
    持有 id -> User 的映射，是用户记录的唯一拥有者
    """

    def __init__(self, file_store: FileStore, users_path: Union[str, Path]):
        """
        初始化 Repository 并加载用户文件

        Args:
            file_store: 文件读写器
            users_path: 用户文件路径
        """
        self.file_store = file_store
        self.users_path = users_path
        self.users: Dict[int, User] = {}
        self.load()

    def load(self) -> None:
        """
        从文件加载全部用户，替换内存中的映射

        字段不足 7 个或数字字段无法解析的行会被跳过并打印警告，
        加载本身永远不会因为坏行而失败
        """
        users: Dict[int, User] = {}
        for line in self.file_store.read_lines(self.users_path):
            try:
                user = User.from_fields(decode_record(line))
            except MalformedRecordError as e:
                print(f"[UserDirectory] 跳过格式错误的用户行: {line} ({e})", file=sys.stderr)
                continue
            users[user.id] = user
        self.users = users

    def save(self) -> bool:
        """整体重写用户文件"""
        lines = [encode_record(user.to_fields()) for user in self.users.values()]
        return self.file_store.write_lines(self.users_path, lines)

    def get_by_id(self, user_id: int) -> User:
        """
        根据 ID 获取用户

        Args:
            user_id: 用户 ID

        Returns:
            User 对象

        Raises:
            NotFoundError: 用户不存在
        """
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    def exists(self, user_id: int) -> bool:
        return user_id in self.users

    def list_users(self) -> List[User]:
        """获取全部用户（映射迭代顺序）"""
        return list(self.users.values())

    def get_by_login_name(self, login_name: str) -> Optional[User]:
        """
        根据登录名获取用户

        Args:
            login_name: 登录名

        Returns:
            User 对象，不存在则返回 None
        """
        for user in self.users.values():
            if user.login_name == login_name:
                return user
        return None

    def _reject_line_breaks(self, user: User) -> bool:
        """字段含换行符时打印错误并返回 True"""
        fields = user.line_break_fields()
        if fields:
            print(f"[UserDirectory] 用户 {user.id} 的字段含换行符: {fields}", file=sys.stderr)
            return True
        return False

    def add(self, user: User) -> bool:
        """
        添加新用户并立即持久化

        Args:
            user: 新用户

        Returns:
            ID 已存在、字段含换行符或写入失败时返回 False
        """
        if user.id in self.users:
            print(f"[UserDirectory] 用户 ID 已存在: {user.id}", file=sys.stderr)
            return False
        if self._reject_line_breaks(user):
            return False
        self.users[user.id] = user
        return self.save()

    def delete(self, user_id: int) -> bool:
        """
        删除用户并持久化

        Returns:
            用户不存在或写入失败时返回 False
        """
        if user_id not in self.users:
            return False
        del self.users[user_id]
        print(f"[UserDirectory] 已删除用户 ID: {user_id}")
        return self.save()

    def update(self, user: User) -> bool:
        """
        整体替换已有用户并持久化

        Returns:
            用户不存在、字段含换行符或写入失败时返回 False
        """
        if user.id not in self.users:
            print(f"[UserDirectory] 用户不存在: {user.id}", file=sys.stderr)
            return False
        if self._reject_line_breaks(user):
            return False
        self.users[user.id] = user
        return self.save()

    def authenticate(self, user_id: int, credential: str) -> bool:
        """
        校验凭证：用户存在且明文凭证完全一致

        Args:
            user_id: 用户 ID
            credential: 明文凭证

        Returns:
            凭证有效返回 True
        """
        user = self.users.get(user_id)
        return user is not None and user.verify_credential(credential)

    def next_id(self) -> int:
        """
        生成下一个可用 ID
        最大 ID + 1，空目录时为 1；删除最大 ID 后该 ID 会被再次分配
        """
        if not self.users:
            return 1
        return max(self.users) + 1
