"""
认证服务层

封装登录状态：
1. 登录：ID + 明文凭证校验
2. 注册：分配新 ID 并写入用户目录
3. 当前用户与登出
"""

from typing import Optional

from askme.errors import (
    AlreadyExistsError,
    PersistenceFailedError,
    UnauthorizedError,
    ValidationFailedError,
)
from askme.models.base import has_line_break
from askme.models.user import User, UserRole
from askme.repositories.user_directory import UserDirectory


class AuthService:
    """
    认证服务类

    使用示例：
        auth = AuthService(user_directory)
        user = auth.sign_up("Kevin", "secret", "kevin", "kevin@example.com", True)
        auth.logout()
        auth.login(user.id, "secret")
    """

    def __init__(self, user_directory: UserDirectory):
        """
        Args:
            user_directory: 用户目录
        """
        self.user_directory = user_directory
        self._current_user: Optional[User] = None

    def login(self, user_id: int, credential: str) -> User:
        """
        登录

        Args:
            user_id: 用户 ID
            credential: 明文凭证

        Returns:
            登录成功的用户

        Raises:
            UnauthorizedError: ID 或凭证错误
        """
        if not self.user_directory.authenticate(user_id, credential):
            raise UnauthorizedError("Invalid information - Please check your ID and password and try again")
        self._current_user = self.user_directory.get_by_id(user_id)
        print(f"[AuthService] 登录成功: 用户 '{self._current_user.display_name}' [{user_id}]")
        return self._current_user

    def sign_up(
        self,
        display_name: str,
        credential: str,
        login_name: str,
        email: str,
        allow_anonymous_questions: bool,
        role: UserRole = UserRole.REGULAR_USER
    ) -> User:
        """
        注册新用户并自动登录

        Returns:
            新用户（ID 由用户目录分配）

        Raises:
            AlreadyExistsError: 登录名已被占用
            ValidationFailedError: 文本字段含换行符
            PersistenceFailedError: 用户文件写入失败
        """
        for value in (display_name, credential, login_name, email):
            if has_line_break(value):
                raise ValidationFailedError("User fields must not contain line breaks")
        if self.user_directory.get_by_login_name(login_name) is not None:
            raise AlreadyExistsError(f"Registration failed - Username already exists: {login_name}")

        new_user = User(
            id=self.user_directory.next_id(),
            display_name=display_name,
            credential=credential,
            login_name=login_name,
            email=email,
            allow_anonymous_questions=allow_anonymous_questions,
            role=role
        )
        if not self.user_directory.add(new_user):
            raise PersistenceFailedError("Registration failed - users file could not be written")

        self._current_user = new_user
        print(f"[AuthService] 注册成功: 用户 '{display_name}' -> ID [{new_user.id}]")
        return new_user

    @property
    def current_user(self) -> User:
        """
        当前登录用户

        Raises:
            UnauthorizedError: 没有用户登录
        """
        if self._current_user is None:
            raise UnauthorizedError("No user currently logged in")
        return self._current_user

    @property
    def is_logged_in(self) -> bool:
        return self._current_user is not None

    def logout(self) -> None:
        self._current_user = None
