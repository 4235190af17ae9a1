"""
用户域模型 - 用户记录
磁盘格式: id,display_name,credential,login_name,email,allow_anonymous_questions,role
"""

from enum import Enum
from typing import ClassVar, List, Sequence

from pydantic import ValidationError
from sqlmodel import Field

from askme.errors import MalformedRecordError

from .base import RecordModel, format_bool, parse_bool, parse_int


class UserRole(int, Enum):
    """用户角色枚举，枚举值即磁盘上的写法"""
    ADMIN = 0
    REGULAR_USER = 1


class User(RecordModel):
    """
    用户记录
    id 创建后不可变；只能通过显式的资料更新修改其它字段
    """
    MIN_FIELDS: ClassVar[int] = 7

    # 唯一正整数 ID
    id: int = Field(gt=0)

    display_name: str = ""

    # 明文凭证：不做哈希，哈希会改变持久化格式的含义
    credential: str = ""

    login_name: str = ""
    email: str = ""

    # 是否接受匿名提问
    allow_anonymous_questions: bool = False

    role: UserRole = UserRole.REGULAR_USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def verify_credential(self, credential: str) -> bool:
        """明文精确比较（区分大小写）"""
        return self.credential == credential

    def to_fields(self) -> List[str]:
        return [
            str(self.id),
            self.display_name,
            self.credential,
            self.login_name,
            self.email,
            format_bool(self.allow_anonymous_questions),
            str(self.role.value),
        ]

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "User":
        """
        从有序字段构建用户

        角色字段 "0" 为管理员，其它任何值（包括非法值）都回退为普通用户

        Raises:
            MalformedRecordError: 字段不足或 ID 非法
        """
        cls.check_arity(fields)
        user_id = parse_int(fields[0], "id")
        # 非 "0" 一律回退为普通用户
        if fields[6] == "0":
            role = UserRole.ADMIN
        else:
            role = UserRole.REGULAR_USER
        try:
            return cls(
                id=user_id,
                display_name=fields[1],
                credential=fields[2],
                login_name=fields[3],
                email=fields[4],
                allow_anonymous_questions=parse_bool(fields[5]),
                role=role
            )
        except ValidationError as e:
            raise MalformedRecordError(str(e))
