"""
问答域模型 - 问题记录
磁盘格式: id,parent_id,from_user_id,to_user_id,is_anonymous,text,answer
"""

from typing import ClassVar, List, Sequence

from pydantic import ValidationError
from sqlmodel import Field

from askme.errors import MalformedRecordError

from .base import RecordModel, format_bool, parse_bool, parse_int

# parent_id 取此值表示顶层问题
NO_PARENT = -1


class Question(RecordModel):
    """
    问题记录
    parent_id 不为 -1 时表示该问题属于某个线程；父问题只是一个普通整数，
    不维护外键或反向引用，线程子问题在查询时扫描得到
    """
    MIN_FIELDS: ClassVar[int] = 6

    id: int = Field(gt=0)

    # -1 为顶层问题，否则为父问题 ID
    parent_id: int = NO_PARENT

    # 提问者 ID：匿名时仍然保存，只在展示时隐藏
    from_user_id: int

    # 接收者 ID
    to_user_id: int

    is_anonymous: bool = False
    text: str = ""

    # 空字符串表示尚未回答
    answer: str = ""

    @property
    def is_answered(self) -> bool:
        return bool(self.answer)

    @property
    def is_thread(self) -> bool:
        return self.parent_id != NO_PARENT

    def to_fields(self) -> List[str]:
        return [
            str(self.id),
            str(self.parent_id),
            str(self.from_user_id),
            str(self.to_user_id),
            format_bool(self.is_anonymous),
            self.text,
            self.answer,
        ]

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "Question":
        """
        从有序字段构建问题，第 7 个字段（回答）可选，缺省为空

        Raises:
            MalformedRecordError: 字段不足或数字字段非法
        """
        cls.check_arity(fields)
        try:
            return cls(
                id=parse_int(fields[0], "id"),
                parent_id=parse_int(fields[1], "parent_id"),
                from_user_id=parse_int(fields[2], "from_user_id"),
                to_user_id=parse_int(fields[3], "to_user_id"),
                is_anonymous=parse_bool(fields[4]),
                text=fields[5],
                answer=fields[6] if len(fields) >= 7 else ""
            )
        except ValidationError as e:
            raise MalformedRecordError(str(e))
