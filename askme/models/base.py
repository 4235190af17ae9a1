"""
基础记录模型
所有持久化记录共用的基类：一条记录 <-> 一行有序字段
"""

from typing import ClassVar, List, Sequence

from sqlmodel import SQLModel

from askme.errors import MalformedRecordError


# 文本文件中布尔值的写法；读取时 "1" 或 "true" 视为真
TRUE_TOKENS = ("1", "true")

# 记录之间的分隔符，不允许出现在字段内
LINE_BREAKS = ("\n", "\r")


def parse_bool(token: str) -> bool:
    """解析布尔字段，无法识别的值一律视为 False"""
    return token in TRUE_TOKENS


def format_bool(value: bool) -> str:
    """布尔值写为 "1" / "0" """
    return "1" if value else "0"


def has_line_break(value: str) -> bool:
    """文本中是否含有 \\n 或 \\r"""
    return any(char in value for char in LINE_BREAKS)


def parse_int(token: str, field_name: str) -> int:
    """
    解析整数字段

    Raises:
        MalformedRecordError: 字段不是合法整数
    """
    try:
        return int(token)
    except ValueError:
        raise MalformedRecordError(f"{field_name} 不是合法整数: {token!r}")


class RecordModel(SQLModel):
    """
    记录基类
    子类声明 MIN_FIELDS（一行最少字段数），并实现 to_fields / from_fields
    """
    MIN_FIELDS: ClassVar[int] = 0

    def to_fields(self) -> List[str]:
        """按磁盘顺序输出字段"""
        raise NotImplementedError

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "RecordModel":
        """从有序字段构建记录，失败时抛出 MalformedRecordError"""
        raise NotImplementedError

    @classmethod
    def check_arity(cls, fields: Sequence[str]) -> None:
        """
        检查字段数量

        Raises:
            MalformedRecordError: 字段数少于 MIN_FIELDS
        """
        if len(fields) < cls.MIN_FIELDS:
            raise MalformedRecordError(
                f"{cls.__name__} 需要至少 {cls.MIN_FIELDS} 个字段，实际 {len(fields)} 个"
            )

    def line_break_fields(self) -> List[str]:
        """
        返回包含换行符的文本字段名

        一条记录占一行，字段内的换行会把记录截断并在重新加载时多出一条伪造记录
        """
        return [
            name for name, value in self.model_dump().items()
            if isinstance(value, str) and has_line_break(value)
        ]
