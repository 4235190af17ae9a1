"""
记录编解码
一条记录（用户或问题）与一行逗号分隔文本之间的映射

注意：编码与解码并不完全互逆。
- 编码：只有包含分隔符的字段才会加引号，字段内的引号加倍；不含分隔符的字段原样输出
- 解码：遇到引号就切换"引号内"状态并丢弃引号本身，不会把成对引号还原为单个引号
因此含引号的字段经过一次往返后会丢失引号。这是现有文件格式的行为，保持不变。
"""

from typing import Iterable, List

DELIMITER = ","
QUOTE = '"'


def escape_field(value: str) -> str:
    """
    转义单个字段

    Args:
        value: 原始字段文本

    Returns:
        含分隔符时返回加引号（内部引号加倍）的字段，否则原样返回
    """
    if DELIMITER not in value:
        return value
    return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE


def encode_record(fields: Iterable[str]) -> str:
    """
    把有序字段序列编码成一行文本

    Args:
        fields: 有序字段序列

    Returns:
        逗号连接后的单行文本
    """
    return DELIMITER.join(escape_field(str(field)) for field in fields)


def decode_record(line: str) -> List[str]:
    """
    把一行文本解码为有序字段列表

    逐字符扫描：引号切换"引号内"状态，只在引号外遇到分隔符时切分。
    不校验字段数量，由调用方检查。

    Args:
        line: 单行文本（不含换行符）

    Returns:
        字段列表，至少包含一个元素
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            tokens.append("".join(current))
            current = []
        else:
            current.append(char)

    tokens.append("".join(current))
    return tokens
