"""
文件存储
以整个文件为单位读写文本资源：读取全部行，或整体覆盖写入全部行

写入不是原子操作（没有临时文件 + 重命名），写到一半崩溃可能留下被截断的文件。
无法按编码解码的字节以 surrogateescape 方式读入并原样写回，
只影响所在的那一行，不会让整个资源被当作空文件。
"""

import sys
from pathlib import Path
from typing import Iterable, List, Union

PathLike = Union[str, Path]

# 读写都使用同一个错误处理器，保证非法字节原样往返
DECODE_ERRORS = "surrogateescape"


class FileStore:
    """
    文本资源读写器
    调用方每次传入完整的目标内容，本类不持有任何资源
    """

    def __init__(self, encoding: str = "utf-8"):
        """
        初始化文件存储

        Args:
            encoding: 读写文件使用的编码
        """
        self.encoding = encoding

    def read_lines(self, resource: PathLike) -> List[str]:
        """
        读取资源中的所有非空行

        资源不存在或无法打开时返回空列表（"没有存储 = 空仓库"），
        错误只打印到 stderr，不向调用方报告失败

        Args:
            resource: 资源文件路径

        Returns:
            按顺序排列的非空行（已去除行尾换行符）
        """
        try:
            with open(
                resource, "r", encoding=self.encoding, errors=DECODE_ERRORS, newline=""
            ) as f:
                lines = []
                for raw_line in f:
                    line = raw_line.rstrip("\r\n")
                    if line:
                        lines.append(line)
                return lines
        except OSError as e:
            print(f"[FileStore] 无法打开文件: {resource} ({e})", file=sys.stderr)
            return []

    def write_lines(self, resource: PathLike, lines: Iterable[str]) -> bool:
        """
        截断并重写整个资源，每条记录一行

        Args:
            resource: 资源文件路径
            lines: 要写入的全部行

        Returns:
            写入成功返回 True，文件无法打开写入时返回 False
        """
        try:
            with open(
                resource, "w", encoding=self.encoding, errors=DECODE_ERRORS, newline="\n"
            ) as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
            return True
        except OSError as e:
            print(f"[FileStore] 无法写入文件: {resource} ({e})", file=sys.stderr)
            return False
