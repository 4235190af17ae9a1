"""
存储模块
提供记录编解码、文件读写和存储初始化功能
"""

from .codec import encode_record, decode_record
from .file_store import FileStore

__all__ = [
    "encode_record",
    "decode_record",
    "FileStore"
]
