"""
Ask Me 问答系统核心
用户目录、线程化问答存储以及基于 CSV 文本文件的持久化层
"""
