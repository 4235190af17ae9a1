"""
错误类型
仓储层的变更操作以布尔值报告失败，只有 get_by_id 查找失败时抛出 NotFoundError；
服务层把布尔失败转换成下列异常交给交互层处理
"""


class AskMeError(Exception):
    """所有问答系统错误的基类"""


class NotFoundError(AskMeError, LookupError):
    """用户或问题不存在"""


class AlreadyExistsError(AskMeError):
    """创建/添加时 ID 重复"""


class UnauthorizedError(AskMeError):
    """无权执行该操作（非提问者且非管理员、凭证错误、未登录）"""


class ValidationFailedError(AskMeError):
    """校验失败：接收者不存在或不接受匿名问题"""


class PersistenceFailedError(AskMeError):
    """资源文件无法写入"""


class MalformedRecordError(AskMeError, ValueError):
    """加载时遇到无法解析的记录行（可恢复：跳过该行）"""
