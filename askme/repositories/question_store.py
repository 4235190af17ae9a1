"""
问题存储 Repository
线程化问答记录的内存注册表：带权限检查的创建、级联删除，每次变更后整体重写问题文件
"""

import sys
from pathlib import Path
from typing import Dict, List, Union

from askme.errors import MalformedRecordError, NotFoundError
from askme.models.question import Question
from askme.models.user import User
from askme.repositories.user_directory import UserDirectory
from askme.storage.codec import decode_record, encode_record
from askme.storage.file_store import FileStore


class QuestionStore:
    """
    问题数据访问对象
    持有 id -> Question 的映射；只读取用户目录做校验，从不修改它
    """

    def __init__(
        self,
        file_store: FileStore,
        questions_path: Union[str, Path],
        user_directory: UserDirectory
    ):
        """
        初始化 Repository 并加载问题文件

        Args:
            file_store: 文件读写器
            questions_path: 问题文件路径
            user_directory: 用户目录，用于校验接收者和匿名权限
        """
        self.file_store = file_store
        self.questions_path = questions_path
        self.user_directory = user_directory
        self.questions: Dict[int, Question] = {}
        self.load()

    def load(self) -> None:
        """
        从文件加载全部问题，替换内存中的映射

        字段不足 6 个或数字字段无法解析的行被跳过并打印警告；
        第 7 个字段（回答）可选
        """
        questions: Dict[int, Question] = {}
        for line in self.file_store.read_lines(self.questions_path):
            try:
                question = Question.from_fields(decode_record(line))
            except MalformedRecordError as e:
                print(f"[QuestionStore] 跳过格式错误的问题行: {line} ({e})", file=sys.stderr)
                continue
            questions[question.id] = question
        self.questions = questions

    def save(self) -> bool:
        """整体重写问题文件"""
        lines = [encode_record(question.to_fields()) for question in self.questions.values()]
        return self.file_store.write_lines(self.questions_path, lines)

    def next_id(self) -> int:
        """
        生成下一个可用 ID
        最大 ID + 1，空仓库时为 1；删除最大 ID 后该 ID 会被再次分配
        """
        if not self.questions:
            return 1
        return max(self.questions) + 1

    def get_by_id(self, question_id: int) -> Question:
        """
        根据 ID 获取问题

        Raises:
            NotFoundError: 问题不存在
        """
        question = self.questions.get(question_id)
        if question is None:
            raise NotFoundError(f"Question not found: {question_id}")
        return question

    def exists(self, question_id: int) -> bool:
        return question_id in self.questions

    def create(self, question: Question) -> bool:
        """
        创建问题

        校验顺序：
        1. ID 不能重复
        2. 接收者必须存在
        3. 匿名问题要求接收者允许匿名提问
        4. 文本字段不能含换行符
        任一失败都不会写入任何内容。

        parent_id 不做存在性校验：指向不存在父问题的"孤儿线程"会被接受。

        Args:
            question: 新问题

        Returns:
            校验失败或写入失败时返回 False
        """
        if question.id in self.questions:
            print(f"[QuestionStore] 问题 ID 已存在: {question.id}", file=sys.stderr)
            return False

        try:
            recipient = self.user_directory.get_by_id(question.to_user_id)
        except NotFoundError:
            print(f"[QuestionStore] 接收者不存在: {question.to_user_id}", file=sys.stderr)
            return False

        if question.is_anonymous and not recipient.allow_anonymous_questions:
            print(
                f"[QuestionStore] 用户 {recipient.display_name} 不接受匿名问题",
                file=sys.stderr
            )
            return False

        if self._reject_line_breaks(question):
            return False

        self.questions[question.id] = question
        return self.save()

    def _reject_line_breaks(self, question: Question) -> bool:
        """字段含换行符时打印错误并返回 True"""
        fields = question.line_break_fields()
        if fields:
            print(f"[QuestionStore] 问题 {question.id} 的字段含换行符: {fields}", file=sys.stderr)
            return True
        return False

    def update(self, question: Question) -> bool:
        """
        整体替换已有问题并持久化
        既用于一般编辑也用于记录回答；这里不检查调用者是否为接收者。
        已回答的问题不能退回未回答状态。

        Returns:
            问题不存在、清空已有回答、字段含换行符或写入失败时返回 False
        """
        existing = self.questions.get(question.id)
        if existing is None:
            print(f"[QuestionStore] 问题不存在: {question.id}", file=sys.stderr)
            return False
        if existing.is_answered and not question.is_answered:
            print(f"[QuestionStore] 问题 {question.id} 已回答，不能清空回答", file=sys.stderr)
            return False
        if self._reject_line_breaks(question):
            return False
        self.questions[question.id] = question
        return self.save()

    def answer(self, question_id: int, recipient_id: int, answer_text: str) -> bool:
        """
        记录或覆盖回答，只有问题的接收者可以回答

        Args:
            question_id: 问题 ID
            recipient_id: 回答者 ID
            answer_text: 回答内容

        Returns:
            问题不存在、回答者不是接收者、回答为空或写入失败时返回 False
        """
        if not answer_text:
            print(f"[QuestionStore] 问题 {question_id} 的回答不能为空", file=sys.stderr)
            return False
        question = self.questions.get(question_id)
        if question is None:
            print(f"[QuestionStore] 问题不存在: {question_id}", file=sys.stderr)
            return False
        if question.to_user_id != recipient_id:
            print(
                f"[QuestionStore] 用户 {recipient_id} 不是问题 {question_id} 的接收者",
                file=sys.stderr
            )
            return False
        answered = question.model_copy(update={"answer": answer_text})
        return self.update(answered)

    def delete(self, question_id: int, acting_user: User) -> bool:
        """
        删除问题及其线程子问题

        只有提问者或管理员可以删除。子问题逐个按同样的规则检查，
        无权删除的子问题被跳过并保留（部分级联不算整体失败），
        之后删除目标问题并只持久化一次。

        Args:
            question_id: 问题 ID
            acting_user: 执行删除的用户

        Returns:
            问题不存在、无权删除或写入失败时返回 False
        """
        question = self.questions.get(question_id)
        if question is None:
            print(f"[QuestionStore] 问题 ID {question_id} 不存在", file=sys.stderr)
            return False

        if not self.can_delete(question, acting_user):
            print(
                f"[QuestionStore] 拒绝访问: 用户 {acting_user.id} 只能删除自己提出的问题",
                file=sys.stderr
            )
            return False

        self._delete_thread_children(question_id, acting_user)

        del self.questions[question_id]
        print(f"[QuestionStore] 已删除问题 ID: {question_id}")
        return self.save()

    @staticmethod
    def can_delete(question: Question, acting_user: User) -> bool:
        """提问者本人或管理员可以删除"""
        return acting_user.is_admin or question.from_user_id == acting_user.id

    def _delete_thread_children(self, parent_id: int, acting_user: User) -> None:
        """
        删除直接子问题（不持久化，由 delete 统一写入）
        无权删除的子问题保留，其 parent_id 将指向已不存在的父问题
        """
        # 先收集 ID，避免遍历时修改映射
        child_ids = [q.id for q in self.questions.values() if q.parent_id == parent_id]

        for child_id in child_ids:
            child = self.questions[child_id]
            if not self.can_delete(child, acting_user):
                print(
                    f"[QuestionStore] 跳过线程问题 ID {child_id}（不是你的问题）",
                    file=sys.stderr
                )
                continue
            del self.questions[child_id]
            print(f"[QuestionStore] 已删除线程问题 ID: {child_id}")

    def questions_to(self, user_id: int) -> List[Question]:
        """发给指定用户的问题（映射迭代顺序）"""
        return [q for q in self.questions.values() if q.to_user_id == user_id]

    def questions_from(self, user_id: int) -> List[Question]:
        """指定用户提出的问题（映射迭代顺序）"""
        return [q for q in self.questions.values() if q.from_user_id == user_id]

    def thread_children(self, parent_id: int) -> List[Question]:
        """parent_id 等于给定 ID 的全部问题，查询时扫描，不维护索引"""
        return [q for q in self.questions.values() if q.parent_id == parent_id]

    def all_questions(self) -> List[Question]:
        """全部问题（管理员 Feed）"""
        return list(self.questions.values())
