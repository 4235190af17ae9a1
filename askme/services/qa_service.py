"""
问答服务层

把问题存储的布尔结果转换为异常，供交互层使用：
1. 提问：接收者校验、跟进问题的父问题回退、匿名权限
2. 回答：只有接收者可以回答，可覆盖已有回答
3. 删除：提问者或管理员，级联删除线程子问题
4. 收件箱 / 发件箱 / 线程视图 / 管理员 Feed
5. 问题的文本展示（匿名提问者显示为 Anonymous）
"""

import sys
from typing import List

from askme.errors import (
    NotFoundError,
    PersistenceFailedError,
    UnauthorizedError,
    ValidationFailedError,
)
from askme.models.base import has_line_break
from askme.models.question import NO_PARENT, Question
from askme.models.user import User
from askme.repositories.question_store import QuestionStore
from askme.repositories.user_directory import UserDirectory

NOT_ANSWERED = "Not answered yet"
ANONYMOUS = "Anonymous"


class QAService:
    """
    问答服务类

    使用示例：
        qa = QAService(user_directory, question_store)
        question = qa.ask(asker, to_user_id=2, text="How are you?")
        qa.answer(recipient, question.id, "Fine, thanks")
    """

    def __init__(self, user_directory: UserDirectory, question_store: QuestionStore):
        self.user_directory = user_directory
        self.question_store = question_store

    def ask(
        self,
        asker: User,
        to_user_id: int,
        text: str,
        parent_id: int = NO_PARENT,
        anonymous: bool = False
    ) -> Question:
        """
        提问

        跟进问题指向不存在的父问题时，改为开启新的顶层线程

        Args:
            asker: 提问者
            to_user_id: 接收者 ID
            text: 问题内容
            parent_id: 父问题 ID（-1 为顶层问题）
            anonymous: 是否匿名

        Returns:
            已保存的问题

        Raises:
            ValidationFailedError: 接收者不存在、不接受匿名问题或问题内容含换行符
            PersistenceFailedError: 问题文件写入失败
        """
        try:
            recipient = self.user_directory.get_by_id(to_user_id)
        except NotFoundError:
            raise ValidationFailedError(f"Recipient user not found: {to_user_id}")

        if has_line_break(text):
            raise ValidationFailedError("Question text must not contain line breaks")

        if anonymous and not recipient.allow_anonymous_questions:
            raise ValidationFailedError(
                f"User {recipient.display_name} doesn't accept anonymous questions"
            )

        if parent_id != NO_PARENT and not self.question_store.exists(parent_id):
            print(
                f"[QAService] 父问题 ID {parent_id} 不存在，改为新的问题线程",
                file=sys.stderr
            )
            parent_id = NO_PARENT

        question = Question(
            id=self.question_store.next_id(),
            parent_id=parent_id,
            from_user_id=asker.id,
            to_user_id=to_user_id,
            is_anonymous=anonymous,
            text=text
        )
        if not self.question_store.create(question):
            raise PersistenceFailedError("Question could not be saved")
        return question

    def answer(self, recipient: User, question_id: int, text: str) -> Question:
        """
        回答问题（已有回答时覆盖）

        Raises:
            NotFoundError: 问题不存在
            ValidationFailedError: 回答为空或含换行符
            UnauthorizedError: 当前用户不是接收者
            PersistenceFailedError: 问题文件写入失败
        """
        if not text:
            raise ValidationFailedError("Answer must not be empty")
        if has_line_break(text):
            raise ValidationFailedError("Answer must not contain line breaks")
        question = self.question_store.get_by_id(question_id)
        if question.to_user_id != recipient.id:
            raise UnauthorizedError("You can only answer questions addressed to you")
        if not self.question_store.answer(question_id, recipient.id, text):
            raise PersistenceFailedError("Answer could not be saved")
        return self.question_store.get_by_id(question_id)

    def delete(self, acting_user: User, question_id: int) -> None:
        """
        删除问题及其线程子问题

        Raises:
            NotFoundError: 问题不存在
            UnauthorizedError: 非提问者且非管理员
            PersistenceFailedError: 问题文件写入失败
        """
        question = self.question_store.get_by_id(question_id)
        if not QuestionStore.can_delete(question, acting_user):
            raise UnauthorizedError("You can only delete questions you asked")
        if not self.question_store.delete(question_id, acting_user):
            raise PersistenceFailedError("Question deletion could not be saved")

    def inbox(self, user: User) -> List[Question]:
        """发给该用户的问题"""
        return self.question_store.questions_to(user.id)

    def outbox(self, user: User) -> List[Question]:
        """该用户提出的问题"""
        return self.question_store.questions_from(user.id)

    def thread(self, parent_id: int) -> List[Question]:
        """
        父问题的线程子问题

        Raises:
            NotFoundError: 父问题不存在
        """
        if not self.question_store.exists(parent_id):
            raise NotFoundError(f"Parent question ID {parent_id} doesn't exist")
        return self.question_store.thread_children(parent_id)

    def feed(self, acting_user: User) -> List[Question]:
        """
        系统全部问题，仅管理员可见

        Raises:
            UnauthorizedError: 非管理员
        """
        if not acting_user.is_admin:
            raise UnauthorizedError("This feature is only available for administrators")
        return self.question_store.all_questions()

    @staticmethod
    def display_sender(question: Question) -> str:
        """匿名问题隐藏提问者身份，ID 仍保存在记录中"""
        if question.is_anonymous:
            return ANONYMOUS
        return f"User ID {question.from_user_id}"

    def render_question(self, question: Question, is_thread: bool = False) -> str:
        """
        渲染单个问题为文本块

        线程条目不显示接收者行；匿名的线程条目连提问者行也不显示

        Args:
            question: 问题
            is_thread: 是否作为线程条目展示

        Returns:
            多行文本
        """
        lines = []
        prefix = "├─ Thread " if is_thread else ""
        lines.append(f"{prefix}Question ID: {question.id}")

        if not is_thread:
            lines.append(f"To: User ID {question.to_user_id}")

        if not question.is_anonymous or not is_thread:
            lines.append(f"From: {self.display_sender(question)}")

        lines.append(f"Question: {question.text}")
        lines.append(f"Answer: {question.answer if question.is_answered else NOT_ANSWERED}")
        lines.append(("  " if is_thread else "") + "───")
        return "\n".join(lines)
