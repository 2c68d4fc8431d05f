"""
FAQ chatbot: fixed keyword groups checked in priority order.

``respond`` is a pure lookup with no state across turns. ``chat`` stores every
exchange so it can be read back through ``history``.
"""

from typing import List, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.exceptions import InternalFailureError
from exam_portal.core.logging_config import logger
from exam_portal.models.chat import ChatEntry


HISTORY_LIMIT = 50

PYQ_RESPONSE = (
    'You can find previous year question papers in the Materials section. '
    'Filter by "PYQ" type to see all available papers. '
    'Would you like me to help you find papers for a specific subject?'
)
NOTES_RESPONSE = (
    'Study notes are available in the Materials section. You can filter by subject, '
    'semester, and department to find relevant notes for your courses. '
    'Just click on Materials in the navigation menu!'
)
SYLLABUS_RESPONSE = (
    'Syllabus documents are available in the Materials section. Filter by "Syllabus" type '
    'to view the curriculum for different courses. This will help you plan your studies better!'
)
EXAM_RESPONSE = (
    'I can help you with exam preparation! We have notes, PYQs, and reference materials. '
    'What subject are you preparing for? I can guide you to the right materials.'
)
DOWNLOAD_RESPONSE = (
    'To download materials: 1) Go to the Materials page, 2) Find the document you need using '
    'filters or search, 3) Click the green "Download" button. Make sure you\'re logged in!'
)
UPLOAD_RESPONSE = (
    'Only faculty members can upload materials. If you\'re a faculty member, use the Upload '
    'button in the navigation menu to share notes, PYQs, or other study materials with students.'
)
GREETING_RESPONSE = (
    'Hello! 👋 I\'m your AI study assistant. I can help you find study materials, PYQs, '
    'and answer questions about using the portal. What would you like to know?'
)
THANKS_RESPONSE = (
    'You\'re welcome! 😊 Feel free to ask if you need any other help with your studies '
    'or using the portal.'
)
DEFAULT_RESPONSE = (
    'I\'m here to help with your academic queries! You can ask me about:\n'
    '• Finding study materials and notes\n'
    '• Previous year question papers (PYQs)\n'
    '• Exam preparation tips\n'
    '• How to download or upload materials\n'
    '• Using the portal features\n'
    '\n'
    'What would you like to know?'
)

# Order matters: the first group with a keyword present wins
KEYWORD_RESPONSES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("pyq", "previous year", "question paper"), PYQ_RESPONSE),
    (("notes", "study material"), NOTES_RESPONSE),
    (("syllabus",), SYLLABUS_RESPONSE),
    (("exam", "preparation"), EXAM_RESPONSE),
    (("download", "how to download"), DOWNLOAD_RESPONSE),
    (("upload",), UPLOAD_RESPONSE),
    (("hello", "hi", "hey"), GREETING_RESPONSE),
    (("thank",), THANKS_RESPONSE),
)


def respond(message: str) -> str:
    """Canned answer for the first keyword group found in the message"""
    text = message.lower()
    for keywords, response in KEYWORD_RESPONSES:
        if any(keyword in text for keyword in keywords):
            return response
    return DEFAULT_RESPONSE


class ChatService:
    """Answers chat messages and keeps the per-user log"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def chat(self, user_id: str, message: str) -> str:
        response = respond(message)
        try:
            self.db.add(ChatEntry(user_id=user_id, message=message, response=response))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.log_error_with_context(e, context="chat.save", user_id=user_id)
            raise InternalFailureError() from e
        return response

    async def history(self, user_id: str, limit: int = HISTORY_LIMIT) -> List[ChatEntry]:
        """Most recent exchanges for the user, newest first"""
        try:
            result = await self.db.execute(
                select(ChatEntry)
                .where(ChatEntry.user_id == user_id)
                .order_by(ChatEntry.created_at.desc())
                .limit(limit)
            )
        except SQLAlchemyError as e:
            logger.log_error_with_context(e, context="chat.history", user_id=user_id)
            raise InternalFailureError() from e
        return list(result.scalars().all())
