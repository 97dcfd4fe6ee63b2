"""
Entity collections kept as JSON arrays in the local store.

Each collection is one key holding the whole serialized list. ``load``
returns the full list (empty when the key is absent) and ``save`` overwrites
it; there are no partial updates.
"""

import time
from collections.abc import Iterable
from typing import Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from bagrut_portal.schemas import (
    CommentRead,
    ExamFormRead,
    ExamRead,
    MessageRead,
    QuestionSolutionRead,
    SubjectRead,
    UserRecord,
)
from bagrut_portal.storage.local_store import StoreTransaction

RecordT = TypeVar("RecordT", bound=BaseModel)


class CorruptCollectionError(Exception):
    """Raised when a stored collection no longer parses as its record type."""

    def __init__(self, key: str, error: ValidationError):
        self.key = key
        super().__init__(f"Stored collection '{key}' is unreadable: {error.error_count()} validation errors")


class Collection(Generic[RecordT]):
    """A typed accessor pair for one collection key."""

    def __init__(self, key: str, model: type[RecordT]):
        self.key = key
        self.model = model
        self._adapter = TypeAdapter(list[model])

    async def load(self, tx: StoreTransaction) -> list[RecordT]:
        raw = await tx.get_item(self.key)
        if raw is None:
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            raise CorruptCollectionError(self.key, e) from e

    async def save(self, tx: StoreTransaction, items: list[RecordT]) -> None:
        await tx.set_item(self.key, self._adapter.dump_json(items).decode("utf-8"))

    async def exists(self, tx: StoreTransaction) -> bool:
        return await tx.get_item(self.key) is not None

    def __repr__(self) -> str:
        return f"<Collection {self.key}>"


USERS = Collection("bagrut_users", UserRecord)
SUBJECTS = Collection("bagrut_subjects", SubjectRead)
EXAMS = Collection("bagrut_exams", ExamRead)
COMMENTS = Collection("bagrut_comments", CommentRead)
MESSAGES = Collection("bagrut_messages", MessageRead)
EXAM_FORMS = Collection("bagrut_exam_forms", ExamFormRead)
QUESTION_SOLUTIONS = Collection("bagrut_question_solutions", QuestionSolutionRead)

ALL_COLLECTIONS = (
    USERS,
    SUBJECTS,
    EXAMS,
    COMMENTS,
    MESSAGES,
    EXAM_FORMS,
    QUESTION_SOLUTIONS,
)

# Last signed-in user, the equivalent of the browser session cache
SESSION_USER_KEY = "currentUser"


def new_id(prefix: str, existing: Iterable[str]) -> str:
    """
    Generate ``<prefix>-<epoch millis>``.

    Two calls within the same millisecond would collide, so the timestamp
    is bumped until the id is free in the target collection.
    """
    taken = set(existing)
    millis = int(time.time() * 1000)
    while f"{prefix}-{millis}" in taken:
        millis += 1
    return f"{prefix}-{millis}"
