import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tasks_database.models import Task, TaskStatus, utcnow

from ..errors import NotFoundError, ServerError, ValidationError

logger = logging.getLogger(__name__)

# ids outside a signed 64-bit INTEGER cannot name a stored row
MAX_ID = 2**63 - 1


class TaskService:
    """
    Task CRUD for a single authenticated user.

    Every query is filtered on ``user_id``; a task belonging to someone else
    is reported exactly like a task that does not exist.
    """

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def _owned(self):
        return self.db.query(Task).filter(Task.user_id == self.user_id)

    def _get_owned(self, task_id):
        if not 0 < task_id <= MAX_ID:
            raise NotFoundError("Task not found")
        try:
            task = self._owned().filter(Task.id == task_id).first()
        except SQLAlchemyError:
            logger.exception("Task lookup failed")
            raise ServerError()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def _commit(self, task, action):
        try:
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Task %s failed", action)
            raise ServerError()

    def list(self, status=None):
        """All owned tasks, newest first. Unknown status filters are ignored."""
        query = self._owned()
        if status in TaskStatus.values():
            query = query.filter(Task.status == status)
        try:
            return query.order_by(Task.created_at.desc(), Task.id.desc()).all()
        except SQLAlchemyError:
            logger.exception("Task list failed")
            raise ServerError()

    def get(self, task_id):
        return self._get_owned(task_id)

    def create(self, title, description=None):
        if not title:
            raise ValidationError("Title is required")

        now = utcnow()
        task = Task(
            user_id=self.user_id,
            title=title,
            description=description or "",
            status=TaskStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        self.db.add(task)
        self._commit(task, "create")
        logger.info("Created task id=%s for user id=%s", task.id, self.user_id)
        return task

    def update(self, task_id, title=None, description=None, status=None):
        """Partial update: arguments left as None keep their stored value."""
        task = self._get_owned(task_id)

        if status is not None and status not in TaskStatus.values():
            raise ValidationError("Invalid status value")
        if title is not None and not title:
            raise ValidationError("Title cannot be empty")

        if title is not None:
            task.title = title
        if description is not None:
            task.description = description
        if status is not None:
            task.status = status
        task.touch()
        self._commit(task, "update")
        logger.info("Updated task id=%s for user id=%s", task.id, self.user_id)
        return task

    def delete(self, task_id):
        """Delete an owned task and return its last state."""
        task = self._get_owned(task_id)
        try:
            self.db.delete(task)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Task delete failed")
            raise ServerError()
        logger.info("Deleted task id=%s for user id=%s", task_id, self.user_id)
        return task

    def toggle(self, task_id):
        task = self._get_owned(task_id)
        task.status = TaskStatus(task.status).flipped().value
        task.touch()
        self._commit(task, "toggle")
        logger.info("Toggled task id=%s to %s", task.id, task.status)
        return task
