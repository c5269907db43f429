"""Storage layer for users and tasks.

Every task query is filtered by owner; callers never see or touch another
user's rows.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from .errors import ConflictError, StoreError
from .models import Task, TaskPriority, TaskStatus, User, utcnow

logger = logging.getLogger(__name__)

# largest id a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


def _commit(session: Session, action: str) -> None:
    """Commit pending changes, turning database failures into StoreError."""
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Database error while {action}")
        raise StoreError(f"Error {action}", cause=e)


class UserStorage:
    """Credential store.

    Attributes:
        session: Database session for the current request
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def add_user(self, username: str, email: str, hashed_password: str) -> User:
        """Insert a new user.

        Raises:
            ConflictError: A concurrent registration took the username or email
            StoreError: Any other database failure
        """
        user = User(username=username, email=email, hashed_password=hashed_password)
        self.session.add(user)
        try:
            _commit(self.session, "creating user")
        except StoreError as e:
            if isinstance(e.cause, IntegrityError):
                raise ConflictError("User already exists")
            raise
        self.session.refresh(user)
        return user


class TaskStorage:
    """Owner-scoped task store.

    Update and delete look the task up and then mutate it in the same session.
    Two concurrent mutations of one task by its owner are not serialized; the
    last commit wins.

    Attributes:
        session: Database session for the current request
    """

    def __init__(self, session: Session):
        self.session = session

    def list_tasks(
        self,
        owner_id: int,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> list[Task]:
        """Get the owner's tasks, newest first.

        Args:
            owner_id: Owner of the tasks
            status: Only return tasks with this status
            priority: Only return tasks with this priority

        Returns:
            List of Task objects
        """
        statement = select(Task).where(Task.user_id == owner_id)
        if status:
            statement = statement.where(Task.status == status)
        if priority:
            statement = statement.where(Task.priority == priority)
        statement = statement.order_by(col(Task.created_at).desc(), col(Task.id).desc())
        return list(self.session.exec(statement).all())

    def get_task(self, owner_id: int, task_id: int) -> Optional[Task]:
        """Get a task by ID if it belongs to ``owner_id``.

        Returns:
            Task object if found and owned, None otherwise
        """
        if not 1 <= task_id <= MAX_ID:
            return None
        statement = select(Task).where(Task.id == task_id, Task.user_id == owner_id)
        return self.session.exec(statement).first()

    def add_task(self, owner_id: int, **fields) -> Task:
        """Add a new task owned by ``owner_id``.

        Args:
            owner_id: Owner of the new task
            **fields: Task column values; any owner or id value is overridden

        Returns:
            The newly created Task object
        """
        fields.pop("id", None)
        fields["user_id"] = owner_id
        task = Task(**fields)
        self.session.add(task)
        _commit(self.session, "creating task")
        self.session.refresh(task)
        return task

    def update_task(self, owner_id: int, task_id: int, **updates) -> Optional[Task]:
        """Update a task's fields.

        Args:
            owner_id: Caller; only their own task is updated
            task_id: The task ID to update
            **updates: Field names and new values

        Returns:
            Updated Task object if found, None otherwise
        """
        task = self.get_task(owner_id, task_id)
        if task is None:
            return None

        updates.pop("id", None)
        updates.pop("user_id", None)
        for name, value in updates.items():
            setattr(task, name, value)
        task.updated_at = utcnow()

        self.session.add(task)
        _commit(self.session, "updating task")
        self.session.refresh(task)
        return task

    def delete_task(self, owner_id: int, task_id: int) -> bool:
        """Delete a task by ID.

        Returns:
            True if task was deleted, False if not found or not owned
        """
        task = self.get_task(owner_id, task_id)
        if task is None:
            return False

        self.session.delete(task)
        _commit(self.session, "deleting task")
        return True
