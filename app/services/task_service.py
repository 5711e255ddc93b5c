"""Task service: user-scoped task CRUD with tag resolution and board moves."""
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.models.base import as_utc, utc_now
from app.models.tag import Tag, TaskTag
from app.models.task import DEFAULT_PRIORITY, DEFAULT_STATUS, PRIORITIES, TASK_STATUSES, Task
from app.schemas.task import MoveResult, TagResponse, TaskResponse
from app.services.errors import NotFoundError, StorageFailure, TaskBoardError, ValidationError
from app.services.status_transitions import evaluate_drop, is_noop
from app.services.tag_resolver import TagResolver
from app.services.task_tag_linker import TaskTagLinker
from app.utils.logger import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status", "priority", "deadline", "tag_names")


def parse_deadline(value: Any) -> Optional[datetime]:
    """Parse an ISO deadline into aware UTC. Naive input is taken as UTC; empty values clear the deadline."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(
                "Deadline must be an ISO 8601 date or datetime",
                {"field": "deadline", "value": value},
            )
    return as_utc(moment)


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Task title cannot be empty", {"field": "title"})
    return title.strip()


def _check_choice(field: str, value: Any, choices: Sequence[str]) -> str:
    if value not in choices:
        raise ValidationError(
            f"{field.capitalize()} must be one of: {', '.join(choices)}",
            {"field": field, "value": value},
        )
    return value


class TaskService:
    """Service class for task CRUD, always scoped to the owning user."""

    def __init__(
        self,
        session: Session,
        tag_resolver: Optional[TagResolver] = None,
        linker: Optional[TaskTagLinker] = None,
    ):
        self.session = session
        self.tag_resolver = tag_resolver or TagResolver(session)
        self.linker = linker or TaskTagLinker(session)

    @contextmanager
    def _transaction(self, operation: str, **context):
        """Commit on success; roll everything back on any failure."""
        try:
            yield
            self.session.commit()
        except TaskBoardError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Failed to {operation} task", operation=operation, **context)
            raise StorageFailure(f"Failed to {operation} task", {"error": str(e)}) from e

    @contextmanager
    def _reading(self, operation: str, **context):
        """Report storage errors on read paths as StorageFailure."""
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Failed to {operation}", operation=operation, **context)
            raise StorageFailure(f"Failed to {operation}", {"error": str(e)}) from e

    def create(
        self,
        user_id: str,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        deadline: Any = None,
        tag_names: Optional[Iterable[str]] = None,
    ) -> TaskResponse:
        """Create a task, resolving and linking its tags in the same transaction."""
        clean_title = _clean_title(title)
        status = _check_choice("status", status or DEFAULT_STATUS, TASK_STATUSES)
        priority = _check_choice("priority", priority or DEFAULT_PRIORITY, PRIORITIES)
        deadline_at = parse_deadline(deadline)
        names = TagResolver.normalize_names(tag_names or [])

        now = utc_now()
        task = Task(
            user_id=user_id,
            title=clean_title,
            description=description,
            status=status,
            priority=priority,
            deadline=deadline_at,
            created_at=now,
            updated_at=now,
        )

        with self._transaction("create", user_id=user_id):
            self.session.add(task)
            self.session.flush()
            if names:
                self._apply_tags(user_id, task.id, names)

        logger.info("Task created", user_id=user_id, task_id=task.id, tags=names)
        return self.get(user_id, task.id)

    def get(self, user_id: str, task_id: str) -> TaskResponse:
        """Get a task by id; raises NotFoundError unless the user owns it."""
        task = self._get_owned(user_id, task_id)
        with self._reading("load task tags", user_id=user_id, task_id=task_id):
            tags = self.linker.tags_for([task.id])[task.id]
        return self._to_response(task, tags)

    def list(
        self,
        user_id: str,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[TaskResponse]:
        """All of the user's tasks in creation order, optionally filtered."""
        statement = select(Task).where(Task.user_id == user_id)

        if status is not None:
            statement = statement.where(Task.status == _check_choice("status", status, TASK_STATUSES))
        if priority is not None:
            statement = statement.where(Task.priority == _check_choice("priority", priority, PRIORITIES))
        if tag:
            statement = (
                statement.join(TaskTag, TaskTag.task_id == Task.id)
                .join(Tag, Tag.id == TaskTag.tag_id)
                .where(Tag.name == tag.strip())
            )

        statement = statement.order_by(Task.created_at, Task.id)
        with self._reading("list tasks", user_id=user_id):
            tasks = list(self.session.exec(statement).all())
            tags_by_task = self.linker.tags_for(task.id for task in tasks)
        return [self._to_response(task, tags_by_task[task.id]) for task in tasks]

    def update(self, user_id: str, task_id: str, changes: Mapping[str, Any]) -> TaskResponse:
        """
        Apply a partial update.

        Only keys present in ``changes`` are written. ``tag_names`` present
        (even empty) replaces the full tag set; absent leaves links alone.
        ``updated_at`` is always refreshed.
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown task fields: {', '.join(sorted(unknown))}", {"fields": sorted(unknown)}
            )

        values: Dict[str, Any] = {}
        if "title" in changes:
            values["title"] = _clean_title(changes["title"])
        if "description" in changes:
            values["description"] = changes["description"]
        if "status" in changes:
            values["status"] = _check_choice("status", changes["status"], TASK_STATUSES)
        if "priority" in changes:
            values["priority"] = _check_choice("priority", changes["priority"], PRIORITIES)
        if "deadline" in changes:
            values["deadline"] = parse_deadline(changes["deadline"])

        names = None
        if "tag_names" in changes:
            if changes["tag_names"] is None:
                raise ValidationError("Tags must be a list; send [] to remove all tags", {"field": "tags"})
            names = TagResolver.normalize_names(changes["tag_names"])

        task = self._get_owned(user_id, task_id)

        with self._transaction("update", user_id=user_id, task_id=task_id):
            for field, value in values.items():
                setattr(task, field, value)
            task.updated_at = utc_now()
            self.session.add(task)
            self.session.flush()
            if names is not None:
                self._apply_tags(user_id, task_id, names)

        logger.info("Task updated", user_id=user_id, task_id=task_id, fields=sorted(changes))
        return self.get(user_id, task_id)

    def delete(self, user_id: str, task_id: str) -> None:
        """Delete a task; its tag links go with it, the tags stay."""
        task = self._get_owned(user_id, task_id)

        with self._transaction("delete", user_id=user_id, task_id=task_id):
            self.session.delete(task)

        logger.info("Task deleted", user_id=user_id, task_id=task_id)

    def move(self, user_id: str, task_id: str, dropped_over_id: str) -> MoveResult:
        """
        Apply a board drop.

        Dropping on a column takes that column's status, dropping on a card
        takes the card's status. Unknown targets and drops that keep the current
        status write nothing.
        """
        task = self._get_owned(user_id, task_id)
        with self._reading("load board statuses", user_id=user_id):
            statuses = dict(
                self.session.exec(select(Task.id, Task.status).where(Task.user_id == user_id)).all()
            )
        target = evaluate_drop(dropped_over_id, statuses)

        if is_noop(task.status, target):
            logger.debug("Board drop is a no-op", user_id=user_id, task_id=task_id, over_id=dropped_over_id)
            return MoveResult(task=self.get(user_id, task_id), changed=False)

        return MoveResult(task=self.update(user_id, task_id, {"status": target}), changed=True)

    def board(self, user_id: str) -> Dict[str, List[TaskResponse]]:
        """The user's tasks grouped by status; every column is present."""
        columns: Dict[str, List[TaskResponse]] = {status: [] for status in TASK_STATUSES}
        for task in self.list(user_id):
            columns[task.status].append(task)
        return columns

    def _get_owned(self, user_id: str, task_id: str) -> Task:
        statement = (
            select(Task)
            .where(Task.id == task_id)
            .where(Task.user_id == user_id)
        )
        with self._reading("load task", user_id=user_id, task_id=task_id):
            task = self.session.exec(statement).first()
        if not task:
            raise NotFoundError(details={"task_id": task_id})
        return task

    def _apply_tags(self, user_id: str, task_id: str, names: List[str]) -> None:
        tag_ids = self.tag_resolver.resolve(user_id, names)
        self.linker.replace_links(task_id, tag_ids.values())

    @staticmethod
    def _to_response(task: Task, tags: List[Tag]) -> TaskResponse:
        return TaskResponse(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            deadline=task.deadline,
            created_at=task.created_at,
            updated_at=task.updated_at,
            tags=[TagResponse.model_validate(tag) for tag in tags],
        )
