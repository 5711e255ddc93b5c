"""Many-to-many links between tasks and tags."""

from typing import Dict, Iterable, List

from sqlmodel import Session, select

from app.models.tag import Tag, TaskTag


class TaskTagLinker:
    """
    Maintains the task_tag join rows.

    The linker only flushes. Commit and rollback belong to the caller, which
    makes ``replace_links`` part of the caller's transaction: readers see the
    old full tag set or the new one, never a partial set.
    """

    def __init__(self, session: Session):
        self.session = session

    def replace_links(self, task_id: str, tag_ids: Iterable[str]) -> None:
        """Replace every link of the task with exactly ``tag_ids``."""
        wanted = list(dict.fromkeys(tag_ids))

        existing = self.session.exec(select(TaskTag).where(TaskTag.task_id == task_id)).all()
        for link in existing:
            self.session.delete(link)
        self.session.flush()

        for tag_id in wanted:
            self.session.add(TaskTag(task_id=task_id, tag_id=tag_id))
        self.session.flush()

    def tags_for(self, task_ids: Iterable[str]) -> Dict[str, List[Tag]]:
        """Load the tags of several tasks with one query."""
        result: Dict[str, List[Tag]] = {task_id: [] for task_id in task_ids}
        if not result:
            return result

        statement = (
            select(TaskTag.task_id, Tag)
            .join_from(TaskTag, Tag, Tag.id == TaskTag.tag_id)
            .where(TaskTag.task_id.in_(list(result)))
            .order_by(Tag.name)
        )
        for task_id, tag in self.session.exec(statement).all():
            result[task_id].append(tag)
        return result
