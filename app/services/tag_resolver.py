"""
Tag resolution: turns free-text tag names into user-scoped tag ids.

Tags are created on first use. Uniqueness of (user_id, name) is enforced by
the ``uq_tag_user_name`` constraint; the resolver inserts optimistically and,
when a concurrent request wins the race, re-reads and reuses that row.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.config import DEFAULT_TAG_COLOR
from app.models.tag import Tag
from app.services.errors import ConflictRetry, StorageFailure, ValidationError
from app.utils.logger import get_logger

logger = get_logger(__name__)

MAX_TAG_NAME_LENGTH = 50


class TagResolver:
    """Resolve and create tags within one user's scope."""

    def __init__(self, session: Session, default_color: str = DEFAULT_TAG_COLOR):
        self.session = session
        self.default_color = default_color

    @staticmethod
    def normalize_names(names: Iterable[str]) -> List[str]:
        """Strip names and drop repeats, keeping first-seen order.

        Raises:
            ValidationError: If a name is blank or too long
        """
        normalized: Dict[str, None] = {}
        for raw in names:
            if not isinstance(raw, str) or not raw.strip():
                raise ValidationError("Tag names cannot be empty", {"field": "tags"})
            name = raw.strip()
            if len(name) > MAX_TAG_NAME_LENGTH:
                raise ValidationError(
                    f"Tag names must be at most {MAX_TAG_NAME_LENGTH} characters",
                    {"field": "tags", "value": name},
                )
            normalized.setdefault(name, None)
        return list(normalized)

    def resolve(self, user_id: str, names: Iterable[str]) -> Dict[str, str]:
        """
        Map each tag name to the id of the user's tag with that name.

        Missing tags are created with the default color. Calling this again with
        the same names returns the same ids.

        Args:
            user_id: Owner of the tags
            names: Tag names as typed by the user

        Returns:
            Mapping of normalized name to tag id, in input order
        """
        resolved: Dict[str, str] = {}
        for name in self.normalize_names(names):
            tag = self._find(user_id, name)
            if tag is None:
                tag = self._create(user_id, name)
            resolved[name] = tag.id
        return resolved

    def list_tags(self, user_id: str) -> List[Tag]:
        """All tags owned by the user, ordered by name."""
        statement = select(Tag).where(Tag.user_id == user_id).order_by(Tag.name)
        return list(self.session.exec(statement).all())

    def _find(self, user_id: str, name: str) -> Optional[Tag]:
        statement = select(Tag).where(Tag.user_id == user_id).where(Tag.name == name)
        return self.session.exec(statement).first()

    def _create(self, user_id: str, name: str) -> Tag:
        try:
            return self._insert(user_id, name)
        except ConflictRetry:
            existing = self._find(user_id, name)
            if existing is None:
                logger.error("Tag conflict without a surviving row", user_id=user_id, tag=name)
                raise StorageFailure("Could not resolve tag", {"tag": name})
            logger.info("Reused tag created by a concurrent request", user_id=user_id, tag_id=existing.id)
            return existing

    def _insert(self, user_id: str, name: str) -> Tag:
        tag = Tag(user_id=user_id, name=name, color=self.default_color)
        try:
            # The savepoint keeps a duplicate insert from poisoning the caller's transaction
            with self.session.begin_nested():
                self.session.add(tag)
                self.session.flush()
        except IntegrityError as e:
            raise ConflictRetry(f"Tag '{name}' already exists", {"tag": name}) from e

        logger.info("Tag created", user_id=user_id, tag_id=tag.id, tag=name)
        return tag
