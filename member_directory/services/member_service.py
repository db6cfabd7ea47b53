# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: member directory — business logic for the CRUD operations.
Coordinates id allocation, the member rules and repository writes.

Raises KeyError for unknown ids, MemberValidationError for rule
violations and RepositoryError for store failures. Controllers turn
these into response text.
"""

from typing import Any

from member_directory.core.logging import get_logger
from member_directory.metrics import MEMBERS_CREATED, MEMBERS_DELETED, VALIDATION_FAILURES
from member_directory.models.domain import Member, MemberPatch
from member_directory.repositories.base import MemberStore
from member_directory.services.id_allocator import IdentifierAllocator
from member_directory.services.update_engine import UpdateEngine
from member_directory.services.validation import MemberValidationError, validate_new_member

logger = get_logger(__name__)


class MemberService:
    """Business logic for directory members."""

    def __init__(
        self,
        member_repo: MemberStore,
        allocator: IdentifierAllocator,
        update_engine: UpdateEngine,
    ) -> None:
        self._members = member_repo
        self._allocator = allocator
        self._updates = update_engine

    # ── Commands ──

    def create_member(self, member: Member) -> tuple[Member, str]:
        """Allocate an id, validate and insert. Returns (stored member, id note)."""
        clid, note = self._allocator.allocate(member.id)
        candidate = member.model_copy(update={"id": clid})
        try:
            validate_new_member(candidate)
        except MemberValidationError as exc:
            VALIDATION_FAILURES.labels(operation="create").inc()
            logger.info("Member rejected: %s", exc.message)
            raise

        self._members.insert_one(candidate.to_document())
        MEMBERS_CREATED.labels(jobtype=candidate.job_kind).inc()
        logger.info("Member created: clid=%s, jobtype=%s", clid, candidate.job_type)
        return candidate, note

    def update_member(self, clid: str, patch: MemberPatch) -> str:
        """Apply a partial update. Returns the outcome trail, empty when nothing was supplied."""
        document = self._members.find_one(clid)
        if document is None:
            raise KeyError(f"No member found with clid '{clid}'")
        try:
            return self._updates.apply(clid, patch, Member.from_document(document))
        except MemberValidationError as exc:
            VALIDATION_FAILURES.labels(operation="update").inc()
            logger.info("Update of %s rejected: %s", clid, exc.message)
            raise

    def delete_member(self, clid: str) -> None:
        if not self._members.exists(clid):
            raise KeyError(f"No member found with clid '{clid}'")
        self._members.delete_one(clid)
        MEMBERS_DELETED.inc()
        logger.info("Member deleted: clid=%s", clid)

    def delete_all_members(self) -> int:
        removed = self._members.delete_many()
        MEMBERS_DELETED.inc(removed)
        logger.info("Deleted all members: count=%d", removed)
        return removed

    # ── Queries ──

    def list_members(self) -> list[dict[str, Any]]:
        return [Member.from_document(d).to_document() for d in self._members.find_all()]

    def get_member(self, clid: str) -> dict[str, Any]:
        document = self._members.find_one(clid)
        if document is None:
            raise KeyError(f"No member found with clid '{clid}'")
        return Member.from_document(document).to_document()
