# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire the repository and services.
"""

from member_directory.core.config import settings
from member_directory.repositories import InMemoryMemberRepository, MongoMemberRepository
from member_directory.services.id_allocator import IdentifierAllocator
from member_directory.services.member_service import MemberService
from member_directory.services.update_engine import UpdateEngine


def _build_member_repo():
    if settings.STORE_BACKEND == "memory":
        return InMemoryMemberRepository()
    from member_directory.core.database import get_collection
    return MongoMemberRepository(get_collection())


# ── Singleton instances (store handle shared process-wide) ──
_member_repo = _build_member_repo()
_allocator = IdentifierAllocator(_member_repo, upper_bound=settings.ID_UPPER_BOUND)
_update_engine = UpdateEngine(_member_repo, strict=settings.STRICT_UPDATES)
_member_service = MemberService(
    member_repo=_member_repo,
    allocator=_allocator,
    update_engine=_update_engine,
)


# ── FastAPI dependency functions ──
def get_member_repo():
    return _member_repo


def get_member_service() -> MemberService:
    return _member_service
