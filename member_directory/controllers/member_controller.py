# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Member CRUD endpoints.
Thin HTTP layer — delegates ALL logic to MemberService.

Outcomes and errors go back as plain text with status 200; only member
data is JSON.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from member_directory.core.dependencies import get_member_service
from member_directory.repositories.base import RepositoryError
from member_directory.schemas import MemberCreateRequest, MemberOut, MemberUpdateRequest
from member_directory.services.id_allocator import IdentifierExhaustedError
from member_directory.services.member_service import MemberService
from member_directory.services.validation import MemberValidationError

router = APIRouter(prefix="/api", tags=["Members"])

EMPTY_COLLECTION = "The collection currently has no members."
MEMBER_NOT_FOUND = "No member for the provided ID could be found"
MEMBER_CREATED = "Created a new member"
NO_CHANGES = "No data was changed"
MEMBER_DELETED = "Member successfully deleted"
ALL_MEMBERS_DELETED = "Successfully deleted all members"
STORE_ERROR = "The following error occurred: {detail}"


def _text(message: str) -> PlainTextResponse:
    return PlainTextResponse(message)


def _store_error(exc: Exception) -> PlainTextResponse:
    return _text(STORE_ERROR.format(detail=exc))


@router.get("/members")
def list_members(service: MemberService = Depends(get_member_service)):
    """List every member, or a notice when the collection is empty."""
    try:
        members = service.list_members()
    except RepositoryError as e:
        return _store_error(e)
    if not members:
        return _text(EMPTY_COLLECTION)
    return JSONResponse(members)


@router.get("/members/{clid}", responses={200: {"model": MemberOut}})
def get_member(clid: str, service: MemberService = Depends(get_member_service)):
    try:
        return JSONResponse(service.get_member(clid))
    except KeyError:
        return _text(MEMBER_NOT_FOUND)
    except RepositoryError as e:
        return _store_error(e)


@router.post("/members")
def create_member(
    payload: Optional[MemberCreateRequest] = Body(default=None),
    service: MemberService = Depends(get_member_service),
):
    """Create a member. The clid is allocated when missing or already taken."""
    payload = payload or MemberCreateRequest()
    try:
        _, note = service.create_member(payload.to_member())
    except MemberValidationError as e:
        return _text(e.message)
    except (RepositoryError, IdentifierExhaustedError) as e:
        return _store_error(e)
    return _text(note + MEMBER_CREATED)


@router.patch("/members/{clid}")
def update_member(
    clid: str,
    payload: Optional[MemberUpdateRequest] = Body(default=None),
    service: MemberService = Depends(get_member_service),
):
    """Partially update a member, one field at a time."""
    payload = payload or MemberUpdateRequest()
    try:
        trail = service.update_member(clid, payload.to_patch())
    except KeyError:
        return _text(MEMBER_NOT_FOUND)
    except MemberValidationError as e:
        return _text(e.message)
    except RepositoryError as e:
        return _store_error(e)
    return _text(trail or NO_CHANGES)


@router.delete("/members/{clid}")
def delete_member(clid: str, service: MemberService = Depends(get_member_service)):
    try:
        service.delete_member(clid)
    except KeyError:
        return _text(MEMBER_NOT_FOUND)
    except RepositoryError as e:
        return _store_error(e)
    return _text(MEMBER_DELETED)


@router.delete("/members")
def delete_members(service: MemberService = Depends(get_member_service)):
    try:
        service.delete_all_members()
    except RepositoryError as e:
        return _store_error(e)
    return _text(ALL_MEMBERS_DELETED)
