# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / response schemas — API contract definitions.
Pydantic models used ONLY at the controller (HTTP) boundary.

Create fields are not marked required here: a missing first name must
come back as the rule engine's message, not as a 422.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from member_directory.models.domain import Member, MemberPatch


class _MemberPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    clid: Optional[str] = Field(default=None, description="Member ID, allocated when omitted")
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    jobtype: Optional[str] = Field(default=None, description="'Employee' or 'Contractor'")
    role: Optional[str] = Field(default=None, description="Employees only")
    duration: Optional[str] = Field(default=None, description="Contractors only")
    tags: Optional[list[str]] = None

    def _strings(self) -> dict[str, str]:
        return {
            "clid": self.clid or "",
            "firstname": self.firstname or "",
            "lastname": self.lastname or "",
            "jobtype": self.jobtype or "",
            "role": self.role or "",
            "duration": self.duration or "",
        }


class MemberCreateRequest(_MemberPayload):
    """Body for POST /api/members."""

    def to_member(self) -> Member:
        return Member(**self._strings(), tags=list(self.tags or []))


class MemberUpdateRequest(_MemberPayload):
    """Body for PATCH /api/members/{clid}. Every field optional; clid is ignored."""

    def to_patch(self) -> MemberPatch:
        fields = self._strings()
        fields["clid"] = ""
        return MemberPatch(**fields, tags=self.tags)


class MemberOut(BaseModel):
    """Documented response shape for a single member."""
    clid: str
    firstname: str
    lastname: str
    jobtype: str
    role: Optional[str] = None
    duration: Optional[str] = None
    tags: list[str] = []
