# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.

Field aliases are the document keys used both on the wire and in the
store: clid, firstname, lastname, jobtype, role, duration, tags.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

EMPLOYEE = "employee"
CONTRACTOR = "contractor"
VALID_JOB_TYPES = (EMPLOYEE, CONTRACTOR)

# Output key order; role and duration are dropped when empty.
DOCUMENT_KEYS = ("clid", "firstname", "lastname", "jobtype", "role", "duration", "tags")
OMIT_WHEN_EMPTY = ("role", "duration")


class Member(BaseModel):
    """A directory member: an employee or a contractor."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", alias="clid")
    first_name: str = Field(default="", alias="firstname")
    last_name: str = Field(default="", alias="lastname")
    job_type: str = Field(default="", alias="jobtype")
    role: str = ""
    duration: str = ""
    tags: list[str] = Field(default_factory=list)

    @property
    def job_kind(self) -> str:
        """Job type lower-cased for comparison; the stored value keeps its casing."""
        return self.job_type.lower()

    def to_document(self) -> dict[str, Any]:
        doc = self.model_dump(by_alias=True)
        ordered = {key: doc[key] for key in DOCUMENT_KEYS}
        for key in OMIT_WHEN_EMPTY:
            if not ordered[key]:
                del ordered[key]
        return ordered

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Member":
        # Older documents may carry nulls or lack optional keys.
        cleaned = {key: doc.get(key) for key in DOCUMENT_KEYS}
        cleaned = {key: value for key, value in cleaned.items() if value is not None}
        return cls.model_validate(cleaned)


class MemberPatch(Member):
    """Partial member: empty strings mean "leave unchanged", tags=None means absent."""

    tags: Optional[list[str]] = None

    @property
    def tags_supplied(self) -> bool:
        return self.tags is not None
