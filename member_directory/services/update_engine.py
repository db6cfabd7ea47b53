# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: partial member updates.

Default (field-by-field) mode walks the patch in a fixed order:

    firstname ─► lastname ─► jobtype ─► role ─► duration ─► tags

Every field that passes its checks is written to the store immediately.
The first failed check stops the walk; fields written before it stay
written. Role and duration checks look only at the job type carried by
the same patch, never at the stored record, so {"role": "X"} alone is
rejected even for a stored employee.

Strict mode merges the patch into the stored record, runs the create
rules over the result and writes every touched field in one update.
"""

from typing import Any, Optional

from member_directory.core.logging import get_logger
from member_directory.metrics import FIELD_UPDATES
from member_directory.models.domain import CONTRACTOR, EMPLOYEE, Member, MemberPatch
from member_directory.repositories.base import MemberStore
from member_directory.services.validation import (
    INVALID_JOB_TYPE,
    MemberValidationError,
    is_valid_job_type,
    validate_new_member,
)

logger = get_logger(__name__)

UPDATED_FIRST_NAME = "Updated first name successfully. "
UPDATED_LAST_NAME = "Updated last name successfully. "
UPDATED_JOB_TYPE = "Updated member job type to {kind}. "
UPDATED_ROLE = "Updated role successfully. "
UPDATED_DURATION = "Updated duration successfully. "
UPDATED_TAGS = "Updated tags successfully. "

INVALID_JOB_TYPE_UPDATE = INVALID_JOB_TYPE + "."
CONTRACTOR_NEEDS_DURATION = "The contractor job type must have a specified duration."
EMPLOYEE_NEEDS_ROLE = "The employee job type must have a specified role."
ROLE_NEEDS_JOB_TYPE = "To set a role, please also include a job type of employee."
CONTRACTOR_ROLE_REJECTED = "A contractor cannot have a role."
DURATION_NEEDS_JOB_TYPE = "To set a duration, please also include a job type of contractor."
EMPLOYEE_DURATION_REJECTED = "An employee cannot have a duration."


class UpdateEngine:
    def __init__(self, repo: MemberStore, strict: bool = False) -> None:
        self._repo = repo
        self.strict = strict

    def apply(self, clid: str, patch: MemberPatch, stored: Optional[Member] = None) -> str:
        """Apply a patch to an existing member and return the outcome trail.

        Raises MemberValidationError on the first rule the patch breaks,
        RepositoryError when a write fails and, in strict mode without a
        stored record, KeyError when the member does not exist. An empty
        trail means nothing was supplied.
        """
        if self.strict:
            if stored is None:
                document = self._repo.find_one(clid)
                if document is None:
                    raise KeyError(f"No member found with clid '{clid}'")
                stored = Member.from_document(document)
            return self._apply_merged(clid, patch, stored)
        return self._apply_fields(clid, patch)

    # ── Field-by-field ──

    def _apply_fields(self, clid: str, patch: MemberPatch) -> str:
        trail: list[str] = []
        written: list[str] = []

        def write(fields: dict[str, Any], note: str) -> None:
            self._repo.update_one(clid, fields)
            for name in fields:
                FIELD_UPDATES.labels(field=name).inc()
            written.extend(fields)
            trail.append(note)

        def reject(message: str) -> None:
            if written:
                logger.warning(
                    "Update of %s stopped after committing %s: %s", clid, written, message
                )
            raise MemberValidationError(message)

        kind = patch.job_kind

        if patch.first_name:
            write({"firstname": patch.first_name}, UPDATED_FIRST_NAME)

        if patch.last_name:
            write({"lastname": patch.last_name}, UPDATED_LAST_NAME)

        if patch.job_type:
            if not is_valid_job_type(patch.job_type):
                reject(INVALID_JOB_TYPE_UPDATE)
            if kind == CONTRACTOR:
                if not patch.duration:
                    reject(CONTRACTOR_NEEDS_DURATION)
                write(
                    {"jobtype": patch.job_type, "duration": patch.duration, "role": ""},
                    UPDATED_JOB_TYPE.format(kind=CONTRACTOR),
                )
            if kind == EMPLOYEE:
                if not patch.role:
                    reject(EMPLOYEE_NEEDS_ROLE)
                write(
                    {"jobtype": patch.job_type, "role": patch.role, "duration": ""},
                    UPDATED_JOB_TYPE.format(kind=EMPLOYEE),
                )

        if patch.role:
            if not kind:
                reject(ROLE_NEEDS_JOB_TYPE)
            if kind == CONTRACTOR:
                reject(CONTRACTOR_ROLE_REJECTED)
            write({"jobtype": patch.job_type, "role": patch.role}, UPDATED_ROLE)

        if patch.duration:
            if not kind:
                reject(DURATION_NEEDS_JOB_TYPE)
            if kind == EMPLOYEE:
                reject(EMPLOYEE_DURATION_REJECTED)
            write(
                {"jobtype": patch.job_type, "duration": patch.duration, "role": ""},
                UPDATED_DURATION,
            )

        if patch.tags_supplied:
            write({"tags": list(patch.tags)}, UPDATED_TAGS)

        if written:
            logger.info("Member %s updated: %s", clid, sorted(set(written)))
        return "".join(trail)

    # ── Strict (merged, single write) ──

    def _apply_merged(self, clid: str, patch: MemberPatch, stored: Member) -> str:
        merged = stored.model_copy(deep=True)
        fields: dict[str, Any] = {}
        trail: list[str] = []

        if patch.first_name:
            merged.first_name = patch.first_name
            fields["firstname"] = patch.first_name
            trail.append(UPDATED_FIRST_NAME)

        if patch.last_name:
            merged.last_name = patch.last_name
            fields["lastname"] = patch.last_name
            trail.append(UPDATED_LAST_NAME)

        if patch.job_type:
            merged.job_type = patch.job_type
            if patch.job_kind == CONTRACTOR and not patch.role:
                merged.role = ""
            if patch.job_kind == EMPLOYEE and not patch.duration:
                merged.duration = ""
            trail.append(UPDATED_JOB_TYPE.format(kind=patch.job_kind))

        if patch.role:
            merged.role = patch.role
            trail.append(UPDATED_ROLE)

        if patch.duration:
            merged.duration = patch.duration
            trail.append(UPDATED_DURATION)

        if patch.job_type or patch.role or patch.duration:
            fields["jobtype"] = merged.job_type
            fields["role"] = merged.role
            fields["duration"] = merged.duration

        if patch.tags_supplied:
            merged.tags = list(patch.tags)
            fields["tags"] = merged.tags
            trail.append(UPDATED_TAGS)

        if not fields:
            return ""

        validate_new_member(merged)
        self._repo.update_one(clid, fields)
        for name in fields:
            FIELD_UPDATES.labels(field=name).inc()
        logger.info("Member %s updated (strict): %s", clid, sorted(fields))
        return "".join(trail)
