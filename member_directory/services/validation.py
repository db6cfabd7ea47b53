# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Member rules for the create path.

Checks run in a fixed order and the first failure is the only one
reported. The message texts are part of the HTTP contract.
"""

from member_directory.models.domain import CONTRACTOR, EMPLOYEE, VALID_JOB_TYPES, Member

MISSING_FIRST_NAME = "The member must have a first name"
MISSING_LAST_NAME = "The member must have a last name"
INVALID_JOB_TYPE = (
    "The job type provided is not valid. Please provide either 'Employee' or 'Contractor'"
)
ROLE_AND_DURATION = "A member cannot have both a duration and a role"
CONTRACTOR_WITH_ROLE = "A contractor cannot have a role"
CONTRACTOR_WITHOUT_DURATION = "A contractor must have a duration"
EMPLOYEE_WITH_DURATION = "An employee cannot have a duration"
EMPLOYEE_WITHOUT_ROLE = "An employee must have a role"


class MemberValidationError(ValueError):
    """Caller input breaks a member rule. str(exc) is the caller-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def is_valid_job_type(job_type: str) -> bool:
    return job_type.lower() in VALID_JOB_TYPES


def validate_new_member(member: Member) -> None:
    """Raise MemberValidationError for the first rule the member breaks."""
    if not member.first_name:
        raise MemberValidationError(MISSING_FIRST_NAME)
    if not member.last_name:
        raise MemberValidationError(MISSING_LAST_NAME)
    if not is_valid_job_type(member.job_type):
        raise MemberValidationError(INVALID_JOB_TYPE)
    if member.role and member.duration:
        raise MemberValidationError(ROLE_AND_DURATION)

    kind = member.job_kind
    if kind == CONTRACTOR and member.role:
        raise MemberValidationError(CONTRACTOR_WITH_ROLE)
    if kind == CONTRACTOR and not member.duration:
        raise MemberValidationError(CONTRACTOR_WITHOUT_DURATION)
    if kind == EMPLOYEE and member.duration:
        raise MemberValidationError(EMPLOYEE_WITH_DURATION)
    if kind == EMPLOYEE and not member.role:
        raise MemberValidationError(EMPLOYEE_WITHOUT_ROLE)
