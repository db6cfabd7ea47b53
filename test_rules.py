# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the member rules: identifier allocation, create validation,
the partial-update engine (both modes) and the store adapters.

Run:  pytest test_rules.py -v
"""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from member_directory.models.domain import Member, MemberPatch
from member_directory.repositories.base import MemberStore, RepositoryError
from member_directory.repositories.member_repository import MongoMemberRepository
from member_directory.repositories.memory_repository import InMemoryMemberRepository
from member_directory.services.id_allocator import (
    IdentifierAllocator,
    IdentifierExhaustedError,
)
from member_directory.services.update_engine import UpdateEngine
from member_directory.services.validation import (
    MemberValidationError,
    validate_new_member,
)


# ============================================
# Helpers
# ============================================
def _employee(**overrides):
    fields = {
        "clid": "1", "firstname": "Julius", "lastname": "Caesar",
        "jobtype": "Employee", "role": "Imperator", "tags": ["x"],
    }
    fields.update(overrides)
    return Member(**fields)


def _contractor(**overrides):
    fields = {
        "clid": "2", "firstname": "Pirate", "lastname": "Booty",
        "jobtype": "Contractor", "duration": "4 minutes",
    }
    fields.update(overrides)
    return Member(**fields)


def _scripted_rng(*draws):
    rng = MagicMock()
    rng.randrange.side_effect = list(draws)
    return rng


@pytest.fixture
def repo():
    store = InMemoryMemberRepository()
    store.insert_one(_employee().to_document())
    return store


# ============================================
# Domain model
# ============================================
class TestMemberDocument:
    def test_document_key_order(self):
        assert list(_employee().to_document()) == [
            "clid", "firstname", "lastname", "jobtype", "role", "tags",
        ]

    def test_empty_role_and_duration_omitted(self):
        doc = _contractor(role="").to_document()
        assert "role" not in doc
        assert doc["duration"] == "4 minutes"

    def test_from_document_tolerates_nulls(self):
        member = Member.from_document({
            "clid": "9", "firstname": "A", "lastname": "B",
            "jobtype": "Employee", "role": "R", "tags": None,
        })
        assert member.tags == []
        assert member.duration == ""

    def test_patch_tags_absent_by_default(self):
        assert MemberPatch().tags_supplied is False
        assert MemberPatch(tags=[]).tags_supplied is True


# ============================================
# Create validation
# ============================================
class TestCreateValidation:
    def test_valid_employee(self):
        validate_new_member(_employee())

    def test_valid_contractor(self):
        validate_new_member(_contractor())

    def test_job_type_is_case_insensitive(self):
        validate_new_member(_employee(jobtype="EMPLOYEE"))
        validate_new_member(_contractor(jobtype="contractor"))

    def test_tags_are_optional(self):
        validate_new_member(_employee(tags=[]))

    @pytest.mark.parametrize("member,message", [
        (_employee(firstname=""), "The member must have a first name"),
        (_employee(lastname=""), "The member must have a last name"),
        (_employee(jobtype="Intern"),
         "The job type provided is not valid. Please provide either 'Employee' or 'Contractor'"),
        (_employee(jobtype=""),
         "The job type provided is not valid. Please provide either 'Employee' or 'Contractor'"),
        (_contractor(role="CEO"), "A member cannot have both a duration and a role"),
        (_contractor(duration="", role="CEO"), "A contractor cannot have a role"),
        (_contractor(duration=""), "A contractor must have a duration"),
        (_employee(role="", duration="1 year"), "An employee cannot have a duration"),
        (_employee(role=""), "An employee must have a role"),
    ])
    def test_rejections(self, member, message):
        with pytest.raises(MemberValidationError) as exc_info:
            validate_new_member(member)
        assert str(exc_info.value) == message

    def test_first_failure_wins(self):
        member = Member(jobtype="Intern", role="a", duration="b")
        with pytest.raises(MemberValidationError, match="first name"):
            validate_new_member(member)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_new_member(Member())


# ============================================
# Identifier allocation
# ============================================
class TestIdentifierAllocator:
    def test_free_requested_id_is_kept(self, repo):
        allocator = IdentifierAllocator(repo, rng=_scripted_rng())
        assert allocator.allocate("42") == ("42", "")

    def test_missing_id_is_drawn(self, repo):
        allocator = IdentifierAllocator(repo, rng=_scripted_rng(1234))
        assert allocator.allocate("") == ("1234", "")

    def test_taken_id_is_substituted_with_note(self, repo):
        allocator = IdentifierAllocator(repo, rng=_scripted_rng(77))
        clid, note = allocator.allocate("1")
        assert clid == "77"
        assert note == "The provided ID was not unique, so a unique one with number 77 was created. "

    def test_redraws_until_free(self, repo):
        repo.insert_one(_contractor(clid="5").to_document())
        rng = _scripted_rng(1, 5, 6)
        allocator = IdentifierAllocator(repo, rng=rng)
        clid, note = allocator.allocate("")
        assert clid == "6"
        assert note == ""
        assert rng.randrange.call_count == 3
        assert not repo.exists(clid)

    def test_draw_range(self, repo):
        rng = _scripted_rng(0)
        IdentifierAllocator(repo, upper_bound=99_999_999, rng=rng).allocate("")
        rng.randrange.assert_called_once_with(0, 99_999_999)

    def test_max_attempts(self, repo):
        allocator = IdentifierAllocator(repo, rng=_scripted_rng(1, 1, 1), max_attempts=2)
        with pytest.raises(IdentifierExhaustedError):
            allocator.allocate("1")

    def test_allocation_does_not_write(self, repo):
        IdentifierAllocator(repo, rng=_scripted_rng(3)).allocate("1")
        assert repo.count() == 1


# ============================================
# Update engine — field-by-field
# ============================================
class TestUpdateEngine:
    def _apply(self, repo, **fields):
        return UpdateEngine(repo).apply("1", MemberPatch(**fields))

    def test_empty_patch(self, repo):
        assert self._apply(repo) == ""

    def test_tags_only_touches_tags(self, repo):
        before = repo.find_one("1")
        assert self._apply(repo, tags=["a", "b"]) == "Updated tags successfully. "
        after = repo.find_one("1")
        assert after.pop("tags") == ["a", "b"]
        before.pop("tags")
        assert after == before

    def test_names(self, repo):
        trail = self._apply(repo, firstname="Gaius", lastname="Octavius")
        assert trail == "Updated first name successfully. Updated last name successfully. "

    def test_contractor_switch_clears_role(self, repo):
        trail = self._apply(repo, jobtype="CONTRACTOR", duration="6 months")
        assert trail == "Updated member job type to contractor. Updated duration successfully. "
        stored = repo.find_one("1")
        assert stored["jobtype"] == "CONTRACTOR"
        assert stored["role"] == ""

    def test_employee_switch_clears_duration(self, repo):
        self._apply(repo, jobtype="Contractor", duration="6 months")
        trail = self._apply(repo, jobtype="Employee", role="Mastermind")
        assert trail == "Updated member job type to employee. Updated role successfully. "
        assert repo.find_one("1")["duration"] == ""

    @pytest.mark.parametrize("fields,message", [
        ({"jobtype": "Pirate"},
         "The job type provided is not valid. Please provide either 'Employee' or 'Contractor'."),
        ({"jobtype": "Contractor"}, "The contractor job type must have a specified duration."),
        ({"jobtype": "Employee"}, "The employee job type must have a specified role."),
        ({"role": "Dishwasher"}, "To set a role, please also include a job type of employee."),
        ({"duration": "2 years"}, "To set a duration, please also include a job type of contractor."),
        ({"jobtype": "Employee", "role": "Chef", "duration": "1 day"},
         "An employee cannot have a duration."),
    ])
    def test_rejections(self, repo, fields, message):
        with pytest.raises(MemberValidationError) as exc_info:
            self._apply(repo, **fields)
        assert exc_info.value.message == message

    def test_role_alone_rejected_even_for_stored_employee(self, repo):
        with pytest.raises(MemberValidationError):
            self._apply(repo, role="Consul")
        assert repo.find_one("1")["role"] == "Imperator"

    def test_earlier_fields_stay_committed(self, repo):
        with pytest.raises(MemberValidationError):
            self._apply(repo, firstname="Gaius", jobtype="Contractor")
        stored = repo.find_one("1")
        assert stored["firstname"] == "Gaius"
        assert stored["jobtype"] == "Employee"

    def test_one_write_per_step(self):
        store = MagicMock()
        UpdateEngine(store).apply(
            "1", MemberPatch(firstname="A", jobtype="Employee", role="R", tags=[])
        )
        assert [c.args[1] for c in store.update_one.call_args_list] == [
            {"firstname": "A"},
            {"jobtype": "Employee", "role": "R", "duration": ""},
            {"jobtype": "Employee", "role": "R"},
            {"tags": []},
        ]

    def test_store_error_stops_the_walk(self):
        store = MagicMock()
        store.update_one.side_effect = [1, RepositoryError("boom")]
        with pytest.raises(RepositoryError):
            UpdateEngine(store).apply("1", MemberPatch(firstname="A", lastname="B", tags=[]))
        assert store.update_one.call_count == 2


# ============================================
# Update engine — strict mode
# ============================================
class TestStrictUpdateEngine:
    def _apply(self, repo, **fields):
        stored = Member.from_document(repo.find_one("1"))
        return UpdateEngine(repo, strict=True).apply("1", MemberPatch(**fields), stored)

    def test_role_alone_uses_stored_job_type(self, repo):
        assert self._apply(repo, role="Consul") == "Updated role successfully. "
        assert repo.find_one("1")["role"] == "Consul"

    def test_switch_to_contractor_single_write(self):
        store = MagicMock()
        stored = _employee()
        trail = UpdateEngine(store, strict=True).apply(
            "1", MemberPatch(jobtype="Contractor", duration="6 months"), stored
        )
        assert trail == "Updated member job type to contractor. Updated duration successfully. "
        store.update_one.assert_called_once_with(
            "1", {"jobtype": "Contractor", "role": "", "duration": "6 months"}
        )

    def test_invalid_merge_writes_nothing(self, repo):
        with pytest.raises(MemberValidationError) as exc_info:
            self._apply(repo, firstname="Gaius", duration="1 year")
        assert exc_info.value.message == "A member cannot have both a duration and a role"
        assert repo.find_one("1")["firstname"] == "Julius"

    def test_contractor_without_duration(self, repo):
        with pytest.raises(MemberValidationError, match="must have a duration"):
            self._apply(repo, jobtype="Contractor")

    def test_empty_patch(self, repo):
        assert self._apply(repo) == ""

    def test_missing_member_without_stored_record(self, repo):
        engine = UpdateEngine(repo, strict=True)
        with pytest.raises(KeyError):
            engine.apply("404", MemberPatch(firstname="Nobody"))
        assert not repo.exists("404")

    def test_loads_stored_record_when_not_given(self, repo):
        trail = UpdateEngine(repo, strict=True).apply("1", MemberPatch(role="Consul"))
        assert trail == "Updated role successfully. "
        assert repo.find_one("1")["role"] == "Consul"


# ============================================
# MongoDB adapter
# ============================================
class TestMongoMemberRepository:
    def test_find_one_hides_object_id(self):
        collection = MagicMock()
        collection.find_one.return_value = {"clid": "1"}
        assert MongoMemberRepository(collection).find_one("1") == {"clid": "1"}
        collection.find_one.assert_called_once_with({"clid": "1"}, {"_id": 0})

    def test_update_uses_set(self):
        collection = MagicMock()
        collection.update_one.return_value.matched_count = 1
        assert MongoMemberRepository(collection).update_one("1", {"role": "R"}) == 1
        collection.update_one.assert_called_once_with({"clid": "1"}, {"$set": {"role": "R"}})

    def test_insert_does_not_mutate_document(self):
        collection = MagicMock()
        collection.insert_one.side_effect = lambda doc: doc.update(_id="oid")
        document = {"clid": "1"}
        MongoMemberRepository(collection).insert_one(document)
        assert document == {"clid": "1"}

    def test_driver_errors_are_wrapped(self):
        collection = MagicMock()
        collection.delete_many.side_effect = ServerSelectionTimeoutError("no servers")
        with pytest.raises(RepositoryError, match="no servers"):
            MongoMemberRepository(collection).delete_many()

    def test_existing_index_conflict_is_ignored(self):
        collection = MagicMock()
        collection.create_index.side_effect = OperationFailure("conflict", code=85)
        MongoMemberRepository(collection).ensure_indexes()

    def test_other_index_failures_raise(self):
        collection = MagicMock()
        collection.create_index.side_effect = OperationFailure("denied", code=13)
        with pytest.raises(RepositoryError):
            MongoMemberRepository(collection).ensure_indexes()


class TestInMemoryMemberRepository:
    def test_duplicate_insert_rejected(self, repo):
        with pytest.raises(RepositoryError):
            repo.insert_one(_employee().to_document())

    def test_reads_are_copies(self, repo):
        repo.find_one("1")["tags"].append("mutated")
        assert repo.find_one("1")["tags"] == ["x"]

    def test_delete_counts(self, repo):
        assert repo.delete_one("missing") == 0
        assert repo.delete_many() == 1
        assert repo.count() == 0


# ============================================
# Store contract
# ============================================
class TestStoreContract:
    @pytest.mark.parametrize("store", [
        InMemoryMemberRepository(),
        MongoMemberRepository(MagicMock()),
    ])
    def test_implements_every_store_method(self, store):
        methods = [name for name in vars(MemberStore) if not name.startswith("_")]
        assert "ensure_indexes" in methods
        for name in methods:
            assert callable(getattr(store, name)), name
