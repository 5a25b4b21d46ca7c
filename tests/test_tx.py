import pytest

from academic_records.errors import StoreConflict
from academic_records.extensions import db
from academic_records.models import Department
from academic_records.services.tx import atomic


def test_nested_blocks_commit_once_and_roll_back_together(app):
    with pytest.raises(RuntimeError):
        with atomic() as session:
            with atomic():
                session.add(Department(name="Inner"))
            session.add(Department(name="Outer"))
            session.flush()
            raise RuntimeError("boom")
    assert Department.query.count() == 0
    assert db.session.info["atomic_depth"] == 0


def test_unique_constraint_backstop_maps_to_store_conflict(app):
    with atomic() as session:
        session.add(Department(name="CSE"))
    with pytest.raises(StoreConflict):
        with atomic() as session:
            session.add(Department(name="CSE"))
    assert Department.query.count() == 1


def test_session_usable_after_conflict(app):
    with pytest.raises(StoreConflict):
        with atomic() as session:
            session.add_all([Department(name="A"), Department(name="A")])
    with atomic() as session:
        session.add(Department(name="B"))
    assert [d.name for d in Department.query.all()] == ["B"]
