import re

import pytest
from pydantic import ValidationError

from icebreaker.schemas.match import MatchCreate
from icebreaker.services import match_service
from icebreaker.services.errors import ConflictError, NotFoundError


def match_in(**overrides):
    data = {
        "teacher_name": "Kim Teacher",
        "teacher_phone": "010-1111-2222",
        "student_name": "Lee Student",
        "student_phone": "010-3333-4444",
    }
    data.update(overrides)
    return MatchCreate(**data)


class TestCreateMatch:
    def test_generated_id_and_initial_status(self, db_session):
        match = match_service.create_match(db_session, obj_in=match_in())
        assert re.fullmatch(r"[a-z0-9]{8}", match.id)
        assert match.status == "waiting"
        assert match.report_url is None
        assert match.created_at is not None

    def test_external_id(self, db_session):
        match = match_service.create_match(db_session, obj_in=match_in(id="fya43ohv"))
        assert match.id == "fya43ohv"

    def test_external_id_already_used(self, db_session, make_match):
        make_match("taken")
        with pytest.raises(ConflictError):
            match_service.create_match(db_session, obj_in=match_in(id="taken"))

    @pytest.mark.parametrize("field", ["teacher_name", "teacher_phone", "student_name", "student_phone"])
    def test_blank_fields_rejected(self, field):
        with pytest.raises(ValidationError):
            match_in(**{field: "   "})

    def test_names_are_trimmed(self):
        assert match_in(teacher_name="  Kim  ").teacher_name == "Kim"

    def test_id_charset(self):
        with pytest.raises(ValidationError):
            match_in(id="has space")


class TestListMatches:
    def test_status_filter(self, db_session, make_match):
        make_match("a", status="waiting")
        make_match("b", status="both_completed")
        result = match_service.list_matches(db_session, status="both_completed")
        assert [m.id for m in result] == ["b"]

    def test_search_by_either_name(self, db_session, make_match):
        make_match("a", teacher_name="Park Jisoo")
        make_match("b", student_name="Choi Jisoo")
        make_match("c", teacher_name="Han", student_name="Yoon")
        result = match_service.list_matches(db_session, search="jisoo")
        assert sorted(m.id for m in result) == ["a", "b"]

    def test_pagination(self, db_session, make_match):
        for i in range(5):
            make_match(f"m{i}")
        assert len(match_service.list_matches(db_session, skip=2, limit=2)) == 2


def test_count_by_status(db_session, make_match):
    make_match(status="waiting")
    make_match(status="waiting")
    make_match(status="teacher_completed")
    counts = match_service.count_by_status(db_session)
    assert counts == {
        "waiting": 2,
        "teacher_completed": 1,
        "student_completed": 0,
        "both_completed": 0,
        "total": 3,
    }


def test_session_links(make_match):
    match = make_match("abc")
    links = match_service.session_links(match, "https://example.org/")
    assert links == {
        "teacher": "https://example.org/session/abc/teacher",
        "student": "https://example.org/session/abc/student",
    }


def test_reset_report_unknown_match(db_session):
    with pytest.raises(NotFoundError):
        match_service.reset_report(db_session, "missing")


def test_lock_match_unknown(db_session):
    with pytest.raises(NotFoundError):
        match_service.lock_match(db_session, "missing")
