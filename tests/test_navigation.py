"""Tests for the back-navigation table and the explicit session."""

from __future__ import annotations

import aula.database as database
from aula.models import User
from aula.navigation import (
    MY_ITEMS,
    OWNER_ITEMS,
    TEACHERS_DIRECTORY,
    back_label,
    resolve_back_route,
    route_key,
)
from aula.session import Session, start_session

ADA = User(7, "Ada", "teacher")
GRACE = User(8, "Grace", "teacher")
BOB = User(3, "Bob", "student")


def _lookup(user_id):
    return {7: ADA, 8: GRACE}.get(user_id)


class TestRouteKey:
    def test_teacher_owner(self):
        assert route_key(Session(ADA), 7) == ("teacher", True)

    def test_teacher_not_owner(self):
        assert route_key(Session(ADA), 8) == ("teacher", False)
        assert route_key(Session(ADA), -1) == ("teacher", False)

    def test_student_and_anonymous(self):
        assert route_key(Session(BOB), 7) == ("student", False)
        assert route_key(Session(), 7) == ("student", False)


class TestResolveBackRoute:
    def test_owner_teacher_goes_to_own_list(self):
        route = resolve_back_route(Session(ADA), 7, "Courses", _lookup)
        assert route.destination == MY_ITEMS
        assert route.owner is None
        assert route.label == "Back to My Courses"

    def test_other_teacher_goes_to_owner_list(self):
        route = resolve_back_route(Session(GRACE), 7, "Exercises", _lookup)
        assert route.destination == OWNER_ITEMS
        assert route.owner is ADA
        assert route.label == "Back to Teacher's Exercises"

    def test_other_teacher_unknown_owner_falls_back_to_own_list(self):
        route = resolve_back_route(Session(GRACE), 42, "Exercises", _lookup)
        assert route.destination == MY_ITEMS

    def test_student_goes_to_owner_list(self):
        route = resolve_back_route(Session(BOB), 8, "Practical Works", _lookup)
        assert route.destination == OWNER_ITEMS
        assert route.owner is GRACE
        assert route.label == "Back to Practical Works"

    def test_student_without_owner_goes_to_directory(self):
        for owner_id in (-1, 0, 42):
            route = resolve_back_route(Session(BOB), owner_id, "Courses", _lookup)
            assert route.destination == TEACHERS_DIRECTORY
            assert route.owner is None

    def test_owner_lookup_skipped_for_own_list(self):
        def exploding(user_id):
            raise AssertionError("lookup should not be needed")
        route = resolve_back_route(Session(ADA), 7, "Courses", exploding)
        assert route.destination == MY_ITEMS


class TestBackLabel:
    def test_labels_follow_role(self):
        assert back_label(Session(ADA), 7, "Exercises") == "Back to My Exercises"
        assert back_label(Session(ADA), 8, "Exercises") == "Back to Teacher's Exercises"
        assert back_label(Session(BOB), 8, "Exercises") == "Back to Exercises"


class TestSession:
    def test_login(self):
        session = Session()
        assert not session.is_logged_in
        assert session.user_id is None

        session.login(ADA)
        assert session.is_logged_in
        assert session.is_teacher
        assert session.user_id == 7

    def test_student_is_not_teacher(self):
        assert not Session(BOB).is_teacher


class TestStartSession:
    def test_known_user_is_logged_in(self):
        session = start_session(8, _lookup)
        assert session.is_logged_in
        assert session.user is GRACE

    def test_unknown_user_browses_anonymously(self):
        session = start_session(42, _lookup)
        assert not session.is_logged_in
        assert route_key(session, 7) == ("student", False)

    def test_no_user_id(self):
        def exploding(user_id):
            raise AssertionError("no lookup without a user id")
        assert not start_session(None, exploding).is_logged_in

    def test_looks_up_the_database_by_default(self, tmp_db):
        user_id = database.insert_user("Ada", "teacher")
        session = start_session(user_id)
        assert session.is_teacher
        assert session.user_id == user_id
