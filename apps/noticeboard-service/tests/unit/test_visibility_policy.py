import pytest

from noticeboard.db import schemas
from noticeboard.visibility import (
    Broadcast,
    Direct,
    SectionMembershipIndex,
    SectionScoped,
    can_delete_notice,
    can_edit_notice,
    can_publish_to,
    is_visible,
    visible_notices,
)

PRIVATE = "private_message"


@pytest.fixture
def membership(make_section):
    """T1 is class teacher of 10 and timetabled into 11."""
    return SectionMembershipIndex(
        sections=[make_section("10", class_teacher_id="T1"), make_section("99", class_teacher_id="T2")],
        timetable_entries=[schemas.TimetableEntry(teacher_id="T1", section_id="11")],
    )


class TestAuthorVisibility:
    """Authors always see their own posts."""

    @pytest.mark.parametrize(
        "target,kind",
        [
            ("All", "notice"),
            ("Student", "notice"),
            ("section_77", "notice"),
            ("someone-else", PRIVATE),
            ("someone-else", "notice"),
        ],
    )
    @pytest.mark.parametrize("role", ["Admin", "Teacher", "Student", "Accountant", "Janitor"])
    def test_author_sees_any_target_and_kind(self, make_user, make_notice, target, kind, role):
        viewer = make_user("u1", role)
        notice = make_notice("n1", target, author_id="u1", kind=kind)
        assert is_visible(notice, viewer) is True


class TestPrivateMessages:
    """Private messages reach exactly the author and the recipient."""

    def test_recipient_sees_message(self, make_user, make_notice):
        notice = make_notice("pm", "student-1", author_id="teacher-1", kind=PRIVATE)
        assert is_visible(notice, make_user("student-1", "Student")) is True

    @pytest.mark.parametrize("role", ["Admin", "Teacher", "Student", "Librarian"])
    def test_everyone_else_is_excluded(self, make_user, make_notice, role):
        """Test that even Admin cannot read other people's private messages."""
        notice = make_notice("pm", "student-1", author_id="teacher-1", kind=PRIVATE)
        assert is_visible(notice, make_user("other", role)) is False

    def test_broadcast_literal_target_does_not_widen_private_message(self, make_user, make_notice):
        notice = make_notice("pm", "All", author_id="teacher-1", kind=PRIVATE)
        assert is_visible(notice, make_user("admin-1", "Admin")) is False

    def test_viewer_without_id_matches_nothing(self, make_user, make_notice):
        notice = make_notice("pm", "", author_id="teacher-1", kind=PRIVATE)
        assert is_visible(notice, make_user("", "Student")) is False


class TestBroadcastVisibility:
    """Broadcast scopes follow the role decision table."""

    @pytest.mark.parametrize(
        "role,expected",
        [
            ("Admin", {"All", "Staff", "Teacher", "Student"}),
            ("Teacher", {"All", "Staff", "Teacher"}),
            ("Student", {"All", "Student"}),
            ("Accountant", {"All", "Staff"}),
            ("Librarian", {"All", "Staff"}),
            ("Janitor", {"All", "Staff"}),
        ],
    )
    def test_role_table(self, make_user, make_notice, role, expected):
        notices = [make_notice(scope, scope) for scope in ["All", "Staff", "Teacher", "Student"]]
        viewer = make_user("viewer", role)
        assert {n.id for n in notices if is_visible(n, viewer)} == expected

    def test_admin_scenario_excludes_section_traffic(self, make_user, make_notice, membership):
        """Admin with All, Staff, section_10, Teacher sees {All, Staff, Teacher}."""
        notices = [make_notice(t, t) for t in ["All", "Staff", "section_10", "Teacher"]]
        visible = visible_notices(notices, make_user("admin-9", "Admin"), membership)
        assert {n.target for n in visible} == {"All", "Staff", "Teacher"}


class TestSectionVisibility:
    """Section-scoped notices follow membership, not role alone."""

    def test_teacher_scenario(self, make_user, make_notice, membership):
        """Teacher with sections {10, 11} sees section_10 and All, not section_99."""
        notices = [make_notice(t, t) for t in ["section_10", "section_99", "All"]]
        teacher = make_user("teacher-1", "Teacher", teacher_id="T1")
        visible = visible_notices(notices, teacher, membership)
        assert {n.target for n in visible} == {"section_10", "All"}

    def test_timetabled_section_is_visible(self, make_user, make_notice, membership):
        teacher = make_user("teacher-1", "Teacher", teacher_id="T1")
        assert is_visible(make_notice("n", "section_11"), teacher, membership) is True

    def test_teacher_without_membership(self, make_user, make_notice, membership):
        teacher = make_user("teacher-3", "Teacher", teacher_id="T3")
        assert is_visible(make_notice("n", "section_10"), teacher, membership) is False

    def test_teacher_without_teacher_id(self, make_user, make_notice, make_section):
        index = SectionMembershipIndex(sections=[make_section("10", class_teacher_id=None)])
        teacher = make_user("teacher-4", "Teacher")
        assert is_visible(make_notice("n", "section_10"), teacher, index) is False

    def test_student_in_section(self, make_user, make_notice):
        student = make_user("s1", "Student", section_id="10")
        assert is_visible(make_notice("n", "section_10"), student) is True

    def test_student_in_other_section(self, make_user, make_notice):
        student = make_user("s2", "Student", section_id="11")
        assert is_visible(make_notice("n", "section_10"), student) is False

    def test_student_without_section(self, make_user, make_notice):
        student = make_user("s3", "Student")
        assert is_visible(make_notice("n", "section_"), student) is False

    @pytest.mark.parametrize("role", ["Admin", "Accountant", "Librarian", "Janitor"])
    def test_other_roles_never_see_sections(self, make_user, make_notice, membership, role):
        viewer = make_user("x", role, teacher_id="T1", section_id="10")
        assert is_visible(make_notice("n", "section_10"), viewer, membership) is False


class TestMalformedNotices:
    """Malformed notices resolve to not visible instead of raising."""

    def test_empty_target(self, make_user, make_notice):
        notice = make_notice("n", "All").model_copy(update={"target": ""})
        assert is_visible(notice, make_user("admin-9", "Admin")) is False

    def test_public_notice_addressed_to_a_user(self, make_user, make_notice):
        notice = make_notice("n", "student-1", author_id="teacher-1")
        assert is_visible(notice, make_user("student-1", "Student")) is False

    def test_unknown_kind(self, make_user, make_notice):
        notice = make_notice("n", "All").model_copy(update={"kind": "memo"})
        assert is_visible(notice, make_user("admin-9", "Admin")) is False


def test_visible_notices_orders_and_is_repeatable(make_user, make_notice, membership):
    teacher = make_user("teacher-1", "Teacher", teacher_id="T1")
    notices = [
        make_notice("a", "All", minutes=1),
        make_notice("b", "Student", minutes=5),
        make_notice("c", "section_10", minutes=3),
        make_notice("d", "teacher-1", author_id="admin-1", kind=PRIVATE, minutes=2),
    ]
    first = visible_notices(notices, teacher, membership)
    assert [n.id for n in first] == ["c", "d", "a"]
    assert visible_notices(notices, teacher, membership) == first
    assert [n.id for n in notices] == ["a", "b", "c", "d"]


def test_empty_snapshot_yields_nothing(make_user):
    assert visible_notices([], make_user("admin-1", "Admin"), SectionMembershipIndex()) == []


class TestModeration:
    def test_author_can_delete_own(self, make_user, make_notice):
        notice = make_notice("n", "All", author_id="teacher-1")
        assert can_delete_notice(notice, make_user("teacher-1", "Teacher")) is True

    def test_admin_can_delete_any(self, make_user, make_notice):
        notice = make_notice("n", "All", author_id="teacher-1")
        assert can_delete_notice(notice, make_user("admin-1", "Admin")) is True

    @pytest.mark.parametrize("role", ["Teacher", "Student", "Accountant"])
    def test_others_cannot_delete(self, make_user, make_notice, role):
        notice = make_notice("n", "All", author_id="teacher-1")
        assert can_delete_notice(notice, make_user("other", role)) is False
        assert can_edit_notice(notice, make_user("other", role)) is False

    def test_no_viewer(self, make_notice):
        assert can_delete_notice(make_notice("n", "All"), None) is False


class TestPublishPermission:
    def test_admin_may_broadcast(self, make_user):
        assert can_publish_to(Broadcast("All"), make_user("admin-1", "Admin")) is True

    @pytest.mark.parametrize("role", ["Teacher", "Student", "Accountant", "Janitor"])
    def test_other_roles_may_not_broadcast(self, make_user, role):
        assert can_publish_to(Broadcast("Staff"), make_user("u", role)) is False

    @pytest.mark.parametrize("audience", [SectionScoped("S1"), Direct("admin-1")])
    def test_sections_and_direct_messages_are_open(self, make_user, audience):
        assert can_publish_to(audience, make_user("student-1", "Student")) is True

    def test_no_viewer(self):
        assert can_publish_to(SectionScoped("S1"), None) is False
