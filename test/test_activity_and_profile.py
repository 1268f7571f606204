import pytest

from conftest import FakeRepo, RecordingPrompter, make_session
from invtrack.application.activity_log import ActivityLogViewer
from invtrack.application.profile import ProfileEditor
from invtrack.domain.errors import ValidationError
from invtrack.services.admin_service import AdminService
from invtrack.services.export_service import ExportService
from invtrack.services.profile_service import ProfileService

LOGS = [
    {"id": 1, "user_id": 1, "user": {"name": "Boss"}, "action": "CREATE", "entity": "product", "entity_id": 4, "details": "Created Bolt"},
    {"id": 2, "user_id": 1, "user": {"name": "Boss"}, "action": "delete", "entity": "product", "entity_id": 4, "details": "Deleted Bolt"},
    {"id": 3, "user_id": 2, "user": {"name": "Ana"}, "action": "UPDATE", "entity": "supplier", "entity_id": 2, "details": "Renamed"},
]


def _viewer(role="admin", prompter=None):
    repo = FakeRepo({("GET", "/admin/logs"): LOGS})
    session = make_session(repo, role=role)
    return repo, ActivityLogViewer(AdminService(repo), ExportService(repo), session, prompter or RecordingPrompter())


def test_log_filter_by_action():
    _repo, viewer = _viewer()
    viewer.fetch()

    assert len(viewer.visible_logs()) == 3
    viewer.set_filter("DELETE")
    assert [e.details for e in viewer.visible_logs()] == ["Deleted Bolt"]
    viewer.set_filter("ALL")
    assert len(viewer.visible_logs()) == 3
    assert viewer.logs[0].user_name == "Boss"


def test_unknown_filter_rejected():
    _repo, viewer = _viewer()
    with pytest.raises(ValidationError):
        viewer.set_filter("PURGE")


def test_staff_cannot_load_logs():
    repo, viewer = _viewer(role="staff")
    viewer.fetch()
    assert viewer.logs == []
    assert repo.calls == []


def test_staff_export_is_refused_with_alert(tmp_path):
    prompter = RecordingPrompter()
    repo, viewer = _viewer(role="staff", prompter=prompter)

    assert viewer.export(tmp_path) is None
    assert prompter.alerts
    assert repo.calls == []


def test_password_mismatch_is_rejected_locally():
    repo = FakeRepo()
    editor = ProfileEditor(ProfileService(repo), make_session(repo))

    assert editor.change_password("old", "new-1", "new-2") is False
    assert editor.error == "New passwords don't match"
    assert repo.calls == []


def test_password_change_success_message():
    repo = FakeRepo({("PUT", "/profile/change-password"): {"message": "ok"}})
    editor = ProfileEditor(ProfileService(repo), make_session(repo))

    assert editor.change_password("old", "new-1", "new-1") is True
    assert editor.success == "Password changed successfully!"
    assert repo.calls_to("PUT", "/profile/change-password")[0]["json"] == {
        "current_password": "old", "new_password": "new-1",
    }


def test_name_update_refreshes_session_user():
    repo = FakeRepo({("PUT", "/profile/update"): {"user": {"id": 1, "name": "Big Boss", "email": "boss@example.com", "role": "admin"}}})
    session = make_session(repo)
    editor = ProfileEditor(ProfileService(repo), session)

    assert editor.update_name("  Big Boss ") is True
    assert session.current_user.name == "Big Boss"
    assert session.current_user.role == "admin"
    assert editor.success == "Profile updated successfully!"
