from conftest import FakeRepo, RecordingPrompter, make_session
from invtrack.application.users import UserManagement, sort_users
from invtrack.domain.models import User
from invtrack.services.admin_service import AdminService


def _users_route(rows):
    return lambda **_kw: list(rows)


def _mgmt(rows, prompter=None, me_id=1):
    repo = FakeRepo({("GET", "/admin/users"): _users_route(rows)})
    session = make_session(repo, role="admin", user_id=me_id)
    mgmt = UserManagement(AdminService(repo), session, prompter or RecordingPrompter())
    mgmt.fetch()
    return repo, session, mgmt


def test_pending_users_sort_first_then_by_name():
    users = [
        User(1, "carol", "c@x.io", is_active=True),
        User(2, "Bob", "b@x.io", is_active=False),
        User(3, "alice", "a@x.io", is_active=True),
        User(4, "Dave", "d@x.io", is_active=False),
    ]
    assert [u.name for u in sort_users(users)] == ["Bob", "Dave", "alice", "carol"]


def test_name_order_ignores_case():
    users = [User(1, "Zed", "z@x.io"), User(2, "bob", "b@x.io"), User(3, "alice", "a@x.io")]
    assert [u.name for u in sort_users(users)] == ["alice", "bob", "Zed"]


def test_builtin_admin_is_locked():
    admin = User(9, "Administrator", "admin", role="admin")
    _repo, _session, mgmt = _mgmt([])

    assert not mgmt.can_edit_role(admin)
    assert not mgmt.can_deactivate(admin)
    assert not mgmt.can_delete(admin)
    mgmt.set_pending_role(admin, "staff")
    assert mgmt.pending_roles.get(9) is None


def test_cannot_deactivate_or_delete_self():
    _repo, session, mgmt = _mgmt([{"id": 1, "name": "Boss", "email": "boss@example.com", "role": "admin", "is_active": True}])
    me = mgmt.users[0]

    assert not mgmt.can_deactivate(me)
    assert not mgmt.can_delete(me)
    assert mgmt.can_edit_role(me)


def test_self_demotion_declined_sends_nothing():
    rows = [{"id": 1, "name": "Boss", "email": "boss@example.com", "role": "admin", "is_active": True}]
    prompter = RecordingPrompter(confirm_answer=False)
    repo, session, mgmt = _mgmt(rows, prompter)

    assert mgmt.update_user(mgmt.users[0], role="staff") is False
    assert repo.calls_to("PUT", "/admin/users/1/approve") == []
    assert session.current_user.role == "admin"
    assert len(prompter.confirms) == 1


def test_self_demotion_confirmed_updates_local_session():
    rows = [{"id": 1, "name": "Boss", "email": "boss@example.com", "role": "admin", "is_active": True}]
    repo, session, mgmt = _mgmt(rows)
    repo.routes[("PUT", "/admin/users/1/approve")] = {"message": "ok"}

    assert mgmt.update_user(mgmt.users[0], role="staff") is True
    assert repo.calls_to("PUT", "/admin/users/1/approve")[0]["json"] == {"is_active": True, "role": "staff"}
    assert session.current_user.role == "staff"
    assert not session.can("manage_users")


def test_approve_pending_user_with_chosen_role():
    rows = [{"id": 7, "name": "Newbie", "email": "n@x.io", "role": "staff", "is_active": False}]
    prompter = RecordingPrompter()
    repo, _session, mgmt = _mgmt(rows, prompter)
    repo.routes[("PUT", "/admin/users/7/approve")] = {"message": "ok"}
    pending = mgmt.users[0]

    mgmt.set_pending_role(pending, "admin")
    assert mgmt.approve(pending) is True
    assert repo.calls_to("PUT", "/admin/users/7/approve")[0]["json"] == {"is_active": True, "role": "admin"}
    assert prompter.infos == [("Users", "User updated successfully!")]
    assert prompter.confirms == []


def test_save_role_requires_a_change():
    rows = [{"id": 7, "name": "Staffer", "email": "s@x.io", "role": "staff", "is_active": True}]
    repo, _session, mgmt = _mgmt(rows)
    user = mgmt.users[0]

    assert not mgmt.can_save_role(user)
    assert mgmt.save_role(user) is False
    mgmt.set_pending_role(user, "admin")
    assert mgmt.can_save_role(user)


def test_delete_failure_reports_server_message():
    from invtrack.domain.errors import RequestError

    rows = [{"id": 7, "name": "Staffer", "email": "s@x.io", "role": "staff", "is_active": True}]
    prompter = RecordingPrompter()
    repo, _session, mgmt = _mgmt(rows, prompter)
    repo.routes[("DELETE", "/admin/users/7")] = RequestError("400", status_code=400, server_message="User has records")

    assert mgmt.delete(mgmt.users[0]) is False
    assert prompter.alerts == [("Users", "Failed to delete user: User has records")]


def test_pending_count_uses_pending_endpoint():
    from invtrack.application.users import pending_count
    from invtrack.domain.errors import NetworkError

    repo = FakeRepo({("GET", "/admin/users/pending"): [{"id": 8, "name": "N", "email": "n@x.io", "is_active": False}]})
    assert pending_count(AdminService(repo)) == 1

    repo.routes[("GET", "/admin/users/pending")] = NetworkError("down")
    assert pending_count(AdminService(repo)) == 0
