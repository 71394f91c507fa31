from chaos_api.client.navigation import NoteRouter
from chaos_api.client.notifications import NotificationLog

NOTE_ID = "abc123def456ghi789jkl"


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_notifications_expire_after_ttl() -> None:
    clock = FakeClock()
    log = NotificationLog(ttl_s=4.0, clock=clock)
    log.publish("success", "Saved")
    clock.now += 2
    log.publish("error", "Failed to rename note")
    assert [n.message for n in log.active()] == ["Saved", "Failed to rename note"]

    clock.now += 2.5
    assert [n.message for n in log.active()] == ["Failed to rename note"]

    clock.now += 2
    assert log.active() == []


def test_notifications_are_bounded() -> None:
    log = NotificationLog(capacity=3, clock=FakeClock())
    for i in range(5):
        log.publish("success", f"m{i}")
    assert [n.message for n in log.active()] == ["m2", "m3", "m4"]
    assert [n.id for n in log.active()] == [3, 4, 5]


def test_router_follows_internal_links() -> None:
    selected = []
    router = NoteRouter(on_select=selected.append)

    assert router.follow_link(f"/chaos/note/{NOTE_ID}") is True
    assert router.selected_id == NOTE_ID
    assert router.path == f"/chaos/note/{NOTE_ID}"

    assert router.follow_link("https://example.com/page") is False
    assert router.follow_link("/chaos/note/short") is False
    assert router.selected_id == NOTE_ID

    router.select(None)
    assert router.path == "/chaos/"
    assert router.history == [f"/chaos/note/{NOTE_ID}", "/chaos/"]
    assert selected == [NOTE_ID, None]


def test_router_restores_from_path() -> None:
    router = NoteRouter(initial_path=f"/chaos/note/{NOTE_ID}")
    assert router.selected_id == NOTE_ID
    assert router.path == f"/chaos/note/{NOTE_ID}"

    router.restore("/chaos/")
    assert router.selected_id is None
    assert router.history == []


def test_router_path_follows_restore() -> None:
    other = "zzz999yyy888xxx777www"
    router = NoteRouter()
    router.select(NOTE_ID)
    router.select(other)

    router.restore(f"/chaos/note/{NOTE_ID}")
    assert router.selected_id == NOTE_ID
    assert router.path == f"/chaos/note/{NOTE_ID}"
    assert router.history == [f"/chaos/note/{NOTE_ID}", f"/chaos/note/{other}"]

    router.restore("/chaos/")
    assert router.path == "/chaos/"
