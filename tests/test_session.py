from checkin_kiosk.errors import UNKNOWN_ATTENDEE
from checkin_kiosk.schemas import SessionStatus
from checkin_kiosk.services.session import SessionState


def test_initial_state_is_idle():
    s = SessionState()
    snap = s.snapshot()

    assert snap.status is SessionStatus.idle
    assert snap.message is None
    assert snap.badge_reference is None
    assert not snap.printing
    assert not s.busy
    assert s.attendee_name == UNKNOWN_ATTENDEE


def test_success_and_error_are_mutually_exclusive():
    s = SessionState()
    s.show_success_msg("Check-in successful!", "Jane Doe")
    assert s.show_success and not s.show_error

    s.show_error_msg("Failed to print badge!", s.attendee_name)
    assert s.show_error and not s.show_success
    assert s.message.attendee_name == "Jane Doe"


def test_reset_clears_everything():
    s = SessionState()
    s.set_badge_reference("/b/1")
    s.show_success_msg("Check-in successful!", None)
    s.set_printing(True)

    s.reset()

    assert s.snapshot().model_dump() == SessionState().snapshot().model_dump()


def test_subscribers_get_a_snapshot_per_change():
    s = SessionState()
    seen = []
    unsubscribe = s.subscribe(seen.append)

    s.set_badge_reference("/b/1")
    s.show_success_msg("Check-in successful!", "Jane Doe")
    unsubscribe()
    s.reset()

    assert len(seen) == 2
    assert seen[0].badge_reference == "/b/1"
    assert seen[1].status is SessionStatus.success


def test_snapshots_are_detached_from_state():
    s = SessionState()
    s.show_success_msg("Check-in successful!", "Jane Doe")
    snap = s.snapshot()

    s.show_error_msg("Check-in failed!")

    assert snap.status is SessionStatus.success
    assert snap.message.attendee_name == "Jane Doe"


def test_failing_listener_does_not_block_others():
    s = SessionState()
    seen = []

    def broken(_snap):
        raise RuntimeError("display gone")

    s.subscribe(broken)
    s.subscribe(seen.append)
    s.show_error_msg("Check-in failed!")

    assert len(seen) == 1
    assert s.show_error
