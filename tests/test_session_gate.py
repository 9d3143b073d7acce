"""Tests for once-per-session tool registration."""

from __future__ import annotations

from toolpanel.catalog import default_catalog
from toolpanel.session_gate import SessionGate
from toolpanel.transport import RecordingTransport


def test_registers_once_per_session() -> None:
    transport = RecordingTransport()
    gate = SessionGate(default_catalog, transport.send_client_event)

    first = gate.check({"type": "session.created"})
    second = gate.check({"type": "session.created"})

    assert first is not None and first["type"] == "session.update"
    assert second is None
    assert gate.registered is True
    assert len(transport.sent_of_type("session.update")) == 1


def test_ignores_other_oldest_events() -> None:
    transport = RecordingTransport()
    gate = SessionGate(default_catalog, transport.send_client_event)

    assert gate.check({"type": "response.done"}) is None
    assert gate.check(None) is None
    assert transport.sent == []
    assert gate.registered is False


def test_reset_allows_next_session_to_register() -> None:
    transport = RecordingTransport()
    gate = SessionGate(default_catalog, transport.send_client_event)

    gate.check({"type": "session.created"})
    gate.reset()
    assert gate.registered is False
    gate.check({"type": "session.created"})

    assert len(transport.sent_of_type("session.update")) == 2
