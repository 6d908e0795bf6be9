"""Unit tests for the summarization and persistence clients."""

import pytest
import requests

from fakes import FakePersistenceService, FakeResponse
from resume_builder.services import persistence_service, summary_service
from resume_builder.services.persistence_service import PersistenceService, SaveFailedError
from resume_builder.editor import EditorSession
from resume_builder.services.summary_service import FALLBACK_SUMMARY, SummaryService, build_description


@pytest.fixture
def captured(monkeypatch):
    """Patch requests.post in both service modules and record the calls."""
    calls = []
    state = {"response": FakeResponse(200, {})}

    def fake_post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    monkeypatch.setattr(summary_service.requests, "post", fake_post)
    monkeypatch.setattr(persistence_service.requests, "post", fake_post)
    return calls, state


@pytest.mark.unit
def test_build_description_joins_clauses(jane):
    assert build_description(jane) == (
        "Jane Doe has experience in: Engineer at Acme.\n"
        "Education includes: BSc from State U.\n"
        "Skills: Go, Rust."
    )


@pytest.mark.unit
def test_request_summary_posts_describe_and_returns_text(captured):
    calls, state = captured
    state["response"] = FakeResponse(200, {"summary": "A skilled engineer."})

    result = SummaryService(url="http://summary.test/x", timeout=5).request_summary("profile")

    assert result == "A skilled engineer."
    assert calls == [{"url": "http://summary.test/x", "json": {"describe": "profile"}, "timeout": 5}]


@pytest.mark.unit
@pytest.mark.parametrize("body", [{}, {"summary": ""}, {"summary": None}, ["summary"], 42])
def test_request_summary_without_summary_returns_none(captured, body):
    _, state = captured
    state["response"] = FakeResponse(200, body)

    assert SummaryService().request_summary("profile") is None


@pytest.mark.unit
def test_request_summary_does_not_check_status(captured):
    _, state = captured
    state["response"] = FakeResponse(500, {"summary": "Still used."})

    assert SummaryService().request_summary("profile") == "Still used."


@pytest.mark.unit
def test_request_summary_propagates_transport_and_decode_errors(captured):
    _, state = captured
    svc = SummaryService()

    state["response"] = requests.ConnectionError("down")
    with pytest.raises(requests.ConnectionError):
        svc.request_summary("profile")

    state["response"] = FakeResponse(200, text_body="<html>oops</html>")
    with pytest.raises(ValueError):
        svc.request_summary("profile")


@pytest.mark.unit
def test_summary_url_comes_from_environment(monkeypatch):
    monkeypatch.setenv("SUMMARY_API_URL", "http://elsewhere.test/summary")

    assert SummaryService().url == "http://elsewhere.test/summary"


@pytest.mark.unit
def test_save_posts_whole_document_in_wire_format(captured, jane):
    calls, state = captured
    state["response"] = FakeResponse(201, None)

    PersistenceService(url="http://save.test/r").save(jane)

    assert calls[0]["url"] == "http://save.test/r"
    assert calls[0]["json"] == jane.to_wire()


@pytest.mark.unit
@pytest.mark.parametrize("status", [301, 400, 500])
def test_save_non_2xx_raises(captured, jane, status):
    _, state = captured
    state["response"] = FakeResponse(status, None)

    with pytest.raises(SaveFailedError) as exc:
        PersistenceService().save(jane)
    assert exc.value.status_code == status


@pytest.mark.unit
def test_request_summary_null_body_raises(captured):
    _, state = captured
    state["response"] = FakeResponse(200, None)

    with pytest.raises(ValueError):
        SummaryService().request_summary("profile")


@pytest.mark.unit
def test_null_summary_reply_falls_back_in_editor(captured, jane):
    _, state = captured
    state["response"] = FakeResponse(200, None)
    session = EditorSession(
        document=jane.model_copy(update={"summary": "Hand written."}),
        summary_service=SummaryService(),
        persistence_service=FakePersistenceService(),
    )

    session.summarize()

    assert session.document.summary == FALLBACK_SUMMARY


@pytest.mark.unit
def test_services_log_under_their_own_context(captured, jane, log_lines):
    _, state = captured
    state["response"] = FakeResponse(503, {})

    SummaryService(url="http://summary.test/x").request_summary("profile")
    with pytest.raises(SaveFailedError):
        PersistenceService(url="http://save.test/r").save(jane)

    assert "[summary] POST http://summary.test/x (7 chars)" in log_lines
    assert "[save] http://save.test/r answered HTTP 503" in log_lines
