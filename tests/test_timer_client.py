"""
tests/test_timer_client.py — Feedback Client & Terminal Timer Tests
====================================================================
"""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest

from zenflow.timer import __main__ as cli
from zenflow.timer.client import FeedbackClient, FeedbackClientError

COUNTS = {
    "Breathing": {"likes": 3, "dislikes": 1},
    "Body Scan": {"likes": 0, "dislikes": 0},
    "Loving-Kindness": {"likes": 0, "dislikes": 0},
    "Mindfulness": {"likes": 0, "dislikes": 0},
}


def _client(handler) -> FeedbackClient:
    return FeedbackClient("http://zen.test/", transport=httpx.MockTransport(handler))


class TestFeedbackClient:
    def test_get_strips_identifier(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/api/feedback"
            return httpx.Response(200, json={"_id": "abc", **COUNTS})

        with _client(handler) as api:
            assert api.get_feedback() == COUNTS

    def test_send_posts_expected_body(self):
        sent = {}

        def handler(request):
            sent.update(json.loads(request.content))
            return httpx.Response(200, json=COUNTS)

        with _client(handler) as api:
            assert api.send_feedback("Breathing", True)["Breathing"]["likes"] == 3
        assert sent == {"typeName": "Breathing", "isLike": True}

    def test_error_payload_surfaces(self):
        handler = lambda request: httpx.Response(  # noqa: E731
            409, json={"error": "You have already voted for Breathing"}
        )
        with _client(handler) as api, pytest.raises(FeedbackClientError) as excinfo:
            api.send_feedback("Breathing", False)
        assert excinfo.value.status_code == 409
        assert "already voted" in str(excinfo.value)

    def test_non_json_error(self):
        with _client(lambda request: httpx.Response(502, content=b"bad gateway")) as api:
            with pytest.raises(FeedbackClientError, match="502"):
                api.get_feedback()

    def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with _client(handler) as api, pytest.raises(FeedbackClientError, match="unreachable"):
            api.get_feedback()


class TestTerminalTimer:
    @pytest.fixture(autouse=True)
    def _instant(self):
        async def done(session, fader, **kwargs):
            session.start()
            session.stop()
            return True

        with patch.object(cli, "run_session", side_effect=done) as mocked:
            self.run_session = mocked
            yield

    def test_runs_without_vote(self, capsys):
        assert cli.main(["--type", "Mindfulness", "--minutes", "10"]) == 0
        session = self.run_session.call_args.args[0]
        assert session.meditation_type.name == "Mindfulness"
        assert session.selected_time == 600

    def test_invalid_minutes_exit_code(self):
        assert cli.main(["--minutes", "500"]) == 2
        self.run_session.assert_not_called()

    def test_sends_vote(self):
        with patch.object(cli, "FeedbackClient") as client_cls:
            api = client_cls.return_value.__enter__.return_value
            api.send_feedback.return_value = COUNTS
            assert cli.main(["--vote", "dislike", "--api-url", "http://zen.test"]) == 0

        client_cls.assert_called_once_with("http://zen.test")
        api.send_feedback.assert_called_once_with("Breathing", False)

    def test_vote_failure_exit_code(self):
        with patch.object(cli, "FeedbackClient") as client_cls:
            api = client_cls.return_value.__enter__.return_value
            api.send_feedback.side_effect = FeedbackClientError("down")
            assert cli.main(["--vote", "like", "--api-url", "http://zen.test"]) == 1
