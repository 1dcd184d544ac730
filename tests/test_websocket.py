"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json
import time

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from grid_snake.server.app import create_app
from grid_snake.server.websocket import _extract_key


@pytest.fixture()
def tc():
    """Started TestClient: REST calls, sockets, and tick loops share one loop."""
    with TestClient(create_app()) as client:
        yield client


def _create_game(tc, start=True, **body):
    """Create a game, optionally start it, return (game_id, token)."""
    payload = {"step_delay_ms": 1000}
    payload.update(body)
    resp = tc.post("/games", json=payload)
    assert resp.status_code == 201
    data = resp.json()
    if start:
        _start(tc, data["game_id"], data["token"])
    return data["game_id"], data["token"]


def _start(tc, game_id, token):
    resp = tc.post(f"/games/{game_id}/start", json={"token": token})
    assert resp.status_code == 200


def _poll(tc, game_id, predicate, attempts=100):
    """Fetch the game until *predicate* holds or attempts run out."""
    data = tc.get(f"/games/{game_id}").json()
    for _ in range(attempts):
        if predicate(data):
            break
        time.sleep(0.02)
        data = tc.get(f"/games/{game_id}").json()
    return data


def _drain(ws):
    """Receive frames until the server closes the socket."""
    frames = []
    with pytest.raises(WebSocketDisconnect) as exc_info:
        while True:
            frames.append(json.loads(ws.receive_text()))
    return frames, exc_info.value.code


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        game_id, token = _create_game(tc)

        with tc.websocket_connect(
            f"/games/{game_id}/play?token={token}",
        ) as ws:
            state = json.loads(ws.receive_text())
            assert "tick" in state
            assert "snake" in state
            assert "food" in state
            assert state["grid"] == {"width": 50, "height": 50}

    def test_frames_each_tick_until_death(self, tc):
        game_id, token = _create_game(
            tc, start=False, board_width=4, board_height=4,
            step_delay_ms=50, seed=3,
        )

        with tc.websocket_connect(
            f"/games/{game_id}/play?token={token}",
        ) as ws:
            initial = json.loads(ws.receive_text())
            assert initial["tick"] == 0
            _start(tc, game_id, token)
            frames, code = _drain(ws)

        # Heading right from (0, 0) on a 4-wide board: three moves, then the wall.
        assert [f["tick"] for f in frames] == [1, 2, 3, 3]
        assert all(f["outcome"] in ("alive", "ate") for f in frames[:-1])
        assert frames[-1]["outcome"] == "dead"
        assert frames[-1]["terminated"] is True
        assert frames[-1]["snake"]["head"] == [0, 3]
        assert code == 1000

        data = tc.get(f"/games/{game_id}").json()
        assert data["status"] == "finished"

    def test_direction_message_applied(self, tc):
        game_id, token = _create_game(tc, start=False)

        with tc.websocket_connect(
            f"/games/{game_id}/play?token={token}",
        ) as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "down"}))
            data = _poll(
                tc, game_id,
                lambda d: d["state"]["snake"]["direction"] == "down",
            )
        assert data["state"]["snake"]["direction"] == "down"

    def test_key_message_applied(self, tc):
        game_id, token = _create_game(tc, start=False)

        with tc.websocket_connect(
            f"/games/{game_id}/play?token={token}",
        ) as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": None, "key": "a"}))
            data = _poll(
                tc, game_id,
                lambda d: d["state"]["snake"]["direction"] == "left",
            )
        assert data["state"]["snake"]["direction"] == "left"

    def test_invalid_token_rejected(self, tc):
        game_id, _ = _create_game(tc)

        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            f"/games/{game_id}/play?token=badtoken",
        ):
            pass

    def test_nonexistent_game_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/games/nonexistent/play?token=x",
        ):
            pass

    def test_waiting_game_sends_snapshot(self, tc):
        game_id, token = _create_game(tc, start=False)

        with tc.websocket_connect(
            f"/games/{game_id}/play?token={token}",
        ) as ws:
            state = json.loads(ws.receive_text())
            assert state["tick"] == 0
            assert state["snake"]["head"] == [0, 0]


class TestSpectateWebSocket:
    def test_spectator_receives_initial_state(self, tc):
        game_id, _ = _create_game(tc)

        with tc.websocket_connect(f"/games/{game_id}/spectate") as ws:
            state = json.loads(ws.receive_text())
            assert "tick" in state
            assert "snake" in state

    def test_spectator_receives_final_frame(self, tc):
        game_id, token = _create_game(
            tc, start=False, board_width=3, board_height=3,
            step_delay_ms=50, seed=1,
        )

        with tc.websocket_connect(f"/games/{game_id}/spectate") as ws:
            ws.receive_text()
            _start(tc, game_id, token)
            frames, code = _drain(ws)

        assert [f["tick"] for f in frames] == [1, 2, 2]
        assert frames[-1]["outcome"] == "dead"
        assert code == 1000

    def test_spectate_nonexistent_game(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/games/nonexistent/spectate",
        ):
            pass


class TestDisconnectHandling:
    def test_player_disconnect_game_continues(self, tc):
        game_id, token = _create_game(tc, step_delay_ms=50)

        with tc.websocket_connect(
            f"/games/{game_id}/play?token={token}",
        ) as ws:
            ws.receive_text()

        data = _poll(tc, game_id, lambda d: d["state"]["tick"] >= 2)
        assert data["state"]["tick"] >= 2
        assert data["status"] in ("active", "finished")

    def test_invalid_messages_ignored(self, tc):
        game_id, token = _create_game(tc, start=False)

        with tc.websocket_connect(
            f"/games/{game_id}/play?token={token}",
        ) as ws:
            ws.receive_text()
            for raw in (
                "not-json",
                "[]",
                "123",
                json.dumps({"direction": "invalid_dir"}),
                json.dumps({"direction": 7}),
                json.dumps({"no_direction_key": True}),
            ):
                ws.send_text(raw)
            # Followed by a valid one, which must still be honored.
            ws.send_text(json.dumps({"direction": "up"}))
            data = _poll(
                tc, game_id,
                lambda d: d["state"]["snake"]["direction"] == "up",
            )
        assert data["state"]["snake"]["direction"] == "up"
        assert data["state"]["tick"] == 0


class TestExtractKey:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ('{"direction": "down"}', "down"),
            ('{"key": "s"}', "s"),
            ('{"direction": null, "key": "s"}', "s"),
            ('{"direction": "left", "key": "s"}', "left"),
            ('{"direction": 7}', None),
            ("[]", None),
            ("nope", None),
        ],
    )
    def test_extract_key(self, raw, expected):
        assert _extract_key(raw) == expected
