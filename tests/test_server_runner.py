from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

import pytest

from circle.server.runner import ServerRunner


@pytest.mark.asyncio
async def test_server_runner_installs_signal_handlers(monkeypatch) -> None:
    calls: list[str] = []
    handlers = []

    class _FakeServer:
        should_exit = False
        force_exit = False

        async def serve(self) -> None:
            calls.append("serve")

    fake_server = _FakeServer()

    class _FakeLoop:
        def add_signal_handler(self, _sig, handler) -> None:
            calls.append("signal")
            handlers.append(handler)

    monkeypatch.setattr("circle.server.runner.uvicorn.Config", lambda *a, **kw: object())
    monkeypatch.setattr("circle.server.runner.uvicorn.Server", lambda _cfg: fake_server)
    monkeypatch.setattr(
        "circle.server.runner.asyncio.get_running_loop", lambda: _FakeLoop()
    )

    app = cast(Any, SimpleNamespace(state=SimpleNamespace()))
    runner = ServerRunner(app, host="127.0.0.1", port=8080)
    await runner.run()

    assert calls.count("signal") == 2
    assert "serve" in calls

    handlers[0]()
    assert fake_server.should_exit is True
    assert fake_server.force_exit is False
    handlers[0]()
    assert fake_server.force_exit is True
