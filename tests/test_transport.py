from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime

import aiohttp
import pytest
from aiohttp import web

from pyracescan._constants import EASTERN_OFFSET
from pyracescan._transport import HttpTransport
from pyracescan.client import RaceScanClient
from pyracescan.config import RaceScanConfig
from pyracescan.exceptions import RaceScanAuthenticationError, RaceScanTransportError

NOW = datetime(2026, 7, 4, 19, 15, tzinfo=EASTERN_OFFSET)

# "José" written by a spreadsheet that saved Latin-1 but the server labels it UTF-8.
LATIN1_DRIVERS = (
    "Driver Number,Driver Name,Team,Hometown,Sponsor,Class\n"
    "7,Jos\xe9 Luis,Team,Town,Acme,LMSC\n"
).encode("latin-1")

EVENTS_CSV = "raceid,track,location,date,time,class\nDAY-0704,Daytona,Daytona Beach FL,2026-07-04,19:30,LMSC\n"


@dataclass
class RunningBackend:
    base_url: str = ""
    queries: list[dict[str, str]] = field(default_factory=list)

    async def drivers(self, request: web.Request) -> web.Response:
        self.queries.append(dict(request.query))
        return web.Response(body=LATIN1_DRIVERS, headers={"Content-Type": "text/csv; charset=utf-8"})


async def _events(_request: web.Request) -> web.Response:
    return web.Response(text=EVENTS_CSV, content_type="text/csv")


async def _icecast(_request: web.Request) -> web.Response:
    return web.json_response({"icestats": {"source": {"listenurl": "http://x:8000/lmsc-7-jos-luis.mp3"}}})


async def _user_info(_request: web.Request) -> web.Response:
    return web.Response(status=401, text='{"success":false,"message":"Not logged in"}')


async def _session(_request: web.Request) -> web.Response:
    return web.Response(text="<html>maintenance</html>", content_type="text/html")


async def _logout(_request: web.Request) -> web.Response:
    return web.Response(status=200)


@asynccontextmanager
async def backend_server() -> AsyncIterator[RunningBackend]:
    backend = RunningBackend()
    app = web.Application()
    app.add_routes(
        [
            web.get("/drivers/drivers.csv", backend.drivers),
            web.get("/events/events.csv", _events),
            web.get("/icecast/status-json.xsl", _icecast),
            web.get("/api/user-info", _user_info),
            web.get("/api/session", _session),
            web.post("/logout", _logout),
        ]
    )
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    backend.base_url = f"http://{host}:{port}"
    try:
        yield backend
    finally:
        await runner.cleanup()


@pytest.mark.asyncio
async def test_snapshot_survives_mislabelled_latin1_feed() -> None:
    async with backend_server() as backend:
        async with RaceScanClient(RaceScanConfig(base_url=backend.base_url)) as client:
            snapshot = await client.load_live_snapshot(NOW)

    assert snapshot.offline is False
    assert snapshot.live_info.live is True
    [status] = snapshot.drivers
    assert status.driver.name == "Jos\ufffd Luis"
    assert status.driver.plain_mount == "/lmsc-7-jos-luis.mp3"
    assert status.is_active is True
    assert "ts" in backend.queries[0]


@pytest.mark.asyncio
async def test_error_status_maps_to_transport_error() -> None:
    async with backend_server() as backend, aiohttp.ClientSession() as http:
        transport = HttpTransport(RaceScanConfig(base_url=backend.base_url), http)

        with pytest.raises(RaceScanTransportError) as exc_info:
            await transport.get_json("/api/user-info")

    assert exc_info.value.status_code == 401
    assert exc_info.value.endpoint == "/api/user-info"
    assert "Not logged in" in str(exc_info.value)


@pytest.mark.asyncio
async def test_client_maps_unauthorized_to_authentication_error() -> None:
    async with backend_server() as backend:
        async with RaceScanClient(RaceScanConfig(base_url=backend.base_url)) as client:
            with pytest.raises(RaceScanAuthenticationError):
                await client.get_user_info()


@pytest.mark.asyncio
async def test_invalid_json_maps_to_transport_error() -> None:
    async with backend_server() as backend, aiohttp.ClientSession() as http:
        transport = HttpTransport(RaceScanConfig(base_url=backend.base_url), http)

        with pytest.raises(RaceScanTransportError, match="Invalid JSON") as exc_info:
            await transport.get_json("/api/session")

    assert exc_info.value.status_code is None
    assert exc_info.value.endpoint == "/api/session"


@pytest.mark.asyncio
async def test_post_json_with_empty_body_returns_empty_dict() -> None:
    async with backend_server() as backend, aiohttp.ClientSession() as http:
        transport = HttpTransport(RaceScanConfig(base_url=backend.base_url), http)

        assert await transport.post_json("/logout") == {}


@pytest.mark.asyncio
async def test_unreachable_backend_maps_to_transport_error() -> None:
    async with backend_server() as backend:
        base_url = backend.base_url

    async with aiohttp.ClientSession() as http:
        transport = HttpTransport(RaceScanConfig(base_url=base_url, request_timeout=2), http)

        with pytest.raises(RaceScanTransportError, match="failed") as exc_info:
            await transport.get_text("/events/events.csv")

    assert exc_info.value.status_code is None
