import asyncio

import pytest
from unittest.mock import AsyncMock

from landing_builder.core.enums import DeployState
from landing_builder.core.exceptions import NetlifyAPIError
from landing_builder.schemas.deployment import DeployStatusRead
from landing_builder.services.deployment_monitor import DeploymentMonitor


def deploy_state(state, provider_state=None):
    return DeployStatusRead(deploy_id="dep-1", state=state, provider_state=provider_state or state.value)


@pytest.mark.asyncio
async def test_polls_until_ready():
    fetch = AsyncMock(side_effect=[
        deploy_state(DeployState.PENDING, "enqueued"),
        deploy_state(DeployState.BUILDING, "processing"),
        deploy_state(DeployState.READY),
    ])
    seen = []
    monitor = DeploymentMonitor(fetch, interval=0.001, on_update=lambda s: seen.append(s.state))

    monitor.start("dep-1")
    final = await monitor.wait()

    assert final.state is DeployState.READY
    assert seen == [DeployState.PENDING, DeployState.BUILDING, DeployState.READY]
    assert monitor.polls == 3
    assert not monitor.is_polling
    fetch.assert_awaited_with("dep-1")


@pytest.mark.asyncio
async def test_stops_on_error_state():
    fetch = AsyncMock(return_value=deploy_state(DeployState.ERROR))
    monitor = DeploymentMonitor(fetch, interval=0.001)

    monitor.start("dep-1")
    final = await monitor.wait()

    assert final.state is DeployState.ERROR
    assert fetch.await_count == 1


@pytest.mark.asyncio
async def test_gives_up_after_consecutive_failures():
    fetch = AsyncMock(side_effect=NetlifyAPIError("Netlify API error: 503"))
    monitor = DeploymentMonitor(fetch, interval=0.001, max_consecutive_errors=3)

    monitor.start("dep-1")
    final = await monitor.wait()

    assert final is None
    assert fetch.await_count == 3
    assert "503" in monitor.error


@pytest.mark.asyncio
async def test_failure_count_resets_after_success():
    fetch = AsyncMock(side_effect=[
        NetlifyAPIError("timeout"),
        deploy_state(DeployState.BUILDING),
        NetlifyAPIError("timeout"),
        deploy_state(DeployState.READY),
    ])
    monitor = DeploymentMonitor(fetch, interval=0.001, max_consecutive_errors=2)

    monitor.start("dep-1")
    final = await monitor.wait()

    assert final.state is DeployState.READY
    assert monitor.error is None


@pytest.mark.asyncio
async def test_stop_cancels_polling():
    fetch = AsyncMock(return_value=deploy_state(DeployState.BUILDING))
    monitor = DeploymentMonitor(fetch, interval=0.01)

    task = monitor.start("dep-1")
    await asyncio.sleep(0.03)
    await monitor.stop()

    assert task.cancelled()
    assert not monitor.is_polling
    assert monitor.state.state is DeployState.BUILDING


@pytest.mark.asyncio
async def test_start_replaces_running_poll():
    fetch = AsyncMock(return_value=deploy_state(DeployState.BUILDING))
    monitor = DeploymentMonitor(fetch, interval=0.01)

    first = monitor.start("dep-1")
    second = monitor.start("dep-2")
    await asyncio.sleep(0)

    assert first.cancelled()
    assert monitor.deploy_id == "dep-2"
    await monitor.stop()
    assert second.cancelled()
