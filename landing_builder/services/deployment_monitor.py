"""
Poll a Netlify deploy until it settles.

DeploymentMonitor holds the polling state the editor shows while a deploy builds
(latest state, error, whether polling is active). It polls in its own asyncio task
every DEPLOY_POLL_INTERVAL_SECONDS and stops on a terminal state (ready/error),
after too many consecutive failures, or when stop() is called.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from landing_builder.core.config import get_settings
from landing_builder.core.enums import DeployState
from landing_builder.core.exceptions import BaseServiceError
from landing_builder.database import get_session
from landing_builder.schemas.deployment import DeployStatusRead

logger = logging.getLogger(__name__)

FetchState = Callable[[str], Awaitable[DeployStatusRead]]


class DeploymentMonitor:
    def __init__(
        self,
        fetch_state: FetchState,
        interval: Optional[float] = None,
        max_consecutive_errors: int = 5,
        on_update: Optional[Callable[[DeployStatusRead], None]] = None,
    ):
        self.fetch_state = fetch_state
        self.interval = interval if interval is not None else get_settings().DEPLOY_POLL_INTERVAL_SECONDS
        self.max_consecutive_errors = max_consecutive_errors
        self.on_update = on_update

        self.deploy_id: Optional[str] = None
        self.state: Optional[DeployStatusRead] = None
        self.error: Optional[str] = None
        self.polls = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def is_polling(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, deploy_id: str) -> asyncio.Task:
        """Start polling ``deploy_id``; an existing poll is cancelled first."""
        if self.is_polling:
            self._task.cancel()
        self.deploy_id = deploy_id
        self.state = None
        self.error = None
        self.polls = 0
        self._task = asyncio.create_task(self._run(deploy_id))
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"Stopped polling deploy {self.deploy_id}")

    async def wait(self) -> Optional[DeployStatusRead]:
        """Wait for the current poll to finish and return the last state seen."""
        if self._task is not None:
            await asyncio.shield(self._task)
        return self.state

    async def _run(self, deploy_id: str) -> None:
        failures = 0
        while True:
            try:
                state = await self.fetch_state(deploy_id)
            except BaseServiceError as e:
                failures += 1
                self.error = str(e)
                logger.warning(f"Polling deploy {deploy_id} failed ({failures}/{self.max_consecutive_errors}): {e}")
                if failures >= self.max_consecutive_errors:
                    logger.error(f"Giving up on deploy {deploy_id}")
                    return
            else:
                failures = 0
                self.error = None
                self.polls += 1
                self.state = state
                if self.on_update is not None:
                    self.on_update(state)
                if state.state.is_terminal:
                    log = logger.info if state.state is DeployState.READY else logger.error
                    log(f"Deploy {deploy_id} finished: {state.provider_state}")
                    return

            await asyncio.sleep(self.interval)


async def fetch_deploy_state(deploy_id: str) -> DeployStatusRead:
    """Poll callback that opens its own session, for use outside a request."""
    from landing_builder.services.deployment_service import DeploymentService

    async with get_session() as db:
        return await DeploymentService(db).get_deploy_state(deploy_id)


async def watch_deploy(deploy_id: str) -> Optional[DeployStatusRead]:
    """Background task: follow a deploy to completion so the job row picks up the final state."""
    monitor = DeploymentMonitor(fetch_deploy_state)
    monitor.start(deploy_id)
    return await monitor.wait()
