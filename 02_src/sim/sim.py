"""SIM implementation - scripted investigation replayed through the webhook."""

import asyncio
import random

import httpx

from bug_agent.logging_config import get_logger

logger = get_logger(__name__)


# Bare parameters, as the voice platform sends them (tool is auto-detected)
SCENARIO: list[dict] = [
    {"status": "Listening to the customer's report...", "type": "info"},
    {
        "status": "Customer says checkout total ignores the discount code",
        "type": "investigating",
        "metadata": {"area": "checkout"},
    },
    {"status": "Looking through the cart and pricing code...", "type": "investigating"},
    {
        "status": "Discount is applied after tax in the cart total",
        "type": "resolving",
        "metadata": {"file_path": "lib/cart.js"},
    },
    {"status": "Bug report drafted for the team", "type": "resolved"},
]


class Sim:
    """SIM posting a hardcoded sequence of status updates."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        scenario: list[dict] | None = None,
        delay_range: tuple[float, float] = (1.0, 3.0),
    ):
        self._api_url = api_url
        self._scenario = scenario if scenario is not None else SCENARIO
        self._delay_range = delay_range
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient()

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenario(self) -> None:
        """Post each scripted step with a random pause in between."""
        try:
            for step in self._scenario:
                if not self._running:
                    break
                await self._send_step(step)
                await asyncio.sleep(random.uniform(*self._delay_range))
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False

    async def _send_step(self, params: dict) -> None:
        """Send one step to the webhook."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}/api/elevenlabs/webhook",
                json=params,
                timeout=10.0,
            )

            if response.status_code == 200:
                logger.info("SIM: %s", params["status"])
            else:
                logger.error("SIM: Error sending step: %s", response.status_code)

        except Exception as e:
            logger.error("SIM: Failed to send step: %s", e)
