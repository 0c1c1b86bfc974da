"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .broadcaster import Broadcaster
from .config import Settings
from .dispatcher import IToolDispatcher, ToolDispatcher
from .github import GitHubClient, IRepositoryHost
from .logging_config import get_logger

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    @property
    def settings(self) -> Settings: ...

    @property
    def broadcaster(self) -> Broadcaster: ...

    @property
    def dispatcher(self) -> IToolDispatcher: ...

    @property
    def repository_host(self) -> IRepositoryHost: ...


class Application:
    """Main application bootstrap.

    Owns the single Broadcaster of the process; everything that publishes
    or subscribes gets it from here.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        repository_host: IRepositoryHost | None = None,
    ):
        self._settings = settings or Settings.from_env()
        self._injected_host = repository_host

        # Components (will be initialized in start())
        self._broadcaster: Broadcaster | None = None
        self._repository_host: IRepositoryHost | None = None
        self._dispatcher: ToolDispatcher | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        if self._dispatcher is not None:
            return
        logger.info("Starting application")

        # 1. Broadcaster (no dependencies)
        self._broadcaster = Broadcaster(
            heartbeat_interval=self._settings.heartbeat_interval
        )
        await self._broadcaster.start()

        # 2. Repository host (no internal dependencies)
        if self._injected_host is not None:
            self._repository_host = self._injected_host
        else:
            client = GitHubClient(self._settings)
            await client.start()
            self._repository_host = client
        logger.info("Repository host initialized")

        # 3. Dispatcher (depends on Broadcaster + repository host)
        self._dispatcher = ToolDispatcher(self._broadcaster, self._repository_host)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        self._dispatcher = None
        if self._repository_host is not None:
            # Injected hosts belong to the caller
            if isinstance(self._repository_host, GitHubClient) and (
                self._repository_host is not self._injected_host
            ):
                await self._repository_host.close()
                logger.info("GitHub client closed")
            self._repository_host = None
        if self._broadcaster:
            await self._broadcaster.stop()
            self._broadcaster = None
        logger.info("Application stopped")

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def broadcaster(self) -> Broadcaster:
        """Get broadcaster instance."""
        if not self._broadcaster:
            raise RuntimeError("Application not started")
        return self._broadcaster

    @property
    def dispatcher(self) -> IToolDispatcher:
        """Get dispatcher instance."""
        if not self._dispatcher:
            raise RuntimeError("Application not started")
        return self._dispatcher

    @property
    def repository_host(self) -> IRepositoryHost:
        """Get repository host instance."""
        if not self._repository_host:
            raise RuntimeError("Application not started")
        return self._repository_host
