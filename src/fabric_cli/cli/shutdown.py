"""Release the network session when the process is interrupted."""

import asyncio
import signal
import typing as t

from ..fabric.base import BaseFactory
from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru

Notifier = t.Callable[[str], None]

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class ShutdownCoordinator:
    """Watches for interrupt/termination signals and closes the session once.

    start() spawns a watcher task that parks on an asyncio.Event set by the
    loop's signal handlers. When a signal arrives the factory's cached
    session is closed; any request still using it fails rather than being
    cancelled. If the command finishes first, stop() tears the watcher down
    and performs the same release, so the session is closed exactly once
    whichever path gets there first.

    Usage:
        coordinator = ShutdownCoordinator(factory, notify=logger.info)
        coordinator.start()
        try:
            await command_body()
        finally:
            await coordinator.stop()
    """

    def __init__(
        self,
        factory: BaseFactory | None,
        notify: Notifier | None = None,
        signals: t.Sequence[signal.Signals] = DEFAULT_SIGNALS,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        """Initialise the coordinator.

        Args:
            factory: Factory owning the session. None means no session was
                ever constructed and release is a no-op.
            notify: Receives human-readable progress messages. Defaults to
                logger.info.
            signals: Signals that trigger a shutdown.
            logger: Logger for failures during release.
        """
        self._factory = factory
        self._logger = logger
        self._notify = notify or logger.info
        self._signals = tuple(signals)
        self._signalled = asyncio.Event()
        self._received: signal.Signals | None = None
        self._installed: list[signal.Signals] = []
        self._task: asyncio.Task[None] | None = None
        self._released = False

    @property
    def is_watching(self) -> bool:
        """True while the watcher task is parked waiting for a signal."""
        return self._task is not None and not self._task.done()

    @property
    def released(self) -> bool:
        return self._released

    @property
    def received_signal(self) -> signal.Signals | None:
        return self._received

    def start(self) -> None:
        """Install signal handlers and spawn the watcher. Returns immediately."""
        if self._task is not None:
            return
        self._install_handlers()
        self._task = asyncio.create_task(self._watch())

    async def stop(self) -> None:
        """Stop watching and release the session if a signal has not already.

        A watcher that was already signalled is left to finish its release;
        only an idle watcher is cancelled.
        """
        self._remove_handlers()
        if self._task is not None and not self._task.done():
            if self._signalled.is_set():
                await self._task
            else:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass
        await self.release()

    async def release(self) -> None:
        """Close the factory's cached session. Only the first call acts.

        Never opens a session, and never raises: shutdown is best effort.
        """
        if self._released:
            return
        self._released = True

        if self._factory is None or not self._factory.has_session:
            return

        try:
            sdk = await self._factory.sdk()
            self._notify("closing network session")
            await sdk.close()
        except Exception as e:
            self._logger.error(f"Failed to close network session: {e}")

    def handle_signal(self, sig: signal.Signals) -> None:
        """Record a delivered signal and wake the watcher."""
        if self._received is None:
            self._received = sig
        self._signalled.set()

    async def _watch(self) -> None:
        self._notify("awaiting signal...")
        await self._signalled.wait()
        name = self._received.name if self._received is not None else "signal"
        self._notify(f"received {name}, exiting")
        await self.release()
        self._notify("shutdown complete")

    def _install_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._signals:
            try:
                loop.add_signal_handler(sig, self.handle_signal, sig)
            except (NotImplementedError, RuntimeError, ValueError) as e:
                # Not the main thread, or a platform without loop signal support
                self._logger.debug(f"Cannot watch {sig.name}: {e}")
                continue
            self._installed.append(sig)

    def _remove_handlers(self) -> None:
        if not self._installed:
            return
        loop = asyncio.get_running_loop()
        for sig in self._installed:
            loop.remove_signal_handler(sig)
        self._installed.clear()
