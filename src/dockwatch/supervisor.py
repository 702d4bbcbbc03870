"""
Loop supervisor for Dockwatch.

Runs a tick callable on a fixed delay as a background task and races it
against a shutdown signal.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import threading
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def call_in_daemon_thread(func: Callable[[], Any]) -> Any:
    """
    Run a blocking call in a daemon thread and await its result.

    A call whose awaiter has gone away keeps running on its own but holds up
    neither loop teardown nor interpreter exit.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _resolve(result: Any, error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def _worker() -> None:
        result, error = None, None
        try:
            result = func()
        except BaseException as e:
            error = e
        try:
            loop.call_soon_threadsafe(_resolve, result, error)
        except RuntimeError:
            # Loop already closed after shutdown
            logger.debug("Abandoned tick finished after the loop closed")

    threading.Thread(target=_worker, name="dockwatch-tick", daemon=True).start()
    return await future


async def poll_loop(tick: Callable[[], Any], interval: float) -> None:
    """
    Run `tick` forever with `interval` seconds between the end of one call
    and the start of the next.

    The tick is blocking (engine and HTTP clients are synchronous) and runs in
    a daemon thread so the event loop stays free to notice shutdown.
    """
    while True:
        await call_in_daemon_thread(tick)
        await asyncio.sleep(interval)


def _install_signal_handlers(
    loop: asyncio.AbstractEventLoop,
    signals: Iterable[signal.Signals],
    shutdown: asyncio.Event,
) -> list[signal.Signals]:
    installed = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, shutdown.set)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            # Windows event loops, or not running in the main thread
            logger.debug(f"Cannot install handler for {sig!r}: {e}")
            continue
        installed.append(sig)
    return installed


async def supervise(
    tick: Callable[[], Any],
    interval: float,
    signals: Iterable[signal.Signals] = DEFAULT_SIGNALS,
    shutdown: asyncio.Event | None = None,
) -> bool:
    """
    Drive the poll loop until shutdown is requested.

    Args:
        tick: Callable performing one fetch-and-report cycle.
        interval: Delay in seconds between ticks.
        signals: Process signals that request shutdown.
        shutdown: Optional event the caller can set to request shutdown.

    Returns:
        True when stopped by a shutdown request.

    Raises:
        ValueError: If interval is negative.
        Exception: Whatever ended the poll loop, if it ended first.
    """
    if interval < 0:
        raise ValueError(f"Interval must not be negative, got {interval}")

    loop = asyncio.get_running_loop()
    if shutdown is None:
        shutdown = asyncio.Event()
    installed = _install_signal_handlers(loop, signals, shutdown)

    poller = asyncio.create_task(poll_loop(tick, interval), name="dockwatch-poll")
    waiter = asyncio.create_task(shutdown.wait(), name="dockwatch-shutdown")

    try:
        done, _ = await asyncio.wait({poller, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)

    if waiter in done:
        logger.info("Shutting down agent...")
        # A tick already running in its thread is abandoned, not interrupted;
        # its daemon thread does not delay process exit.
        poller.cancel()
        return True

    waiter.cancel()
    # Only reachable through an exception; re-raise it
    poller.result()
    return False


def run(
    tick: Callable[[], Any],
    interval: float,
    signals: Iterable[signal.Signals] = DEFAULT_SIGNALS,
) -> bool:
    """Blocking entry point around `supervise`."""
    try:
        return asyncio.run(supervise(tick, interval, signals))
    except KeyboardInterrupt:
        # Only reached where signal handlers could not be installed
        logger.info("Shutting down agent...")
        return True
