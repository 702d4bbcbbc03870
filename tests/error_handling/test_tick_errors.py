"""
Error handling tests for failing ticks.

Both agents follow the same policy: a failed fetch or delivery is logged,
the tick ends, and the supervisor keeps scheduling ticks.
"""

from __future__ import annotations

import asyncio
import unittest
from unittest.mock import MagicMock

import pytest
import requests
from docker.errors import DockerException

from dockwatch import supervisor
from dockwatch.config import Config
from dockwatch.core import ProbeAgent, StatusAgent
from dockwatch.reporter import Reporter
from dockwatch.snapshot import Snapshot


def _drive(tick, ticks: int, interval: float = 0.01) -> None:
    """Run the supervisor until `ticks` calls happened, then shut down."""

    calls = []

    def counting_tick():
        calls.append(1)
        return tick()

    async def scenario():
        shutdown = asyncio.Event()
        task = asyncio.create_task(
            supervisor.supervise(counting_tick, interval, signals=(), shutdown=shutdown)
        )
        while len(calls) < ticks and not task.done():
            await asyncio.sleep(0.005)
        shutdown.set()
        return await task

    assert asyncio.run(asyncio.wait_for(scenario(), timeout=10)) is True


@pytest.mark.integration
class TestStatusAgentErrors(unittest.TestCase):
    """The status agent survives every kind of per-tick failure."""

    def setUp(self):
        self.config = Config(status_token="token", status_url="https://control.example.com/status")

    def test_engine_down_every_tick(self):
        """Test that a missing socket never stops the loop."""
        collector = MagicMock()
        collector.collect.side_effect = DockerException("socket missing")
        reporter = MagicMock()
        agent = StatusAgent(self.config, collector=collector, reporter=reporter)

        _drive(agent.tick, ticks=3)

        self.assertGreaterEqual(collector.collect.call_count, 3)
        reporter.send.assert_not_called()

    def test_delivery_failure_every_tick(self):
        """Test that an unreachable status endpoint never stops the loop."""
        collector = MagicMock()
        collector.collect.return_value = Snapshot()
        reporter = Reporter(self.config)
        reporter.session = MagicMock()
        reporter.session.post.side_effect = requests.exceptions.ConnectionError("refused")
        agent = StatusAgent(self.config, collector=collector, reporter=reporter)

        _drive(agent.tick, ticks=3)

        self.assertGreaterEqual(reporter.session.post.call_count, 3)

    def test_unexpected_error_is_fatal(self):
        """Test that errors outside the handled set end the supervisor."""
        collector = MagicMock()
        collector.collect.side_effect = KeyError("bug")
        agent = StatusAgent(self.config, collector=collector, reporter=MagicMock())

        with self.assertRaises(KeyError):
            asyncio.run(supervisor.supervise(agent.tick, 0.01, signals=()))


@pytest.mark.integration
class TestProbeAgentErrors(unittest.TestCase):
    """The endpoint probe survives request failures."""

    def test_request_failure_every_tick(self):
        collector = MagicMock()
        collector.collect.side_effect = requests.exceptions.Timeout("timed out")
        agent = ProbeAgent(Config(), collector=collector)

        _drive(agent.tick, ticks=3)

        self.assertGreaterEqual(collector.collect.call_count, 3)
