"""Tests for the debug type decision: by PID, by explicit protocol, or auto."""

from __future__ import annotations

import signal
import threading

import pytest

from node_launch.config import LaunchConfiguration
from node_launch.errors import DebugModeActivationError
from node_launch.errors import InvalidProcessIdError
from node_launch.errors import UserAbort
from node_launch.protocol.kinds import INSPECTOR_PORT_DEFAULT
from node_launch.protocol.kinds import LEGACY_PORT_DEFAULT
from node_launch.protocol.kinds import DebugType
from node_launch.resolver.debug_type import DebugTypeResolver
from node_launch.resolver.debug_type import is_pick_process_command
from node_launch.resolver.debug_type import parse_pid
from tests.mocks import AsyncCallRecorder
from tests.mocks import FakeHost

posix_only = pytest.mark.skipif(not hasattr(signal, "SIGUSR1"), reason="SIGUSR1 is POSIX only")


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def picker():
    return AsyncCallRecorder(return_value="4242")


@pytest.fixture
def probe():
    return AsyncCallRecorder(return_value="inspector")


@pytest.fixture
def auto_detect():
    return AsyncCallRecorder(return_value=DebugType.INSPECTOR)


@pytest.fixture
def resolver(host, picker, probe, auto_detect):
    return DebugTypeResolver(host=host, pick_process=picker, probe=probe, auto_detect=auto_detect)


class TestHelpers:
    @pytest.mark.parametrize(
        "value",
        [
            "${command:PickProcess}",
            "${command:extension.pickNodeProcess}",
            "  ${command:PickProcess} ",
        ],
    )
    def test_pick_process_commands(self, value: str) -> None:
        assert is_pick_process_command(value)

    def test_plain_pid_is_not_pick_command(self) -> None:
        assert not is_pick_process_command("1234")

    def test_parse_pid(self) -> None:
        assert parse_pid("1234") == 1234

    @pytest.mark.parametrize("value", ["abc", "", "12a", "-5", " 12", "1.5", "0", "١٢"])
    def test_parse_pid_rejects(self, value: str) -> None:
        with pytest.raises(InvalidProcessIdError) as exc_info:
            parse_pid(value)

        assert exc_info.value.process_id == value


@posix_only
class TestByPid:
    @pytest.mark.asyncio
    async def test_pid_attach_probes_and_becomes_port_attach(self, resolver, host, probe) -> None:
        config = LaunchConfiguration(request="attach", process_id="4242")

        result = await resolver.determine(config)

        assert result is DebugType.INSPECTOR
        assert host.killed == [(4242, signal.SIGUSR1)]
        probe.assert_called_once_with(4242)
        assert config.process_id is None
        assert config.port == INSPECTOR_PORT_DEFAULT

    @pytest.mark.asyncio
    async def test_explicit_legacy_protocol_skips_probe(self, resolver, host, probe) -> None:
        config = LaunchConfiguration(request="attach", process_id="4242", protocol="legacy")

        result = await resolver.determine(config)

        assert result is DebugType.LEGACY
        assert host.killed == [(4242, signal.SIGUSR1)]
        probe.assert_not_called()
        assert config.process_id is None
        assert config.port == LEGACY_PORT_DEFAULT

    @pytest.mark.asyncio
    async def test_pick_process_uses_picker(self, resolver, host, picker) -> None:
        config = LaunchConfiguration(request="attach", process_id="${command:PickProcess}")

        result = await resolver.determine(config)

        assert result is DebugType.INSPECTOR
        picker.assert_called_once()
        assert host.killed == [(4242, signal.SIGUSR1)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("picked", [None, ""])
    async def test_empty_pick_aborts(self, resolver, host, picker, probe, picked) -> None:
        picker.return_value = picked
        config = LaunchConfiguration(request="attach", process_id="${command:PickProcess}")

        with pytest.raises(UserAbort):
            await resolver.determine(config)

        assert host.killed == []
        probe.assert_not_called()
        assert config.process_id == "${command:PickProcess}"

    @pytest.mark.asyncio
    async def test_picked_garbage_is_invalid(self, resolver, picker) -> None:
        picker.return_value = "node"
        config = LaunchConfiguration(request="attach", process_id="${command:PickProcess}")

        with pytest.raises(InvalidProcessIdError) as exc_info:
            await resolver.determine(config)

        assert "'node' doesn't look like a process id" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_numeric_pid(self, resolver, host) -> None:
        config = LaunchConfiguration(request="attach", process_id="abc")

        with pytest.raises(InvalidProcessIdError) as exc_info:
            await resolver.determine(config)

        assert exc_info.value.message == "Attach to process: 'abc' doesn't look like a process id."
        assert host.killed == []
        assert config.type is None

    @pytest.mark.asyncio
    async def test_activation_failure(self, resolver, host, probe) -> None:
        host.kill_error = ProcessLookupError(3, "No such process")
        config = LaunchConfiguration(request="attach", process_id="4242")

        with pytest.raises(DebugModeActivationError):
            await resolver.determine(config)

        probe.assert_not_called()
        assert config.process_id == "4242"

    @pytest.mark.asyncio
    async def test_unknown_protocol_leaves_config(self, resolver, host, probe) -> None:
        probe.return_value = "unknown"
        config = LaunchConfiguration(request="attach", process_id="4242", port=9000)

        result = await resolver.determine(config)

        assert result is None
        # the process stays in debug mode
        assert host.killed == [(4242, signal.SIGUSR1)]
        assert config.process_id == "4242"
        assert config.port == 9000

    @pytest.mark.asyncio
    async def test_activation_runs_off_the_event_loop_thread(self, probe, picker, auto_detect) -> None:
        threads: list[int] = []

        class ThreadRecordingHost(FakeHost):
            def run(self, args: list[str]) -> None:
                threads.append(threading.get_ident())
                super().run(args)

        host = ThreadRecordingHost(is_windows=True)
        resolver = DebugTypeResolver(
            host=host, pick_process=picker, probe=probe, auto_detect=auto_detect
        )

        await resolver.determine(LaunchConfiguration(request="attach", process_id="4242"))

        assert host.commands == [["node", "-e", "process._debugProcess(4242)"]]
        assert threads and threads[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_determine_for_pid_config_uses_given_process_id(
        self, resolver, host, probe
    ) -> None:
        config = LaunchConfiguration(request="attach")

        result = await resolver.determine_for_pid_config(config, "4242")

        assert result is DebugType.INSPECTOR
        probe.assert_called_once_with(4242)
        assert config.port == INSPECTOR_PORT_DEFAULT


class TestByProtocolAndAuto:
    @pytest.mark.asyncio
    async def test_explicit_legacy(self, resolver, auto_detect) -> None:
        config = LaunchConfiguration(request="launch", protocol="legacy")

        assert await resolver.determine(config) is DebugType.LEGACY
        auto_detect.assert_not_called()

    @pytest.mark.asyncio
    async def test_explicit_inspector(self, resolver, auto_detect) -> None:
        config = LaunchConfiguration(request="attach", port=9229, protocol="inspector")

        assert await resolver.determine(config) is DebugType.INSPECTOR
        auto_detect.assert_not_called()
        assert config.port == 9229

    @pytest.mark.asyncio
    async def test_auto_delegates(self, resolver, auto_detect, host) -> None:
        auto_detect.return_value = DebugType.LEGACY
        config = LaunchConfiguration(request="launch", protocol="auto")

        assert await resolver.determine(config) is DebugType.LEGACY
        auto_detect.assert_called_once_with(config)
        assert host.killed == []

    @pytest.mark.asyncio
    async def test_unspecified_delegates(self, resolver, auto_detect) -> None:
        auto_detect.return_value = None
        config = LaunchConfiguration(request="launch")

        assert await resolver.determine(config) is None
        auto_detect.assert_called_once()

    @pytest.mark.asyncio
    async def test_launch_with_process_id_is_not_pid_attach(self, resolver, auto_detect, host) -> None:
        config = LaunchConfiguration(request="launch", process_id="4242")

        await resolver.determine(config)

        auto_detect.assert_called_once()
        assert host.killed == []
