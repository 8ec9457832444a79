"""Tests for platform registration and discovery."""

import pytest
from conftest import FakeProber, RecordingSink

from fileset_scanner import PlatformRegistry
from fileset_scanner.core.config import ScanConfig, SubmitFailurePolicy
from fileset_scanner.core.errors import ConfigurationError
from fileset_scanner.platforms.stdout import StdoutSink
from fileset_scanner.scanner import Scanner


@pytest.fixture
def registered_fakes():
    """Register fake platforms for the duration of a test."""
    PlatformRegistry.register_prober("fake", lambda **kwargs: FakeProber())
    PlatformRegistry.register_sink("recording", lambda **kwargs: RecordingSink(**kwargs))
    yield
    PlatformRegistry._probers.pop("fake", None)
    PlatformRegistry._sinks.pop("recording", None)


class TestDiscovery:
    """Test platforms register themselves on import."""

    def test_builtin_sinks_registered(self) -> None:
        sinks = PlatformRegistry.list_sinks()

        assert "stdout" in sinks
        assert "http" in sinks

    def test_discovery_is_repeatable(self) -> None:
        before = PlatformRegistry.list_sinks()
        PlatformRegistry.discover_platforms()

        assert PlatformRegistry.list_sinks() == before

    def test_create_stdout_sink(self) -> None:
        assert isinstance(PlatformRegistry.create_sink("stdout"), StdoutSink)


class TestCreateScanner:
    """Test scanner construction by name."""

    def test_create_scanner_wires_platforms(self, registered_fakes) -> None:
        config = ScanConfig(on_submit_failure=SubmitFailurePolicy.ABORT)

        scanner = PlatformRegistry.create_scanner(
            "fake",
            "recording",
            config=config,
            sink_options={"fail_for": ["a.tif"]},
        )

        assert isinstance(scanner, Scanner)
        assert isinstance(scanner.prober, FakeProber)
        assert scanner.sink.fail_for == {"a.tif"}
        assert scanner.config is config
        assert scanner.builder.reader_software == "fake-prober"

    def test_unknown_prober(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown prober: 'nope'"):
            PlatformRegistry.create_prober("nope")

    def test_unknown_sink_lists_available(self) -> None:
        with pytest.raises(ConfigurationError, match="stdout"):
            PlatformRegistry.create_sink("nope")

    def test_factory_errors_become_configuration_errors(self) -> None:
        """Test a sink missing its required setting fails as configuration."""
        with pytest.raises(ConfigurationError, match="endpoint"):
            PlatformRegistry.create_sink("http")
