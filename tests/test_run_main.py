"""
Tests for the linkcheck entry point and its dependency injection container.
"""
from unittest.mock import patch

from typer.testing import CliRunner

from linkcheck.cli import USAGE, app
from linkcheck.container import Container
from linkcheck.domain.check_speed import CheckSpeed
from linkcheck.services.http_service import HttpService
from linkcheck.services.link_checker import LinkChecker
from run import main


def test_container_creates_services():
    container = Container()
    container.config.USER_AGENT.from_value("TestBot/1.0")
    container.config.HTTP_TIMEOUT.from_value(3)

    http_service = container.http_service()
    assert isinstance(http_service, HttpService)
    assert http_service.user_agent == "TestBot/1.0"
    assert http_service.timeout == 3.0
    assert container.link_extractor() is container.link_extractor()


def test_container_builds_a_fresh_checker_per_call():
    container = Container()
    container.config.BUFFER_SIZE.from_value(5)

    first = container.link_checker(speed=CheckSpeed.SLOW)
    second = container.link_checker(verbose=True)

    assert isinstance(first, LinkChecker)
    assert first is not second
    assert first.http_service is second.http_service
    assert first.results.maxsize == 5
    assert (first.rate_limiter.rate, first.rate_limiter.burst) == (1, 1)
    assert second.verbose is True


def test_missing_url_prints_usage():
    result = CliRunner().invoke(app, [])
    assert result.exit_code == 1
    assert "Usage:" in result.output
    assert "linkcheck https://somewebpage123.com" in result.output


def test_help_argument_prints_usage():
    result = CliRunner().invoke(app, ["help"])
    assert result.exit_code == 1
    assert USAGE.strip() in result.output


def test_bad_config_file_exits(tmp_path):
    cfg = tmp_path / "bad.yml"
    cfg.write_text("site: https://example.com\nspeed: ludicrous\n")
    result = CliRunner().invoke(app, ["--config", str(cfg)])
    assert result.exit_code == 1
    assert "Invalid speed" in result.output


def test_speed_flags_pick_the_preset(tmp_path):
    with patch("linkcheck.cli.Container") as container_cls:
        checker = container_cls.return_value.link_checker.return_value
        checker.stream_results.return_value = iter(())
        result = CliRunner().invoke(app, ["https://example.com", "-furious", "--no-progress"])

    assert result.exit_code == 0, result.output
    kwargs = container_cls.return_value.link_checker.call_args.kwargs
    assert kwargs["speed"] is CheckSpeed.FURIOUS
    assert kwargs["progress"] is False
    checker.start.assert_called_once_with("https://example.com")
    checker.start.return_value.join.assert_called_once()


def test_main_runs_the_cli():
    with patch("linkcheck.cli.app") as fake_app:
        main()
    fake_app.assert_called_once_with()


def test_progress_flag_overrides_config_file(tmp_path):
    cfg = tmp_path / "check.yml"
    cfg.write_text("site: https://example.com\nprogress: true\n")
    with patch("linkcheck.cli.Container") as container_cls:
        container_cls.return_value.link_checker.return_value.stream_results.return_value = iter(())
        result = CliRunner().invoke(app, ["--config", str(cfg), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert container_cls.return_value.link_checker.call_args.kwargs["progress"] is False


def test_progress_defaults_on_without_flag_or_config():
    with patch("linkcheck.cli.Container") as container_cls:
        container_cls.return_value.link_checker.return_value.stream_results.return_value = iter(())
        result = CliRunner().invoke(app, ["https://example.com"])

    assert result.exit_code == 0, result.output
    assert container_cls.return_value.link_checker.call_args.kwargs["progress"] is True
