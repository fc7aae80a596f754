"""
Tests for the Typer CLI application.

Commands run end to end against a container whose fetcher talks to a
scripted session, so no network access happens.
"""

import json

import aiohttp
import pytest
from dependency_injector import providers
from typer.testing import CliRunner

from anikam.cli.common.context import LogLevel, get_cli_context
from anikam.cli.typer_app import app, build_container, main
from anikam.config.models import Settings
from anikam.containers import Container
from anikam.services.network_monitor import NetworkMonitor
from anikam.services.request_scheduler import RequestScheduler
from anikam.services.resilient_fetcher import ResilientFetcher
from anikam.shared.constants import CLIMessages, JikanAPIConfig, UserMessages

BASE = JikanAPIConfig.BASE_URL
WIDE = {"COLUMNS": "200"}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def connectivity(response) -> list:
    """Outcomes of the connectivity check each command runs at startup."""
    return [response()]


@pytest.fixture
def session(mocker, fake_session, clock, connectivity, session_factory):
    """Route every command through the scripted session."""
    mocker.patch("anikam.cli.typer_app.setup_structured_logger")

    def _build(config_path=None):
        container = Container()
        container.config.override(providers.Object(Settings()))
        monitor = NetworkMonitor(session=session_factory(*connectivity))
        container.network_monitor.override(providers.Object(monitor))
        container.resilient_fetcher.override(
            providers.Object(
                ResilientFetcher(
                    session=fake_session, network_monitor=monitor, sleep=clock.sleep
                )
            )
        )
        container.request_scheduler.override(
            providers.Object(RequestScheduler(min_interval=0, clock=clock, sleep=clock.sleep))
        )
        return container

    mocker.patch("anikam.cli.typer_app.build_container", side_effect=_build)
    return fake_session


class TestMainCallback:
    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "AniKam CLI v0.1.0" in result.output

    def test_sets_context(self, tmp_path):
        config_file = tmp_path / "anikam.toml"

        main(log_level=LogLevel.DEBUG, config=config_file, version=False)

        context = get_cli_context()
        assert context.log_level == LogLevel.DEBUG
        assert context.config_path == config_file

    def test_build_container_reads_config_file(self, tmp_path):
        config_file = tmp_path / "anikam.toml"
        config_file.write_text("[api.jikan]\ntimeout = 3\n", encoding="utf-8")

        container = build_container(config_file)

        assert container.config().api.jikan.timeout == 3


class TestSearchCommand:
    def test_json_output(self, runner, session, response, make_page, anime_record):
        session.queue(response(body=make_page([anime_record], has_next_page=True)))

        result = runner.invoke(app, ["search", "bebop", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["command"] == "search"
        assert payload["data"]["items"][0]["title"] == "Cowboy Bebop"
        assert payload["data"]["has_next_page"] is True
        assert payload["data"]["using_fallback"] is False
        assert session.urls == [f"{BASE}/anime?limit=24&page=1&q=bebop"]

    def test_table_output(self, runner, session, response, make_page, anime_record):
        session.queue(response(body=make_page([anime_record])))

        result = runner.invoke(app, ["search", "bebop"], env=WIDE)

        assert result.exit_code == 0
        assert "Cowboy Bebop" in result.output

    def test_manga_with_filters(self, runner, session, response, make_page, manga_record):
        session.queue(response(body=make_page([manga_record])))

        result = runner.invoke(
            app,
            ["search", "berserk", "--manga", "--status", "publishing", "--limit", "5"],
            env=WIDE,
        )

        assert result.exit_code == 0
        assert session.urls == [f"{BASE}/manga?limit=5&page=1&q=berserk&status=publishing"]

    def test_all_searches_both_catalogs(
        self, runner, session, response, make_page, anime_record, manga_record
    ):
        session.queue(
            response(body=make_page([anime_record])),
            response(body=make_page([manga_record])),
        )

        result = runner.invoke(app, ["search", "x", "--all", "--json"])

        assert result.exit_code == 0
        types = [item["type"] for item in json.loads(result.stdout)["data"]["items"]]
        assert sorted(types) == ["anime", "manga"]

    def test_manga_and_all_conflict(self, runner, session):
        result = runner.invoke(app, ["search", "x", "--manga", "--all"])

        assert result.exit_code == 1
        assert CLIMessages.MANGA_ALL_CONFLICT in result.output
        assert session.requests == []

    def test_http_error_is_reported(self, runner, session, response):
        session.queue(*(response(status=500, reason="Internal Server Error") for _ in range(3)))

        result = runner.invoke(app, ["search", "bebop"])

        assert result.exit_code == 1
        assert "Jikan API error: 500 Internal Server Error" in result.output


class TestTopCommand:
    def test_network_failure_shows_fallback(self, runner, session):
        session.queue(*(aiohttp.ClientConnectionError() for _ in range(3)))

        result = runner.invoke(app, ["top"], env=WIDE)

        assert result.exit_code == 0
        assert "Attack on Titan" in result.output
        assert "offline picks" in result.output

    def test_fallback_flagged_in_json(self, runner, session):
        session.queue(*(aiohttp.ClientConnectionError() for _ in range(3)))

        result = runner.invoke(app, ["top", "--json"])

        payload = json.loads(result.stdout)
        assert payload["data"]["using_fallback"] is True
        assert payload["warnings"] == [CLIMessages.FALLBACK_NOTICE_PLAIN]

    def test_invalid_filter(self, runner, session):
        result = runner.invoke(app, ["top", "--filter", "bogus"])

        assert result.exit_code == 1
        assert "Invalid filter 'bogus'" in result.output
        assert session.requests == []


class TestSeasonCommand:
    def test_current_season(self, runner, session, response, make_page, anime_record):
        session.queue(response(body=make_page([anime_record])))

        result = runner.invoke(app, ["season", "--json"])

        assert result.exit_code == 0
        assert session.urls == [f"{BASE}/seasons/now?limit=24&page=1"]

    def test_explicit_season(self, runner, session, response, make_page, anime_record):
        session.queue(response(body=make_page([anime_record])))

        result = runner.invoke(
            app, ["season", "--year", "1998", "--season", "spring"], env=WIDE
        )

        assert result.exit_code == 0
        assert "Spring 1998" in result.output
        assert session.urls == [f"{BASE}/seasons/1998/spring?limit=24&page=1"]

    def test_year_without_season(self, runner, session):
        result = runner.invoke(app, ["season", "--year", "2020"])

        assert result.exit_code == 1
        assert CLIMessages.SEASON_ARGS_REQUIRED in result.output


class TestDetailsCommands:
    def test_details(self, runner, session, response, anime_record):
        session.queue(response(body={"data": anime_record}))

        result = runner.invoke(app, ["details", "1"], env=WIDE)

        assert result.exit_code == 0
        assert "Cowboy Bebop" in result.output
        assert "Sunrise" in result.output

    def test_details_json(self, runner, session, response, manga_record):
        session.queue(response(body={"data": manga_record}))

        result = runner.invoke(app, ["details", "2", "--manga", "--json"])

        item = json.loads(result.stdout)["data"]["item"]
        assert item["id"] == "2"
        assert item["type"] == "manga"
        assert session.urls == [f"{BASE}/manga/2"]

    def test_details_not_found(self, runner, session, response):
        session.queue(*(response(status=404, reason="Not Found") for _ in range(3)))

        result = runner.invoke(app, ["details", "999999"])

        assert result.exit_code == 1
        assert "Jikan API error: 404 Not Found" in result.output

    def test_details_error_as_json(self, runner, session, response):
        session.queue(*(response(status=404, reason="Not Found") for _ in range(3)))

        result = runner.invoke(app, ["details", "999999", "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["errors"] == ["Jikan API error: 404 Not Found"]

    def test_details_offline_host(self, runner, session, connectivity):
        connectivity[:] = [aiohttp.ClientConnectionError()]
        session.queue(*(aiohttp.ClientConnectionError() for _ in range(3)))

        result = runner.invoke(app, ["details", "1", "--json"])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["errors"] == [UserMessages.OFFLINE]

    def test_details_unreachable_api_while_online(self, runner, session):
        session.queue(*(aiohttp.ClientConnectionError() for _ in range(3)))

        result = runner.invoke(app, ["details", "1", "--json"])

        assert json.loads(result.stdout)["errors"] == [UserMessages.UNREACHABLE]

    def test_random_manga(self, runner, session, response, manga_record):
        session.queue(response(body={"data": manga_record}))

        result = runner.invoke(app, ["random", "--manga"], env=WIDE)

        assert result.exit_code == 0
        assert "Berserk" in result.output
        assert session.urls == [f"{BASE}/random/manga"]
