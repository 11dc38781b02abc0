# ─────────────────────────────────────────────────────────────────────────────
# Tests — command line front end
# ─────────────────────────────────────────────────────────────────────────────

import httpx
import pytest
from fakes import ENDPOINT, scripted, suggestion_response

from font_analyzer import cli
from font_analyzer.client.font_loader import FontLinkLoader
from font_analyzer.client.orchestrator import FALLBACK_SUGGESTION
from font_analyzer.client.state import RequestState, RequestStatus
from font_analyzer.client.suggestion_client import SuggestionClient
from font_analyzer.config import Settings
from font_analyzer.schemas import Suggestion


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(
        suggestion_endpoint=ENDPOINT,
        backoff_base_seconds=0.0,
        fallback_delay_seconds=0.0,
        log_json=False,
    )


@pytest.fixture
def route_client(monkeypatch):
    """Make SuggestionClient.from_settings talk to a scripted handler."""

    def _route(handler):
        def from_settings(settings, **kwargs):
            return SuggestionClient(
                settings.suggestion_endpoint,
                http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
                max_retries=settings.max_retries,
                backoff_base_seconds=settings.backoff_base_seconds,
            )

        monkeypatch.setattr(SuggestionClient, "from_settings", staticmethod(from_settings))

    return _route


class TestRenderState:
    def test_success_shows_font_preview_and_stylesheet(self):
        loader = FontLinkLoader()
        loader.ensure_font_loaded("Cinzel")
        state = RequestState(
            RequestStatus.SUCCEEDED,
            suggestion=Suggestion(font_name="Cinzel", reason="Roman capitals."),
        )

        text = cli.render_state(state, "  The Roman Empire ", loader)

        assert "Suggested font: Cinzel" in text
        assert "Your title preview: The Roman Empire" in text
        assert "Stylesheet: https://fonts.googleapis.com/css2?family=Cinzel" in text

    def test_advisory_error_and_fallback_together(self):
        state = RequestState(
            RequestStatus.FAILED, suggestion=FALLBACK_SUGGESTION, message="[MOCK ACTIVE] ..."
        )

        text = cli.render_state(state, "Retro", FontLinkLoader())

        assert text.startswith("! [MOCK ACTIVE]")
        assert "Press Start 2P" in text

    def test_idle_renders_nothing(self):
        assert cli.render_state(RequestState(RequestStatus.IDLE), "x", FontLinkLoader()) == ""


class TestParser:
    def test_suggest_takes_titles(self):
        args = cli.build_parser().parse_args(["suggest", "One", "Two", "--endpoint", ENDPOINT])
        assert args.command == "suggest"
        assert args.titles == ["One", "Two"]
        assert args.endpoint == ENDPOINT

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestRunSuggest:
    @pytest.mark.asyncio
    async def test_repeated_title_is_requested_once(self, fast_settings, route_client, capsys):
        handler, seen = scripted(suggestion_response("Cinzel", "Roman capitals."))
        route_client(handler)

        code = await cli.run_suggest(["The Roman Empire", "The Roman Empire"], fast_settings)

        assert code == 0
        assert len(seen) == 1
        out = capsys.readouterr().out
        assert out.count("Suggested font: Cinzel") == 2

    @pytest.mark.asyncio
    async def test_unreachable_server_shows_mock(self, fast_settings, route_client, capsys):
        handler, _ = scripted(*[httpx.ConnectError("refused")] * 3)
        route_client(handler)

        code = await cli.run_suggest(["Retro Arcade"], fast_settings)

        assert code == 0
        out = capsys.readouterr().out
        assert "[MOCK ACTIVE]" in out
        assert "Press Start 2P" in out

    @pytest.mark.asyncio
    async def test_client_error_exits_nonzero(self, fast_settings, route_client, capsys):
        handler, _ = scripted(httpx.Response(400, json={"details": "Title too vague."}))
        route_client(handler)

        code = await cli.run_suggest(["Stuff"], fast_settings)

        assert code == 1
        assert "Server Error: Title too vague." in capsys.readouterr().out
