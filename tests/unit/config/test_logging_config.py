"""Tests for structlog configuration helpers."""

import structlog

from smartsearch.config.logging import (
    MAX_LOGGED_QUERY_LENGTH,
    add_service_context,
    build_processors,
    clip_query_text,
)


class TestClipQueryText:
    def test_long_query_clipped(self):
        event = clip_query_text(None, "info", {"query": "a" * 500})
        assert event["query"] == "a" * MAX_LOGGED_QUERY_LENGTH + "..."

    def test_short_query_kept(self):
        event = clip_query_text(None, "info", {"original_query": "الأمن الرقمي"})
        assert event["original_query"] == "الأمن الرقمي"

    def test_other_fields_untouched(self):
        event = clip_query_text(None, "info", {"path": "x" * 500, "query": None})
        assert event == {"path": "x" * 500, "query": None}


class TestServiceContext:
    def test_adds_settings(self):
        event = add_service_context(None, "info", {"event": "search_completed"})
        assert event["service"] == "Smart Search"
        assert event["environment"] == "development"

    def test_existing_keys_win(self):
        event = add_service_context(None, "info", {"service": "worker"})
        assert event["service"] == "worker"


class TestBuildProcessors:
    def test_json_renderer_keeps_unicode(self):
        renderer = build_processors(json_output=True)[-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)
        assert "حماية" in renderer(None, "info", {"event": "x", "query": "حماية"})

    def test_console_renderer_in_development(self):
        renderer = build_processors(json_output=False)[-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_context_merged_first(self):
        assert build_processors(json_output=True)[0] is structlog.contextvars.merge_contextvars
