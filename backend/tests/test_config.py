"""
NoteKeeper Backend - Settings and Ambient Stack Tests
======================================================

What:  Settings validators, app factory wiring and access-log level choice.
"""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from notekeeper.config import Settings
from notekeeper.main import create_app
from notekeeper.middleware.logging import level_for_status
from notekeeper.services.note_store import NoteStore


class TestSettings:
    def test_defaults(self):
        s = Settings(_env_file=None)

        assert s.api_prefix == "/api/v1"
        assert s.default_page_limit == 10
        assert s.cors_origins_list == ["*"]

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_bad_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="chatty")

    @pytest.mark.parametrize("raw, expected", [("api/v2/", "/api/v2"), ("/", ""), ("/x", "/x")])
    def test_api_prefix_normalized(self, raw, expected):
        assert Settings(_env_file=None, api_prefix=raw).api_prefix == expected

    def test_cors_origins_split(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")

        assert s.cors_origins_list == ["http://a.test", "http://b.test"]


class TestAppFactory:
    def test_each_app_owns_a_store(self):
        first, second = create_app(), create_app()

        assert isinstance(first.state.note_store, NoteStore)
        assert first.state.note_store is not second.state.note_store

    def test_injected_store_and_prefix(self):
        store = NoteStore()
        app = create_app(Settings(_env_file=None, api_prefix="/v2"), store=store)

        paths = app.openapi()["paths"]
        assert app.state.note_store is store
        assert "/v2/notes" in paths
        assert "/v2/notes/{note_id}/archive" in paths


class TestAccessLogLevel:
    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (204, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_by_status_class(self, status, level):
        assert level_for_status(status) == level
