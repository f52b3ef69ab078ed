"""Tests for the QueryParser WSGI middleware."""
import logging

import pytest
from werkzeug.test import Client

from wsgiquery import (
    Config,
    MalformedEscape,
    QueryParser,
    Request,
    query_parser,
    query_populated,
    query_rejected,
    store,
)


def echo_app(environ, start_response):
    request = Request(environ)
    body = (
        f"User: {request.query('username')},"
        f" Book: {request.query('bookname')}"
    ).encode("utf-8")
    start_response("200 OK", [("Content-Type", "text/plain; charset=utf-8")])
    return [body]


class TestQueryParser:
    def test_handler_sees_decoded_values(self):
        client = Client(QueryParser(echo_app))
        resp = client.get("/?username=Alice&bookname=HarryPotter")
        assert resp.status_code == 200
        assert resp.text == "User: Alice, Book: HarryPotter"

    def test_missing_values_are_none(self):
        client = Client(QueryParser(echo_app))
        resp = client.get("/")
        assert resp.text == "User: None, Book: None"

    def test_decodes_plus_and_escapes(self):
        client = Client(QueryParser(echo_app))
        resp = client.get("/?username=John+Doe&bookname=C%2B%2B+Primer")
        assert resp.text == "User: John Doe, Book: C++ Primer"

    def test_utf8_values(self):
        client = Client(QueryParser(echo_app))
        resp = client.get("/?username=caf%C3%A9")
        assert resp.text == "User: café, Book: None"

    def test_populates_before_app_runs(self):
        seen = {}

        def app(environ, start_response):
            seen["populated"] = store.is_populated(environ)
            start_response("204 No Content", [])
            return []

        Client(QueryParser(app)).get("/?a=1")
        assert seen["populated"] is True

    def test_empty_query_is_populated(self):
        seen = {}

        def app(environ, start_response):
            seen["queries"] = store.queries(environ)
            seen["populated"] = store.is_populated(environ)
            start_response("204 No Content", [])
            return []

        Client(QueryParser(app)).get("/")
        assert seen["populated"] is True
        assert seen["queries"] == {}

    def test_repr(self):
        assert repr(QueryParser(echo_app)).startswith("<QueryParser ")


class TestQueryParserRejects:
    def test_malformed_escape_is_bad_request(self):
        called = []

        def app(environ, start_response):
            called.append(True)
            start_response("200 OK", [])
            return [b""]

        resp = Client(QueryParser(app)).get("/?a=%")
        assert resp.status_code == 400
        assert called == []

    def test_invalid_utf8_is_bad_request(self):
        resp = Client(QueryParser(echo_app)).get("/?username=%FF")
        assert resp.status_code == 400

    def test_too_many_params_is_bad_request(self):
        app = QueryParser(echo_app, max_params=2)
        resp = Client(app).get("/?a=1&b=2&c=3")
        assert resp.status_code == 400

    def test_debug_includes_reason(self):
        app = QueryParser(echo_app, Config({"DEBUG": True}))
        resp = Client(app).get("/?username=%ZZ")
        assert resp.status_code == 400
        assert "Malformed percent-escape" in resp.text

    def test_production_hides_reason(self):
        resp = Client(QueryParser(echo_app)).get("/?username=%ZZ")
        assert resp.status_code == 400
        assert "Malformed percent-escape" not in resp.text

    def test_lenient_mode_passes_through(self):
        app = QueryParser(echo_app, strict=False)
        resp = Client(app).get("/?username=%ZZ")
        assert resp.status_code == 200
        assert resp.text == "User: %ZZ, Book: None"

    def test_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="wsgiquery"):
            resp = Client(QueryParser(echo_app)).get("/?username=%")
        assert resp.status_code == 400
        assert "Rejecting query string" in caplog.text


class TestQueryParserConfig:
    def test_config_duplicates(self):
        app = QueryParser(echo_app, Config({"QUERY_DUPLICATES": "first"}))
        resp = Client(app).get("/?username=Alice&username=Bob")
        assert resp.text == "User: Alice, Book: None"

    def test_default_duplicates_last_wins(self):
        resp = Client(QueryParser(echo_app)).get("/?username=Alice&username=Bob")
        assert resp.text == "User: Bob, Book: None"

    def test_plain_mapping_config(self):
        app = QueryParser(echo_app, {"QUERY_SEPARATOR": ";"})
        resp = Client(app).get("/?username=Alice;bookname=Dune")
        assert resp.text == "User: Alice, Book: Dune"

    def test_keyword_overrides_config(self):
        app = QueryParser(echo_app, Config({"QUERY_STRICT": True}), strict=False)
        assert app.options.strict is False

    def test_unknown_keyword(self):
        with pytest.raises(TypeError):
            QueryParser(echo_app, nonsense=True)

    def test_debug_property(self):
        assert QueryParser(echo_app).debug is False
        assert QueryParser(echo_app, {"DEBUG": True}).debug is True


class TestQueryParserDecorator:
    def test_decorator(self):
        @query_parser()
        def app(environ, start_response):
            start_response("200 OK", [("Content-Type", "text/plain")])
            return [Request(environ).query("q", "").encode("utf-8")]

        assert isinstance(app, QueryParser)
        resp = Client(app).get("/?q=hello+world")
        assert resp.text == "hello world"

    def test_decorator_options(self):
        @query_parser(strict=False)
        def app(environ, start_response):
            start_response("200 OK", [("Content-Type", "text/plain")])
            return [Request(environ).query("q", "").encode("utf-8")]

        resp = Client(app).get("/?q=100%")
        assert resp.text == "100%"


class TestQueryParserSignals:
    def test_query_populated(self):
        received = []

        def receiver(sender, environ, queries):
            received.append((sender, queries))

        app = QueryParser(echo_app)
        with query_populated.connected_to(receiver):
            Client(app).get("/?a=1")
        assert len(received) == 1
        assert received[0][0] is app
        assert received[0][1] == {"a": "1"}

    def test_query_rejected(self):
        received = []

        def receiver(sender, environ, error):
            received.append(error)

        with query_rejected.connected_to(receiver):
            Client(QueryParser(echo_app)).get("/?a=%")
        assert len(received) == 1
        assert isinstance(received[0], MalformedEscape)

    def test_sender_filter(self):
        received = []
        app = QueryParser(echo_app)
        other = QueryParser(echo_app)

        def receiver(sender, **kwargs):
            received.append(sender)

        with query_populated.connected_to(receiver, sender=app):
            Client(other).get("/?a=1")
            Client(app).get("/?a=1")
        assert received == [app]


class TestQueryParserBadConfig:
    def test_bad_setting_fails_when_built(self):
        with pytest.raises(ValueError, match="QUERY_MAX_PARAMS"):
            QueryParser(echo_app, {"QUERY_MAX_PARAMS": "abc"})

    def test_bad_keyword_fails_when_built(self):
        with pytest.raises(ValueError, match="QUERY_DUPLICATES"):
            QueryParser(echo_app, duplicates="all")
