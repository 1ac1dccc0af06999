"""
Tests for the request-scoped logging context
"""

from membergraph.logging import (
    add_request_id,
    clear_request_context,
    generate_request_id,
    get_request_id,
    set_request_context,
)


class TestRequestContext:
    def teardown_method(self):
        clear_request_context()

    def test_set_and_clear(self):
        assert set_request_context("abc") == "abc"
        assert get_request_id() == "abc"

        clear_request_context()
        assert get_request_id() is None

    def test_generated_when_missing(self):
        request_id = set_request_context()

        assert request_id
        assert get_request_id() == request_id

    def test_generated_ids_differ(self):
        assert generate_request_id() != generate_request_id()

    def test_processor_adds_request_id(self):
        set_request_context("req-1")

        event = add_request_id(None, "info", {"event": "hello"})

        assert event == {"event": "hello", "request_id": "req-1"}

    def test_processor_without_context(self):
        assert add_request_id(None, "info", {"event": "hello"}) == {"event": "hello"}
