"""Tests for request body normalization."""

import pytest

from shopal.configs.system import ChatConfig
from shopal.core.errors import MalformedBody
from shopal.api.body import build_chat_request, parse_body

LENIENT = ChatConfig(parsing_mode="lenient")
STRICT = ChatConfig(parsing_mode="strict")


class TestParseBody:
    def test_json_content_type(self):
        assert parse_body(b'{"message": "hi"}', "application/json", strict=False) == {
            "message": "hi"
        }

    def test_content_type_is_case_insensitive(self):
        with pytest.raises(MalformedBody):
            parse_body(b"nope", "Application/JSON; charset=utf-8", strict=False)

    def test_lenient_text_body_parsed_as_json(self):
        assert parse_body(b'{"message": "hi"}', "text/plain", strict=False) == {
            "message": "hi"
        }

    @pytest.mark.parametrize("raw", [b"", b"not json", b"[1, 2]", b"null", b"\xff\xfe"])
    def test_lenient_text_body_falls_back_to_empty(self, raw):
        assert parse_body(raw, "text/plain", strict=False) == {}

    def test_lenient_deeply_nested_text_body_falls_back_to_empty(self):
        assert parse_body(b"[" * 200000, "text/plain", strict=False) == {}

    def test_strict_deeply_nested_body_rejected(self):
        with pytest.raises(MalformedBody, match="Invalid JSON body"):
            parse_body(b"[" * 200000, "application/json", strict=True)

    @pytest.mark.parametrize("raw", [b"", b"not json", b"{oops"])
    def test_strict_rejects_invalid_json(self, raw):
        with pytest.raises(MalformedBody, match="Invalid JSON body"):
            parse_body(raw, "application/json", strict=True)

    def test_strict_ignores_content_type(self):
        assert parse_body(b'{"message": "hi"}', "", strict=True) == {"message": "hi"}

    def test_strict_rejects_non_object(self):
        with pytest.raises(MalformedBody, match="JSON object"):
            parse_body(b"[1, 2]", "application/json", strict=True)


class TestBuildChatRequest:
    def test_defaults(self):
        request = build_chat_request({}, LENIENT)
        assert request.message == ""
        assert request.history == []
        assert request.policies == {}

    @pytest.mark.parametrize(
        "value, expected",
        [(None, ""), ("", ""), (0, ""), (False, ""), (42, "42"), ("hello", "hello")],
    )
    def test_message_coercion(self, value, expected):
        assert build_chat_request({"message": value}, LENIENT).message == expected

    def test_message_truncated(self):
        request = build_chat_request({"message": "x" * 2001}, LENIENT)
        assert request.message == "x" * 2000

    def test_configurable_truncation(self):
        config = ChatConfig(max_message_length=5)
        assert build_chat_request({"message": "abcdefgh"}, config).message == "abcde"

    def test_history_passthrough(self):
        history = [{"role": "user", "content": "hi", "extra": {"k": 1}}]
        assert build_chat_request({"history": history}, STRICT).history == history

    def test_null_history_and_policies(self):
        request = build_chat_request({"history": None, "policies": None}, STRICT)
        assert request.history == []
        assert request.policies == {}

    @pytest.mark.parametrize("config", [LENIENT, STRICT], ids=["lenient", "strict"])
    def test_history_entries_forwarded_untouched(self, config):
        history = ["oops", {"role": "user"}, 7, None]
        assert build_chat_request({"history": history}, config).history == history

    @pytest.mark.parametrize("config", [LENIENT, STRICT], ids=["lenient", "strict"])
    @pytest.mark.parametrize("history", ["oops", {"role": "user"}, 3])
    def test_non_list_history_becomes_empty(self, config, history):
        assert build_chat_request({"history": history}, config).history == []

    def test_non_object_policies_ignored(self):
        assert build_chat_request({"policies": ["a"]}, STRICT).policies == {}
