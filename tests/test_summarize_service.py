import json
import httpx
import pytest

from papernotes.summarize.service import (
    mock_summarize,
    summarize_text,
    summarize_with_groq,
    SYSTEM_PROMPT,
)

def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))

def test_mock_summary_example():
    assert summarize_text("Hello world. This is a test.") == (
        "This note contains 6 words. Hello world. "
        "The note covers key information that has been condensed in this summary."
    )

@pytest.mark.parametrize("text,count,first", [
    ("One two three", 3, "One two three"),
    ("Wow! Such fun? Yes.", 4, "Wow"),
    ("...  Leading dots. then more", 5, "Leading dots"),
    ("", 1, ""),
])
def test_mock_summary_has_count_and_first_sentence(text, count, first):
    out = mock_summarize(text)
    assert f"This note contains {count} words." in out
    assert f" {first}." in out

def test_groq_success_sends_expected_request():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "A short summary."}}]})

    out = summarize_text("Some text.", api_key="k-123", client=_client(handler))
    assert out == "A short summary."
    assert seen["url"].endswith("/chat/completions")
    assert seen["auth"] == "Bearer k-123"
    body = seen["body"]
    assert body["temperature"] == 0.5 and body["max_tokens"] == 200
    assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert body["messages"][1]["content"] == "Summarize the following text:\n\nSome text."

def test_groq_http_error_falls_back():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={"error": "boom"})

    out = summarize_text("Hello world. This is a test.", api_key="k", client=_client(handler))
    assert out.startswith("This note contains 6 words.")
    assert len(calls) == 1  # no retries

def test_groq_transport_error_returns_none():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    assert summarize_with_groq("x", "k", client=_client(handler)) is None

def test_groq_bad_json_returns_none():
    def handler(request):
        return httpx.Response(200, content=b"not json")

    assert summarize_with_groq("x", "k", client=_client(handler)) is None

def test_groq_empty_choice():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"content": ""}}]})

    assert summarize_with_groq("x", "k", client=_client(handler)) == "Failed to generate summary"

def test_no_key_never_calls_out():
    def handler(request):
        raise AssertionError("should not be called")

    out = summarize_text("Plain. Text.", api_key="", client=_client(handler))
    assert out.startswith("This note contains 2 words. Plain.")

@pytest.mark.parametrize("payload", [
    {"choices": {"a": 1}},
    {"choices": 5},
    {"choices": ["not a dict"]},
    {"choices": [{"message": {"content": 42}}]},
    {"choices": [{"message": {"content": ["a", "b"]}}]},
    ["not", "an", "object"],
])
def test_malformed_completion_falls_back(payload):
    def handler(request):
        return httpx.Response(200, json=payload)

    assert summarize_with_groq("x", "k", client=_client(handler)) is None
    out = summarize_text("Hello world. This is a test.", api_key="k", client=_client(handler))
    assert out.startswith("This note contains 6 words. Hello world.")
