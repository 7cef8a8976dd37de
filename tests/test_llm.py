"""Tests for the k8s_agent.llm package.

Tests cover:
- OpenAIClient: request formatting, retry behavior, auth errors, env config, timeouts
- Protocols: conformance of the built-in client and capabilities
- LLMGenerator: action-calling loop, round limit
- LLMEvaluator: message layout
- Error hierarchy: correct inheritance, error attributes
"""

from __future__ import annotations

import json

import httpx
import pytest

from k8s_agent.exceptions import AgentError
from k8s_agent.llm import (
    EvaluationCapability,
    GenerationCapability,
    LLMAuthError,
    LLMClient,
    LLMClientError,
    LLMConfigError,
    LLMEvaluator,
    LLMGenerator,
    LLMRateLimitError,
    LLMResponseError,
    OpenAIClient,
)
from k8s_agent.llm.capabilities import extract_action_calls, format_action_results
from k8s_agent.toolkit.models import ActionCall, ActionDefinition, ActionResult


# ---------------------------------------------------------------------------
# Fixtures and helpers
# ---------------------------------------------------------------------------

def _success_response(content: str | None = "<div>ok</div>", model: str = "gpt-4o-mini") -> dict:
    """Build a realistic OpenAI chat completion response dict."""
    return {
        "id": "chatcmpl-test123",
        "object": "chat.completion",
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def _tool_call_response(name: str, arguments: dict, call_id: str = "call_1") -> dict:
    return {
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [
                        {
                            "id": call_id,
                            "type": "function",
                            "function": {"name": name, "arguments": json.dumps(arguments)},
                        }
                    ],
                },
                "finish_reason": "tool_calls",
            }
        ],
    }


def _make_client(handler, api_key: str = "test-key", max_retries: int = 3, **kwargs) -> OpenAIClient:
    """Create an OpenAIClient whose HTTP traffic goes to ``handler``."""
    client = OpenAIClient(
        api_key=api_key,
        base_url="http://test-api",
        max_retries=max_retries,
        **kwargs,
    )
    client._client = httpx.Client(
        transport=httpx.MockTransport(handler),
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        },
    )
    return client


@pytest.fixture()
def no_transport_wait(monkeypatch):
    """Skip the client's real exponential waits between HTTP retries."""
    monkeypatch.setattr("tenacity.nap.time.sleep", lambda seconds: None)


class MockLLMClient:
    """A mock LLM client that records calls and replays canned responses."""

    def __init__(self, *responses: dict):
        self.calls: list[dict] = []
        self._responses = list(responses) or [_success_response()]

    def chat(self, messages, *, model=None, temperature=None, max_tokens=None, **kwargs):
        self.calls.append({
            "messages": [dict(m) for m in messages],
            "model": model,
            "temperature": temperature,
            **kwargs,
        })
        index = min(len(self.calls), len(self._responses)) - 1
        return self._responses[index]

    def close(self):
        pass


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class TestErrors:
    @pytest.mark.parametrize(
        "error_cls", [LLMConfigError, LLMRateLimitError, LLMAuthError, LLMResponseError],
    )
    def test_hierarchy(self, error_cls):
        assert issubclass(error_cls, LLMClientError)
        assert issubclass(error_cls, AgentError)

    def test_rate_limit_retry_after(self):
        error = LLMRateLimitError("Rate limited", retry_after=2.5)
        assert error.retry_after == 2.5
        assert str(error) == "Rate limited (retry after 2.5s)"

    def test_rate_limit_without_retry_after(self):
        error = LLMRateLimitError()
        assert error.retry_after is None
        assert str(error) == "Rate limited"


# ---------------------------------------------------------------------------
# OpenAIClient
# ---------------------------------------------------------------------------


class TestOpenAIClientConfig:
    def test_explicit_api_key(self):
        client = OpenAIClient(api_key="sk-explicit")
        assert client._api_key == "sk-explicit"
        client.close()

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("K8S_AGENT_OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("K8S_AGENT_OPENAI_BASE_URL", "http://proxy.local/v1/")
        client = OpenAIClient()
        assert client._api_key == "sk-env"
        assert client._base_url == "http://proxy.local/v1"
        client.close()

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("K8S_AGENT_OPENAI_API_KEY", raising=False)
        with pytest.raises(LLMConfigError, match="K8S_AGENT_OPENAI_API_KEY"):
            OpenAIClient()

    def test_default_base_url(self, monkeypatch):
        monkeypatch.delenv("K8S_AGENT_OPENAI_BASE_URL", raising=False)
        client = OpenAIClient(api_key="k")
        assert client._base_url == "https://api.openai.com/v1"
        client.close()

    def test_default_timeouts(self):
        client = OpenAIClient(api_key="k")
        assert client.timeout.connect == 100.0
        assert client.timeout.read == 600.0
        client.close()

    def test_custom_timeouts(self):
        client = OpenAIClient(api_key="k", connect_timeout=5.0, read_timeout=30.0)
        assert client.timeout.connect == 5.0
        assert client.timeout.read == 30.0
        client.close()

    def test_context_manager(self):
        with OpenAIClient(api_key="k") as client:
            assert isinstance(client, OpenAIClient)
        assert client._client.is_closed


class TestOpenAIClientChat:
    def test_request_format(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_success_response())

        client = _make_client(handler, default_model="gpt-4o")
        response = client.chat(
            [{"role": "user", "content": "list pods"}],
            temperature=0.2,
            tools=[{"type": "function"}],
        )

        assert captured["url"] == "http://test-api/chat/completions"
        assert captured["auth"] == "Bearer test-key"
        assert captured["body"]["model"] == "gpt-4o"
        assert captured["body"]["temperature"] == 0.2
        assert captured["body"]["tools"] == [{"type": "function"}]
        assert "max_tokens" not in captured["body"]
        assert OpenAIClient.extract_content(response) == "<div>ok</div>"
        client.close()

    def test_model_override(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content)["model"])
            return httpx.Response(200, json=_success_response())

        client = _make_client(handler)
        client.chat([{"role": "user", "content": "x"}], model="gpt-4.1")
        assert seen == ["gpt-4.1"]
        client.close()

    def test_auth_error_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(401, json={"error": "bad key"})

        client = _make_client(handler)
        with pytest.raises(LLMAuthError, match="HTTP 401"):
            client.chat([{"role": "user", "content": "x"}])
        assert len(calls) == 1
        client.close()

    def test_missing_choices(self):
        client = _make_client(lambda request: httpx.Response(200, json={"id": "x"}))
        with pytest.raises(LLMResponseError, match="missing 'choices'"):
            client.chat([{"role": "user", "content": "x"}])
        client.close()

    def test_client_error_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(400, json={"error": "bad request"})

        client = _make_client(handler)
        with pytest.raises(httpx.HTTPStatusError):
            client.chat([{"role": "user", "content": "x"}])
        assert len(calls) == 1
        client.close()


class TestOpenAIClientRetry:
    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_retry_then_success(self, status, no_transport_wait):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) == 1:
                return httpx.Response(status, json={"error": "transient"})
            return httpx.Response(200, json=_success_response())

        client = _make_client(handler, max_retries=3)
        response = client.chat([{"role": "user", "content": "x"}])
        assert len(calls) == 2
        assert "choices" in response
        client.close()

    def test_rate_limit_exhausted(self, no_transport_wait):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": "slow down"}, headers={"Retry-After": "3"})

        client = _make_client(handler, max_retries=2)
        with pytest.raises(LLMRateLimitError) as exc_info:
            client.chat([{"role": "user", "content": "x"}])
        assert exc_info.value.retry_after == 3.0
        client.close()

    def test_single_attempt(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(503, json={"error": "unavailable"})

        client = _make_client(handler, max_retries=1)
        with pytest.raises(httpx.HTTPStatusError):
            client.chat([{"role": "user", "content": "x"}])
        assert len(calls) == 1
        client.close()

    def test_connect_error_retried(self, no_transport_wait):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=_success_response())

        client = _make_client(handler, max_retries=2)
        client.chat([{"role": "user", "content": "x"}])
        assert len(calls) == 2
        client.close()


class TestExtractors:
    def test_extract_content(self):
        assert OpenAIClient.extract_content(_success_response("hi")) == "hi"

    def test_null_content_is_empty(self):
        assert OpenAIClient.extract_content(_success_response(None)) == ""

    def test_bad_format(self):
        with pytest.raises(LLMResponseError):
            OpenAIClient.extract_content({"choices": []})

    def test_extract_usage(self):
        assert OpenAIClient.extract_usage(_success_response())["total_tokens"] == 15
        assert OpenAIClient.extract_usage({"choices": []}) is None


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class TestProtocols:
    def test_openai_client_conforms(self):
        client = OpenAIClient(api_key="k")
        assert isinstance(client, LLMClient)
        client.close()

    def test_capabilities_conform(self):
        client = MockLLMClient()
        assert isinstance(LLMGenerator(client), GenerationCapability)
        assert isinstance(LLMEvaluator(client), EvaluationCapability)

    def test_generator_is_not_evaluator(self):
        assert not isinstance(LLMGenerator(MockLLMClient()), EvaluationCapability)


# ---------------------------------------------------------------------------
# Action call helpers
# ---------------------------------------------------------------------------


class TestActionCallHelpers:
    def test_extract_action_calls(self):
        response = _tool_call_response("list_pods", {"namespace": "kube-system"})
        assert extract_action_calls(response) == [
            ActionCall(id="call_1", name="list_pods", arguments={"namespace": "kube-system"}),
        ]

    def test_no_calls(self):
        assert extract_action_calls(_success_response()) == []
        assert extract_action_calls({}) == []

    def test_malformed_arguments(self):
        response = _tool_call_response("list_pods", {})
        response["choices"][0]["message"]["tool_calls"][0]["function"]["arguments"] = "{oops"
        (call,) = extract_action_calls(response)
        assert call.arguments == {}

    def test_format_action_results(self):
        response = _tool_call_response("list_pods", {})
        calls = extract_action_calls(response)
        results = [ActionResult(action_name="list_pods", success=True, output="web-1")]

        messages = format_action_results(response, calls, results)

        assert messages[0]["role"] == "assistant"
        assert messages[0]["tool_calls"][0]["id"] == "call_1"
        assert messages[1] == {"role": "tool", "tool_call_id": "call_1", "content": "web-1"}

    def test_format_does_not_alias_response(self):
        response = _tool_call_response("list_pods", {})
        messages = format_action_results(response, extract_action_calls(response), [
            ActionResult(action_name="list_pods", success=False, error="denied"),
        ])
        messages[0]["content"] = "changed"
        assert response["choices"][0]["message"]["content"] is None
        assert messages[1]["content"] == "Error: denied"


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


def _list_pods_action(calls: list) -> ActionDefinition:
    def handler(namespace: str = "default") -> str:
        calls.append(namespace)
        return f"web-1 ({namespace})"

    return ActionDefinition(
        name="list_pods",
        description="List pods in a namespace",
        parameters={
            "type": "object",
            "properties": {"namespace": {"type": "string"}},
        },
        handler=handler,
    )


class TestLLMGenerator:
    def test_plain_answer(self):
        client = MockLLMClient(_success_response("<div>pods</div>"))
        generator = LLMGenerator(client, model="gpt-4o", temperature=0.1)

        text = generator.generate("list pods", "system rules")

        assert text == "<div>pods</div>"
        (call,) = client.calls
        assert call["messages"] == [
            {"role": "system", "content": "system rules"},
            {"role": "user", "content": "list pods"},
        ]
        assert call["model"] == "gpt-4o"
        assert call["temperature"] == 0.1
        assert "tools" not in call

    def test_executes_requested_actions(self):
        handled = []
        action = _list_pods_action(handled)
        client = MockLLMClient(
            _tool_call_response("list_pods", {"namespace": "payments"}),
            _success_response("<div>web-1</div>"),
        )

        text = LLMGenerator(client).generate("list pods", "rules", [action])

        assert text == "<div>web-1</div>"
        assert handled == ["payments"]
        assert len(client.calls) == 2
        assert client.calls[0]["tools"] == [action.to_openai()]
        followup = client.calls[1]["messages"]
        assert followup[2]["role"] == "assistant"
        assert followup[3] == {
            "role": "tool",
            "tool_call_id": "call_1",
            "content": "web-1 (payments)",
        }

    def test_unknown_action_reported_to_model(self):
        client = MockLLMClient(
            _tool_call_response("delete_cluster", {}),
            _success_response("<div>cannot</div>"),
        )

        LLMGenerator(client).generate("nuke it", "rules", [_list_pods_action([])])

        tool_message = client.calls[1]["messages"][3]
        assert tool_message["content"] == "Error: Unknown action: delete_cluster"

    def test_round_limit(self):
        client = MockLLMClient(_tool_call_response("list_pods", {}))
        generator = LLMGenerator(client, max_tool_rounds=2)

        text = generator.generate("list pods", "rules", [_list_pods_action([])])

        assert text == ""
        assert len(client.calls) == 3

    def test_client_errors_propagate(self):
        class FailingClient(MockLLMClient):
            def chat(self, messages, **kwargs):
                raise LLMRateLimitError("Rate limited")

        with pytest.raises(LLMRateLimitError):
            LLMGenerator(FailingClient()).generate("x", "y")

    def test_uses_client_extractor(self):
        class CustomClient(MockLLMClient):
            def extract_content(self, response):
                return "custom"

        assert LLMGenerator(CustomClient()).generate("x", "y") == "custom"


class TestLLMEvaluator:
    def test_messages(self):
        client = MockLLMClient(_success_response("RATING: PASS"))
        evaluator = LLMEvaluator(client, model="gpt-4o-mini", temperature=0.0)

        assert evaluator.evaluate("judge this", "evaluator rules") == "RATING: PASS"
        (call,) = client.calls
        assert call["messages"] == [
            {"role": "system", "content": "evaluator rules"},
            {"role": "user", "content": "judge this"},
        ]
        assert call["model"] == "gpt-4o-mini"
        assert call["temperature"] == 0.0

    def test_null_content(self):
        client = MockLLMClient(_success_response(None))
        assert LLMEvaluator(client).evaluate("x", "y") == ""
