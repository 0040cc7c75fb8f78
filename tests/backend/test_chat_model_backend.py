"""Tests for the LangChain chat-model backend."""

import asyncio
from typing import Any

import httpx
import openai
import pytest
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from langchain_openai import ChatOpenAI
from pydantic import Field

from roleplay_simulator.backend.base import SessionHandle
from roleplay_simulator.backend.chat_model import ChatModelBackend, classify_exception
from roleplay_simulator.defaults import EMPTY_RESPONSE_TEXT
from roleplay_simulator.errors import BackendError, BackendErrorKind, MissingCredentialError


class FailingChatModel(BaseChatModel):
    """Chat model that always raises the configured error."""

    error: Exception

    @property
    def _llm_type(self) -> str:
        return "failing"

    def _generate(self, messages: list[BaseMessage], stop: list[str] | None = None,
                  run_manager: Any = None, **kwargs: Any) -> ChatResult:
        raise self.error


class SlowRecordingChatModel(BaseChatModel):
    """Chat model that records each prompt and answers r1, r2, ... after a short delay."""

    delay: float = 0.02
    prompts: list[list[str]] = Field(default_factory=list)

    @property
    def _llm_type(self) -> str:
        return "slow-recording"

    def _generate(self, messages: list[BaseMessage], stop: list[str] | None = None,
                  run_manager: Any = None, **kwargs: Any) -> ChatResult:
        raise NotImplementedError("Only async generation is supported")

    async def _agenerate(self, messages: list[BaseMessage], stop: list[str] | None = None,
                         run_manager: Any = None, **kwargs: Any) -> ChatResult:
        self.prompts.append([str(message.content) for message in messages])
        reply = f"r{len(self.prompts)}"
        await asyncio.sleep(self.delay)
        return ChatResult(generations=[ChatGeneration(message=AIMessage(content=reply))])


def _openai_error(error_class: type[openai.APIStatusError], status: int) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return error_class("request failed", response=httpx.Response(status, request=request), body=None)


class TestChatModelBackend:

    @pytest.mark.asyncio
    async def test_replies_and_keeps_history(self) -> None:
        backend = ChatModelBackend(FakeListChatModel(responses=["Halo kak[BREAK]Saya Budi", "Sudah bisa"]))
        handle = await backend.initialize_session("You are a consumer.")

        first = await backend.send_message(handle, "Selamat siang")
        second = await backend.send_message(handle, "Sudah dicoba lagi?")

        assert first == "Halo kak[BREAK]Saya Budi"
        assert second == "Sudah bisa"
        assert backend._sessions[handle.id].history == [
            HumanMessage(content="Selamat siang"),
            AIMessage(content="Halo kak[BREAK]Saya Budi"),
            HumanMessage(content="Sudah dicoba lagi?"),
            AIMessage(content="Sudah bisa"),
        ]

    @pytest.mark.asyncio
    async def test_instruction_with_braces_is_not_a_template(self) -> None:
        backend = ChatModelBackend(FakeListChatModel(responses=["ok"]))
        handle = await backend.initialize_session("Reply with {not a variable}")

        assert await backend.send_message(handle, "Halo") == "ok"

    @pytest.mark.asyncio
    async def test_empty_reply_gets_fallback_text(self) -> None:
        backend = ChatModelBackend(FakeListChatModel(responses=["   "]))
        handle = await backend.initialize_session("You are a consumer.")

        assert await backend.send_message(handle, "Halo") == EMPTY_RESPONSE_TEXT

    @pytest.mark.asyncio
    async def test_missing_model_cannot_initialize(self) -> None:
        with pytest.raises(MissingCredentialError):
            await ChatModelBackend(model=None).initialize_session("You are a consumer.")

    @pytest.mark.asyncio
    async def test_unknown_session_fails(self) -> None:
        backend = ChatModelBackend(FakeListChatModel(responses=["ok"]))

        with pytest.raises(BackendError) as excinfo:
            await backend.send_message(SessionHandle("missing"), "Halo")
        assert excinfo.value.kind == BackendErrorKind.UNKNOWN

    @pytest.mark.asyncio
    async def test_model_failure_is_classified(self) -> None:
        backend = ChatModelBackend(FailingChatModel(error=RuntimeError("429 RESOURCE_EXHAUSTED: quota")))
        handle = await backend.initialize_session("You are a consumer.")

        with pytest.raises(BackendError) as excinfo:
            await backend.send_message(handle, "Halo")

        assert excinfo.value.kind == BackendErrorKind.QUOTA_EXCEEDED
        assert backend._sessions[handle.id].history == []

    @pytest.mark.asyncio
    async def test_close_session_forgets_history(self) -> None:
        backend = ChatModelBackend(FakeListChatModel(responses=["ok"]))
        handle = await backend.initialize_session("You are a consumer.")

        await backend.close_session(handle)

        with pytest.raises(BackendError):
            await backend.send_message(handle, "Halo")

    @pytest.mark.asyncio
    async def test_overlapping_sends_run_in_order(self) -> None:
        model = SlowRecordingChatModel()
        backend = ChatModelBackend(model)
        handle = await backend.initialize_session("You are a consumer.")

        replies = await asyncio.gather(backend.send_message(handle, "m1"), backend.send_message(handle, "m2"))

        assert replies == ["r1", "r2"]
        assert model.prompts[1] == ["You are a consumer.", "m1", "r1", "m2"]
        assert [message.content for message in backend._sessions[handle.id].history] == ["m1", "r1", "m2", "r2"]

    def test_chain_without_model_reports_missing_credential(self) -> None:
        with pytest.raises(MissingCredentialError):
            ChatModelBackend(model=None)._get_chain()

    def test_from_env_without_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("roleplay_simulator.backend.chat_model.load_dotenv", lambda: False)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        assert ChatModelBackend.from_env().model is None

    def test_from_env_with_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("roleplay_simulator.backend.chat_model.load_dotenv", lambda: False)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        backend = ChatModelBackend.from_env(model_name="gpt-4o-mini")

        assert isinstance(backend.model, ChatOpenAI)
        assert backend.model.model_name == "gpt-4o-mini"


class TestClassifyException:

    def test_typed_openai_errors(self) -> None:
        assert classify_exception(_openai_error(openai.AuthenticationError, 401)) == BackendErrorKind.INVALID_CREDENTIAL
        assert classify_exception(_openai_error(openai.RateLimitError, 429)) == BackendErrorKind.QUOTA_EXCEEDED
        assert classify_exception(_openai_error(openai.InternalServerError, 503)) == BackendErrorKind.SERVICE_OVERLOADED
        assert classify_exception(_openai_error(openai.InternalServerError, 500)) == BackendErrorKind.UNKNOWN

    @pytest.mark.parametrize(("message", "kind"), [
        ("API_KEY_INVALID: API key not valid", BackendErrorKind.INVALID_CREDENTIAL),
        ("Error 429: Too Many Requests", BackendErrorKind.QUOTA_EXCEEDED),
        ("You exceeded your current quota", BackendErrorKind.QUOTA_EXCEEDED),
        ("RESOURCE_EXHAUSTED", BackendErrorKind.QUOTA_EXCEEDED),
        ("503 Service Unavailable", BackendErrorKind.SERVICE_OVERLOADED),
        ("The model is overloaded", BackendErrorKind.SERVICE_OVERLOADED),
        ("connection reset by peer", BackendErrorKind.UNKNOWN),
    ])
    def test_text_signals(self, message: str, kind: BackendErrorKind) -> None:
        assert classify_exception(RuntimeError(message)) == kind
