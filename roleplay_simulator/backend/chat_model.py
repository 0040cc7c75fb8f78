"""Dialogue backend built on a LangChain chat model."""

from __future__ import annotations

import asyncio
import logging
import os

import attrs
import openai
from dotenv import load_dotenv
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from pydantic import SecretStr

from ..defaults import EMPTY_RESPONSE_TEXT
from ..errors import BackendError, BackendErrorKind, MissingCredentialError
from .base import DialogueBackend, SessionHandle

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gpt-4o-mini"

_INVALID_CREDENTIAL_SIGNALS = ("api_key_invalid", "invalid api key", "incorrect api key", "unauthorized")
_QUOTA_SIGNALS = ("quota", "resource_exhausted", "rate limit", "ratelimit")
_OVERLOADED_SIGNALS = ("overloaded", "unavailable")


def classify_exception(error: BaseException) -> BackendErrorKind:
    """Map an exception raised by a chat model to a backend error kind.

    Typed OpenAI errors and HTTP status codes are checked first; other
    providers are recognised by the signals in their error text.
    """
    if isinstance(error, openai.AuthenticationError | openai.PermissionDeniedError):
        return BackendErrorKind.INVALID_CREDENTIAL
    if isinstance(error, openai.RateLimitError):
        return BackendErrorKind.QUOTA_EXCEEDED

    status = getattr(error, "status_code", None) or getattr(error, "code", None)
    if status in (401, 403):
        return BackendErrorKind.INVALID_CREDENTIAL
    if status == 429:
        return BackendErrorKind.QUOTA_EXCEEDED
    if status == 503:
        return BackendErrorKind.SERVICE_OVERLOADED

    text = f"{type(error).__name__} {error}".lower()
    if any(signal in text for signal in _INVALID_CREDENTIAL_SIGNALS):
        return BackendErrorKind.INVALID_CREDENTIAL
    if "429" in text or any(signal in text for signal in _QUOTA_SIGNALS):
        return BackendErrorKind.QUOTA_EXCEEDED
    if "503" in text or any(signal in text for signal in _OVERLOADED_SIGNALS):
        return BackendErrorKind.SERVICE_OVERLOADED
    return BackendErrorKind.UNKNOWN


@attrs.define
class _ChatState:
    instruction: str
    history: list[BaseMessage] = attrs.field(factory=list)
    # Held for a whole turn so overlapping sends see each other in order.
    lock: asyncio.Lock = attrs.field(factory=asyncio.Lock)


@attrs.define
class ChatModelBackend(DialogueBackend):
    """Plays the consumer with a LangChain chat model.

    Each backend session keeps its own history; the session instruction is
    sent as the system message on every turn.

    Args:
        model: Chat model to use, or None when no credential is configured
    """

    model: BaseChatModel | None
    _sessions: dict[str, _ChatState] = attrs.field(init=False, factory=dict)
    _chain: Runnable | None = attrs.field(init=False, default=None)

    @classmethod
    def from_env(cls, model_name: str | None = None, temperature: float = 0.8) -> ChatModelBackend:
        """Build an OpenAI-backed instance from ``OPENAI_API_KEY`` (``.env`` files are honoured).

        A missing key is reported when a session is initialized, not here.
        """
        load_dotenv()
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            logger.warning("OPENAI_API_KEY is not set; sessions cannot be started")
            return cls(model=None)
        model = ChatOpenAI(
            api_key=SecretStr(api_key),
            model=model_name or os.getenv("ROLEPLAY_MODEL", DEFAULT_MODEL_NAME),
            temperature=temperature,
            top_p=0.95,
        )
        return cls(model=model)

    def _get_chain(self) -> Runnable:
        if self._chain is None:
            if self.model is None:
                raise MissingCredentialError("API key is missing")
            prompt = ChatPromptTemplate.from_messages([
                ("system", "{instruction}"),
                ("placeholder", "{history}"),
                ("human", "{message}"),
            ])
            self._chain = prompt | self.model | StrOutputParser()
        return self._chain

    async def initialize_session(self, instruction: str) -> SessionHandle:
        if self.model is None:
            raise MissingCredentialError("API key is missing")
        handle = SessionHandle()
        self._sessions[handle.id] = _ChatState(instruction=instruction)
        logger.info(f"Initialized backend session {handle.id}")
        return handle

    async def send_message(self, handle: SessionHandle, text: str) -> str:
        state = self._sessions.get(handle.id)
        if state is None:
            raise BackendError(BackendErrorKind.UNKNOWN, f"Session {handle.id} is not initialized")
        chain = self._get_chain()
        async with state.lock:
            try:
                reply = await chain.ainvoke({
                    "instruction": state.instruction,
                    "history": list(state.history),
                    "message": text,
                })
            except Exception as e:
                raise BackendError(classify_exception(e), str(e)) from e

            reply = reply.strip() or EMPTY_RESPONSE_TEXT
            state.history.extend([HumanMessage(content=text), AIMessage(content=reply)])
        return reply

    async def close_session(self, handle: SessionHandle) -> None:
        self._sessions.pop(handle.id, None)
