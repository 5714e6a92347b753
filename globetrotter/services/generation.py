"""Text generation capability backed by a LangChain chat model."""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from globetrotter.core.config import ApiSettings

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "xai": "grok-4-fast-reasoning",
    "openai": "gpt-4o-mini",
}


class TextGenerator(Protocol):
    """Anything that turns a prompt into free-form text."""

    async def generate(self, prompt: str) -> str:
        ...


def _content_to_text(content: Any) -> str:
    """Flatten LangChain message content (string or content blocks) to text."""

    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type", "text") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


class ChatModelGenerator:
    """Adapt a chat model to the :class:`TextGenerator` interface."""

    def __init__(self, llm: BaseChatModel) -> None:
        self.llm = llm

    @property
    def model_name(self) -> str:
        return (
            getattr(self.llm, "model_name", None)
            or getattr(self.llm, "model", None)
            or type(self.llm).__name__
        )

    async def generate(self, prompt: str) -> str:
        message = await self.llm.ainvoke([HumanMessage(content=prompt)])
        return _content_to_text(message.content)

    def __repr__(self) -> str:
        return f"ChatModelGenerator(model='{self.model_name}')"


def create_chat_model(settings: ApiSettings) -> BaseChatModel:
    """Instantiate the chat model selected by ``LLM_PROVIDER``."""

    provider = settings.llm_provider
    model = settings.llm_model or DEFAULT_MODELS.get(provider)
    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(model=model, temperature=0.7, api_key=settings.ensure("openai_api_key"))
    if provider == "xai":
        from langchain_xai import ChatXAI

        return ChatXAI(model=model, temperature=0.7, api_key=settings.ensure("xai_api_key"))
    raise ValueError(f"Unsupported LLM provider '{provider}'")


def create_text_generator(settings: ApiSettings) -> Optional[ChatModelGenerator]:
    """Return a generator, or ``None`` when no provider credential is configured."""

    if not settings.llm_api_key:
        logger.critical("No API key configured for LLM provider '%s'", settings.llm_provider)
        return None
    llm = create_chat_model(settings)
    logger.info("Text generation using %s via %s", type(llm).__name__, settings.llm_provider)
    return ChatModelGenerator(llm)
