from .types import Provider, TokenUsage, LLMResponse
from .interface import ChatAdapter
from .openai_adapter import OpenAIChatAdapter
from .anthropic_adapter import AnthropicChatAdapter
from .factory import get_adapter

__all__ = [
    "Provider",
    "TokenUsage",
    "LLMResponse",
    "ChatAdapter",
    "OpenAIChatAdapter",
    "AnthropicChatAdapter",
    "get_adapter",
]
