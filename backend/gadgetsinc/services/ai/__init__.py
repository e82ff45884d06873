# AI Services Package
# Completion backends (mock, Ollama, Azure OpenAI) and their configuration

from gadgetsinc.services.ai.completion_service import CompletionService
from gadgetsinc.services.ai.conversation import ConversationMessage, Role, StreamChunk
from gadgetsinc.services.ai.latency import LatencyPolicy, NO_DELAY
from gadgetsinc.services.ai.llm_config import build_completion_service
from gadgetsinc.services.ai.mock_completion_service import MockCompletionService
from gadgetsinc.services.ai.ollama_completion_service import OllamaCompletionService
from gadgetsinc.services.ai.openai_completion_service import AzureOpenAICompletionService

__all__ = [
    "CompletionService",
    "ConversationMessage",
    "Role",
    "StreamChunk",
    "LatencyPolicy",
    "NO_DELAY",
    "build_completion_service",
    "MockCompletionService",
    "OllamaCompletionService",
    "AzureOpenAICompletionService",
]
