from case_ingestion.llm.client_base import BaseLLMClient
from case_ingestion.llm.factory import LLMClientFactory
from case_ingestion.llm.invoker import LLMInvoker
from case_ingestion.llm.registry import ModelRegistry, ModelTier, Stage
from case_ingestion.llm.structured import parse_json_response

__all__ = [
    "BaseLLMClient",
    "LLMClientFactory",
    "LLMInvoker",
    "ModelRegistry",
    "ModelTier",
    "Stage",
    "parse_json_response",
]
