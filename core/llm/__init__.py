"""LLM Module - LLM services and interfaces."""
from core.llm.interfaces import LLMProvider
from core.llm.json_parsing import LLMResponseFormatError, extract_json_array, extract_json_object
from core.llm.openai_service import OpenAIService

__all__ = [
    'LLMProvider',
    'OpenAIService',
    'LLMResponseFormatError',
    'extract_json_array',
    'extract_json_object',
]
