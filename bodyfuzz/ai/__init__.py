from bodyfuzz.ai.case_generator import AICaseGenerator, AIGenerationError, summarize_categories
from bodyfuzz.ai.llm_client import LLMClient

__all__ = ["AICaseGenerator", "AIGenerationError", "LLMClient", "summarize_categories"]
