"""AI service boundary.

The AI-backed extraction strategy talks to a text-generation provider
only through AIService. Provider implementations build prompts, make
one blocking round trip bounded by a timeout, and hand back raw reply
text. They never raise: any failure becomes an empty JSON array.
"""

import logging
import time
from abc import ABC, abstractmethod
from datetime import date

from ..config import Settings
from ..logging import log_ai_call
from . import prompts

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "[]"


class AIService(ABC):
    """Abstract text-generation service used by the AI strategy.

    extract_* return a JSON array as text (possibly wrapped in Markdown
    code fences), or "[]" on failure.
    """

    @property
    def is_demo_mode(self) -> bool:
        """True when this service never reaches a real provider."""
        return False

    @abstractmethod
    def extract_topics(self, content: str) -> str:
        ...

    @abstractmethod
    def extract_deadlines(self, content: str) -> str:
        ...

    @abstractmethod
    def extract_materials(self, content: str) -> str:
        ...

    @abstractmethod
    def generate_text(self, prompt: str) -> str:
        """Free-form single-value completion."""
        ...


class PromptingAIService(AIService):
    """AIService that builds prompts and delegates completion to a provider.

    Subclasses implement _complete(), which performs the network call and
    may raise; this class converts every failure into an empty reply.
    """

    provider: str = "unknown"

    def __init__(self, settings: Settings):
        """Initialize the service.

        Args:
            settings: Provides model, timeout and content limits
        """
        self.settings = settings

    @abstractmethod
    def _complete(self, prompt: str, json_output: bool) -> str:
        """Send a prompt to the provider and return the reply text."""
        ...

    def extract_topics(self, content: str) -> str:
        prompt = prompts.topic_prompt(self._truncate(content))
        return self._call("topics", prompt, json_output=True)

    def extract_deadlines(self, content: str) -> str:
        prompt = prompts.deadline_prompt(self._truncate(content), self._semester_start())
        return self._call("deadlines", prompt, json_output=True)

    def extract_materials(self, content: str) -> str:
        prompt = prompts.material_prompt(self._truncate(content))
        return self._call("materials", prompt, json_output=True)

    def generate_text(self, prompt: str) -> str:
        return self._call("text", prompt, json_output=False, empty="")

    def _call(self, operation: str, prompt: str, json_output: bool, empty: str = EMPTY_RESPONSE) -> str:
        started = time.perf_counter()
        try:
            result = self._complete(prompt, json_output)
        except Exception as e:
            logger.error(f"{self.provider} {operation} call failed: {e}")
            result = ""

        ok = bool(result and result.strip())
        log_ai_call(
            provider=self.provider,
            operation=operation,
            prompt_chars=len(prompt),
            response_chars=len(result or ""),
            duration_ms=(time.perf_counter() - started) * 1000,
            ok=ok,
        )
        return result if ok else empty

    def _truncate(self, content: str) -> str:
        return prompts.truncate_content(content, self.settings.ai_max_content_length)

    def _semester_start(self) -> date:
        return self.settings.semester_start or prompts.default_semester_start()
