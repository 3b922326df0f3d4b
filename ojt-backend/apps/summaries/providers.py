import json
import logging

from django.conf import settings
from django.db import models
from openai import OpenAI

from apps.core.exceptions import InvalidInput, ProviderError


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You help an On-the-Job-Training trainee write the weekly entry of their training journal. "
    "You receive the week's date range, the hours logged per day, the trainee's daily notes and the total hours. "
    "Write a concise first-person reflection of two to four short paragraphs: what they worked on, "
    "skills they practised, and any challenges or lessons. Mention the total hours for the week. "
    "Only describe activities that appear in the notes. Return only the reflection text."
)


class SummaryProviderName(models.TextChoices):
    GEMINI = "gemini", "Gemini"
    OPENAI = "openai", "OpenAI"


class SummaryProvider:
    """A text-generation backend: week context in, prose out."""

    name: str = ""
    label: str = ""

    def generate(self, context: dict) -> str:
        raise NotImplementedError

    @staticmethod
    def build_messages(context: dict) -> list[dict]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": json.dumps(context, ensure_ascii=False)},
        ]

    def _finish(self, output: str) -> str:
        output = (output or "").strip()
        if not output:
            logger.warning("SUMMARY_PROVIDER_EMPTY_OUTPUT provider=%s", self.name)
            raise ProviderError(f"{self.label} returned an empty response")
        return output


class OpenAISummaryProvider(SummaryProvider):
    name = SummaryProviderName.OPENAI
    label = "OpenAI"

    def __init__(self, client=None):
        self.model = settings.OJT_OPENAI_MODEL
        self.client = client

        if self.client is None and settings.OJT_OPENAI_API_KEY:
            self.client = OpenAI(
                api_key=settings.OJT_OPENAI_API_KEY,
                timeout=settings.OJT_AI_TIMEOUT_SECONDS,
            )

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def generate(self, context: dict) -> str:
        if not self.enabled:
            raise ProviderError("OpenAI API key is not configured")

        try:
            logger.info(
                "OPENAI_SUMMARY_REQUEST model=%s week_start=%s total_hours=%s",
                self.model,
                context.get("week_start"),
                context.get("total_hours"),
            )
            response = self.client.responses.create(
                model=self.model,
                input=self.build_messages(context),
            )
            output = getattr(response, "output_text", "") or ""
        except Exception as exc:
            logger.exception("OpenAI summary generation failed")
            raise ProviderError(str(exc) or exc.__class__.__name__) from exc

        return self._finish(output)


class GeminiSummaryProvider(SummaryProvider):
    """Gemini through Google's OpenAI-compatible chat completions endpoint."""

    name = SummaryProviderName.GEMINI
    label = "Gemini"

    def __init__(self, client=None):
        self.model = settings.OJT_GEMINI_MODEL
        self.client = client

        if self.client is None and settings.OJT_GEMINI_API_KEY:
            self.client = OpenAI(
                api_key=settings.OJT_GEMINI_API_KEY,
                base_url=settings.OJT_GEMINI_BASE_URL,
                timeout=settings.OJT_AI_TIMEOUT_SECONDS,
            )

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def generate(self, context: dict) -> str:
        if not self.enabled:
            raise ProviderError("Gemini API key is not configured")

        try:
            logger.info(
                "GEMINI_SUMMARY_REQUEST model=%s week_start=%s total_hours=%s",
                self.model,
                context.get("week_start"),
                context.get("total_hours"),
            )
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(context),
            )
            choices = getattr(response, "choices", None) or []
            output = choices[0].message.content if choices else ""
        except Exception as exc:
            logger.exception("Gemini summary generation failed")
            raise ProviderError(str(exc) or exc.__class__.__name__) from exc

        return self._finish(output)


PROVIDERS: dict[str, type[SummaryProvider]] = {
    SummaryProviderName.GEMINI.value: GeminiSummaryProvider,
    SummaryProviderName.OPENAI.value: OpenAISummaryProvider,
}


def get_provider(name: str) -> SummaryProvider:
    provider_class = PROVIDERS.get((name or "").strip().lower())
    if provider_class is None:
        raise InvalidInput(f"Unknown summary provider: {name}")
    return provider_class()
