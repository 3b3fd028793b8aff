"""LLM service - drafts and categorizes affirmation copy through DashScope (通义千问).

The model is an opaque collaborator: every call has a documented fallback so the
admin panel keeps working when the API is down or answers with malformed JSON.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import yaml

from affirmly.config import settings
from affirmly.models.affirmation import CATEGORIES
from affirmly.schemas.generation import CategorizeResponse, GeneratedAffirmation

logger = logging.getLogger(__name__)

PROMPT_FILE = Path(__file__).parent.parent / "data" / "prompts" / "generator.yaml"

FALLBACK_CATEGORY = "personal-growth"
FALLBACK_TAGS = ["general"]

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class LLMError(RuntimeError):
    pass


def _get_generation():
    """Lazy import of dashscope.Generation to avoid import-time crashes in test."""
    import dashscope
    from dashscope import Generation

    dashscope.api_key = settings.DASHSCOPE_API_KEY
    return Generation


def load_prompts() -> dict:
    """Load prompt templates and model params from the prompts YAML."""
    if not PROMPT_FILE.exists():
        return {}
    with open(PROMPT_FILE, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_json_reply(text: str, opener: str = "[", closer: str = "]"):
    """Parse a model reply as JSON, tolerating code fences and chatter around the payload."""
    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        start, end = cleaned.find(opener), cleaned.rfind(closer)
        if start == -1 or end <= start:
            raise
        return json.loads(cleaned[start:end + 1])


class LLMService:
    def __init__(self):
        self.model = settings.LLM_MODEL
        self._prompts = load_prompts()
        self._model_params = self._prompts.get("model_params", {})

    def fallback_candidate(self, category: str, tags: list[str]) -> GeneratedAffirmation:
        template = self._prompts.get(
            "fallback_template", "I am growing in {category} every day"
        )
        return GeneratedAffirmation(
            content=template.format(category=category.replace("-", " ")),
            category=category,
            tags=list(tags) or list(FALLBACK_TAGS),
            reasoning="Fallback affirmation used because generation failed.",
        )

    def _complete(self, system_prompt: str, prompt: str, temperature: float) -> str:
        """Single non-streaming completion. Raises LLMError on any API failure."""
        if not settings.DASHSCOPE_API_KEY:
            raise LLMError("DASHSCOPE_API_KEY is not configured")

        Generation = _get_generation()
        response = Generation.call(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            result_format="message",
            temperature=temperature,
            top_p=self._model_params.get("top_p", 0.8),
            max_tokens=self._model_params.get("max_tokens", 1500),
        )
        if response.status_code != 200:
            raise LLMError(f"LLM API error: {response.status_code} - {response.message}")
        return response.output.choices[0].message.content or ""

    async def generate(
        self,
        category: str,
        tags: list[str],
        count: int = 5,
        tone: str = "motivational",
    ) -> list[GeneratedAffirmation]:
        """Draft `count` candidate affirmations; one templated candidate on failure."""
        prompt = self._prompts.get("generate_prompt", "").format(
            count=count, category=category, tags=", ".join(tags), tone=tone
        )
        try:
            text = self._complete(
                self._prompts.get("system_prompt", ""),
                prompt,
                self._model_params.get("temperature", 0.8),
            )
            items = parse_json_reply(text)
            if not isinstance(items, list):
                raise LLMError("Expected a JSON array of affirmations")
        except (LLMError, ValueError) as exc:
            logger.warning("Affirmation generation failed for %s: %s", category, exc)
            return [self.fallback_candidate(category, tags)]

        candidates = []
        for item in items[:count]:
            if not isinstance(item, dict) or not str(item.get("content", "")).strip():
                continue
            item_tags = item.get("tags") or tags
            candidates.append(
                GeneratedAffirmation(
                    content=str(item["content"]).strip(),
                    category=category,
                    tags=[str(t) for t in item_tags] if isinstance(item_tags, list) else list(tags),
                    reasoning=str(item.get("reasoning") or ""),
                )
            )

        if not candidates:
            logger.warning("Model returned no usable affirmations for %s", category)
            return [self.fallback_candidate(category, tags)]
        return candidates

    async def categorize(self, content: str) -> CategorizeResponse:
        """Suggest a category and tags for existing copy."""
        fallback = CategorizeResponse(category=FALLBACK_CATEGORY, tags=list(FALLBACK_TAGS))
        prompt = self._prompts.get("categorize_prompt", "").format(
            content=content, categories=", ".join(CATEGORIES)
        )
        try:
            text = self._complete(
                self._prompts.get("categorize_system_prompt", ""), prompt, 0.3
            )
            data = parse_json_reply(text, "{", "}")
        except (LLMError, ValueError) as exc:
            logger.warning("Affirmation categorization failed: %s", exc)
            return fallback

        if not isinstance(data, dict):
            return fallback
        category = data.get("category")
        tags = data.get("tags")
        return CategorizeResponse(
            category=category if category in CATEGORIES else FALLBACK_CATEGORY,
            tags=[str(t) for t in tags] if isinstance(tags, list) and tags else list(FALLBACK_TAGS),
        )


llm_service = LLMService()
