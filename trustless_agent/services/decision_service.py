"""
Decision service.

Asks the inference collaborator to classify a request's complexity and
recovers a Decision from whatever it returns: strict and loose JSON parsing,
one extra call when the reply looks truncated, then field scraping. The
Decision is untrusted; pricing is left to the guardrail enforcer.
"""

import logging

from trustless_agent.core.config import Settings
from trustless_agent.core.constants import RAW_PREVIEW_CHARS
from trustless_agent.core.errors import ModelOutputInvalidError
from trustless_agent.schemas.decision import Decision
from trustless_agent.services.inference_client import InferenceClient
from trustless_agent.utils.decision_parser import looks_truncated, parse_decision, scrape_fields

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
You are a backend pricing + analysis engine.

ABSOLUTE OUTPUT RULES (MUST FOLLOW):
- Output ONLY a single valid JSON object.
- Do NOT include markdown.
- Do NOT include any text before or after JSON.
- JSON must be COMPLETE (all braces closed).
- Do NOT truncate.

JSON SCHEMA (EXACT KEYS):
{{
  "complexity": "LOW" | "MEDIUM" | "HIGH",
  "payment_required": boolean,
  "amount_usdc": number,
  "reason": string,
  "analysis": string
}}

PRICING (SERVER WILL ENFORCE ANYWAY):
LOW => 0.00 (payment_required false)
MEDIUM => 0.05
HIGH => 0.10

USER TEXT:
{text}

RETURN ONLY JSON.
"""


def build_prompt(text: str) -> str:
    """Render the fixed classification prompt around the user text."""
    return PROMPT_TEMPLATE.format(text=text).strip()


class DecisionService:
    """Service that turns free-form text into an untrusted Decision."""

    def __init__(self, inference_client: InferenceClient, settings: Settings):
        """
        Initialize the decision service.

        Args:
            inference_client: Model endpoint
            settings: Application settings (temperature, output cap)
        """
        self.inference_client = inference_client
        self.temperature = settings.gemini_temperature
        self.max_output_tokens = settings.gemini_max_output_tokens

    async def _generate(self, prompt: str, attempt: int) -> str:
        logger.info(f"Requesting decision from {self.inference_client.name} (attempt {attempt})")
        return await self.inference_client.generate(
            prompt,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )

    async def request_decision(self, text: str, analysis_only: bool = False) -> Decision:
        """
        Obtain a Decision for the given text.

        Args:
            text: Free-form user text
            analysis_only: Drop the model's payment fields and default
                analysis to "" (pricing is owned by the guardrail)

        Returns:
            Decision, possibly partially populated

        Raises:
            ModelOutputInvalidError: no field could be recovered
        """
        prompt = build_prompt(text)

        raw = await self._generate(prompt, attempt=1)
        decision = parse_decision(raw)

        if decision is None and looks_truncated(raw):
            logger.warning("Model output looks truncated, retrying once")
            raw = await self._generate(prompt, attempt=2)
            decision = parse_decision(raw)

        if decision is None:
            logger.warning("Model output is not valid JSON, scraping fields")
            decision = scrape_fields(raw)

        if decision is None:
            raise ModelOutputInvalidError(
                preview=raw[:RAW_PREVIEW_CHARS],
                truncated=len(raw) > RAW_PREVIEW_CHARS,
            )

        if analysis_only:
            return Decision(
                complexity=decision.complexity,
                reason=decision.reason,
                analysis=decision.analysis or "",
            )

        return decision
