import time
from typing import Any, Dict, List, Optional

from groq import Groq
from loguru import logger

from designlens.config import Settings
from designlens.errors import AnalyzerConfigError, NoContentError
from designlens.schemas import ComparisonAnalysis, DesignAnalysis, FlowAnalysis
from designlens.services.assemblers import (
    parse_comparison_analysis,
    parse_design_analysis,
    parse_flow_analysis,
)
from designlens.services.prompts import (
    COMPARISON_PROMPT,
    DESIGN_REVIEW_CONCISE_PROMPT,
    DESIGN_REVIEW_PROMPT,
    FLOW_IMAGE_PROMPT,
    build_flow_text_prompt,
)

Message = Dict[str, Any]


def _image_part(image_url: str) -> Dict[str, Any]:
    return {"type": "image_url", "image_url": {"url": image_url}}


class DesignAnalyzer:
    """
    Sends design screenshots or flow descriptions to Groq and parses the
    answers into analysis records.

    The API key is passed in explicitly; a prebuilt ``client`` (anything with
    ``chat.completions.create``) can be supplied instead.
    """

    provider = "groq"

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        vision_model: str = "meta-llama/llama-4-scout-17b-16e-instruct",
        text_model: str = "llama-3.3-70b-versatile",
        temperature: float = 0.7,
        timeout: float = 60.0,
        max_retries: int = 3,
        client: Any = None,
    ) -> None:
        self.vision_model = vision_model
        self.text_model = text_model
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max(1, max_retries)

        if client is None:
            if not api_key:
                raise AnalyzerConfigError("GROQ_API_KEY is not configured")
            client = Groq(api_key=api_key)
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, client: Any = None) -> "DesignAnalyzer":
        return cls(
            settings.groq_api_key,
            vision_model=settings.vision_model,
            text_model=settings.text_model,
            temperature=settings.temperature,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            client=client,
        )

    # --------------------------------------------
    # Analyses
    # --------------------------------------------
    def analyze_design(self, image_url: str, concise: bool = False) -> DesignAnalysis:
        logger.info("Starting design review (concise={})", concise)
        prompt = DESIGN_REVIEW_CONCISE_PROMPT if concise else DESIGN_REVIEW_PROMPT
        messages = [
            {
                "role": "user",
                "content": [{"type": "text", "text": prompt}, _image_part(image_url)],
            }
        ]
        raw = self._call_groq_with_retry(self.vision_model, messages, max_tokens=500 if concise else 1500)
        return parse_design_analysis(raw)

    def compare_designs(self, your_design_url: str, competitor_design_url: str) -> ComparisonAnalysis:
        logger.info("Starting design comparison")
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": COMPARISON_PROMPT},
                    _image_part(your_design_url),
                    _image_part(competitor_design_url),
                ],
            }
        ]
        raw = self._call_groq_with_retry(self.vision_model, messages, max_tokens=3000)
        return parse_comparison_analysis(raw)

    def analyze_flow_from_image(self, image_url: str) -> FlowAnalysis:
        logger.info("Starting flow analysis from screenshot")
        messages = [
            {
                "role": "user",
                "content": [{"type": "text", "text": FLOW_IMAGE_PROMPT}, _image_part(image_url)],
            }
        ]
        raw = self._call_groq_with_retry(self.vision_model, messages, max_tokens=3000)
        return parse_flow_analysis(raw, from_image=True)

    def analyze_user_flow(self, flow_description: str) -> FlowAnalysis:
        logger.info("Starting flow analysis from description ({} chars)", len(flow_description))
        messages = [{"role": "user", "content": build_flow_text_prompt(flow_description)}]
        raw = self._call_groq_with_retry(self.text_model, messages, max_tokens=2000)
        return parse_flow_analysis(raw, from_image=False)

    # --------------------------------------------
    # Transport
    # --------------------------------------------
    def _call_groq_with_retry(self, model: str, messages: List[Message], max_tokens: int) -> str:
        response = None
        for attempt in range(self.max_retries):
            try:
                response = self._client.chat.completions.create(
                    model=model,
                    temperature=self.temperature,
                    max_tokens=max_tokens,
                    timeout=self.timeout,
                    messages=messages,
                )
                break
            except Exception as e:
                if attempt >= self.max_retries - 1:
                    logger.error("Groq request failed after {} attempts: {}", attempt + 1, e)
                    raise
                wait_time = (attempt + 1) * 3 if "rate_limit" in str(e).lower() else 1
                logger.warning("Groq request failed ({}), retrying in {}s", e, wait_time)
                time.sleep(wait_time)

        content = self._extract_content(response)
        if content is None or not content.strip():
            raise NoContentError()
        logger.debug("Raw model response: {}", content)
        return content.strip()

    @staticmethod
    def _extract_content(response: Any) -> Optional[str]:
        choices = getattr(response, "choices", None)
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None)
