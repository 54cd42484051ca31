"""Claude provider -- qualitative project analysis via the Claude Agent SDK."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Optional

from claude_agent_sdk import AssistantMessage, ClaudeAgentOptions, TextBlock, query

from metria.config.settings import Settings
from metria.engine.result import CalculatedMetrics
from metria.errors import MetriaError
from metria.models.analysis import AIAnalysis
from metria.models.inputs import ProjectInputs
from metria.prompts.analysis import SYSTEM_PROMPT, format_analysis_prompt

from .base import AnalysisProvider

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class AnalysisError(MetriaError):
    """The provider reply could not be turned into an AIAnalysis."""


class ClaudeAnalysisProvider(AnalysisProvider):
    """Single-shot, tool-less Claude query bounded by a timeout.

    One attempt per call; no retries. Callers decide what to do on failure.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()

    def _options(self) -> ClaudeAgentOptions:
        env: dict[str, str] = {}
        if self._settings.anthropic_api_key:
            env["ANTHROPIC_API_KEY"] = self._settings.anthropic_api_key
        return ClaudeAgentOptions(
            system_prompt=SYSTEM_PROMPT,
            model=self._settings.analysis_model,
            allowed_tools=[],
            max_turns=1,
            env=env,
        )

    async def analyze(self, inputs: ProjectInputs, metrics: CalculatedMetrics) -> AIAnalysis:
        prompt = format_analysis_prompt(
            inputs, metrics, language=self._settings.analysis_language
        )
        text = await asyncio.wait_for(
            self._collect_text(prompt),
            timeout=self._settings.analysis_timeout_seconds,
        )
        return parse_analysis(text)

    async def health_check(self) -> bool:
        try:
            text = await asyncio.wait_for(
                self._collect_text('Reply with {"ok": true}'),
                timeout=self._settings.analysis_timeout_seconds,
            )
            return bool(text.strip())
        except Exception as e:
            logger.error(f"Claude health check failed: {e}")
            return False

    async def _collect_text(self, prompt: str) -> str:
        chunks: list[str] = []
        async for msg in query(prompt=prompt, options=self._options()):
            if isinstance(msg, AssistantMessage):
                for block in msg.content:
                    if isinstance(block, TextBlock):
                        chunks.append(block.text)
        return "".join(chunks)


def parse_analysis(text: str) -> AIAnalysis:
    """Extract and validate the JSON analysis object from a model reply.

    Handles:
      - a bare JSON object
      - a JSON object inside a ```json fenced block
      - prose around the object
    """
    if not text or not text.strip():
        raise AnalysisError("Empty response from provider")

    candidate = text.strip()
    fenced = _FENCE_RE.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start == -1 or end <= start:
        raise AnalysisError("No JSON object in provider response")

    try:
        payload: Any = json.loads(candidate[start:end + 1])
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Invalid JSON in provider response: {e}") from e

    try:
        return AIAnalysis.model_validate(payload)
    except ValueError as e:
        raise AnalysisError(f"Unexpected analysis shape: {e}") from e
