"""Ollama-based bank lookup.

Asks a self-hosted LLM to identify the bank behind a BIC. Small models
know the large German banks well; unknown or made-up codes are expected to
come back as "Unknown", which is treated the same as any failure.
"""

import json
import logging
import re
from typing import Optional

import httpx

from giro.domain.banking.exceptions import BankLookupError
from giro.domain.banking.ports import BankLookupPort
from giro.domain.banking.value_objects import BankInfo

logger = logging.getLogger(__name__)

UNKNOWN_MARKER = "unknown"


class OllamaBankLookup(BankLookupPort):
    """
    Bank lookup using Ollama for self-hosted LLM inference.

    Sends the BIC to a local Ollama instance and parses the JSON answer
    into a BankInfo.
    """

    DEFAULT_PROMPT_TEMPLATE = """Identify the bank name and city for the BIC (Business Identifier Code): "{bic}".
If the BIC is invalid or fictitious, return "Unknown" for both fields.

Respond with ONLY this JSON format, no additional text:
{{"bankName": "...", "city": "..."}}
"""  # NOQA: E501

    def __init__(
        self,
        model: str = "qwen2.5:1.5b",
        base_url: str = "http://localhost:11434",
        timeout: float = 20.0,
        prompt_template: Optional[str] = None,
    ):
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._prompt_template = prompt_template or self.DEFAULT_PROMPT_TEMPLATE

    @property
    def provider_name(self) -> str:
        return f"ollama:{self._model}"

    @property
    def model_name(self) -> str:
        return self._model

    async def lookup(self, bic: str) -> Optional[BankInfo]:
        try:
            return await self._lookup_with_ollama(bic)
        except Exception as e:
            self._log_lookup_error(bic, e)
            return None

    async def _lookup_with_ollama(self, bic: str) -> Optional[BankInfo]:
        prompt = self._prompt_template.format(bic=bic)
        logger.debug("Bank lookup prompt:\n%s", prompt)

        response_text = await self._call_ollama(prompt)
        if not response_text:
            return None

        logger.debug("Bank lookup response: %s", response_text)
        return self._parse_response(response_text, bic)

    def _log_lookup_error(self, bic: str, e: Exception) -> None:
        if isinstance(e, httpx.TimeoutException):
            logger.warning(
                "Ollama bank lookup for %s timed out after %.1fs",
                bic,
                self._timeout,
            )
        elif isinstance(e, httpx.ConnectError):
            logger.warning(
                "Could not connect to Ollama at %s. Is it running?",
                self._base_url,
            )
        elif isinstance(e, BankLookupError):
            logger.warning("Unusable bank lookup answer for %s: %s", bic, e)
        else:
            logger.warning(
                "Bank lookup failed: %s (type: %s)",
                str(e) or repr(e),
                type(e).__name__,
            )

    async def _call_ollama(self, prompt: str) -> Optional[str]:
        url = f"{self._base_url}/api/generate"

        payload = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
            "options": {
                "temperature": 0.0,
                "num_predict": 100,
            },
        }

        # Allow extra time for model loading (cold start)
        timeout = httpx.Timeout(connect=5.0, read=self._timeout, write=10.0, pool=5.0)
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()

            data = response.json()
            return data.get("response", "")

    def _parse_response(self, response_text: str, bic: str) -> Optional[BankInfo]:
        json_data = self._extract_json(response_text)
        if json_data is None:
            msg = "Response contains no JSON object"
            raise BankLookupError(msg, bic=bic)

        bank_name = json_data.get("bankName")
        city = json_data.get("city")
        if not isinstance(bank_name, str) or not isinstance(city, str):
            msg = "Response is missing bankName or city"
            raise BankLookupError(msg, bic=bic)

        bank_name = bank_name.strip()
        if not bank_name or bank_name.lower() == UNKNOWN_MARKER:
            logger.debug("Ollama does not know BIC %s", bic)
            return None

        city = city.strip()
        if city.lower() == UNKNOWN_MARKER:
            city = ""

        return BankInfo(bank_name=bank_name, city=city)

    def _extract_json(self, text: str) -> Optional[dict]:
        # Try to find JSON in code blocks first
        json_match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
        if json_match:
            try:
                return json.loads(json_match.group(1))
            except json.JSONDecodeError:
                pass

        # Try to find raw JSON object
        json_match = re.search(r"\{[^{}]*\}", text)
        if json_match:
            try:
                return json.loads(json_match.group(0))
            except json.JSONDecodeError:
                pass

        return None
