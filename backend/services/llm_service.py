"""
LLM Service - Edit-suggestion provider backed by different LLM providers
"""

from __future__ import annotations

import asyncio
import re
from contextlib import asynccontextmanager
from typing import Any

import aiohttp

from .exceptions import EditSuggestionError

EDIT_PROMPT = """You are an AI code editing assistant. Apply the instruction to the code below.

INSTRUCTION:
{instruction}

CODE:
```
{code}
```

Return the COMPLETE modified code. Do not use placeholders or comments like "# rest of file".
Keep every line that does not need to change exactly as it is.

Return ONLY the code, no explanations. Wrap in ``` ... ```"""

_CODE_BLOCK = re.compile(r"```[\w+#.-]*[ \t]*\n([\s\S]*?)```")


def extract_code(response: str, original_code: str = "") -> str:
    """Pull the code out of an LLM response, keeping the original's trailing newline convention"""
    code_match = _CODE_BLOCK.search(response)
    if code_match:
        code = code_match.group(1)
    else:
        code = response.strip("\n")

    if original_code.endswith("\n") and not code.endswith("\n"):
        code += "\n"
    elif not original_code.endswith("\n"):
        code = code.rstrip("\n")
    return code


class LLMService:
    """Service for requesting code edits from various LLM providers"""

    def __init__(self, config: dict[str, Any]):
        self.config = config
        self.provider = config.get("provider", "openai")

    # ========== Config Helpers ==========

    def _get_gemini_config(self) -> tuple[str, str]:
        """Get Gemini config: (model, url). Raises if api_key missing."""
        cfg = self.config.get("gemini", {})
        api_key = cfg.get("apiKey")
        if not api_key:
            raise EditSuggestionError("Gemini API key not configured", provider="Gemini")
        model = cfg.get("model", "gemini-2.5-flash")
        url = f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent?key={api_key}"
        return model, url

    def _get_openai_config(self) -> tuple[str, str, dict[str, str]]:
        """Get OpenAI config: (model, url, headers). Raises if api_key missing."""
        cfg = self.config.get("openai", {})
        api_key = cfg.get("apiKey")
        if not api_key:
            raise EditSuggestionError("OpenAI API key not configured", provider="OpenAI")
        model = cfg.get("model", "gpt-4o-mini")
        url = "https://api.openai.com/v1/chat/completions"
        headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
        return model, url, headers

    def _get_vllm_config(self) -> tuple[str, str, dict[str, str]]:
        """Get vLLM config: (model, url, headers)."""
        cfg = self.config.get("vllm", {})
        endpoint = cfg.get("endpoint", "http://localhost:8000")
        model = cfg.get("model", "default")
        url = f"{endpoint}/v1/chat/completions"
        headers = {"Content-Type": "application/json"}
        if cfg.get("apiKey"):
            headers["Authorization"] = f"Bearer {cfg['apiKey']}"
        return model, url, headers

    # ========== Message/Payload Builders ==========

    def build_edit_prompt(self, code: str, instruction: str) -> str:
        """Build the edit prompt for a piece of code"""
        return EDIT_PROMPT.format(code=code, instruction=instruction)

    def _build_openai_payload(
        self,
        model: str,
        messages: list,
        max_tokens: int = 4096,
        temperature: float = 0.0,
    ) -> dict[str, Any]:
        """Build OpenAI-compatible request payload"""
        return {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def _build_gemini_payload(self, prompt: str, max_output_tokens: int = 32768) -> dict[str, Any]:
        """Build Gemini API request payload"""
        cfg = self.config.get("gemini", {})
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": cfg.get("temperature", 0.0),
                "topK": 1,
                "topP": 0.95,
                "maxOutputTokens": max_output_tokens,
            },
        }

    # ========== Transport ==========

    async def _retry_with_backoff(self, operation, max_retries: int = 3, provider: str = "API"):
        """Execute operation with exponential backoff retry logic"""
        for attempt in range(max_retries):
            last_attempt = attempt == max_retries - 1
            try:
                return await operation()
            except asyncio.TimeoutError as e:
                if not last_attempt:
                    wait_time = (2**attempt) * 3
                    print(
                        f"[LLMService] Request timeout. Retrying in {wait_time}s... "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                raise EditSuggestionError(
                    f"{provider} request timeout after {max_retries} retries", provider=provider
                ) from e
            except EditSuggestionError as e:
                # Rate limit (429)
                if e.status == 429:
                    if not last_attempt:
                        wait_time = 40 + (attempt * 20)
                        print(
                            f"[LLMService] Rate limit hit. Waiting {wait_time}s before retry... "
                            f"(attempt {attempt + 1}/{max_retries})"
                        )
                        await asyncio.sleep(wait_time)
                        continue
                    raise EditSuggestionError(
                        f"Rate limit exceeded after {max_retries} retries. "
                        "Please wait a minute and try again.",
                        provider=provider,
                        status=429,
                    ) from e
                # Server overloaded (503)
                if e.status == 503 and not last_attempt:
                    wait_time = (2**attempt) * 5
                    print(
                        f"[LLMService] Server overloaded. Retrying in {wait_time}s... "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                # Other API errors - fail immediately
                raise
            except aiohttp.ClientError as e:
                # Network errors - retry
                if not last_attempt:
                    wait_time = (2**attempt) * 2
                    print(
                        f"[LLMService] Network error: {e}. Retrying in {wait_time}s... "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                raise EditSuggestionError(f"{provider} network error: {e}", provider=provider) from e

    @asynccontextmanager
    async def _request(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
        timeout_seconds: int = 60,
        provider: str = "API",
    ):
        """Context manager for HTTP POST requests with automatic session cleanup"""
        timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, json=payload, headers=headers) as response:
                if response.status != 200:
                    error_text = await response.text()
                    print(f"[LLMService] {provider} API Error ({response.status}): {error_text}")
                    raise EditSuggestionError(
                        f"{provider} API error ({response.status}): {error_text}",
                        provider=provider,
                        status=response.status,
                    )
                yield response

    async def _request_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
        provider: str = "API",
    ) -> dict[str, Any]:
        """Make request (with retries) and return JSON response"""

        async def _execute_request():
            async with self._request(url, payload, headers, provider=provider) as response:
                return await response.json()

        return await self._retry_with_backoff(_execute_request, provider=provider)

    # ========== Response Parsers ==========

    def _parse_openai_response(self, data: dict[str, Any], provider: str = "OpenAI") -> str:
        """Parse OpenAI-compatible response format"""
        if "choices" in data and len(data["choices"]) > 0:
            choice = data["choices"][0]
            if "message" in choice and isinstance(choice["message"].get("content"), str):
                return choice["message"]["content"]
            elif isinstance(choice.get("text"), str):
                return choice["text"]
        raise EditSuggestionError(f"No valid response from {provider} API", provider=provider)

    def _parse_gemini_response(self, data: dict[str, Any]) -> str:
        """Parse Gemini API response format"""
        if "candidates" in data and len(data["candidates"]) > 0:
            candidate = data["candidates"][0]
            if "content" in candidate and "parts" in candidate["content"]:
                parts = candidate["content"]["parts"]
                if len(parts) > 0 and isinstance(parts[0].get("text"), str):
                    return parts[0]["text"]
        raise EditSuggestionError("No valid response from Gemini API", provider="Gemini")

    # ========== Provider Calls ==========

    async def generate_response(self, prompt: str) -> str:
        """Generate a response from the configured LLM provider"""
        if self.provider == "gemini":
            return await self._call_gemini(prompt)
        elif self.provider == "vllm":
            return await self._call_vllm(prompt)
        elif self.provider == "openai":
            return await self._call_openai(prompt)
        else:
            raise EditSuggestionError(f"Unsupported provider: {self.provider}", provider=self.provider)

    async def _call_gemini(self, prompt: str) -> str:
        """Call Google Gemini API"""
        model, url = self._get_gemini_config()
        print(f"[LLMService] Calling Gemini API with model: {model}")
        payload = self._build_gemini_payload(prompt)

        data = await self._request_json(url, payload, provider="Gemini")
        return self._parse_gemini_response(data)

    async def _call_vllm(self, prompt: str) -> str:
        """Call vLLM endpoint with OpenAI Compatible API"""
        model, url, headers = self._get_vllm_config()
        print(f"[LLMService] Calling vLLM endpoint with model: {model}")
        messages = [{"role": "user", "content": prompt}]
        payload = self._build_openai_payload(model, messages)

        data = await self._request_json(url, payload, headers, provider="vLLM")
        return self._parse_openai_response(data, provider="vLLM")

    async def _call_openai(self, prompt: str) -> str:
        """Call OpenAI API"""
        model, url, headers = self._get_openai_config()
        print(f"[LLMService] Calling OpenAI API with model: {model}")
        messages = [{"role": "user", "content": prompt}]
        payload = self._build_openai_payload(model, messages)

        data = await self._request_json(url, payload, headers, provider="OpenAI")
        return self._parse_openai_response(data)

    async def suggest_edit(self, code: str, instruction: str) -> str:
        """Ask the provider for a revised version of `code` following `instruction`"""
        response = await self.generate_response(self.build_edit_prompt(code, instruction))
        revised = extract_code(response, code)
        print(f"[LLMService] Received revised code ({len(revised)} chars)")
        return revised


# ═══════════════════════════════════════════════════════════════════════════
# Module-level helper functions
# ═══════════════════════════════════════════════════════════════════════════


async def suggest_edit(code: str, instruction: str, config: dict[str, Any]) -> str:
    """Convenience function to request an edit with the given config."""
    service = LLMService(config)
    return await service.suggest_edit(code, instruction)
