import json
import logging
import os

import requests
from pydantic import ValidationError

from models import AdOutput, PropertyData
from prompt import AD_TOOL, AD_TOOL_CHOICE, SYSTEM_PROMPT, build_user_prompt

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TIMEOUT = 120  # seconds

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """호출자에게 그대로 전달되는 생성 실패. status_code는 응답 HTTP 상태."""

    status_code = 500
    message = "Failed to generate ad content"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class RateLimitError(GenerationError):
    status_code = 429
    message = "Rate limit exceeded. Please try again in a moment."


class CreditsDepletedError(GenerationError):
    status_code = 402
    message = "AI credits depleted. Please add credits to continue."


class UpstreamError(GenerationError):
    pass


class InvalidResponseError(GenerationError):
    message = "Invalid AI response format"


def build_request_body(property_data: PropertyData, model: str) -> dict:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(property_data)},
        ],
        "tools": [AD_TOOL],
        "tool_choice": AD_TOOL_CHOICE,
    }


def _extract_arguments(data) -> str | None:
    """choices[0].message.tool_calls[0].function.arguments, 없으면 None."""
    try:
        tool_call = data["choices"][0]["message"]["tool_calls"][0]
        arguments = tool_call["function"]["arguments"]
    except (KeyError, IndexError, TypeError):
        return None
    return arguments or None


def generate_ad(
    property_data: PropertyData,
    api_key: str,
    *,
    url: str | None = None,
    model: str | None = None,
    timeout: float | None = None,
) -> AdOutput:
    """게이트웨이 1회 호출로 광고 문구 생성. 재시도 없음."""
    url = url or os.getenv("AI_GATEWAY_URL", DEFAULT_GATEWAY_URL)
    model = model or os.getenv("AI_MODEL", DEFAULT_MODEL)
    if timeout is None:
        timeout = float(os.getenv("AI_TIMEOUT", DEFAULT_TIMEOUT))

    try:
        resp = requests.post(
            url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=build_request_body(property_data, model),
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error(f"AI Gateway 연결 실패: {e}")
        raise UpstreamError() from e

    if not resp.ok:
        logger.error(f"AI Gateway error: {resp.status_code} {resp.text}")
        if resp.status_code == 429:
            raise RateLimitError()
        if resp.status_code == 402:
            raise CreditsDepletedError()
        raise UpstreamError()

    try:
        data = resp.json()
    except ValueError as e:
        logger.error(f"AI 응답 JSON 파싱 실패: {resp.text[:500]}")
        raise InvalidResponseError() from e

    logger.debug(f"AI Response: {json.dumps(data, ensure_ascii=False, indent=2)}")

    arguments = _extract_arguments(data)
    if arguments is None:
        logger.error(f"No tool call in response: {data}")
        raise InvalidResponseError()

    try:
        output = AdOutput.from_arguments(arguments)
    except ValidationError as e:
        logger.error(f"tool call arguments가 스키마와 불일치: {e}")
        raise InvalidResponseError() from e

    logger.info(f"Generated content: {output.short_hook}")
    return output
