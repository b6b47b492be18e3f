"""Remote extractors: an OpenAI-compatible chat completions API, or an extraction endpoint."""

from __future__ import annotations

import json
from typing import Any

import requests

from . import register
from .base import QueryExtractor
from ..config import Settings, get_settings
from ..errors import ExtractionError
from ..models import ExtractionOutcome, ExtractionResult, TimeRange
from ..temporal import normalize_year

# Keys the service must return; the first two are mandatory
RESPONSE_KEYS = ("start_time", "end_time", "country", "city")
REQUIRED_KEYS = ("start_time", "country")

INSTRUCTIONS = """你是一个时间地点信息提取工具。从用户输入中提取时间和地点，并把模糊的历史时期换算成具体年份。

规则：
1. 只返回一个JSON对象，格式严格为：{"start_time": "开始时间", "end_time": "结束时间", "country": "国家", "city": "城市"}
2. 无法确定的字段返回null
3. country尽量提取，city可以为null
4. 不回答其他问题，不输出JSON以外的任何内容

示例：
- "文艺复兴时期" -> {"start_time": "1400年", "end_time": "1600年", "country": null, "city": null}
- "二战期间的柏林" -> {"start_time": "1939年", "end_time": "1945年", "country": "德国", "city": "柏林"}
- "清朝末年的中国" -> {"start_time": "1840年", "end_time": "1912年", "country": "中国", "city": null}
- "明天" -> {"start_time": "明天", "end_time": null, "country": null, "city": null}"""


def build_messages(utterance: str) -> list[dict[str, str]]:
    """The instruction payload followed by the user's utterance."""
    return [
        {"role": "system", "content": INSTRUCTIONS},
        {"role": "user", "content": utterance},
    ]


def parse_fields(content: str | None) -> dict[str, Any]:
    """
    Parse the model's reply into the four raw fields.

    Raises ExtractionError if the reply is not a JSON object carrying the
    required keys. Optional keys that are missing come back as None.
    """
    if not content:
        raise ExtractionError("Empty response from extraction service")
    text = content.strip()
    # Models sometimes wrap JSON in a fenced block
    if text.startswith("```"):
        text = text.strip("`").strip()
        if text.lower().startswith("json"):
            text = text[4:].strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Response is not JSON: {e}") from e
    return check_fields(parsed)


def check_fields(parsed: Any) -> dict[str, Any]:
    """Validate an already-decoded answer the same way ``parse_fields`` does."""
    if not isinstance(parsed, dict):
        raise ExtractionError("Response is not a JSON object")
    missing = [key for key in REQUIRED_KEYS if key not in parsed]
    if missing:
        raise ExtractionError(f"Response missing keys: {', '.join(missing)}")
    fields = {key: parsed.get(key) for key in RESPONSE_KEYS}
    for key, value in fields.items():
        if value is not None and not isinstance(value, (str, int)):
            raise ExtractionError(f"Field {key} has unexpected type {type(value).__name__}")
    return fields


def _clean_place(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@register
class RemoteExtractor(QueryExtractor):
    """Calls the extraction model once per utterance and normalizes its answer."""

    name = "AI extraction service"
    short_name = "REMOTE"

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def request_fields(self, utterance: str) -> dict[str, Any]:
        """
        Send one request and return the validated raw fields.

        Raises requests exceptions on transport failure and ExtractionError
        on a malformed answer.
        """
        if not self.settings.remote_extraction_enabled:
            raise ExtractionError("Extraction service API key is not configured")

        payload = {
            "model": self.settings.extraction_model,
            "messages": build_messages(utterance),
            "max_tokens": self.settings.extraction_max_tokens,
            "temperature": self.settings.extraction_temperature,
        }
        self._log_info(
            f"Requesting extraction (model={self.settings.extraction_model}, "
            f"timeout={self.settings.extraction_timeout}s)"
        )
        response = requests.post(
            self.settings.extraction_api_url,
            json=payload,
            headers={
                "Authorization": f"Bearer {self.settings.openai_api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.settings.extraction_timeout,
        )
        response.raise_for_status()

        try:
            completion = response.json()
            content = completion["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ExtractionError(f"Unexpected completion body: {e}") from e

        fields = parse_fields(content)
        self._log_info(f"Received fields: {fields}")
        return fields

    def extract(self, utterance: str) -> ExtractionOutcome:
        fields = self.request_fields(utterance)
        result = ExtractionResult(
            start_year=normalize_year(fields["start_time"]),
            end_year=normalize_year(fields["end_time"]),
            country=_clean_place(fields["country"]),
            city=_clean_place(fields["city"]),
        )
        message = describe_result(result, self.settings.baseline)
        return ExtractionOutcome(result=result, message=message, source="remote")


@register
class EndpointExtractor(RemoteExtractor):
    """
    Posts the utterance to an extraction endpoint that answers with the four
    raw fields directly, e.g. this package's own proxy.
    """

    name = "Extraction endpoint"
    short_name = "ENDPOINT"

    def request_fields(self, utterance: str) -> dict[str, Any]:
        url = self.settings.extraction_endpoint_url
        if not url:
            raise ExtractionError("Extraction endpoint URL is not configured")

        self._log_info(f"Requesting extraction from {url} (timeout={self.settings.extraction_timeout}s)")
        response = requests.post(
            url,
            json={"messages": [{"role": "user", "content": utterance}]},
            timeout=self.settings.extraction_timeout,
        )
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            raise ExtractionError(f"Response is not JSON: {e}") from e

        fields = check_fields(body)
        self._log_info(f"Received fields: {fields}")
        return fields


def describe_result(result: ExtractionResult, baseline: TimeRange | None = None) -> str:
    """Confirmation message for a remote extraction."""
    if result.is_empty:
        return "抱歉，我没能从您的描述中识别出时间或地点。"
    parts: list[str] = []
    time_range = result.time_range(baseline)
    if time_range is not None:
        parts.append(f"已设置时间范围为{time_range.start}-{time_range.end}年。")
    if result.country:
        place = f"{result.country}（{result.city}）" if result.city else result.country
        parts.append(f"已定位到{place}。")
    elif result.city:
        parts.append(f"已识别城市{result.city}，但未能确定所属国家。")
    return "".join(parts)
