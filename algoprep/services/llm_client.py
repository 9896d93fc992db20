"""
Thin wrapper around the OpenAI client, pointed at DeepSeek.

- complete_json(): one chat completion in JSON mode, parsed into a dict
- stream_chat(): chat completion streamed back as text chunks
"""
import json
import logging
import re
from functools import lru_cache
from typing import Any, Dict, Iterator, List

from openai import OpenAI

from algoprep.config import settings

logger = logging.getLogger(__name__)


class LLMResponseError(ValueError):
    """The model answered, but not with the JSON we asked for."""


@lru_cache(maxsize=1)
def get_client() -> OpenAI:
    if not settings.llm_api_key:
        raise RuntimeError("LLM_API_KEY is not set")
    return OpenAI(api_key=settings.llm_api_key, base_url=settings.llm_base_url)


def parse_json_content(content: str | None) -> Dict[str, Any]:
    if not content:
        raise LLMResponseError("empty completion")
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        # models sometimes wrap the object in prose or a code fence
        match = re.search(r"\{[\s\S]*\}", content)
        if not match:
            raise LLMResponseError("no JSON object in completion")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise LLMResponseError(str(e)) from e

    if not isinstance(data, dict):
        raise LLMResponseError("completion is not a JSON object")
    return data


def complete_json(
    messages: List[Dict[str, str]],
    temperature: float = 0.3,
    max_tokens: int = 1000,
) -> Dict[str, Any]:
    resp = get_client().chat.completions.create(
        model=settings.llm_model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
        response_format={"type": "json_object"},
    )
    return parse_json_content(resp.choices[0].message.content)


def stream_chat(
    messages: List[Dict[str, str]],
    temperature: float = 0.7,
    max_tokens: int = 1000,
) -> Iterator[str]:
    stream = get_client().chat.completions.create(
        model=settings.llm_model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
        stream=True,
    )
    for chunk in stream:
        if not chunk.choices:
            continue
        delta = chunk.choices[0].delta.content
        if delta:
            yield delta
