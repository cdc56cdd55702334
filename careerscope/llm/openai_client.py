from __future__ import annotations
from typing import Any, Dict, Optional

from langchain_openai import ChatOpenAI
from langchain_core.messages import SystemMessage, HumanMessage

from careerscope.settings import Settings


def make_client(
    model: str,
    temperature: float = 0.3,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    base_url: Optional[str] = None,
) -> ChatOpenAI:
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY missing")
    # one attempt per submission; failures surface to the caller
    return ChatOpenAI(
        model=model,
        temperature=temperature,
        api_key=api_key,
        timeout=timeout,
        base_url=base_url,
        max_retries=0,
    )


def client_from_settings(settings: Settings) -> ChatOpenAI:
    return make_client(
        settings.openai_model,
        temperature=settings.temperature,
        api_key=settings.openai_api_key,
        timeout=settings.request_timeout,
        base_url=settings.openai_base_url,
    )


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    # content-block lists: keep only the text parts
    parts = []
    for block in content or []:
        if isinstance(block, dict):
            parts.append(block.get("text", ""))
        elif isinstance(block, str):
            parts.append(block)
    return "".join(parts)


async def structured_json_chat(
    llm: ChatOpenAI,
    system: str,
    user: str,
    schema: Dict[str, Any],
    name: str = "response",
) -> str:
    """Ask for a reply constrained to `schema` and return the raw text, unparsed."""
    bound = llm.bind(
        response_format={
            "type": "json_schema",
            "json_schema": {"name": name, "schema": schema, "strict": True},
        }
    )
    msgs = [SystemMessage(content=system), HumanMessage(content=user)]
    resp = await bound.ainvoke(msgs)
    return _content_text(resp.content)
