"""Tools the example flows offer to the model: ``echo`` and ``web_search``.

Each tool is an OpenAI function definition plus a plain callable taking the
decoded arguments and returning a JSON-serialisable dict.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Tuple

from duckduckgo_search import DDGS

ECHO_TOOL = "echo"
WEB_SEARCH_TOOL = "web_search"
WEB_SEARCH_MAX_RESULTS = 3


def make_tool_def(
    name: str,
    description: str,
    parameters: Dict[str, Any],
) -> Dict[str, Any]:
    """Build an OpenAI function tool definition dict."""
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": parameters,
        },
    }


def echo(text: str = "") -> Dict[str, Any]:
    return {"echo": text}


def web_search(query: str, max_results: int = WEB_SEARCH_MAX_RESULTS) -> Dict[str, Any]:
    """Search DuckDuckGo (worldwide region) and return title, link and snippet per hit."""
    results = []
    with DDGS() as ddgs:
        for r in ddgs.text(query, region="wt-wt", max_results=max_results):
            results.append({"title": r.get("title"), "href": r.get("href"), "body": r.get("body")})
    return {"query": query, "results": results, "ts": _utc_iso()}


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


ToolEntry = Tuple[Dict[str, Any], Callable[..., Dict[str, Any]]]

ECHO: ToolEntry = (
    make_tool_def(
        ECHO_TOOL,
        "Echo back the given text.",
        {
            "type": "object",
            "properties": {"text": {"type": "string", "description": "Text to echo back."}},
            "required": ["text"],
        },
    ),
    echo,
)

WEB_SEARCH: ToolEntry = (
    make_tool_def(
        WEB_SEARCH_TOOL,
        "Search the public web and return the top results.",
        {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query."},
                "max_results": {
                    "type": "integer",
                    "description": f"Maximum number of results (default {WEB_SEARCH_MAX_RESULTS}).",
                },
            },
            "required": ["query"],
        },
    ),
    web_search,
)
