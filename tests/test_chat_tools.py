"""Tests for the echo and web_search tools (DuckDuckGo mocked)."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

from simple_mcp.infrastructure.chat.tools import ECHO, WEB_SEARCH, echo, make_tool_def, web_search


def test_make_tool_def_shape():
    tool_def = make_tool_def("echo", "Echo it.", {"type": "object", "properties": {}})
    assert tool_def == {
        "type": "function",
        "function": {"name": "echo", "description": "Echo it.", "parameters": {"type": "object", "properties": {}}},
    }


def test_echo():
    assert echo("안녕하세요") == {"echo": "안녕하세요"}


def test_tool_entries():
    echo_def, echo_fn = ECHO
    assert echo_def["function"]["name"] == "echo"
    assert echo_def["function"]["parameters"]["required"] == ["text"]
    assert echo_fn is echo
    search_def, search_fn = WEB_SEARCH
    assert search_def["function"]["name"] == "web_search"
    assert search_def["function"]["parameters"]["required"] == ["query"]
    assert search_fn is web_search


def test_web_search_maps_results():
    ddgs = MagicMock()
    ddgs.__enter__.return_value = ddgs
    ddgs.text.return_value = [
        {"title": "The Go Programming Language", "href": "https://go.dev", "body": "Go is..."},
    ]
    with patch("simple_mcp.infrastructure.chat.tools.DDGS", return_value=ddgs):
        result = web_search("golang")

    ddgs.text.assert_called_once_with("golang", region="wt-wt", max_results=3)
    assert result["query"] == "golang"
    assert result["results"] == [
        {"title": "The Go Programming Language", "href": "https://go.dev", "body": "Go is..."},
    ]
    assert result["ts"].endswith("Z")
