"""Example chat flows against the configured LLM.

Each flow is a short, explicit sequence of awaits: render a prompt, call the
model, post-process the reply.  The template flows decode the model's JSON
reply with the tolerant extractor, so fenced or chatty answers still parse.
The tool flows offer OpenAI function tools to the model and run the calls it
requests locally.
"""

from __future__ import annotations

import asyncio
import datetime
import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import httpx

from simple_mcp.application.json_parsing import ExtractionPolicy, JSONResponseParser
from simple_mcp.application.ports import ChatClient
from simple_mcp.config.schema import ModelConfig
from simple_mcp.domain import (
    AnswerPayload,
    ChatMessage,
    ErrorCode,
    ExtractionError,
    LLMResponse,
    SimpleMCPError,
    ToolCallRequest,
    wrap,
)
from simple_mcp.domain.models import ASSISTANT, TOOL, system_message, user_message

from . import prompts
from .tools import ECHO, WEB_SEARCH, ToolEntry

logger = logging.getLogger(__name__)

DEFAULT_USER = "WonjinSin"
DEFAULT_COMPANY = "Wherever I go"
DEFAULT_EMOTION_MESSAGE = "I'm having a normal day!"
DEFAULT_SEARCH_QUERY = "Go programming development"
DEFAULT_ECHO_TEXT = "안녕하세요"

Message = Union[ChatMessage, Dict[str, Any]]


def _one_year_later(today: datetime.date) -> datetime.date:
    try:
        return today.replace(year=today.year + 1)
    except ValueError:  # 29 February
        return today.replace(year=today.year + 1, day=28)


def _make_assistant_tool_turn(
    content: Optional[str],
    tool_calls: Sequence[ToolCallRequest],
) -> Dict[str, Any]:
    """Build the ``assistant`` message dict for a turn that contains tool calls."""
    return {
        "role": ASSISTANT,
        "content": content,
        "tool_calls": [
            {
                "id": tc.call_id,
                "type": "function",
                "function": {
                    "name": tc.tool_name,
                    "arguments": json.dumps(tc.arguments, ensure_ascii=False),
                },
            }
            for tc in tool_calls
        ],
    }


def _make_tool_result(call_id: str, content: str) -> Dict[str, Any]:
    """Build the ``tool`` message dict for a tool call result."""
    return {"role": TOOL, "tool_call_id": call_id, "content": content}


async def _execute_tool(tools: Mapping[str, ToolEntry], tc: ToolCallRequest) -> Dict[str, Any]:
    """Run one requested tool; failures become an error result for the model."""
    entry = tools.get(tc.tool_name)
    if entry is None:
        logger.warning("Model requested unknown tool %r", tc.tool_name)
        return {"error": "unknown_tool", "message": f"no tool named {tc.tool_name!r}"}
    _, fn = entry
    try:
        # Tools are blocking (network I/O); keep them off the event loop.
        return await asyncio.to_thread(fn, **tc.arguments)
    except TypeError as exc:
        logger.warning("Tool %r called with bad arguments: %s", tc.tool_name, exc)
        return {"error": "invalid_arguments", "message": str(exc)}
    except Exception as exc:  # noqa: BLE001
        logger.warning("Tool %r failed: %s", tc.tool_name, exc)
        return {"error": "unexpected_error", "message": str(exc), "error_type": type(exc).__name__}


class OllamaBasicChatRepo:
    """``BasicChatRepository`` backed by a ``ChatClient``.

    ``today`` is injectable so the date rendered into report prompts is
    deterministic in tests.
    """

    def __init__(
        self,
        chat_client: ChatClient,
        model_config: ModelConfig,
        *,
        policy: Optional[ExtractionPolicy] = None,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self._client = chat_client
        self._model = model_config
        self._answer_parser: JSONResponseParser[AnswerPayload] = JSONResponseParser(
            AnswerPayload, policy or ExtractionPolicy()
        )
        self._today = today

    async def _generate(
        self,
        messages: Sequence[Message],
        tools: Optional[Mapping[str, ToolEntry]] = None,
    ) -> LLMResponse:
        try:
            return await self._client.chat(
                [m.to_dict() if isinstance(m, ChatMessage) else m for m in messages],
                self._model.model,
                tools=[tool_def for tool_def, _ in tools.values()] if tools else None,
                temperature=self._model.temperature,
                top_p=self._model.top_p,
                max_tokens=self._model.max_tokens,
            )
        except (httpx.HTTPError, SimpleMCPError) as e:
            raise wrap(e, "failed to generate content") from e

    async def _call_tools(
        self,
        messages: Sequence[Message],
        tools: Mapping[str, ToolEntry],
    ) -> Tuple[List[Message], List[Dict[str, Any]]]:
        """One tool round: ask the model, run every call it requests.

        Returns the extended conversation and the tool results in call order.

        Raises:
            SimpleMCPError: ``INVALID_PARAMETER`` when the model answers without
                calling any tool.
        """
        resp = await self._generate(messages, tools)
        if not resp.has_tool_calls:
            raise SimpleMCPError(
                ErrorCode.INVALID_PARAMETER,
                f"failed to invoke tools: model called none of {sorted(tools)}",
            )
        history: List[Message] = [*messages, _make_assistant_tool_turn(resp.content, resp.tool_calls)]
        results: List[Dict[str, Any]] = []
        for tc in resp.tool_calls:
            logger.info("tool call %s(%s)", tc.tool_name, tc.arguments)
            result = await _execute_tool(tools, tc)
            results.append(result)
            history.append(_make_tool_result(tc.call_id, json.dumps(result, ensure_ascii=False)))
        return history, results

    def _report_variables(self) -> Dict[str, str]:
        return {
            "user": DEFAULT_USER,
            "company": DEFAULT_COMPANY,
            "date": _one_year_later(self._today()).isoformat(),
        }

    def _report_messages(self, variables: Dict[str, str]) -> List[ChatMessage]:
        return [
            system_message(prompts.SYSTEM_PROMPT_JSON_ONLY),
            user_message(prompts.REPORT_REQUEST_TEMPLATE.format(**variables)),
            user_message(prompts.REPORT_SUBJECT_TEMPLATE.format(**variables)),
        ]

    async def _ask_report(self, variables: Dict[str, str]) -> AnswerPayload:
        resp = await self._generate(self._report_messages(variables))
        try:
            payload = self._answer_parser.parse_message(resp)
        except ExtractionError as e:
            logger.warning("Model reply did not decode (%s): %r", e.kind, (resp.content or "")[:200])
            raise wrap(e, "failed to parse answer") from e
        return payload

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    async def ask_basic_chat(self, msg: str) -> str:  # noqa: ARG002
        messages = [system_message(prompts.SYSTEM_PROMPT_ASSISTANT)]
        messages += [ChatMessage(role, content) for role, content in prompts.BASIC_CHAT_HISTORY]
        resp = await self._generate(messages)
        return resp.content or ""

    async def ask_prompt_template_chat(self, msg: str) -> str:  # noqa: ARG002
        payload = await self._ask_report(self._report_variables())
        return payload.answer

    async def ask_parallel_chat(self, msg: str) -> str:  # noqa: ARG002
        """Run the report flow alongside two local steps; return the upper-cased user."""
        variables = self._report_variables()

        async def length() -> int:
            return len(variables["user"])

        async def upper() -> str:
            return variables["user"].upper()

        report, name_length, upper_name = await asyncio.gather(
            self._ask_report(variables), length(), upper()
        )
        result: Dict[str, Any] = {"ask": report.answer, "length": name_length, "upper": upper_name}
        logger.info("result: %s", result)
        return upper_name

    async def ask_branch_chat(self, msg: str) -> str:
        """Describe a dog when ``msg`` is ``"a"``, a cat otherwise."""
        role = "dog" if msg == "a" else "cat"
        logger.debug("branch chose role=%s", role)
        resp = await self._generate([user_message(prompts.CHARACTER_TEMPLATE.format(role=role))])
        return resp.content or ""

    async def ask_with_tool(self, msg: str) -> str:
        """Let the model search the web for ``msg``, then summarise the results."""
        query = msg.strip() or DEFAULT_SEARCH_QUERY
        tools = {WEB_SEARCH[0]["function"]["name"]: WEB_SEARCH}
        history, _ = await self._call_tools(
            [
                system_message(prompts.SYSTEM_PROMPT_WEB_SEARCH),
                user_message(prompts.WEB_SEARCH_REQUEST_TEMPLATE.format(query=query)),
            ],
            tools,
        )
        resp = await self._generate(history)
        return resp.content or ""

    async def ask_with_tool_and_summary(self, msg: str) -> str:
        """Ask the model to call ``echo``; return the first tool result as JSON."""
        text = msg.strip() or DEFAULT_ECHO_TEXT
        tools = {ECHO[0]["function"]["name"]: ECHO}
        _, results = await self._call_tools(
            [user_message(prompts.ECHO_REQUEST_TEMPLATE.format(text=text))], tools,
        )
        for result in results:
            logger.info("echo result: %s", result)
        return json.dumps(results[0], ensure_ascii=False)

    async def ask_with_graph(self, msg: str) -> str:
        """Two local steps in sequence: greet the name, then mark it processed."""
        state: Dict[str, Any] = {"name": msg.strip() or DEFAULT_USER}

        async def greeting(kvs: Dict[str, Any]) -> Dict[str, Any]:
            return {**kvs, "greeting": f"Hello, {kvs['name']}!"}

        async def process(kvs: Dict[str, Any]) -> str:
            return f"Processed: {kvs['greeting']}"

        return await process(await greeting(state))

    async def ask_emotion_branch(self, msg: str) -> str:
        """Classify the emotion of ``msg`` and answer with the matching canned response."""
        message = msg.strip() or DEFAULT_EMOTION_MESSAGE
        resp = await self._generate([
            system_message(prompts.SYSTEM_PROMPT_EMOTION),
            user_message(prompts.EMOTION_REQUEST_TEMPLATE.format(message=message)),
        ])
        emotion = (resp.content or "").strip().lower()
        response = prompts.EMOTION_RESPONSES.get(emotion)
        if response is None:
            raise SimpleMCPError(
                ErrorCode.INVALID_PARAMETER,
                f"failed to classify emotion: unexpected label {emotion!r}",
            )
        return response
