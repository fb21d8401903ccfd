"""CLI: Typer app wired to the MCP server, the example chat flows and the extractor."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import sys
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from simple_mcp import __version__
from simple_mcp.application.chat_service import BasicChatService
from simple_mcp.application.json_parsing import ExtractionPolicy, extract_and_decode
from simple_mcp.config import load_config
from simple_mcp.domain import SimpleMCPError
from simple_mcp.infrastructure.chat import build_chat_repo
from simple_mcp.infrastructure.logging_setup import setup_logging, trace_context
from simple_mcp.interfaces.mcp_server import run_stdio

app = typer.Typer(help="simple-mcp: hello-world MCP server and local-LLM chat examples (Ollama by default).")

FLOWS = ("basic", "template", "parallel", "branch", "tool", "tool-summary", "graph", "emotion")


def _print_banner(console: Console, name: str, version: str) -> None:
    console.print(Panel.fit(f"[bold]{name}[/bold]  v{version}", subtitle="simple-mcp"))


@app.command()
def serve(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Run the MCP server over stdio (stdout is reserved for the protocol)."""
    config = load_config()
    setup_logging(config.env, verbose=verbose)
    _print_banner(Console(stderr=True), config.server.name, config.server.version)
    run_stdio(config)


async def _run_flow(flow: str, message: str, model_key: str) -> str:
    config = load_config()
    repo = build_chat_repo(config, model_key)
    service = BasicChatService(repo)
    with trace_context():
        if flow == "basic":
            return await service.ask_basic_chat(message)
        if flow == "emotion":
            return await service.ask_basic_prompt_template_chat(message)
        if flow == "template":
            return await repo.ask_prompt_template_chat(message)
        if flow == "parallel":
            return await repo.ask_parallel_chat(message)
        if flow == "tool":
            return await repo.ask_with_tool(message)
        if flow == "tool-summary":
            return await repo.ask_with_tool_and_summary(message)
        if flow == "graph":
            return await repo.ask_with_graph(message)
        return await repo.ask_branch_chat(message)


@app.command()
def ask(
    flow: str = typer.Argument(..., help=f"Example flow to run ({'|'.join(FLOWS)})."),
    message: str = typer.Option("", "--message", "-m", help="Input message for the flow."),
    model_key: str = typer.Option("default", help="Which model profile to use."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Run one example chat flow against the configured LLM and print the answer."""
    config = load_config()
    setup_logging(config.env, verbose=verbose)
    if flow not in FLOWS:
        rprint(f"[red]Unknown flow {flow!r}.[/red] Choose one of: {', '.join(FLOWS)}")
        sys.exit(2)

    try:
        model_cfg = config.model(model_key)
    except KeyError as e:
        rprint(f"[red]{e.args[0]}[/red]")
        sys.exit(1)
    rprint(f"[dim]Using model: {model_cfg.model} at {model_cfg.base_url}[/dim]")

    try:
        answer = asyncio.run(_run_flow(flow, message, model_key))
    except SimpleMCPError as e:
        cause = e.__cause__
        while isinstance(cause, SimpleMCPError) and cause.__cause__ is not None:
            cause = cause.__cause__
        if isinstance(cause, httpx.ConnectError):
            rprint(
                f"[red]LLM server unreachable.[/red]\n"
                f"  URL: {model_cfg.base_url}\n  Error: {escape(str(cause))}\n"
                "  Start your backend (e.g. Ollama: ollama serve)."
            )
        elif isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
            rprint(
                f"[red]Model not found (404).[/red]\n"
                f"  URL: {model_cfg.base_url}\n  Model: {model_cfg.model}\n"
                f"  Pull with: [bold]ollama pull {model_cfg.model}[/bold] or set SIMPLE_MCP_CONFIG_PATH."
            )
        else:
            rprint(f"[red]Error {e.code.value}:[/red] {escape(str(e))}")
        sys.exit(1)

    rprint(Panel.fit(escape(answer) if answer else "[dim](empty answer)[/dim]", title=f"[bold]{flow}[/bold]"))


@app.command()
def extract(
    file: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False, readable=True,
        help="File holding the model output. Reads stdin when omitted.",
    ),
    no_require_object: bool = typer.Option(
        False, "--no-require-object", help="Decode the raw text when no {...} span is found.",
    ),
    naive_braces: bool = typer.Option(
        False, "--naive-braces", help="Count braces inside string literals too.",
    ),
) -> None:
    """Extract and decode the JSON payload from model output."""
    raw = file.read_text(encoding="utf-8") if file is not None else sys.stdin.read()
    policy = ExtractionPolicy.from_config(load_config().extraction)
    if no_require_object:
        policy = dataclasses.replace(policy, require_object=False)
    if naive_braces:
        policy = dataclasses.replace(policy, string_aware=False)

    result = extract_and_decode(raw, None, policy)
    if not result.ok:
        rprint(f"[red]{result.error.kind}[/red]: {escape(str(result.error))}")
        sys.exit(1)
    rprint(f"[dim]source: {result.source}[/dim]", file=sys.stderr)
    print(json.dumps(result.value, indent=2, ensure_ascii=False))


@app.command()
def version() -> None:
    """Print the installed version."""
    print(__version__)
