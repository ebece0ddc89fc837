"""
Command-line adapter for the AI SDK client.

Architectural role:
- Exposes the streaming text endpoint and the MCP endpoint to a terminal.
- Delegates all protocol work to `streaming.client`, `streaming.controller`
  and `mcp.client`.

Commands:
- `ask PROMPT [--system TEXT] [--no-stream]`: one answer, streamed by default.
- `chat [--system TEXT]`: interactive loop; each question streams its answer.
- `mcp-check`: health check, session handshake, tool listing,
  `list_content_types` call, session teardown.

Error handling strategy:
- `AiSdkError` and `httpx.HTTPError` print a message and exit with status 1.
- Keyboard interrupts cancel the running stream and exit without traceback.

Side effects:
- Loads environment variables at import time via `load_dotenv()` (through
  `transport.config`).
- Writes to stdout extensively for operator feedback.
"""

import argparse
import asyncio
import logging
import sys

import httpx

from ai_sdk_client.errors import AiSdkError
from ai_sdk_client.mcp.client import McpSessionClient, tool_text_content
from ai_sdk_client.streaming.client import StreamingRequestClient
from ai_sdk_client.streaming.controller import AskStreamController
from ai_sdk_client.transport.config import ClientConfig
from ai_sdk_client.transport.http import HttpTransport, check_health

EXPECTED_TOOLS = ("list_content_types", "search_content", "write_content")


def _print_fragment(fragment: str) -> None:
    print(fragment, end="", flush=True)


# =========================================================
# ASK
# =========================================================

async def run_ask(config: ClientConfig, prompt: str, system: str | None, stream: bool) -> int:
    async with HttpTransport(config) as transport:
        client = StreamingRequestClient(transport)

        if not stream:
            print(await client.ask(prompt, system=system) or "")
            return 0

        controller = AskStreamController(client, on_fragment=_print_fragment)
        await controller.ask(prompt, system=system)
        print()
        return 0


# =========================================================
# CHAT LOOP
# =========================================================

async def run_chat(config: ClientConfig, system: str | None) -> int:
    """
    Interactive question loop.

    Local commands:
    - `exit` / `quit`: leave the loop.
    - `/system <text>`: replace the system directive (`/system` alone clears it).
    """
    async with HttpTransport(config) as transport:
        controller = AskStreamController(StreamingRequestClient(transport), on_fragment=_print_fragment)

        while True:
            try:
                question = (await asyncio.to_thread(input, "Question: ")).strip()
            except EOFError:
                print()
                break

            if not question:
                continue

            if question.lower() in ("exit", "quit"):
                break

            if question.startswith("/system"):
                system = question[len("/system"):].strip() or None
                print(f"System directive: {system or '(none)'}\n")
                continue

            print("\nResponse:\n")
            try:
                await controller.ask(question, system=system)
            except (AiSdkError, httpx.HTTPError) as err:
                print(f"\nError: {err}")
            print("\n" + "-" * 60 + "\n")

    return 0


# =========================================================
# MCP CHECK
# =========================================================

async def run_mcp_check(config: ClientConfig) -> int:
    print("=" * 50)
    print(f"Base URL: {config.strapi_url}")
    print(f"MCP Endpoint: {config.mcp_url}")
    print("=" * 50)

    async with HttpTransport(config) as transport:
        if not await check_health(transport):
            print(f"Server at {config.strapi_url} is not running or not healthy")
            return 1

        mcp = McpSessionClient(transport)
        session_id = await mcp.create_session()
        print(f"Session created: {session_id}")

        try:
            tools = await mcp.list_tools()
            print(f"Found {len(tools)} tools:")
            for tool in tools:
                print(f"   - {tool.get('name')}: {(tool.get('description') or '')[:60]}")

            names = {tool.get("name") for tool in tools}
            missing = [name for name in EXPECTED_TOOLS if name not in names]
            if missing:
                print(f"Missing tools: {', '.join(missing)}")

            result = await mcp.call_tool("list_content_types")
            parsed = tool_text_content(result)
            if isinstance(parsed, dict):
                content_types = parsed.get("contentTypes") or []
                print(f"Found {len(content_types)} content types")
                for ct in content_types[:5]:
                    print(f"   - {ct.get('uid')} ({ct.get('displayName')})")
                if len(content_types) > 5:
                    print(f"   ... and {len(content_types) - 5} more")
                print(f"Found {len(parsed.get('components') or [])} components")
            else:
                print("list_content_types returned no JSON text content")
        finally:
            await mcp.close_session(session_id)

    return 1 if missing else 0


# =========================================================
# MAIN
# =========================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ai-sdk-client", description="AI SDK plugin client")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Ask one question")
    ask.add_argument("prompt")
    ask.add_argument("--system", default=None, help="System directive forwarded to the model")
    ask.add_argument("--no-stream", action="store_true", help="Wait for the complete answer")

    chat = sub.add_parser("chat", help="Interactive streaming chat")
    chat.add_argument("--system", default=None)

    sub.add_parser("mcp-check", help="Exercise the MCP endpoint")
    return parser


def main(argv=None, config: ClientConfig | None = None) -> int:
    """CLI entrypoint. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = config or ClientConfig()

    if args.command == "ask":
        coro = run_ask(config, args.prompt, args.system, stream=not args.no_stream)
    elif args.command == "chat":
        coro = run_chat(config, args.system)
    else:
        coro = run_mcp_check(config)

    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 0
    except (AiSdkError, httpx.HTTPError) as err:
        print(f"\nError: {err}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
