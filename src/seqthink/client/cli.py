"""CLI client for the seqthink API."""

from __future__ import annotations

import json
import logging
import time
from typing import (
    Any,
    Dict,
    Tuple,
    cast,
)

import httpx

from seqthink.common import (
    AnsiColors,
    colored_print,
)
from seqthink.config import settings
from seqthink.tools import SEQUENTIAL_THINKING_TOOL_NAME

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Enter one thought as a JSON object per line, e.g.
  {"thought": "start", "thought_number": 1, "total_thoughts": 3, "next_thought_needed": true}
Commands: 'tools' lists the tool catalog, 'clear' forgets the history, 'exit' or 'quit' leaves."""


# ---------------------------------------------------------------------------
# CLI Client
# ---------------------------------------------------------------------------
def get_user_message() -> Tuple[str, bool]:
    """
    Get a message from the user via standard input.

    Returns:
        Tuple of (user_input, success_flag)
        The success_flag is False if input couldn't be read (e.g., Ctrl+C)
    """
    import signal  # pylint: disable=import-outside-toplevel

    # Ensure SIGINT breaks out of slow system calls such as read()
    signal.siginterrupt(signal.SIGINT, True)

    try:
        user_input = input().strip()
        return user_input, True
    except (EOFError, KeyboardInterrupt):
        return "", False


def call_api(
    endpoint: str,
    data: Dict[str, Any] | None = None,
    max_retries: int = 5,
    transport: httpx.BaseTransport | None = None,
) -> Dict[str, Any]:
    """
    Call the API and return the decoded JSON response, retrying while the server starts.

    A GET is sent when *data* is None, a POST otherwise.  Errors are reported as
    ``{"error": <message>}`` instead of raising.
    """
    api_url = f"http://localhost:{settings.API_PORT}{endpoint}"

    for attempt in range(max_retries):
        try:
            with httpx.Client(timeout=30.0, transport=transport) as client:
                if data is None:
                    response = client.get(api_url)
                else:
                    response = client.post(api_url, json=data)
                response.raise_for_status()
                return cast(Dict[str, Any], response.json())
        except httpx.HTTPError as e:
            # On connection refused, retry with exponential backoff
            if isinstance(e, httpx.ConnectError) and attempt < max_retries - 1:
                retry_delay = 0.5 * (2**attempt)  # exponential backoff: 0.5s, 1s, 2s, 4s...
                logger.info(
                    "API not ready yet, retrying in %.1f seconds (attempt %d/%d)...",
                    retry_delay,
                    attempt + 1,
                    max_retries,
                )
                time.sleep(retry_delay)
                continue

            logger.error("API request error: %s", str(e))
            error_msg = f"Error connecting to API: {str(e)}"
            if isinstance(e, httpx.HTTPStatusError):
                error_msg = f"API error {e.response.status_code}: {e.response.text}"
            return {"error": error_msg}

    return {"error": f"Failed to connect to API after {max_retries} attempts"}


def submit_thought(
    arguments: Dict[str, Any], transport: httpx.BaseTransport | None = None
) -> Tuple[Dict[str, Any], bool]:
    """
    Send one thought to the sequential thinking tool.

    Returns:
        Tuple of (payload, is_error) where payload is the decoded tool result.
    """
    response = call_api(
        "/tools/call",
        {"name": SEQUENTIAL_THINKING_TOOL_NAME, "arguments": arguments},
        transport=transport,
    )
    if "content" not in response:
        return response, True
    text = response["content"][0]["text"]
    return cast(Dict[str, Any], json.loads(text)), bool(response.get("isError"))


def run_cli() -> None:
    """Run the CLI client that communicates with the API."""
    colored_print("\n🧠 seqthink shell - type 'help' for usage, 'exit' to quit", AnsiColors.GREEN)
    while True:
        colored_print("\n💭 Thought: ", AnsiColors.BLUE, end="")
        user_msg, ok = get_user_message()
        if not ok:
            break  # Exit if user input couldn't be retrieved (e.g., Ctrl+C)
        command = user_msg.lower()
        if command in {"exit", "quit"}:
            break
        if not user_msg:
            continue
        if command == "help":
            colored_print(HELP_TEXT, AnsiColors.YELLOW)
            continue
        if command == "tools":
            tools = call_api("/tools").get("tools", [])
            for tool in tools:
                colored_print(f"- {tool['name']}", AnsiColors.GREEN)
            continue
        if command == "clear":
            call_api("/history/clear", {})
            colored_print("History cleared", AnsiColors.YELLOW)
            continue

        try:
            arguments = json.loads(user_msg)
        except json.JSONDecodeError as exc:
            colored_print(f"⚠️ Not valid JSON: {exc}", AnsiColors.RED)
            continue
        if not isinstance(arguments, dict):
            colored_print("⚠️ A thought must be a JSON object", AnsiColors.RED)
            continue

        payload, is_error = submit_thought(arguments)
        colored_print(
            json.dumps(payload, indent=2, ensure_ascii=False),
            AnsiColors.RED if is_error else AnsiColors.YELLOW,
        )


if __name__ == "__main__":
    run_cli()
