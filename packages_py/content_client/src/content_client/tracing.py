"""
Console tracing of request/response exchanges using Rich.

Enabled per client with ``trace=True`` or globally with
``CONTENT_CLIENT_TRACE=1``. Output goes to stderr; credentials are masked.
"""
import json
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from .headers import mask_headers
from .serialization import media_type
from .types import MultiHeaders

console = Console(stderr=True)

_LEXERS = {
    "application/json": "json",
    "text/json": "json",
    "application/yaml": "yaml",
    "application/x-yaml": "yaml",
    "text/yaml": "yaml",
    "application/xml": "xml",
    "text/xml": "xml",
    "text/html": "html",
}


def _lexer(content_type: Optional[str]) -> str:
    key = media_type(content_type)
    if key.endswith("+json"):
        return "json"
    return _LEXERS.get(key, "text")


def _format_body(body: bytes, content_type: Optional[str]) -> str:
    """Format body for pretty printing."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return f"<binary data: {len(body)} bytes>"
    if _lexer(content_type) == "json":
        try:
            return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
        except ValueError:
            return text
    return text


def print_request(
    method: str,
    url: str,
    headers: MultiHeaders,
    body: Optional[bytes],
    content_type: Optional[str] = None,
) -> None:
    """Print an outgoing request."""
    console.print(
        Panel(f"[bold cyan]{method}[/bold cyan] {url}", title="[bold blue]Request[/bold blue]")
    )
    console.print("[bold]Headers:[/bold]", mask_headers(headers))
    if body:
        console.print(
            Panel(
                Syntax(_format_body(body, content_type), _lexer(content_type), word_wrap=True),
                title="[bold]Request Body[/bold]",
            )
        )


def print_response(
    url: str,
    status_code: int,
    reason_phrase: str,
    headers: MultiHeaders,
    body: bytes,
    content_type: Optional[str] = None,
) -> None:
    """Print a received response."""
    color = "green" if 200 <= status_code < 300 else "red"
    console.print(
        Panel(
            f"[bold {color}]{status_code}[/bold {color}] {reason_phrase}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
    )
    console.print("[bold]Headers:[/bold]", mask_headers(headers))
    if body:
        console.print(
            Panel(
                Syntax(_format_body(body, content_type), _lexer(content_type), word_wrap=True),
                title=f"[bold]Response Body[/bold] (URL: {url})",
            )
        )
