"""
Request/response pretty-printing for debugging, switched on with
``AICHAT_DEBUG=true``.
"""
import json
from typing import Any, Dict, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from .config import is_debug_enabled, mask_sensitive

console = Console(stderr=True)

_SENSITIVE_HEADERS = ("authorization", "x-api-key")


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Mask authorization headers for safe logging."""
    masked = dict(headers)
    for key in masked:
        if key.lower() in _SENSITIVE_HEADERS:
            masked[key] = mask_sensitive(masked[key])
    return masked


def format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def print_request(
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: Any = None,
    retries_remaining: Optional[int] = None,
) -> None:
    """Print an outgoing request when debugging is enabled."""
    if not is_debug_enabled():
        return

    info = f"[bold cyan]{method}[/bold cyan] {url}"
    if retries_remaining is not None:
        info += f"  [dim](retries remaining: {retries_remaining})[/dim]"
    console.print(Panel(info, title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", mask_headers(headers))
    if body is not None:
        console.print(
            Panel(
                Syntax(format_body(body), "json", theme="monokai"),
                title="[bold]Request Body[/bold]",
            )
        )


def print_response(
    status: int,
    url: str,
    headers: Mapping[str, str],
    body: Any = None,
) -> None:
    """Print a received response when debugging is enabled."""
    if not is_debug_enabled():
        return

    color = "green" if 200 <= status < 300 else "red"
    console.print(
        Panel(
            f"[bold {color}]{status}[/bold {color}]",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
    )
    console.print("[bold]Headers:[/bold]", dict(headers))
    if body:
        console.print(
            Panel(
                Syntax(format_body(body), "json", theme="monokai"),
                title=f"[bold]Response Body[/bold] (URL: {url})",
            )
        )
