"""
Terminal trace of requests and responses using Rich.

Only used when ``ClientConfig.verbose`` is enabled.
"""
import json
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from .auth import mask_auth_header

console = Console(stderr=True)


def _mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
    masked = dict(headers)
    for key in masked:
        if key.lower() == "authorization":
            masked[key] = mask_auth_header(masked[key])
    return masked


def _format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    return str(body)


def print_request(method: str, url: str, headers: Dict[str, str], body: Optional[str]) -> None:
    console.print(Panel(f"[bold cyan]{method}[/bold cyan] {url}", title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", _mask_headers(headers))
    if body:
        console.print(Panel(Syntax(body, "json", theme="monokai"), title="[bold]Request Body[/bold]"))


def print_response(url: str, status: int, reason: str, data: Any) -> None:
    color = "green" if 200 <= status < 300 else "red"
    console.print(
        Panel(
            f"[bold {color}]{status}[/bold {color}] {reason}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
    )
    if data:
        console.print(Panel(Syntax(_format_body(data), "json", theme="monokai"), title="[bold]Response Body[/bold]"))
