"""Main script for running the news checker from a terminal."""

import asyncio
from typing import Callable, Optional

from rich.console import Console
from rich.panel import Panel

from .domain.models.claim import Claim
from .domain.models.errors import PipelineError
from .domain.models.verdict import CanonicalVerdict
from .infrastructure.dependencies import ServiceContainer

VERDICT_STYLES = {
    "real": "green",
    "fake": "red",
    "uncertain": "yellow",
}

QUIT_COMMANDS = ("quit", "exit", "q")


def render_verdict(console: Console, result: CanonicalVerdict) -> None:
    """Print a verdict panel with red flags and sources."""
    style = VERDICT_STYLES[result.verdict.value]
    console.print(
        Panel(
            result.explanation,
            title=f"{result.verdict.value.upper()} ({result.confidence}%)",
            subtitle=f"evidence: {result.source_mode.value}",
            border_style=style,
        )
    )
    for flag in result.red_flags:
        console.print(f"  [bold red]![/bold red] {flag}")
    for i, source in enumerate(result.sources, 1):
        console.print(f"  {i}. {source.title} [dim]{source.url}[/dim]")


async def run(
    container: Optional[ServiceContainer] = None,
    read_input: Callable[[str], str] = input,
    console: Optional[Console] = None,
) -> None:
    """Run the interactive checker until the user quits."""
    console = console or Console()
    container = container or ServiceContainer()

    console.print("[bold]News Checker[/bold] - claim credibility analysis")
    console.print("-" * 46)

    try:
        while True:
            text = read_input("\nEnter a claim to check (or 'quit' to exit): ")
            if text.strip().lower() in QUIT_COMMANDS:
                break

            try:
                claim = Claim.from_input(text)
                service = await container.get_fact_checking_service()
                with console.status("Checking..."):
                    result = await service.analyze(claim)
                render_verdict(console, result)
            except PipelineError as e:
                console.print(f"[red]Error:[/red] {e.message}")
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        await container.shutdown()


def main() -> None:
    """Console entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
