# ABOUTME: Interactive numbered-list prompts for the terminal
# ABOUTME: Supports single lists and remote paged listings with next/back navigation

"""Interactive selection prompts."""

from collections.abc import Callable
from dataclasses import dataclass

from rich.console import Console
from rich.prompt import Prompt


@dataclass
class Page:
    """One page of options from a paged listing."""

    options: list[str]
    next_token: str | None = None


FetchPage = Callable[[str | None], Page | None]
Ask = Callable[[str], str]


def _render(console: Console, description: str, options: list[str], has_next: bool, has_back: bool) -> None:
    console.print(f"\n[bold cyan]{description}[/bold cyan]")
    for index, choice in enumerate(options):
        console.print(f"{index}) {choice}", highlight=False)

    if has_next or has_back:
        console.print()
    if has_next:
        console.print("[dim]Or type 'next' to continue[/dim]")
    if has_back:
        console.print("[dim]Or type 'back' to go back[/dim]")


def _default_ask(console: Console) -> Ask:
    return lambda prompt: Prompt.ask(prompt, console=console)


def _parse_index(answer: str, count: int) -> int | None:
    try:
        index = int(answer)
    except ValueError:
        return None
    return index if 0 <= index < count else None


def select_one(description: str, options: list[str], ask: Ask = None, console: Console = None) -> str:
    """Prompt until the user picks a valid zero-based index from ``options``."""
    console = console or Console()
    ask = ask or _default_ask(console)

    while True:
        _render(console, description, options, has_next=False, has_back=False)
        index = _parse_index(ask("Choice").strip(), len(options))
        if index is not None:
            return options[index]
        console.print("[red]Invalid selection. Try again.[/red]")


def select_one_paged(
    description: str, fetch_page: FetchPage, ask: Ask = None, console: Console = None
) -> str | None:
    """
    Prompt for a choice over a remote paged listing.

    Pages are fetched lazily with ``fetch_page(token)`` and cached by page
    index, so going back replays a page without fetching it again.

    Args:
        description: Heading shown above every page
        fetch_page: Returns a Page for a continuation token, or None when empty
        ask: Reads one line of input (defaults to a rich prompt)
        console: Console used for rendering

    Returns:
        The selected option, or None if the first page has no options
    """
    console = console or Console()
    ask = ask or _default_ask(console)
    pages: dict[int, Page] = {}

    page_index = 0
    token = None
    while True:
        page = pages.get(page_index)
        if page is None:
            page = fetch_page(token)
            if page is None or not page.options:
                if page_index == 0:
                    return None
                # An empty follow-up page: stay on the previous one
                page_index -= 1
                pages[page_index].next_token = None
                continue
            pages[page_index] = page

        has_back = page_index > 0
        _render(console, description, page.options, has_next=bool(page.next_token), has_back=has_back)
        answer = ask("Choice").strip().lower()

        index = _parse_index(answer, len(page.options))
        if index is not None:
            return page.options[index]

        if answer == "next" and page.next_token:
            token = page.next_token
            page_index += 1
            continue

        if answer == "back" and has_back:
            page_index -= 1
            continue

        console.print("[red]Invalid selection. Try again.[/red]")
