"""
Module: cli.py
Description:
    Typer-based command-line interface over the MyAnimeList and AniList clients.

Usage:
    python cli.py [mal|anilist] [subcommand] [options]

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * MAL_ACCESS_TOKEN (mal commands)
        * ANILIST_ACCESS_TOKEN (anilist whoami/update)
    - `--verbose` shows request logs.
"""

import logging
from datetime import datetime
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from trackers.anilist_api_calls import AniListApiCalls
from trackers.anilist_models import AniListStatus
from trackers.auth_api_call import ApiName
from trackers.mal_api_calls import MalApiCalls
from trackers.mal_models import Sort, Status
from utils.env import token_env_var, validate_env_vars

console = Console()

app = typer.Typer(help="AniSync CLI – sync watch progress with anime trackers.")

# === Sub-apps ===
mal_app = typer.Typer(help="MyAnimeList commands.")
anilist_app = typer.Typer(help="AniList commands.")

app.add_typer(mal_app, name="mal")
app.add_typer(anilist_app, name="anilist")

DATE_FORMATS = ["%Y-%m-%d"]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show request logs."),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def not_found(message: str):
    console.print(f"[yellow]⚠️  {message}[/yellow]")
    raise typer.Exit(code=1)


# === MAL COMMANDS ===
@mal_app.callback()
def mal_main():
    validate_env_vars([token_env_var(ApiName.MAL)])


@mal_app.command("whoami")
def mal_whoami():
    """Show the MyAnimeList user owning the access token."""
    with MalApiCalls() as mal:
        user = mal.get_user_information()
    if user is None:
        not_found("Could not retrieve user information.")

    console.print(f"[bold green]✅ {user.name}[/bold green] [dim](id {user.id})[/dim]")
    if user.location:
        console.print(f"[dim]Location:[/dim] {user.location}")
    if user.joined_at:
        console.print(f"[dim]Joined:[/dim] {user.joined_at:%Y-%m-%d}")


@mal_app.command("search")
def mal_search(
    query: str = typer.Argument(..., help="Title to search for."),
    fields: Optional[List[str]] = typer.Option(None, "--field", help="Extra field to return (repeatable)."),
    nsfw: bool = typer.Option(False, "--nsfw", help="Include NSFW entries."),
):
    """Search MyAnimeList for anime."""
    with MalApiCalls() as mal:
        results = mal.search_anime(query, fields=fields or ["num_episodes"], update_nsfw=nsfw)
    if not results:
        not_found(f"No results found for '{query}'.")

    table = Table(title=f"🔎 MAL results for '{query}'")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Episodes", justify="right")
    for anime in results:
        table.add_row(str(anime.id), anime.title, str(anime.num_episodes or "?"))
    console.print(table)


@mal_app.command("anime")
def mal_anime(
    anime_id: int = typer.Argument(..., help="MyAnimeList anime id."),
    fields: Optional[List[str]] = typer.Option(None, "--field", help="Field to return (repeatable)."),
):
    """Show a single MyAnimeList anime."""
    with MalApiCalls() as mal:
        anime = mal.get_anime(anime_id, fields=fields or ["num_episodes", "my_list_status"])
    if anime is None:
        not_found(f"Anime {anime_id} not found.")

    console.print(f"[bold white]{anime.title}[/bold white] [dim](id {anime.id})[/dim]")
    console.print(f"[dim]Episodes:[/dim] {anime.num_episodes or '?'}")
    if anime.my_list_status:
        status = anime.my_list_status
        console.print(
            f"[dim]List status:[/dim] {status.status.value if status.status else 'N/A'}, "
            f"{status.num_episodes_watched} watched"
        )


@mal_app.command("list")
def mal_list(
    status: Optional[Status] = typer.Option(None, "--status", help="Only entries with this status."),
    sort: Optional[Sort] = typer.Option(None, "--sort", help="Sort order."),
    id_search: Optional[int] = typer.Option(None, "--id", help="Stop at the entry with this anime id."),
):
    """Show the user's anime list (all pages)."""
    with MalApiCalls() as mal:
        entries = mal.get_user_anime_list(status=status, sort=sort, id_search=id_search)
    if not entries:
        not_found("No matching entries on the anime list.")

    table = Table(title="📚 MAL anime list")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Progress", justify="right")
    for entry in entries:
        list_status = entry.list_status
        table.add_row(
            str(entry.anime.id),
            entry.anime.title,
            list_status.status.value if list_status and list_status.status else "N/A",
            f"{list_status.num_episodes_watched if list_status else 0}/{entry.anime.num_episodes or '?'}",
        )
    console.print(table)
    console.print(f"[bold green]✅ Total entries: {len(entries)}[/bold green]")


@mal_app.command("update")
def mal_update(
    anime_id: int = typer.Argument(..., help="MyAnimeList anime id."),
    episodes: int = typer.Argument(..., help="Number of watched episodes."),
    status: Optional[Status] = typer.Option(None, "--status", help="New list status."),
    rewatching: bool = typer.Option(False, "--rewatching/--no-rewatching", help="Mark as rewatching."),
    times_rewatched: Optional[int] = typer.Option(None, "--times-rewatched", help="Number of rewatches."),
    start: Optional[datetime] = typer.Option(None, "--start", formats=DATE_FORMATS, help="Start date."),
    end: Optional[datetime] = typer.Option(None, "--end", formats=DATE_FORMATS, help="Finish date."),
):
    """Update the list status of an anime."""
    with MalApiCalls() as mal:
        response = mal.update_anime_status(
            anime_id,
            episodes,
            status=status,
            is_rewatching=rewatching,
            number_of_times_rewatched=times_rewatched,
            start_date=start.date() if start else None,
            end_date=end.date() if end else None,
        )
    if response is None:
        console.print(f"[bold red]❌ Failed to update anime {anime_id}.[/bold red]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]✅ Updated:[/bold green] {anime_id} → "
        f"{response.status.value if response.status else 'N/A'}, {response.num_episodes_watched} watched"
    )


# === ANILIST COMMANDS ===
@anilist_app.command("whoami")
def anilist_whoami():
    """Show the AniList user owning the access token."""
    validate_env_vars([token_env_var(ApiName.ANILIST)])
    with AniListApiCalls() as anilist:
        user = anilist.get_user_information()
    if user is None:
        not_found("Could not retrieve user information.")

    console.print(f"[bold green]✅ {user.name}[/bold green] [dim](id {user.id})[/dim]")
    if user.site_url:
        console.print(f"[dim]{user.site_url}[/dim]")


@anilist_app.command("search")
def anilist_search(
    title: str = typer.Argument(..., help="Title to search for."),
    per_page: int = typer.Option(10, "--per-page", help="Number of results."),
):
    """Search AniList for anime (no token needed)."""
    with AniListApiCalls() as anilist:
        results = anilist.search_anime(title, per_page=per_page)
    if not results:
        not_found(f"No results found for '{title}'.")

    table = Table(title=f"🔎 AniList results for '{title}'")
    table.add_column("ID", style="cyan")
    table.add_column("MAL ID", style="dim")
    table.add_column("Title")
    table.add_column("Format")
    table.add_column("Year", justify="right")
    for media in results:
        table.add_row(
            str(media.id),
            str(media.id_mal or ""),
            media.title.preferred,
            media.format or "N/A",
            str(media.season_year or "?"),
        )
    console.print(table)


@anilist_app.command("anime")
def anilist_anime(anime_id: int = typer.Argument(..., help="AniList media id.")):
    """Show a single AniList anime."""
    with AniListApiCalls() as anilist:
        media = anilist.get_anime(anime_id)
    if media is None:
        not_found(f"Anime {anime_id} not found.")

    console.print(f"[bold white]{media.title.preferred}[/bold white] [dim](id {media.id})[/dim]")
    console.print(f"[dim]Romaji:[/dim] {media.title.romaji or 'N/A'}")
    console.print(f"[dim]Episodes:[/dim] {media.episodes or '?'}")


@anilist_app.command("update")
def anilist_update(
    media_id: int = typer.Argument(..., help="AniList media id."),
    progress: int = typer.Argument(..., help="Number of watched episodes."),
    status: Optional[AniListStatus] = typer.Option(None, "--status", help="New list status."),
):
    """Update the list progress of an anime."""
    validate_env_vars([token_env_var(ApiName.ANILIST)])
    with AniListApiCalls() as anilist:
        entry = anilist.update_anime_progress(media_id, progress, status=status)
    if entry is None:
        console.print(f"[bold red]❌ Failed to update anime {media_id}.[/bold red]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]✅ Updated:[/bold green] {media_id} → "
        f"{entry.status.value if entry.status else 'N/A'}, progress {entry.progress}"
    )


# === ENTRY POINT ===
if __name__ == "__main__":
    app()
