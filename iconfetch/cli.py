"""Entrypoint for the command line interface."""

import asyncio
import json
import pathlib

import typer

from iconfetch.configs import settings
from iconfetch.configs.app_configs.config_logging import configure_logging
from iconfetch.exceptions import IconLookupError
from iconfetch.icons.cache import IconCache
from iconfetch.icons.models import IconConfig, ValidatedIcon
from iconfetch.icons.resolver import IconResolver
from iconfetch.metrics import get_metrics

cli = typer.Typer(no_args_is_help=True, add_completion=False)

all_option = typer.Option(
    False,
    "--all",
    help="Print every valid icon instead of only the best one",
)

output_option = typer.Option(
    ...,
    "--output",
    "-o",
    help="File the icon bytes are written to",
)


def icon_metadata(icon: ValidatedIcon) -> dict[str, str | int]:
    """Describe an icon without its bytes."""
    return {
        "url": icon.url,
        "iconType": icon.icon_type.value,
        "mimeType": icon.mime_type,
        "length": icon.length,
    }


async def _resolve(url: str, all_icons: bool) -> list[ValidatedIcon]:
    resolver = IconResolver(IconConfig.from_settings(settings.icons), get_metrics())
    try:
        if all_icons:
            return await resolver.find_icons(url)
        return [await resolver.best_icon(url)]
    finally:
        await resolver.close()


async def _fetch(url: str) -> tuple[bytes, str, bool]:
    resolver = IconResolver(IconConfig.from_settings(settings.icons), get_metrics())
    try:
        entry = await resolver.fetch_icon(url)
    finally:
        await resolver.close()
    return entry.content, entry.mime_type, entry.is_cached


@cli.command()
def resolve(url: str, all_icons: bool = all_option):
    """Print the best icon of a page, or all of its valid icons, as JSON."""
    try:
        found = asyncio.run(_resolve(url, all_icons))
    except IconLookupError as e:
        typer.echo(e.external_message, err=True)
        raise typer.Exit(code=1)

    result = [icon_metadata(icon) for icon in found]
    typer.echo(json.dumps(result if all_icons else result[0], indent=2))


@cli.command()
def fetch(url: str, output: pathlib.Path = output_option):
    """Write the bytes of the best icon of a page to a file."""
    try:
        content, mime_type, is_cached = asyncio.run(_fetch(url))
    except IconLookupError as e:
        typer.echo(e.external_message, err=True)
        raise typer.Exit(code=1)

    output.write_bytes(content)
    source = "cache" if is_cached else "network"
    typer.echo(f"Wrote {len(content)} bytes of {mime_type} from {source} to {output}")


@cli.command()
def remove_cached(url: str):
    """Remove the cached icon of a requested URL."""
    cache = IconCache(IconConfig.from_settings(settings.icons))
    if asyncio.run(cache.delete(url)):
        typer.echo(f"Removed cached icon for {url}")
    else:
        typer.echo(f"No cached icon for {url}")


@cli.callback()
def setup():
    """CLI Entrypoint"""
    configure_logging()


if __name__ == "__main__":
    cli()
