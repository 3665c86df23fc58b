"""ffuftree command line entry point."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from ffuftree.models import FfufTreeError, RenderOptions
from ffuftree.source import load_scan_output
from ffuftree.tree_builder import build_tree
from ffuftree.tree_renderer import print_tree

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-f",
    "--file",
    "json_file",
    default=None,
    metavar="PATH",
    help="Path (or http(s) URL) of the JSON file containing ffuf output.",
)
@click.option("--by-host", is_flag=True, help="Group the tree by the host of each result.")
@click.option("--no-color", is_flag=True, help="Disable status colors.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr.")
@click.pass_context
def main(ctx, json_file, by_host, no_color, verbose):
    """ffuftree - show ffuf results as a directory tree.

    Each discovered path is annotated with its HTTP status and response
    length and colored by status class.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not json_file:
        click.echo("Error: -f flag is required.")
        click.echo(ctx.get_help())
        ctx.exit(1)

    options = RenderOptions(by_host=by_host, color=not no_color)

    try:
        raw = load_scan_output(json_file)
        tree = build_tree(raw, by_host=options.by_host)
    except FfufTreeError as exc:
        raise click.ClickException(str(exc)) from exc

    logger.debug("Tree has %d top-level entries", len(tree.children))
    # None leaves the NO_COLOR environment variable in charge
    console = Console(no_color=True if no_color else None, highlight=False)
    print_tree(tree, console, options)


if __name__ == "__main__":
    main()
