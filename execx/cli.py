"""
Click CLI for execx.

Debugging helpers that show what a decorated exit error would report:
the rendered command line and the child environment.
"""

from pathlib import Path
from typing import Optional, Tuple

import click

from . import env
from .cmdline import cmdline as render_cmdline
from .config.settings import VERSION, load_settings
from .exceptions import ConfigError
from .utils.logging import configure, error_exit, log_info


@click.group()
@click.version_option(version=VERSION, prog_name="execx")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output (show INFO and WARNING messages)",
)
def cli(verbose: bool) -> None:
    """execx: command line and environment context for exit errors."""
    try:
        settings = load_settings()
    except ConfigError as e:
        error_exit(e.message, e.exit_code)
        return
    settings.verbose = settings.verbose or verbose
    configure(settings)


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("path")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cmdline(path: str, args: Tuple[str, ...]) -> None:
    """Render PATH and ARGS the way exit errors show them.

    ARGS is the full argument vector, starting with the program name.
    """
    argv = list(args) or [path]
    click.echo(render_cmdline(path, argv))


@cli.command("env")
@click.option("--clear", is_flag=True, default=False, help="Start from an empty environment instead of inheriting")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Apply variables from a .env file",
)
@click.argument("pairs", nargs=-1)
def show_env(clear: bool, env_file: Optional[Path], pairs: Tuple[str, ...]) -> None:
    """Show the environment a child process would get.

    PAIRS are KEY=VALUE entries applied last.
    """
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="PAIRS")

    base = {} if clear else env.variables()
    file_vars = {}
    if env_file is not None:
        file_vars = env.load_env_file(env_file)
        log_info(f"Loaded {len(file_vars)} variables from {env_file}")

    child = env.merge(base, file_vars, env.parse(*pairs))
    click.echo(env.format_detail(child), nl=False)


@cli.command()
def version() -> None:
    """Show version information."""
    click.echo(f"execx v{VERSION}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
