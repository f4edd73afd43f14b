"""
Command‑line interface for the scaffold_codemod package.

This module exposes the codemods using :mod:`click`.  Currently there is a
single subcommand:

* ``migrate‑scaffold‑ui‑imports`` – move imports of the legacy
  ``~~/components/scaffold-eth`` components over to
  ``@scaffold-ui/components``.

Point it at a single file or at a directory; directories are searched
recursively for source and Markdown files.  With ``--dry-run`` the planned
changes are reported but nothing is written.
"""

from __future__ import annotations

import logging
import pathlib
import sys

import click

from . import __version__
from .runner import CodemodError, CodemodReport, run_codemod


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def print_report(report: CodemodReport, cwd: pathlib.Path) -> None:
    """Echo the end-of-run summary for ``report``."""
    if report.dry_run:
        header = click.style("Dry run complete", fg="cyan")
    else:
        header = click.style("Codemod complete", fg="green")
    click.echo(f"\n{header}")
    changed = report.files_changed
    plural = "" if changed == 1 else "s"
    simulated = " (simulated)" if report.dry_run else ""
    click.echo(f"{changed} file{plural} updated{simulated}.")
    lines = report.summary_lines(cwd)
    if lines:
        click.echo("\nChanges:")
        for line in lines:
            click.echo(f"  • {line}")


@click.group()
@click.version_option(version=__version__, prog_name="scaffold-codemod")
@click.option("-v", "--verbose", is_flag=True, help="Log every rewritten statement.")
def cli(verbose: bool) -> None:
    """Codemods for projects built on the scaffold-eth templates."""
    _configure_logging(verbose)


@cli.command(
    "migrate-scaffold-ui-imports",
    help="Rewrite legacy scaffold-eth component imports to @scaffold-ui/components.",
)
@click.argument("path", type=click.Path())
@click.option("--dry-run", is_flag=True, help="Show the planned changes without writing to disk.")
@click.option(
    "--jobs", "-j", type=click.IntRange(min=1), default=1, show_default=True,
    help="Number of files processed in parallel.",
)
@click.pass_context
def migrate_scaffold_ui_imports_cmd(ctx: click.Context, path: str, dry_run: bool, jobs: int) -> None:
    """Migrate imports in ``PATH``.

    ``PATH`` is a file or directory, resolved relative to the current
    working directory.  For extensions, point it at the extension root or
    its packages directory.
    """
    cwd = pathlib.Path.cwd()
    target = (cwd / path).resolve()
    try:
        report = run_codemod(target, dry_run=dry_run, jobs=jobs)
    except FileNotFoundError as exc:
        click.secho(f"✖ Unable to access path: {target}", fg="red", err=True)
        click.echo(str(exc), err=True)
        ctx.exit(1)
    except CodemodError as exc:
        click.secho(f"✖ {exc}", fg="red", err=True)
        ctx.exit(1)
    except Exception as exc:
        raise click.ClickException(f"Codemod failed: {exc}") from exc

    if not report.results:
        click.secho("⚠ No files found matching supported extensions.", fg="yellow")
        return

    print_report(report, cwd)
    failures = report.failures
    if failures:
        click.secho(f"\n{len(failures)} file(s) could not be processed:", fg="red", err=True)
        for failure in failures:
            click.secho(f"  ✖ {failure.path}: {failure.error}", fg="red", err=True)
        ctx.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Entrypoint for console_scripts.

    Allows the CLI to be executed via ``python -m scaffold_codemod`` or when
    installed through a ``console_scripts`` entry point.
    """
    cli.main(args=argv, prog_name="scaffold-codemod")


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
