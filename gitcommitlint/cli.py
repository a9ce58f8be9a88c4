#!/usr/bin/env python3
import json
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import click
import pyperclip
from rich.console import Console
from rich.markup import escape

from .commit_message import CommitMessageValidator
from .config import DEFAULT_CONFIG_FILENAME, Config
from .formatters import render_json, render_text
from .models import LintReport
from .observers import ConsoleLogObserver, FileLogObserver

console = Console()


def read_messages(message: Optional[str], edit: Optional[Path], batch: bool) -> List[str]:
    """Collect the messages to lint from the option, a file or stdin."""
    if message is not None:
        return [message]
    if edit is not None:
        return [edit.read_text(encoding="utf-8")]

    stdin = click.get_text_stream("stdin")
    if stdin.isatty():
        raise click.UsageError("No commit message given. Use --message, --edit or pipe one to stdin.")
    data = stdin.read()
    if batch:
        return [chunk for chunk in data.split("\0") if chunk.strip()]
    return [data]


def exit_code_for(reports: Sequence[LintReport], strict: bool) -> int:
    """0 on success; 1 on errors, or 2/3 for warnings/errors with ``strict``."""
    has_errors = any(not report.valid for report in reports)
    has_warnings = any(report.warnings for report in reports)
    if strict:
        if has_errors:
            return 3
        if has_warnings:
            return 2
        return 0
    return 1 if has_errors else 0


def print_config_list(config: Config, config_path: Path) -> None:
    resolved = config.resolve()

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\nextends: {escape(', '.join(config.extends))}")
    console.print(f"default_ignores: {config.default_ignores}")
    for pattern in config.ignores:
        console.print(f"ignore pattern: {escape(pattern)}")
    for prefix in config.ignore_prefixes:
        console.print(f"ignore prefix: {escape(repr(prefix))}")

    console.print(f"\n{'Rule':<24} {'Level':<8} {'When':<8} {'Value':<20}")
    console.print("-" * 60)
    for name in sorted(resolved.rules):
        setting = resolved.rules[name]
        value = "" if setting.parameter is None else str(setting.parameter)
        console.print(
            f"{name:<24} {setting.severity.label:<8} {setting.applicability.value:<8} {escape(value):<20}"
        )

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.command()
@click.option("-m", "--message", help="Commit message to lint")
@click.option(
    "-e",
    "--edit",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the commit message from a file (e.g. .git/COMMIT_EDITMSG)",
)
@click.option(
    "--batch",
    is_flag=True,
    help="Read NUL-separated messages from stdin (e.g. git log -z --format=%B)",
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Directory holding the config file (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"Config file to use instead of {DEFAULT_CONFIG_FILENAME}",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    help="Output format (overrides config setting)",
)
@click.option("--strict", is_flag=True, help="Exit 2 on warnings and 3 on errors")
@click.option("-q", "--quiet", is_flag=True, help="Print nothing, only set the exit status")
@click.option("-V", "--verbose", is_flag=True, help="Also report passing and ignored messages")
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log lint results (overrides config setting)",
)
@click.option("--help-url", help="Help URL shown when a message is rejected")
@click.option("--config-list", is_flag=True, help="Display current configuration settings")
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option("--print-config", is_flag=True, help="Print the resolved rules as JSON")
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    message: Optional[str],
    edit: Optional[Path],
    batch: bool,
    path: Path,
    config_file: Optional[Path],
    output_format: Optional[str],
    strict: bool,
    quiet: bool,
    verbose: bool,
    log_file: Optional[Path],
    help_url: Optional[str],
    config_list: bool,
    config_dir: bool,
    print_config: bool,
    version: bool,
):
    """
    Lint commit messages against the conventional commit format.

    The message is taken from --message, from the file given to --edit, or
    from stdin. Merge, revert and bot commits are exempt.

    Configuration can be set in .gitcommitlint.toml in the repository root.
    Command line options override configuration file settings.
    """
    exit_code = 0
    try:
        if version:
            from .version import display_version_info

            display_version_info()
            return

        repo_path = path.absolute()
        config_path = config_file or repo_path / DEFAULT_CONFIG_FILENAME

        if config_dir:
            config_path_str = str(config_path)

            # Create default config file if it doesn't exist
            if not config_path.exists():
                Config().save(config_path.parent)
                console.print("[yellow]Created new config file with default values[/yellow]")

            pyperclip.copy(config_path_str)
            console.print(f"[green]Config file location:[/green] {escape(config_path_str)}")
            console.print("[green]Path copied to clipboard![/green]")
            return

        config = Config.load_file(config_file) if config_file else Config.load(repo_path)

        # Command line options override config
        if output_format is not None:
            config.format = output_format.lower()
        if help_url is not None:
            config.help_url = help_url
        if log_file is not None:
            config.log_file = str(log_file)

        if config_list:
            print_config_list(config, config_path)
            return

        if print_config:
            resolved = config.resolve()
            click.echo(
                json.dumps(
                    {
                        "extends": config.extends,
                        "ignores": [predicate.name for predicate in resolved.ignores],
                        "rules": {
                            name: resolved.rules[name].as_entry()
                            for name in sorted(resolved.rules)
                        },
                    },
                    indent=2,
                )
            )
            return

        # Only a message file opened in an editor carries git comment lines
        from_editor = message is None and edit is not None
        validator = CommitMessageValidator.from_config(
            config, comment_char="#" if from_editor else None
        )
        if verbose and not quiet:
            validator.add_observer(ConsoleLogObserver(console))

        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            validator.add_observer(FileLogObserver(str(log_file_path)))

        messages = read_messages(message, edit, batch)
        reports = validator.validate_many(messages)

        if not quiet:
            if config.format == "json":
                click.echo(render_json(reports))
            else:
                rendered = render_text(reports, help_url=config.help_url, verbose=verbose)
                if rendered.plain:
                    console.print(rendered, end="", soft_wrap=True)

        exit_code = exit_code_for(reports, strict)
    except click.UsageError:
        raise
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        exit_code = 130
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
