"""Command-line interfaces: the protoc plugin and the offline tool."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click
from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest
from google.protobuf.descriptor_pb2 import FileDescriptorSet
from google.protobuf.message import DecodeError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from protolinker import __version__
from protolinker.generator.allocator import AllocationError, GroupRegistry
from protolinker.generator.config import DEFAULT_CONFIG_FILE, ConfigError, read_config
from protolinker.generator.descriptors import SchemaError, select_files
from protolinker.generator.link import allocate, generate
from protolinker.generator.plugin import PluginError, run
from protolinker.generator.types import GenConfig, SchemaFile

GENERATION_ERRORS = (AllocationError, ConfigError, PluginError, SchemaError)


def _setup_logging(level: int | str) -> None:
    """Send log records to stderr; stdout may carry the plugin response."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_files(descriptor_set: str, names: tuple[str, ...]) -> list[SchemaFile]:
    """Read a FileDescriptorSet written by ``protoc --descriptor_set_out``."""
    fds = FileDescriptorSet()
    try:
        with open(descriptor_set, "rb") as f:
            fds.ParseFromString(f.read())
    except DecodeError as e:
        raise click.ClickException(f"{descriptor_set} is not a FileDescriptorSet: {e}") from e

    wanted = list(names) if names else [f.name for f in fds.file]
    try:
        return select_files(fds.file, wanted)
    except SchemaError as e:
        raise click.ClickException(str(e)) from e


def _load_config(config_file: str) -> GenConfig:
    try:
        return read_config(config_file)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


@click.command("protoc-gen-pylink")
@click.version_option(__version__, prog_name="protoc-gen-pylink")
def plugin() -> None:
    """protoc plugin: reads a CodeGeneratorRequest on stdin.

    Run through protoc, e.g. ``protoc --pylink_out=config=link.toml:out foo.proto``.
    """
    _setup_logging(os.environ.get("PROTOLINKER_LOG", "WARNING").upper())
    ctx = click.get_current_context()

    try:
        request = CodeGeneratorRequest.FromString(sys.stdin.buffer.read())
        response = run(request)
    except (DecodeError, *GENERATION_ERRORS) as e:
        click.echo(f"{ctx.info_name}: {e}", err=True)
        ctx.exit(1)

    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.buffer.flush()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log allocation details to stderr")
def cli(verbose: bool) -> None:
    """Protolinker message identifier generator."""
    _setup_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.option(
    "--descriptor-set",
    "-d",
    "descriptor_set",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="FileDescriptorSet from protoc --include_source_info --descriptor_set_out",
)
@click.option("--config", "-c", "config_file", default=DEFAULT_CONFIG_FILE, help="Config file")
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--file", "-f", "names", multiple=True, help="Only generate for these files")
def gen(descriptor_set: str, config_file: str, output_path: str, names: tuple[str, ...]) -> None:
    """Generate link modules and the registry from a descriptor set."""
    files = _load_files(descriptor_set, names)
    config = _load_config(config_file)

    try:
        generated = generate(files, config)
    except AllocationError as e:
        raise click.ClickException(str(e)) from e

    for generated_file in generated:
        path = Path(output_path) / generated_file.name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generated_file.content, encoding="utf-8")
        click.echo(f"Generated {path}")


@cli.command()
@click.option(
    "--descriptor-set",
    "-d",
    "descriptor_set",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="FileDescriptorSet from protoc --include_source_info --descriptor_set_out",
)
@click.option("--config", "-c", "config_file", default=DEFAULT_CONFIG_FILE, help="Config file")
@click.option("--file", "-f", "names", multiple=True, help="Only include these files")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(descriptor_set: str, config_file: str, names: tuple[str, ...], output_json: bool) -> None:
    """Display message identifier allocation and group usage."""
    files = _load_files(descriptor_set, names)
    config = _load_config(config_file)

    registry = GroupRegistry(config.groups)
    try:
        allocated = allocate(files, registry)
    except AllocationError as e:
        raise click.ClickException(str(e)) from e

    messages = [
        {
            "id": alloc.id,
            "name": alloc.type.ident,
            "full_name": alloc.type.full_name,
            "file": schema_file.name,
        }
        for schema_file, allocations in allocated
        for alloc in allocations
    ]
    groups = [
        {
            "name": group.name,
            "min": group.min,
            "max": group.max,
            "used": registry.used(group.name),
            "capacity": group.capacity,
        }
        for group in config.groups
    ]

    if output_json:
        print(json.dumps({"groups": groups, "messages": messages}, indent=2))
    else:
        _output_plain(groups, messages)


def _output_plain(groups: list[dict], messages: list[dict]) -> None:
    """Output allocation info using rich text formatting."""
    console = Console()

    console.print("[bold cyan]Groups[/bold cyan]")
    group_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    group_table.add_column("Name", style="white")
    group_table.add_column("Range", style="yellow", justify="right")
    group_table.add_column("Used", style="green", justify="right")

    for group in groups:
        group_table.add_row(
            group["name"],
            f"{group['min']}-{group['max']}",
            f"{group['used']}/{group['capacity']}",
        )

    console.print(group_table)
    console.print()

    console.print("[bold cyan]Messages[/bold cyan]")
    msg_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    msg_table.add_column("Msg ID", style="green", justify="right")
    msg_table.add_column("Name", style="white")
    msg_table.add_column("File", style="dim")

    for message in messages:
        msg_table.add_row(str(message["id"]), message["full_name"], message["file"])

    console.print(msg_table)


def main() -> None:
    """Main entry point."""
    cli()


def plugin_main() -> None:
    """protoc-gen-pylink entry point."""
    plugin()


if __name__ == "__main__":
    main()
