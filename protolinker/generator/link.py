"""Run identifier allocation over schema files and render the results."""

import logging
from collections.abc import Sequence

from protolinker import __version__

from . import python
from .allocator import GroupRegistry
from .config import validate_config
from .flatten import flatten
from .types import Allocation, GenConfig, GeneratedFile, SchemaFile

logger = logging.getLogger(__name__)


def allocate(
    files: Sequence[SchemaFile], registry: GroupRegistry
) -> list[tuple[SchemaFile, list[Allocation]]]:
    """Allocate identifiers file by file, in input order."""
    return [(f, flatten(f.messages, registry)) for f in files]


def generate(
    files: Sequence[SchemaFile],
    config: GenConfig,
    *,
    compiler_version: str = "(unknown)",
) -> list[GeneratedFile]:
    """Generate link modules for annotated files plus the registry module.

    Files without any annotated message produce no link module. The first
    allocation error aborts generation and nothing is returned.
    """
    out = validate_config(config)

    registry = GroupRegistry(config.groups)
    generated: list[GeneratedFile] = []

    for schema_file, allocations in allocate(files, registry):
        if not allocations:
            logger.debug("skipping %s: no annotated messages", schema_file.name)
            continue

        content = python.render_file(
            schema_file,
            allocations,
            out,
            version=__version__,
            compiler_version=compiler_version,
        )
        generated.append(GeneratedFile(name=schema_file.link_filename, content=content))

    generated.append(
        GeneratedFile(
            name=out.filename,
            content=python.render_registry(config.groups, version=__version__),
        )
    )
    return generated
