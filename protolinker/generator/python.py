"""Python code generator for message identifier bindings and the registry."""

from collections.abc import Sequence

from jinja2 import Environment, PackageLoader

from .types import Allocation, GroupConfig, PythonOutConfig, SchemaFile
from .util import to_camel_case

env = Environment(
    loader=PackageLoader("protolinker.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

link_template = env.get_template("python_link.py.j2")
registry_template = env.get_template("python_registry.py.j2")


def _import_as(module: str, alias: str) -> str:
    """Generate an absolute import of ``module`` bound to ``alias``."""
    package, _, name = module.rpartition(".")
    if package:
        return f"from {package} import {name} as {alias}"
    return f"import {name} as {alias}"


def render_file(
    file: SchemaFile,
    allocations: Sequence[Allocation],
    out: PythonOutConfig,
    *,
    version: str,
    compiler_version: str,
) -> str:
    """Render the link module binding identifiers to one file's messages.

    Args:
        file: The schema file the allocations came from
        allocations: Allocations for the file, in emission order
        out: Python output settings (registry location, auto registration)
        version: Plugin version for the file header
        compiler_version: protoc version for the file header
    """
    return link_template.render(
        file=file,
        allocations=allocations,
        import_registry=_import_as(out.module, "_registry"),
        import_pb2=_import_as(file.module, "_pb2"),
        auto_register=out.auto_register,
        version=version,
        compiler_version=compiler_version,
    )


def render_registry(groups: Sequence[GroupConfig], *, version: str) -> str:
    """Render the registry module shared by every link module."""
    return registry_template.render(
        groups=groups,
        to_camel_case=to_camel_case,
        version=version,
    )
