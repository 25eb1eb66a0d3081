"""Type definitions for configuration, schema input and code generation."""

from dataclasses import dataclass, field
from typing import Optional

from dataclasses_json import DataClassJsonMixin

UINT16_MAX = 0xFFFF


@dataclass
class GroupConfig(DataClassJsonMixin):
    """A named, closed range of message identifiers."""

    name: str
    min: int
    max: int

    @property
    def capacity(self) -> int:
        return self.max - self.min + 1


@dataclass
class PythonOutConfig(DataClassJsonMixin):
    """Output settings for the Python registry module.

    - package: dotted import path of the package holding the registry module
    - filename: output path of the registry module, relative to the plugin
      output directory
    - auto_register: register messages into the default registry on import
    """

    filename: str
    package: str = ""
    auto_register: bool = True

    @property
    def module(self) -> str:
        """Dotted import path of the registry module."""
        stem = self.filename.rsplit("/", 1)[-1].removesuffix(".py")
        return f"{self.package}.{stem}" if self.package else stem


@dataclass
class OutConfig(DataClassJsonMixin):
    """Output backends."""

    python: Optional[PythonOutConfig] = None


@dataclass
class GenConfig(DataClassJsonMixin):
    """Complete generator configuration."""

    out: Optional[OutConfig] = None
    groups: list[GroupConfig] = field(default_factory=list)


@dataclass
class DeclaredType:
    """A message declaration and its nested message declarations.

    - full_name: dotted protobuf name, e.g. ``game.Outer.Inner``
    - ident: flattened identifier used in generated code, e.g. ``Outer_Inner``
    - class_path: attribute path on the ``_pb2`` module, e.g. ``Outer.Inner``
    """

    full_name: str
    ident: str
    class_path: str
    comment: str = ""
    nested: list["DeclaredType"] = field(default_factory=list)


@dataclass
class SchemaFile:
    """A schema file and its top-level message declarations."""

    name: str
    package: str
    messages: list[DeclaredType] = field(default_factory=list)

    @property
    def _stem(self) -> str:
        return self.name.removesuffix(".proto").replace("-", "_")

    @property
    def module(self) -> str:
        """Dotted import path of the protoc-generated ``_pb2`` module."""
        return self._stem.replace("/", ".") + "_pb2"

    @property
    def link_filename(self) -> str:
        """Output path of the generated link module for this file."""
        return self._stem + "_link_pb2.py"


@dataclass(frozen=True)
class Allocation:
    """A declared type paired with the identifier assigned to it."""

    type: DeclaredType
    id: int


@dataclass(frozen=True)
class GeneratedFile:
    """A named text blob handed back to the compiler."""

    name: str
    content: str
