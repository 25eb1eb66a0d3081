"""Build declaration trees from protobuf file descriptors."""

from collections.abc import Iterable, Sequence

from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest
from google.protobuf.descriptor_pb2 import DescriptorProto, FileDescriptorProto

from .types import DeclaredType, SchemaFile

# SourceCodeInfo path components
MESSAGE_TYPE_FIELD = FileDescriptorProto.MESSAGE_TYPE_FIELD_NUMBER
NESTED_TYPE_FIELD = DescriptorProto.NESTED_TYPE_FIELD_NUMBER


class SchemaError(RuntimeError):
    """Raised when the compiler input is inconsistent."""


def leading_comments(proto_file: FileDescriptorProto) -> dict[tuple[int, ...], str]:
    """Map source location paths to their leading comments."""
    comments: dict[tuple[int, ...], str] = {}
    for location in proto_file.source_code_info.location:
        if location.leading_comments:
            comments.setdefault(tuple(location.path), location.leading_comments)
    return comments


def _declared_type(
    message: DescriptorProto,
    path: tuple[int, ...],
    parent: DeclaredType | None,
    package: str,
    comments: dict[tuple[int, ...], str],
) -> DeclaredType:
    if parent is None:
        full_name = f"{package}.{message.name}" if package else message.name
        ident = message.name
        class_path = message.name
    else:
        full_name = f"{parent.full_name}.{message.name}"
        ident = f"{parent.ident}_{message.name}"
        class_path = f"{parent.class_path}.{message.name}"

    node = DeclaredType(
        full_name=full_name,
        ident=ident,
        class_path=class_path,
        comment=comments.get(path, ""),
    )
    for i, nested in enumerate(message.nested_type):
        node.nested.append(
            _declared_type(nested, (*path, NESTED_TYPE_FIELD, i), node, package, comments)
        )
    return node


def schema_file(proto_file: FileDescriptorProto) -> SchemaFile:
    """Convert one file descriptor into a SchemaFile."""
    comments = leading_comments(proto_file)
    result = SchemaFile(name=proto_file.name, package=proto_file.package)
    for i, message in enumerate(proto_file.message_type):
        result.messages.append(
            _declared_type(message, (MESSAGE_TYPE_FIELD, i), None, proto_file.package, comments)
        )
    return result


def select_files(
    proto_files: Iterable[FileDescriptorProto], names: Sequence[str]
) -> list[SchemaFile]:
    """Return the files named in ``names``, in that order."""
    by_name = {f.name: f for f in proto_files}
    results: list[SchemaFile] = []
    for name in names:
        if name not in by_name:
            raise SchemaError(f"file {name} was requested but its descriptor is missing")
        results.append(schema_file(by_name[name]))
    return results


def load_schema(request: CodeGeneratorRequest) -> list[SchemaFile]:
    """Return the files protoc asked us to generate."""
    return select_files(request.proto_file, request.file_to_generate)


def compiler_version(request: CodeGeneratorRequest) -> str:
    """Format the protoc version that produced ``request``."""
    if not request.HasField("compiler_version"):
        return "(unknown)"

    ver = request.compiler_version
    version = f"{ver.major}.{ver.minor}.{ver.patch}"
    return version + ver.suffix
