"""protoc plugin request handling."""

import logging

from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest, CodeGeneratorResponse

from .config import DEFAULT_CONFIG_FILE, read_config
from .descriptors import compiler_version, load_schema
from .link import generate

logger = logging.getLogger(__name__)

KNOWN_PARAMETERS = frozenset(["config"])


class PluginError(RuntimeError):
    """Raised when protoc passes parameters the plugin does not understand."""


def parse_parameters(parameter: str) -> dict[str, str]:
    """Split protoc's ``key=value,key=value`` parameter string."""
    params: dict[str, str] = {}
    for item in parameter.split(","):
        key, _, value = item.partition("=")
        if not key:
            continue
        if key not in KNOWN_PARAMETERS:
            raise PluginError(f'unknown parameter "{key}"')
        params[key] = value
    return params


def run(request: CodeGeneratorRequest) -> CodeGeneratorResponse:
    """Handle one code generation request."""
    params = parse_parameters(request.parameter)
    config = read_config(params.get("config") or DEFAULT_CONFIG_FILE)
    files = load_schema(request)
    logger.debug("generating for %d file(s)", len(files))

    response = CodeGeneratorResponse(
        supported_features=CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    )
    for generated in generate(files, config, compiler_version=compiler_version(request)):
        response.file.add(name=generated.name, content=generated.content)
    return response
