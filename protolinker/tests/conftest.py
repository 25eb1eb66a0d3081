"""Unit tests configuration file."""

import sys
import types

import pytest
from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest
from google.protobuf.descriptor_pb2 import FileDescriptorProto

from protolinker.generator.config import parse_config
from protolinker.generator.types import DeclaredType


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def _add_message(proto_file, container, path, name, comment="", nested=()):
    message = container.add(name=name)
    if comment:
        location = proto_file.source_code_info.location.add()
        location.path.extend(path)
        location.leading_comments = comment
    for i, child in enumerate(nested):
        _add_message(proto_file, message.nested_type, (*path, 3, i), *child)
    return message


def build_proto_file(name, messages, package="game"):
    """Build a FileDescriptorProto from ``(name, comment, nested)`` tuples."""
    proto_file = FileDescriptorProto(name=name, package=package, syntax="proto3")
    for i, message in enumerate(messages):
        _add_message(proto_file, proto_file.message_type, (4, i), *message)
    return proto_file


@pytest.fixture
def proto_file():
    return build_proto_file


@pytest.fixture
def make_request():
    def _make_request(*proto_files, parameter=""):
        request = CodeGeneratorRequest(parameter=parameter)
        request.proto_file.extend(proto_files)
        request.file_to_generate.extend(f.name for f in proto_files)
        request.compiler_version.major = 25
        request.compiler_version.minor = 1
        request.compiler_version.patch = 0
        return request

    return _make_request


@pytest.fixture
def node():
    def _node(name, comment="", nested=()):
        return DeclaredType(
            full_name=f"game.{name}",
            ident=name,
            class_path=name,
            comment=comment,
            nested=list(nested),
        )

    return _node


CONFIG_DATA = {
    "out": {"python": {"package": "netmsg", "filename": "netmsg/registry.py"}},
    "groups": [
        {"name": "login", "min": 1, "max": 3},
        {"name": "game_core", "min": 100, "max": 199},
    ],
}

CONFIG_TOML = """
[out.python]
package = "netmsg"
filename = "netmsg/registry.py"

[[groups]]
name = "login"
min = 1
max = 3

[[groups]]
name = "game_core"
min = 100
max = 199
"""


@pytest.fixture
def config():
    return parse_config(CONFIG_DATA)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "link.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    return str(path)


@pytest.fixture
def load_module(monkeypatch):
    """Execute generated source as an importable module."""

    def _load_module(name, source):
        module = types.ModuleType(name)
        monkeypatch.setitem(sys.modules, name, module)
        package, _, attr = name.rpartition(".")
        if package:
            parent = sys.modules.get(package)
            if parent is None:
                parent = types.ModuleType(package)
                monkeypatch.setitem(sys.modules, package, parent)
            setattr(parent, attr, module)
        exec(compile(source, f"<{name}>", "exec"), module.__dict__)
        return module

    return _load_module
