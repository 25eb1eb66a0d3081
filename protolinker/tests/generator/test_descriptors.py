"""Tests for building declaration trees from descriptors."""

import pytest
from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest

from protolinker.generator.descriptors import (
    SchemaError,
    compiler_version,
    leading_comments,
    load_schema,
    schema_file,
    select_files,
)


def describe_schema_file():
    def builds_nested_declarations(expect, proto_file):
        fdp = proto_file(
            "game/net.proto",
            [
                ("Outer", " outer docs\n", [("Inner", ' @group="core"\n', [("Deep", "", [])])]),
                ("Other", "", []),
            ],
        )

        result = schema_file(fdp)

        expect(result.name) == "game/net.proto"
        expect(result.package) == "game"
        expect([m.ident for m in result.messages]) == ["Outer", "Other"]

        outer = result.messages[0]
        expect(outer.full_name) == "game.Outer"
        expect(outer.comment) == " outer docs\n"

        inner = outer.nested[0]
        expect(inner.full_name) == "game.Outer.Inner"
        expect(inner.ident) == "Outer_Inner"
        expect(inner.class_path) == "Outer.Inner"
        expect(inner.comment) == ' @group="core"\n'

        deep = inner.nested[0]
        expect(deep.ident) == "Outer_Inner_Deep"
        expect(deep.comment) == ""

    def handles_files_without_package(expect, proto_file):
        result = schema_file(proto_file("plain.proto", [("Ping", "", [])], package=""))

        expect(result.messages[0].full_name) == "Ping"
        expect(result.module) == "plain_pb2"
        expect(result.link_filename) == "plain_link_pb2.py"

    def derives_module_names_from_the_path(expect, proto_file):
        result = schema_file(proto_file("game/net-msgs.proto", []))

        expect(result.module) == "game.net_msgs_pb2"
        expect(result.link_filename) == "game/net_msgs_link_pb2.py"


def describe_leading_comments():
    def maps_paths_to_comments(expect, proto_file):
        fdp = proto_file("a.proto", [("A", "first\n", [("B", "second\n", [])])])

        expect(leading_comments(fdp)) == {(4, 0): "first\n", (4, 0, 3, 0): "second\n"}


def describe_load_schema():
    def returns_requested_files_in_order(expect, proto_file, make_request):
        dep = proto_file("dep.proto", [("Dep", "", [])])
        a = proto_file("a.proto", [("A", "", [])])
        b = proto_file("b.proto", [("B", "", [])])
        request = make_request(dep, a, b)
        del request.file_to_generate[:]
        request.file_to_generate.extend(["b.proto", "a.proto"])

        expect([f.name for f in load_schema(request)]) == ["b.proto", "a.proto"]

    def fails_when_a_requested_file_is_missing(expect, proto_file):
        with pytest.raises(SchemaError):
            select_files([proto_file("a.proto", [])], ["missing.proto"])


def describe_compiler_version():
    def formats_the_version(expect, make_request):
        expect(compiler_version(make_request())) == "25.1.0"

    def appends_the_suffix(expect, make_request):
        request = make_request()
        request.compiler_version.suffix = "-rc1"
        expect(compiler_version(request)) == "25.1.0-rc1"

    def handles_missing_version(expect):
        expect(compiler_version(CodeGeneratorRequest())) == "(unknown)"
