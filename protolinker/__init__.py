"""protolinker - message identifier and registry generator for protoc."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("protolinker")
except PackageNotFoundError:
    __version__ = "(local)"
