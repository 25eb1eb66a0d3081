"""Message identifier allocation and registry generation."""

from .allocator import AllocationError as AllocationError
from .allocator import GroupExhaustedError as GroupExhaustedError
from .allocator import GroupRegistry as GroupRegistry
from .allocator import UnknownGroupError as UnknownGroupError
from .config import ConfigError as ConfigError
from .config import read_config as read_config
from .directives import extract_group_name as extract_group_name
from .flatten import flatten as flatten
from .link import allocate as allocate
from .link import generate as generate
from .types import *
from .util import underscores_to_camel_case as underscores_to_camel_case
