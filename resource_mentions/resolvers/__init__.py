"""Reference resolvers for resource mentions."""

from .file import FileResolver
from .file import mime_type_for
from .http import HttpResolver
from .memory import MemoryResolver

__all__ = [
    "FileResolver",
    "HttpResolver",
    "MemoryResolver",
    "mime_type_for",
]
