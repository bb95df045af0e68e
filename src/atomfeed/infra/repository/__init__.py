"""Content stores."""

from atomfeed.infra.repository.files import DirectoryContentStore
from atomfeed.infra.repository.memory import MemoryContentStore

__all__ = ["DirectoryContentStore", "MemoryContentStore"]
