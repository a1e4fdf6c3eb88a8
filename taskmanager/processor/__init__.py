from .exceptions import UnsupportedToDoItemType
from .processor import DISPATCH_TABLE, ToDoItemProcessor, supports

__all__ = [
    "ToDoItemProcessor",
    "UnsupportedToDoItemType",
    "DISPATCH_TABLE",
    "supports",
]
