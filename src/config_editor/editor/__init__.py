from .tree_editor import (
    MISSING, array_append, array_insert, array_remove, delete_value, filter_entries, get_value,
    has_path, set_value
)

__all__ = [
    'MISSING', 'array_append', 'array_insert', 'array_remove', 'delete_value', 'filter_entries',
    'get_value', 'has_path', 'set_value'
]
