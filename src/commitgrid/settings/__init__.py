"""Table view properties."""

from .manager import ViewProperties, default_properties_path
from .schema import COLUMN_IDS, DEFAULT_PROPERTIES

__all__ = ["COLUMN_IDS", "DEFAULT_PROPERTIES", "ViewProperties", "default_properties_path"]
