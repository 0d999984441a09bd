"""Graph model, equipment catalog and project document schema."""
from .blocks import BlockType
from .catalog import Catalog
from .models import ensure_project, load_project, load_project_file
from .project import Connection, Project

__all__ = [
    "BlockType",
    "Catalog",
    "Connection",
    "Project",
    "ensure_project",
    "load_project",
    "load_project_file",
]
