# Project persistence
from .project_store import (
    ProjectStore, JsonProjectStore, ProjectRecord, ProjectNotFoundError, optimize,
)
