# Model package init
from .saved_world import SavedWorld  # noqa: F401 re-export

__all__ = ["SavedWorld"]
