from .dashboard import Dashboard
from .forms import EntityForm
from .list_page import SORT_MODES, ListPage

__all__ = ["Dashboard", "EntityForm", "ListPage", "SORT_MODES"]
