from .about import __version__
from .config import LayoutConfig, TreapConfig
from .core.colors import get_priority_color, get_priority_glow
from .core.layout import TreeLayout, calculate_tree_layout
from .core.treap import OperationRecord, Treap
from .core.tree import InvariantViolation, TreapNode
