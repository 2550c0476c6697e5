"""Day picker - a single-date calendar controller.

Shows one or more contiguous months, decides which days may be selected
from caller predicates, and reports selection and navigation changes back
to the caller.
"""

__version__ = "1.0.0"
__description__ = "Single-date calendar controller with navigation, constraints and rendering hooks"

__all__ = [
    "__description__",
    "__version__",
]
