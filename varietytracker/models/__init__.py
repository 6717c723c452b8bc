"""Record definitions and enums.  Application code can do::

    from varietytracker.models import SortOrder, Variety
"""

from varietytracker.models.enums import SortOrder
from varietytracker.models.variety import SAMPLE_VARIETIES, Variety

__all__ = [
    "SAMPLE_VARIETIES",
    "SortOrder",
    "Variety",
]
