"""
Core ticker engine shared by the status ticker application.
"""

from .segment import Fragment, FragmentStatus, Segment  # noqa: F401
from .segment_queue import SegmentQueue  # noqa: F401
from .ticker import AnimationMode, TickerController  # noqa: F401
