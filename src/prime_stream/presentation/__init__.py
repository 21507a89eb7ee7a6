from .view import (
    HistoryGroup,
    MarkerGroup,
    StreamView,
    ValueGroup,
    build_view,
    group_history,
    is_near_bottom,
    render_groups,
    render_status,
)

__all__ = [
    "HistoryGroup",
    "MarkerGroup",
    "StreamView",
    "ValueGroup",
    "build_view",
    "group_history",
    "is_near_bottom",
    "render_groups",
    "render_status",
]
