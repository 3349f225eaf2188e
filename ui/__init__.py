"""
ui/
---
Presentation layer.

    from ui import render_greedy_board, render_dp_grid
    from ui import playback_controls, item_playground, …
"""

from ui.board import render_greedy_board, render_dp_grid, BoardConfig

from ui.controls import (
    playback_controls,
    item_playground,
    comparison_table,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_greedy_board",
    "render_dp_grid",
    "BoardConfig",
    "playback_controls",
    "item_playground",
    "comparison_table",
    "pseudocode_viewer",
    "explanation_panel",
]
