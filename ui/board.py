"""
board.py — Stepper Frame Renderers
==================================
Pure rendering functions: Step snapshot → HTML string.

  • render_greedy_board – ratio-sorted item list + knapsack fill bar
  • render_dp_grid      – the (N+1) × (C+1) table with cursor / path colours

Design decisions:
  - NO mutation.  Everything comes from the Step's overlay and metrics.
  - Status-based colouring is a dict lookup in BoardConfig.
"""

from html import escape
from typing import Dict, Optional

from algorithms import Step


# ---------------------------------------------------------------------------
# Visual Config
# ---------------------------------------------------------------------------
class BoardConfig:
    # greedy row state → border colour
    item_colors: Dict[str, str] = {
        "pending":    "#30363d",
        "evaluating": "#0ea5e9",
        "accepted":   "#10b981",
        "rejected":   "#f43f5e",
    }

    # dp cell status → background
    cell_colors: Dict[str, str] = {
        "pending":           "#0d1117",
        "filled":            "#161b22",
        "on-backtrack-path": "#14532d",
        "selected":          "#16a34a",
    }
    cell_current: str = "#a16207"
    cell_last:    str = "#1e3a5f"
    cell_size:    int = 36


CONFIG = BoardConfig()


# ---------------------------------------------------------------------------
# Greedy
# ---------------------------------------------------------------------------
def render_greedy_board(step: Optional[Step], config: BoardConfig = CONFIG) -> str:
    if step is None:
        return '<div class="board greedy-board placeholder">Ready to start</div>'

    overlay = step.overlay
    metrics = step.metrics
    rows = []
    for item, ratio, status in zip(overlay["order"], overlay["ratios"], overlay["statuses"]):
        border = config.item_colors.get(status, config.item_colors["pending"])
        mark = {"accepted": "✔", "rejected": "✘"}.get(status, "")
        current = "current" if status == "evaluating" else ""
        rows.append(
            f'<div class="greedy-item {status} {current}" style="border-color: {border};">'
            f'<span class="icon" style="background: {item["color"]};">{item["icon"]}</span>'
            f'<span class="name">{escape(item["name"])}</span>'
            f'<span class="wv">W:{item["weight"]} V:{item["value"]}</span>'
            f'<span class="ratio">R: {ratio:.2f}</span>'
            f'<span class="mark">{mark}</span>'
            f'</div>'
        )

    capacity = metrics["capacity"]
    fill_pct = (metrics["weight"] / capacity * 100) if capacity else 0

    return f"""
    <div class="board greedy-board">
      <div class="board-header">
        Value: <strong>{metrics["value"]}</strong> | Rem. Cap: <strong>{metrics["remaining"]}</strong>
      </div>
      <div class="greedy-list">
        <h4>Sorted by Ratio (Value/Weight)</h4>
        {''.join(rows)}
      </div>
      <div class="knapsack-bar">
        <div class="knapsack-fill" style="height: {fill_pct:.0f}%;"></div>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# DP
# ---------------------------------------------------------------------------
def render_dp_grid(step: Optional[Step], config: BoardConfig = CONFIG) -> str:
    if step is None:
        return '<div class="board dp-board placeholder">Ready to start</div>'

    overlay = step.overlay
    grid = overlay["grid"]
    labels = overlay["row_labels"]
    cursor = tuple(overlay["cursor"]) if overlay["cursor"] else None
    last = tuple(overlay["last_cell"]) if overlay["last_cell"] else None
    cols = len(grid[0]) if grid else 0
    size = config.cell_size

    header = "".join(f'<th style="width: {size}px;">{c}</th>' for c in range(cols))
    body = []
    for r, row in enumerate(grid):
        cells = []
        for c, cell in enumerate(row):
            bg = config.cell_colors.get(cell["status"], config.cell_colors["pending"])
            if cursor == (r, c):
                bg = config.cell_current
            elif last == (r, c) and cell["status"] == "filled":
                bg = config.cell_last
            text = "" if cell["value"] is None else cell["value"]
            cells.append(f'<td class="cell {cell["status"]}" style="background: {bg};">{text}</td>')
        body.append(f'<tr><th class="row-label">{escape(labels[r][:6])}</th>{"".join(cells)}</tr>')

    pos = f"dp[{cursor[0]}][{cursor[1]}]" if cursor else step.phase
    return f"""
    <div class="board dp-board">
      <div class="board-header">State: <strong>{pos}</strong></div>
      <table class="dp-grid">
        <thead><tr><th>Item\\Cap</th>{header}</tr></thead>
        <tbody>{''.join(body)}</tbody>
      </table>
    </div>
    """
