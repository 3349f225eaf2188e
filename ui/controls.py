"""
controls.py — UI Control Panels
===============================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls  – run / pause / step / reset / speed
  • item_playground    – capacity slider, item list, add / remove / randomize
  • comparison_table   – Greedy vs DP results (shown once both finish)
  • pseudocode_viewer  – code listing with live line highlighting
  • explanation_panel  – status text of the last step

Design:
  - All panels are stateless render functions.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from engine import ComparisonResult, SPEED_PRESETS
from knapsack import Item
from knapsack.inventory import MIN_CAPACITY, MAX_CAPACITY
from knapsack.item import MAX_WEIGHT


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_running: bool = False,
    is_finished: bool = False,
    speed: float = SPEED_PRESETS["medium"],
) -> str:
    run_label = "Running..." if is_running else "▶ Run Comparison"
    disabled = "disabled" if is_running else ""
    speed_ms = int(round(speed * 1000))

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Simulation</h3>
      <div class="button-row">
        <button id="btn-run" class="btn-primary" {disabled}>{run_label}</button>
        <button id="btn-pause" title="Pause">⏸</button>
        <button id="btn-step" title="One step">⏭</button>
        <button id="btn-reset" title="Reset" {disabled}>↺</button>
      </div>
      <div class="speed-control">
        <label>Step delay: <span id="speed-val">{speed_ms}</span> ms</label>
        <input type="range" id="speed-slider" min="50" max="1000" step="50" value="{speed_ms}">
      </div>
      {'<span class="finished-badge">FINISHED</span>' if is_finished else ''}
    </div>
    """


# ---------------------------------------------------------------------------
# Item Playground
# ---------------------------------------------------------------------------
def item_playground(items: List[Item], capacity: int, is_locked: bool = False) -> str:
    disabled = "disabled" if is_locked else ""
    rows = []
    for item in items:
        rows.append(
            f'<tr data-id="{escape(item.id)}">'
            f'<td><span class="icon" style="background: {item.color};">{item.icon}</span> {escape(item.name)}</td>'
            f'<td>{item.weight}</td><td>{item.value}</td><td>{item.ratio:.2f}</td>'
            f'<td><button class="btn-remove" data-id="{escape(item.id)}" {disabled}>🗑</button></td>'
            f'</tr>'
        )

    return f"""
    <div class="panel item-playground">
      <h3>🎒 Configuration Playground</h3>
      <label>Knapsack Capacity: <strong id="capacity-val">{capacity}</strong>
        <input type="range" id="capacity-slider" min="{MIN_CAPACITY}" max="{MAX_CAPACITY}"
               value="{capacity}" {disabled}>
      </label>
      <table class="items-table">
        <thead><tr><th>Item</th><th>W</th><th>V</th><th>Ratio</th><th></th></tr></thead>
        <tbody>{''.join(rows)}</tbody>
      </table>
      <form id="add-item-form">
        <input type="text" id="new-name" placeholder="Name" {disabled}>
        <input type="number" id="new-weight" value="1" min="1" max="{MAX_WEIGHT}" {disabled}>
        <input type="number" id="new-value" value="1" min="1" {disabled}>
        <button type="submit" class="btn-secondary" {disabled}>+ Add</button>
      </form>
      <button id="btn-randomize" class="btn-secondary" {disabled}>🎲 Randomize</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Table
# ---------------------------------------------------------------------------
def comparison_table(comp: Optional[ComparisonResult], items: List[Item]) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel placeholder">
          Run the simulation to see the comparison results.
        </div>
        """

    names = {item.id: item.name for item in items}

    def item_names(ids: List[str]) -> str:
        return escape(", ".join(names.get(i, i) for i in ids))

    greedy, dp = comp.greedy, comp.dp
    greedy_cls = "" if comp.greedy_optimal else "suboptimal"

    return f"""
    <div class="panel comparison-panel">
      <table class="comparison-table">
        <thead>
          <tr><th>Feature</th><th>{greedy.algo_label}</th><th>{dp.algo_label}</th></tr>
        </thead>
        <tbody>
          <tr><td>Time Complexity</td><td>O(N log N)</td><td>O(N × Capacity)</td></tr>
          <tr><td>Optimality</td><td>❌ Not Guaranteed</td><td>✅ Always Optimal</td></tr>
          <tr><td>Total Value</td>
              <td class="{greedy_cls}">${greedy.total_value}</td>
              <td>${dp.total_value}</td></tr>
          <tr><td>Total Weight</td><td>{greedy.total_weight}</td><td>{dp.total_weight}</td></tr>
          <tr><td>Selected Items</td>
              <td>{item_names(greedy.selected_ids)}</td>
              <td>{item_names(dp.selected_ids)}</td></tr>
          <tr><td>Solve Time</td>
              <td>{greedy.wall_time_ms:.3f} ms</td>
              <td>{dp.wall_time_ms:.3f} ms</td></tr>
        </tbody>
      </table>
      <p class="gap">Optimality gap: <strong>{comp.optimality_gap}</strong></p>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = "highlight" if i == current_line else ""
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        explanation = "Ready to start"
    return f"""<div class="explanation-text">{escape(explanation)}</div>"""
