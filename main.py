"""
main.py — Knapsack Duel Flask App
=================================
The web server that animates Greedy vs Dynamic Programming side by side.

Routes:
  GET  /                       – main UI
  GET  /api/state              – both stepper frames + run status
  POST /api/items/add          – add an item            (resets the duel)
  POST /api/items/remove       – remove an item         (resets the duel)
  POST /api/items/update       – edit an item           (resets the duel)
  POST /api/items/randomize    – random item set        (resets the duel)
  POST /api/capacity           – change capacity        (resets the duel)
  POST /api/run                – start both animations
  POST /api/pause              – pause both
  POST /api/reset              – back to the initial frame
  POST /api/tick               – driver heartbeat; advances whichever is due
  POST /api/step               – advance both by one step
  POST /api/config/speed       – step delay (preset or milliseconds)
  GET  /api/results            – comparison, null until both are finished
  GET  /api/trace              – full recorded frames of both runs

State management:
  The Inventory (items + capacity) is small and lives in the Flask
  session.  Each session's Duel (the two steppers) lives in an
  in-process dict keyed by a per-session id.  Configuration edits are
  refused with 409 while a run is animating.
"""

import logging
import os
import secrets
import sys
import threading
from collections import OrderedDict

from flask import Flask, jsonify, render_template_string, request, session

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from algorithms import get_algorithm
from engine import Duel, Recorder, SPEED_PRESETS, compare
from knapsack import ConfigurationError, Inventory
from ui import (
    render_greedy_board,
    render_dp_grid,
    playback_controls,
    item_playground,
    comparison_table,
    pseudocode_viewer,
    explanation_panel,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

_DUELS: "OrderedDict[str, Duel]" = OrderedDict()
_DUELS_LOCK = threading.Lock()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_inventory() -> Inventory:
    """Deserialise the inventory from session, or create the default one."""
    if "inventory" not in session:
        session["inventory"] = Inventory().to_dict()
    return Inventory.from_dict(session["inventory"])


def save_inventory(inventory: Inventory) -> None:
    session["inventory"] = inventory.to_dict()


def get_duel() -> Duel:
    """This session's Duel; least recently used duels are evicted past MAX_DUELS."""
    if "duel_id" not in session:
        session["duel_id"] = secrets.token_hex(8)
    duel_id = session["duel_id"]
    with _DUELS_LOCK:
        duel = _DUELS.get(duel_id)
        if duel is None:
            inventory = get_inventory()
            duel = Duel(inventory.items, inventory.capacity)
            _DUELS[duel_id] = duel
            logger.debug(f"Created duel {duel_id}")
            while len(_DUELS) > max(1, config.MAX_DUELS):
                evicted, _ = _DUELS.popitem(last=False)
                logger.debug(f"Evicted idle duel {evicted}")
        else:
            _DUELS.move_to_end(duel_id)
        return duel


def locked_response():
    return jsonify({"error": "Simulation is running; reset or wait for it to finish"}), 409


def apply_inventory(inventory: Inventory):
    """Persist an edited inventory and reset the duel onto it."""
    save_inventory(inventory)
    duel = get_duel()
    duel.configure(inventory.items, inventory.capacity)
    return jsonify(render_state(duel, inventory))


def render_state(duel: Duel, inventory: Inventory) -> dict:
    greedy_step = duel.greedy.current_step
    dp_step = duel.dp.current_step
    greedy_info = get_algorithm("greedy")
    dp_info = get_algorithm("dp")
    return {
        "greedy_board":       render_greedy_board(greedy_step),
        "dp_board":           render_dp_grid(dp_step),
        "greedy_explanation": explanation_panel(greedy_step.explanation),
        "dp_explanation":     explanation_panel(dp_step.explanation),
        "greedy_code":        pseudocode_viewer(greedy_info.pseudocode, greedy_step.pseudocode_line),
        "dp_code":            pseudocode_viewer(dp_info.pseudocode, dp_step.pseudocode_line),
        "controls":           playback_controls(duel.is_running, duel.is_finished, duel.speed),
        "playground":         item_playground(inventory.items, inventory.capacity, duel.is_running),
        "results":            comparison_table(duel.results, inventory.items),
        "state":              duel.snapshot(),
    }


@app.errorhandler(ConfigurationError)
def handle_configuration_error(e):
    logger.warning(f"Rejected configuration: {e}")
    return jsonify({"error": str(e)}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    inventory = get_inventory()
    duel = get_duel()
    panels = render_state(duel, inventory)
    return render_template_string(
        INDEX_TEMPLATE,
        poll_ms=config.POLL_INTERVAL_MS,
        **{k: v for k, v in panels.items() if k != "state"},
    )


@app.route("/api/state")
def api_state():
    return jsonify(render_state(get_duel(), get_inventory()))


# ---------------------------------------------------------------------------
# API: Configuration
# ---------------------------------------------------------------------------
@app.route("/api/items/add", methods=["POST"])
def api_items_add():
    if get_duel().is_running:
        return locked_response()
    data = request.get_json(silent=True) or {}
    inventory = get_inventory()
    inventory.add_item(data.get("name", ""), data.get("weight", 1), data.get("value", 1))
    return apply_inventory(inventory)


@app.route("/api/items/remove", methods=["POST"])
def api_items_remove():
    if get_duel().is_running:
        return locked_response()
    data = request.get_json(silent=True) or {}
    inventory = get_inventory()
    inventory.remove_item(data.get("id", ""))
    return apply_inventory(inventory)


@app.route("/api/items/update", methods=["POST"])
def api_items_update():
    if get_duel().is_running:
        return locked_response()
    data = request.get_json(silent=True) or {}
    inventory = get_inventory()
    inventory.update_item(
        data.get("id", ""),
        name=data.get("name"),
        weight=data.get("weight"),
        value=data.get("value"),
    )
    return apply_inventory(inventory)


@app.route("/api/items/randomize", methods=["POST"])
def api_items_randomize():
    if get_duel().is_running:
        return locked_response()
    data = request.get_json(silent=True) or {}
    inventory = get_inventory()
    inventory.randomize(seed=data.get("seed"))
    return apply_inventory(inventory)


@app.route("/api/capacity", methods=["POST"])
def api_capacity():
    if get_duel().is_running:
        return locked_response()
    data = request.get_json(silent=True) or {}
    inventory = get_inventory()
    inventory.set_capacity(data.get("capacity", inventory.capacity))
    return apply_inventory(inventory)


# ---------------------------------------------------------------------------
# API: Simulation
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    duel = get_duel()
    duel.run()
    return jsonify(render_state(duel, get_inventory()))


@app.route("/api/pause", methods=["POST"])
def api_pause():
    duel = get_duel()
    duel.pause()
    return jsonify(render_state(duel, get_inventory()))


@app.route("/api/reset", methods=["POST"])
def api_reset():
    duel = get_duel()
    duel.reset()
    return jsonify(render_state(duel, get_inventory()))


@app.route("/api/tick", methods=["POST"])
def api_tick():
    duel = get_duel()
    advanced = duel.tick()
    payload = render_state(duel, get_inventory()) if any(advanced.values()) else {"state": duel.snapshot()}
    payload["advanced"] = advanced
    return jsonify(payload)


@app.route("/api/step", methods=["POST"])
def api_step():
    duel = get_duel()
    advanced = duel.step()
    payload = render_state(duel, get_inventory())
    payload["advanced"] = advanced
    return jsonify(payload)


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = request.get_json(silent=True) or {}
    duel = get_duel()
    if "speed_ms" in data:
        try:
            duel.set_speed(float(data["speed_ms"]) / 1000)
        except (TypeError, ValueError):
            return jsonify({"error": "speed_ms must be a number"}), 400
    else:
        preset = data.get("speed", "medium")
        if preset not in SPEED_PRESETS:
            return jsonify({"error": f"Unknown speed preset: {preset}"}), 400
        duel.set_speed_preset(preset)
    return jsonify({"greedy_interval": duel.greedy.speed, "dp_interval": duel.dp.speed})


@app.route("/api/results")
def api_results():
    results = get_duel().results
    return jsonify({"results": results.to_dict() if results else None})


@app.route("/api/trace")
def api_trace():
    """
    Every frame of both algorithms on the current configuration, recorded
    headless, plus the comparison of the two recorded runs.
    """
    inventory = get_inventory()
    recorders = {}
    for key in ("greedy", "dp"):
        rec = Recorder()
        rec.start(key, inventory.items, inventory.capacity)
        rec.run_to_completion()
        recorders[key] = rec
    return jsonify({
        "greedy":     recorders["greedy"].export(),
        "dp":         recorders["dp"].export(),
        "comparison": compare(recorders["greedy"], recorders["dp"]).to_dict(),
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Knapsack Duel — Greedy vs Dynamic Programming</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg: #010409; --panel: #161b22; --border: #30363d;
      --text: #e6edf3; --muted: #7d8590; --accent: #0ea5e9; --good: #10b981; --bad: #f43f5e;
    }
    body { font-family: -apple-system, BlinkMacSystemFont, sans-serif; background: var(--bg); color: var(--text); padding: 24px; }
    h1 { margin-bottom: 16px; }
    h3, h4 { margin-bottom: 8px; color: var(--muted); }
    .panel, .board { background: var(--panel); border: 1px solid var(--border); border-radius: 10px; padding: 16px; margin-bottom: 16px; }
    .row { display: flex; gap: 16px; align-items: flex-start; }
    .row > * { flex: 1; min-width: 0; }
    button { background: var(--border); color: var(--text); border: none; border-radius: 6px; padding: 6px 12px; cursor: pointer; }
    button:disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-primary { background: var(--good); font-weight: bold; }
    .greedy-item { display: flex; gap: 8px; align-items: center; border: 2px solid; border-radius: 8px; padding: 6px; margin-bottom: 6px; }
    .greedy-item.current { transform: scale(1.03); }
    .greedy-item .ratio { margin-left: auto; font-family: monospace; }
    .icon { border-radius: 50%; padding: 2px 6px; }
    .knapsack-bar { width: 40px; height: 160px; border: 3px solid var(--muted); border-top: none; position: relative; }
    .knapsack-fill { position: absolute; bottom: 0; width: 100%; background: var(--accent); opacity: 0.4; }
    .dp-grid { border-collapse: collapse; font-family: monospace; font-size: 12px; }
    .dp-grid td, .dp-grid th { border: 1px solid var(--border); text-align: center; height: 30px; min-width: 30px; }
    .code-block { font-family: monospace; font-size: 12px; white-space: pre; }
    .code-line.highlight { background: rgba(14,165,233,0.25); }
    .explanation-text { color: var(--accent); margin-bottom: 8px; }
    .comparison-table { width: 100%; border-collapse: collapse; }
    .comparison-table td, .comparison-table th { padding: 8px; border-bottom: 1px solid var(--border); text-align: left; }
    .suboptimal { color: var(--bad); font-weight: bold; }
    .placeholder { color: var(--muted); text-align: center; }
  </style>
</head>
<body>
  <h1>Knapsack Duel</h1>
  <div class="row">
    <div id="playground">{{ playground|safe }}</div>
    <div id="controls">{{ controls|safe }}</div>
  </div>

  <div class="row">
    <div>
      <h3>Greedy Algorithm — O(N log N)</h3>
      <div id="greedy-explanation">{{ greedy_explanation|safe }}</div>
      <div id="greedy-board">{{ greedy_board|safe }}</div>
      <div id="greedy-code">{{ greedy_code|safe }}</div>
    </div>
    <div>
      <h3>Dynamic Programming — O(N × W)</h3>
      <div id="dp-explanation">{{ dp_explanation|safe }}</div>
      <div id="dp-board">{{ dp_board|safe }}</div>
      <div id="dp-code">{{ dp_code|safe }}</div>
    </div>
  </div>

  <h3>Results</h3>
  <div id="results">{{ results|safe }}</div>

  <script>
    const POLL_MS = {{ poll_ms }};
    let timer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    const PANELS = {
      'greedy_board': 'greedy-board', 'dp_board': 'dp-board',
      'greedy_explanation': 'greedy-explanation', 'dp_explanation': 'dp-explanation',
      'greedy_code': 'greedy-code', 'dp_code': 'dp-code',
      'controls': 'controls', 'playground': 'playground', 'results': 'results',
    };

    function apply(data) {
      if (data.error) { alert(data.error); return; }
      for (const [key, id] of Object.entries(PANELS)) {
        if (data[key] !== undefined) document.getElementById(id).innerHTML = data[key];
      }
      if (data.state) {
        if (data.state.running && !timer) timer = setInterval(tick, POLL_MS);
        if (!data.state.running && timer) { clearInterval(timer); timer = null; }
      }
    }

    async function tick() { apply(await post('/api/tick')); }

    document.addEventListener('click', async (e) => {
      const id = e.target.id;
      if (id === 'btn-run') apply(await post('/api/run'));
      else if (id === 'btn-pause') apply(await post('/api/pause'));
      else if (id === 'btn-step') apply(await post('/api/step'));
      else if (id === 'btn-reset') apply(await post('/api/reset'));
      else if (id === 'btn-randomize') apply(await post('/api/items/randomize'));
      else if (e.target.classList.contains('btn-remove')) {
        apply(await post('/api/items/remove', {id: e.target.dataset.id}));
      }
    });

    document.addEventListener('submit', async (e) => {
      if (e.target.id !== 'add-item-form') return;
      e.preventDefault();
      apply(await post('/api/items/add', {
        name: document.getElementById('new-name').value,
        weight: +document.getElementById('new-weight').value,
        value: +document.getElementById('new-value').value,
      }));
    });

    document.addEventListener('change', async (e) => {
      if (e.target.id === 'capacity-slider') {
        apply(await post('/api/capacity', {capacity: +e.target.value}));
      } else if (e.target.id === 'speed-slider') {
        await post('/api/config/speed', {speed_ms: +e.target.value});
        document.getElementById('speed-val').textContent = e.target.value;
      }
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def main():
    from logger_config import setup_logger

    setup_logger("server")
    logger.info("Knapsack Duel: starting Flask server")
    logger.info(f"Open http://localhost:{config.PORT}")
    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
