# config.py
# Centralized configuration for the Knapsack Duel app.
# Every setting can be overridden with a KNAPSACK_DUEL_<NAME> environment variable.

import os
import secrets


def _env(name: str, default: str) -> str:
    return os.environ.get(f"KNAPSACK_DUEL_{name}", default)


# --- Directory Settings ---
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
LOG_DIR = _env("LOG_DIR", os.path.join(BASE_DIR, "logs"))

# --- Server Settings ---
HOST = _env("HOST", "0.0.0.0")
PORT = int(_env("PORT", "5000"))
DEBUG = _env("DEBUG", "0").lower() in ("1", "true", "yes")
SECRET_KEY = _env("SECRET_KEY", "") or secrets.token_hex(32)

# --- Animation Settings ---
# Greedy speed preset at startup (see engine.stepper.SPEED_PRESETS)
DEFAULT_SPEED = _env("DEFAULT_SPEED", "medium")

# The DP stepper does O(N·C) steps against Greedy's O(N), so it ticks
# this many times faster to finish in comparable wall-clock time.
DP_SPEED_DIVISOR = float(_env("DP_SPEED_DIVISOR", "4"))

# Shortest interval (seconds) either stepper may tick at
MIN_INTERVAL = float(_env("MIN_INTERVAL", "0.02"))

# How often the browser polls /api/tick (milliseconds)
POLL_INTERVAL_MS = int(_env("POLL_INTERVAL_MS", "20"))

# Per-session duels kept in memory; the least recently used is dropped past this
MAX_DUELS = int(_env("MAX_DUELS", "256"))
