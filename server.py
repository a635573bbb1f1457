"""
EvoForage Server  –  Flask JSON bridge
======================================

A browser renderer drives the simulation through these endpoints:
  POST /start         Build a new simulation from a JSON config body
  POST /step          Advance one step (evolves at the end of a generation)
  POST /fast_forward  Run the rest of the generation, return a summary line
  GET  /world         Current world snapshot (foods + animals)
  GET  /status        Generation counters and active config

Run:
  python server.py
  # → http://localhost:5000
"""

import threading

from flask import Flask, Response, request, jsonify

from config import config_from_dict
from errors import InvalidConfig
from simulation import initialize

# ──────────────────────────────────────────────────────────────────────────────
app = Flask(__name__)

# One simulation at a time; Flask serves requests on several threads
_sim         = None
_sim_lock    = threading.Lock()
_last_stats  = None


# ──────────────────────────────────────────────────────────────────────────────
# CORS helper – allow the renderer (any origin) to call us
# ──────────────────────────────────────────────────────────────────────────────

@app.after_request
def add_cors(response):
    response.headers["Access-Control-Allow-Origin"]  = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response

@app.route("/", methods=["OPTIONS"])
@app.route("/<path:p>", methods=["OPTIONS"])
def preflight(p=""):
    return Response(status=200)


@app.errorhandler(InvalidConfig)
def invalid_config(exc):
    return jsonify({"error": "invalid_config", "detail": str(exc)}), 400


def _no_simulation():
    return jsonify({"error": "not_started",
                    "hint": "POST /start first"}), 409


# ──────────────────────────────────────────────────────────────────────────────
# Routes
# ──────────────────────────────────────────────────────────────────────────────

@app.route("/start", methods=["POST"])
def start():
    global _sim, _last_stats

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise InvalidConfig("request body must be a JSON object")
    data = dict(data)
    seed = data.pop("seed", None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)
                             or seed < 0):
        raise InvalidConfig(f"seed must be a non-negative integer, got {seed!r}")
    config = config_from_dict(data)
    sim = initialize(config, seed=seed)

    with _sim_lock:
        _sim = sim
        _last_stats = None
    return jsonify({"status": "started", "cfg": config.as_dict()})


@app.route("/step", methods=["POST"])
def step_one():
    global _last_stats
    with _sim_lock:
        if _sim is None:
            return _no_simulation()
        stats = _sim.tick()
        if stats is not None:
            _last_stats = stats
        return jsonify({
            "world": _sim.world_snapshot().as_dict(),
            "stats": stats.as_dict() if stats is not None else None,
        })


@app.route("/fast_forward", methods=["POST"])
def fast_forward():
    with _sim_lock:
        if _sim is None:
            return _no_simulation()
        summary = _sim.fast_forward()
        return jsonify({"summary": summary, "generation": _sim.generation})


@app.route("/world", methods=["GET"])
def world():
    with _sim_lock:
        if _sim is None:
            return _no_simulation()
        return jsonify(_sim.world_snapshot().as_dict())


@app.route("/status", methods=["GET"])
def status():
    with _sim_lock:
        if _sim is None:
            return jsonify({"running": False})
        return jsonify({
            "running":    True,
            "generation": _sim.generation,
            "age":        _sim.age,
            "cfg":        _sim.config.as_dict(),
            "lastStats":  _last_stats.as_dict() if _last_stats else None,
        })


# ──────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print("=" * 50)
    print("  EvoForage Server  →  http://localhost:5000")
    print("=" * 50)
    app.run(host="0.0.0.0", port=5000, threaded=True, debug=False)
