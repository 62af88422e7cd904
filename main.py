"""
main.py — Sorting Visualizer Flask App
=======================================
The web server that hosts the trace engine for a browser front-end.

Routes:
  GET  /api/algorithms         – registry listing (labels, variants, pseudocode)
  POST /api/run                – generate a trace, reset playback
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N
  POST /api/step/rewind        – jump to step 0
  POST /api/step/end           – jump to the last step
  POST /api/step/play          – toggle play/pause
  POST /api/step/pause         – pause
  POST /api/config/speed       – preset name or milliseconds
  POST /api/config/mode        – beginner / expert / interview
  GET  /api/state              – pump the tick scheduler, return current step
  GET  /api/export             – full trace + metrics for save/replay
  POST /api/compare            – run two configurations on the same input

State management:
  Each browser session gets a run id in the Flask session cookie. The
  live objects (Recorder, PlaybackController, PollingScheduler) stay in
  the in-process RUNS dict under that id. Autoplay advances when the
  client polls /api/state, which pumps the scheduler. RUNS holds at most
  MAX_RUNS entries; the least recently used run is closed and dropped
  to make room.
"""

import logging
import os
import secrets
from collections import OrderedDict
from dataclasses import asdict

from flask import Flask, jsonify, request, session

from algorithms import (
    InvalidInputError,
    UnsupportedVariantError,
    get_algorithm,
    list_algorithms,
    parse_input,
    random_input,
    validate_size,
)
from engine import (
    PlaybackController,
    PollingScheduler,
    Recorder,
    MIN_SPEED_MS,
    SPEED_PRESETS,
    compare,
    stats_to_dict,
    step_to_dict,
)


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)

# run id → {"recorder", "controller", "scheduler"}, least recently used first
RUNS = OrderedDict()
MAX_RUNS = 128


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_run():
    """Return this session's live run, or None."""
    run_id = session.get("run_id")
    if not run_id or run_id not in RUNS:
        return None
    RUNS.move_to_end(run_id)
    return RUNS[run_id]


def drop_run(run_id: str) -> None:
    run = RUNS.pop(run_id, None)
    if run is not None:
        run["controller"].close()


def new_run(recorder: Recorder) -> dict:
    """Replace this session's run: the old trace and its playback go together."""
    old_id = session.get("run_id")
    if old_id:
        drop_run(old_id)
    while len(RUNS) >= MAX_RUNS:
        evicted = next(iter(RUNS))
        logger.info("evicting idle run %s", evicted)
        drop_run(evicted)

    scheduler  = PollingScheduler()
    controller = PlaybackController(
        recorder.trace,
        scheduler=scheduler,
        speed_ms=session.get("speed_ms", SPEED_PRESETS["medium"]),
        mode=session.get("mode", "beginner"),
    )
    run_id = secrets.token_hex(8)
    RUNS[run_id] = {"recorder": recorder, "controller": controller, "scheduler": scheduler}
    session["run_id"] = run_id
    return RUNS[run_id]


def read_values(data: dict):
    """Input may arrive as a list or as the raw text of the input box."""
    raw = data.get("input")
    if raw is None and data.get("random"):
        return random_input(size=validate_size(data.get("size", 7)), seed=data.get("seed"))
    if isinstance(raw, str):
        return parse_input(raw)
    return raw


def playback_payload(run: dict) -> dict:
    ctl = run["controller"]
    return {
        "current_step": ctl.current_index,
        "total_steps":  ctl.total_steps,
        "is_playing":   ctl.is_playing,
        "is_finished":  ctl.is_finished,
        "speed_ms":     ctl.speed_ms,
        "mode":         ctl.mode,
        "step":         step_to_dict(ctl.current_step),
    }


def no_run():
    return jsonify({"error": "Run an algorithm first"}), 400


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([
        {
            "key":              a.key,
            "label":            a.label,
            "variants":         a.variants,
            "default_variant":  a.default_variant,
            "pseudocode":       {v: a.pseudocode_for(v) for v in a.variants},
            "tags":             a.tags,
            "stable":           a.stable,
            "complexity_time":  a.complexity_time,
            "complexity_space": a.complexity_space,
            "description":      a.description,
        }
        for a in list_algorithms()
    ])


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = request.get_json(silent=True) or {}
    algo_key = data.get("algo", "bubble")

    rec = Recorder()
    try:
        rec.start(algo_key, read_values(data), data.get("variant"), seed=data.get("seed"))
    except (InvalidInputError, UnsupportedVariantError) as e:
        logger.warning("rejected run request for %r: %s", algo_key, e)
        return jsonify({"error": str(e)}), 400
    rec.run_to_completion()

    run = new_run(rec)
    info = get_algorithm(algo_key)
    body = playback_payload(run)
    body.update({
        "algo":       info.key,
        "variant":    rec.metrics.variant,
        "input":      list(rec.trace.input),
        "pseudocode": info.pseudocode_for(rec.metrics.variant),
        "stats":      stats_to_dict(rec.trace.stats),
    })
    return jsonify(body)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    run = get_run()
    if run is None:
        return no_run()
    run["controller"].step_forward()
    return jsonify(playback_payload(run))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    run = get_run()
    if run is None:
        return no_run()
    run["controller"].step_back()
    return jsonify(playback_payload(run))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    run = get_run()
    if run is None:
        return no_run()
    data = request.get_json(silent=True) or {}
    try:
        idx = int(data.get("index", 0))
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid step index"}), 400
    run["controller"].goto(idx)
    return jsonify(playback_payload(run))


@app.route("/api/step/rewind", methods=["POST"])
def api_step_rewind():
    run = get_run()
    if run is None:
        return no_run()
    run["controller"].rewind()
    return jsonify(playback_payload(run))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    run = get_run()
    if run is None:
        return no_run()
    run["controller"].jump_to_end()
    return jsonify(playback_payload(run))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    run = get_run()
    if run is None:
        return no_run()
    run["controller"].toggle_play()
    return jsonify(playback_payload(run))


@app.route("/api/step/pause", methods=["POST"])
def api_step_pause():
    run = get_run()
    if run is None:
        return no_run()
    run["controller"].pause()
    return jsonify(playback_payload(run))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    speed = (request.get_json(silent=True) or {}).get("speed", "medium")
    if isinstance(speed, str):
        if speed not in SPEED_PRESETS:
            return jsonify({"error": f"Unknown speed preset: {speed}"}), 400
        speed_ms = SPEED_PRESETS[speed]
    else:
        try:
            speed_ms = int(speed)
        except (TypeError, ValueError):
            return jsonify({"error": "Speed must be a preset name or milliseconds"}), 400
    speed_ms = max(MIN_SPEED_MS, speed_ms)

    run = get_run()
    if run is not None:
        run["controller"].set_speed(speed_ms)
        speed_ms = run["controller"].speed_ms
    session["speed_ms"] = speed_ms
    return jsonify({"speed_ms": speed_ms})


@app.route("/api/config/mode", methods=["POST"])
def api_config_mode():
    mode = (request.get_json(silent=True) or {}).get("mode", "beginner")
    run = get_run()
    if run is not None:
        run["controller"].set_mode(mode)
        mode = run["controller"].mode
    session["mode"] = mode
    return jsonify({"mode": mode})


# ---------------------------------------------------------------------------
# API: Polling / Export / Compare
# ---------------------------------------------------------------------------
@app.route("/api/state")
def api_state():
    run = get_run()
    if run is None:
        return jsonify({"current_step": 0, "total_steps": 0, "is_playing": False, "step": None})
    run["scheduler"].pump()
    return jsonify(playback_payload(run))


@app.route("/api/export")
def api_export():
    run = get_run()
    if run is None:
        return no_run()
    return jsonify(run["recorder"].export())


@app.route("/api/compare", methods=["POST"])
def api_compare():
    data      = request.get_json(silent=True) or {}
    left_cfg  = data.get("left")  or {}
    right_cfg = data.get("right") or {}

    recs = []
    try:
        values = read_values(data)
        for cfg in (left_cfg, right_cfg):
            rec = Recorder()
            rec.start(cfg.get("algo", "bubble"), values, cfg.get("variant"), seed=cfg.get("seed"))
            recs.append(rec)
    except (InvalidInputError, UnsupportedVariantError) as e:
        logger.warning("rejected compare request: %s", e)
        return jsonify({"error": str(e)}), 400

    for rec in recs:
        rec.run_to_completion()
    result = compare(recs[0], recs[1])
    return jsonify({
        "left":               asdict(result.left),
        "right":              asdict(result.right),
        "winner_comparisons": result.winner_comparisons,
        "winner_swaps":       result.winner_swaps,
        "winner_steps":       result.winner_steps,
    })


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    host = os.environ.get("SORTVIZ_HOST", "0.0.0.0")
    port = int(os.environ.get("SORTVIZ_PORT", "5000"))
    print("=" * 60)
    print("  Sorting Algorithm Visualizer")
    print("  Starting Flask server...")
    print(f"  Open http://localhost:{port}")
    print("=" * 60)
    app.run(debug=True, host=host, port=port)
