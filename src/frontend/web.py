from __future__ import annotations
import argparse
import threading
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from flask import Flask, request, jsonify, Response
from singlish.engine import Engine
from singlish.loader import TableFormatError
from singlish.session import Session

app = Flask(__name__)
_engine: Engine | None = None
# live-typing sessions: least recently used first, capped and expired when idle
MAX_SESSIONS = 256
SESSION_IDLE_S = 30 * 60
_now = time.monotonic


@dataclass
class _Slot:
    session: Session
    last_used: float
    lock: threading.Lock = field(default_factory=threading.Lock)


_sessions: OrderedDict[str, _Slot] = OrderedDict()
_sessions_lock = threading.Lock()


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = Engine().build()
    return _engine


def _evict_locked(now: float) -> None:
    """Drop idle sessions, then the least recently used ones over the cap. Caller holds _sessions_lock."""
    while _sessions:
        sid, slot = next(iter(_sessions.items()))
        if now - slot.last_used <= SESSION_IDLE_S and len(_sessions) <= MAX_SESSIONS:
            break
        del _sessions[sid]


def _touch(sid: str) -> _Slot | None:
    with _sessions_lock:
        slot = _sessions.get(sid)
        if slot is None:
            return None
        now = _now()
        if now - slot.last_used > SESSION_IDLE_S:
            del _sessions[sid]
            return None
        slot.last_used = now
        _sessions.move_to_end(sid)
        return slot


def _not_found(sid: str):
    return jsonify({"error": f"unknown session {sid!r}"}), 404


@app.errorhandler(TableFormatError)
@app.errorhandler(FileNotFoundError)
def _tables_unavailable(exc: Exception):
    return jsonify({"error": f"rule table unavailable: {exc}"}), 500


# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify({"ok": True, "sessions": len(_sessions)})


@app.get("/api/translate")
def api_translate():
    q = request.args.get("q", "", type=str)
    return jsonify({"input": q, "output": _get_engine().translate(q)})


@app.post("/api/session")
def api_session_create():
    session = _get_engine().new_session()
    sid = uuid.uuid4().hex
    with _sessions_lock:
        now = _now()
        _sessions[sid] = _Slot(session, now)
        _evict_locked(now)
    return jsonify({"id": sid}), 201


@app.post("/api/session/<sid>")
def api_session_update(sid: str):
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not isinstance(body.get("text"), str):
        return jsonify({"error": "expected JSON body {\"text\": <string>}"}), 400
    slot = _touch(sid)
    if slot is None:
        return _not_found(sid)
    # one writer per session; overlapping requests for the same id queue here
    with slot.lock:
        session = slot.session
        output = session.update(body["text"])
        payload = {
            "output": output,
            "stable_boundary": session.stable_boundary,
            "diagnostics": session.result.to_dict()["diagnostics"],
        }
    return jsonify(payload)


@app.delete("/api/session/<sid>")
def api_session_delete(sid: str):
    with _sessions_lock:
        slot = _sessions.pop(sid, None)
    if slot is None:
        return _not_found(sid)
    return jsonify({"ok": True})


# ---------- UI ----------
@app.get("/")
def home():
    # A tiny SPA: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Singlish → Sinhala • Flask UI</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --accent-2:#22d3ee;
  --border:#1c2530;
}
*{box-sizing:border-box}
html,body{height:100%}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; box-shadow:0 10px 30px rgba(0,0,0,.25);
}
h1{ font-size:20px; margin:0 0 8px 0; letter-spacing:.3px; }
textarea, .output{
  width:100%; min-height:9rem; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); font-size:17px; white-space:pre-wrap;
}
textarea{ outline:none; resize:vertical }
textarea:focus{ border-color:var(--accent) }
.output{ margin-top:12px; font-family:"Noto Sans Sinhala","Iskoola Pota",system-ui }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0 4px 0; }
.btn{
  padding:10px 14px; border-radius:10px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); cursor:pointer;
}
.btn:hover{ border-color:var(--accent-2) }
.meta{ display:flex; justify-content:space-between; color:var(--muted); font-size:13px; margin-top:6px; }
footer{ margin:26px 0 6px 0; color:var(--muted); font-size:12px; text-align:center; }
kbd{ background:#111825; border:1px solid var(--border); padding:1px 6px; border-radius:6px; color:var(--ink) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Singlish → Sinhala</h1>
      <textarea id="q" placeholder="Input your Singlish text here." autofocus></textarea>
      <div class="controls">
        <button id="clear" class="btn">Clear</button>
        <div id="stats" class="meta">Ready.</div>
      </div>
      <div id="out" class="output"></div>
      <div class="meta"><div id="diag"></div><div>Tip: Press <kbd>Esc</kbd> to clear.</div></div>
    </div>
    <footer>Built with Flask • Live transliteration • No external JS/CSS deps</footer>
  </div>

<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), stats = $("#stats"), diag = $("#diag"), clearBtn = $("#clear");
let sid = null, t; // session id, debounce timer

async function openSession(){
  const resp = await fetch("/api/session", {method:"POST"});
  sid = (await resp.json()).id;
}

async function update(){
  if(!sid) await openSession();
  const t0 = performance.now();
  try{
    const resp = await fetch(`/api/session/${sid}`, {
      method:"POST", headers:{"Content-Type":"application/json"},
      body: JSON.stringify({text: q.value}),
    });
    if(resp.status === 404){ sid = null; return update(); }
    if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
    const data = await resp.json();
    out.textContent = data.output;
    const dt = Math.max(1, Math.round(performance.now() - t0));
    stats.textContent = `~${dt} ms • stable up to ${data.stable_boundary}`;
    diag.textContent = describeDiagnostics(data.diagnostics);
  }catch(e){
    stats.textContent = `Error: ${e.message ?? e}`;
  }
}

function describeDiagnostics(diags){
  const unmapped = diags.filter(d => d.kind === "unmapped").map(d => d.fragment);
  const corrected = diags.filter(d => d.kind === "corrected").map(d => d.fragment);
  const parts = [];
  if(unmapped.length) parts.push(`Unconverted: ${unmapped.join(", ")}`);
  if(corrected.length) parts.push(`Corrected: ${corrected.join(", ")}`);
  return parts.join(" • ");
}

function debouncedUpdate(){
  clearTimeout(t);
  t = setTimeout(update, 150);
}

q.addEventListener("input", debouncedUpdate);
clearBtn.addEventListener("click", async ()=>{
  q.value = "";
  out.textContent = "";
  diag.textContent = "";
  stats.textContent = "Ready.";
  if(sid){ await fetch(`/api/session/${sid}`, {method:"DELETE"}); sid = null; }
  q.focus();
});
window.addEventListener("keydown", (ev)=>{ if(ev.key === "Escape"){ clearBtn.click(); } });
// free the server-side session when the tab goes away
window.addEventListener("pagehide", ()=>{
  if(sid){ fetch(`/api/session/${sid}`, {method:"DELETE", keepalive:true}); sid = null; }
});
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--data-dir", default=None)
    ap.add_argument("--correct-typos", action="store_true")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.build(args.data_dir, correct_typos=args.correct_typos or None, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
