"""Text Analyzer — single-page UI + JSON API.

  - Primary / comparison text areas with Analyze, Clear and Copy JSON
  - Size, compression ratio, message type, similarity bar
  - Colour-coded diff (green = added, red = removed)
  - Collapsible XML structure tree

Run:  python -m msg_analyzer.web_app
Open: http://localhost:{PORT}  (default 3050)
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, field_validator

from msg_analyzer import __version__
from msg_analyzer.analyzer import analyze
from msg_analyzer.config import get_config
from msg_analyzer.presenter import clean_text, result_payload
from msg_analyzer.redactor import redact

log = logging.getLogger(__name__)

app = FastAPI(title="Text Analyzer", version=__version__)


class AnalyzeRequest(BaseModel):
    primary: str
    secondary: str | None = None
    mask: bool | None = None   # None → MASK_SENSITIVE_DATA setting

    @field_validator("primary", "secondary", mode="before")
    @classmethod
    def replace_surrogates(cls, v):
        if isinstance(v, str):
            return clean_text(v)
        return v


class RedactRequest(BaseModel):
    text: str

    @field_validator("text", mode="before")
    @classmethod
    def replace_surrogates(cls, v):
        if isinstance(v, str):
            return clean_text(v)
        return v


def _enforce_limit(*texts: str | None):
    limit = get_config().max_input_chars
    for text in texts:
        if text and len(text) > limit:
            raise HTTPException(
                status_code=413,
                detail=f"Input is {len(text)} characters; the limit is {limit}.",
            )


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@app.post("/api/analyze")
def api_analyze(req: AnalyzeRequest):
    """Run the full analysis on the primary text (and comparison text, if any)."""
    _enforce_limit(req.primary, req.secondary)
    mask = get_config().mask_sensitive_data if req.mask is None else req.mask
    result = analyze(req.primary, req.secondary, mask=mask)
    log.info(
        "Analyze: %d bytes, type=%s, compared=%s",
        result.original_size, result.message_type.value, result.has_comparison,
    )
    return result_payload(result, mask=mask)


@app.post("/api/redact")
def api_redact(req: RedactRequest):
    _enforce_limit(req.text)
    return {"text": redact(req.text)}


@app.get("/", response_class=HTMLResponse)
async def index():
    return ANALYZER_HTML


# Diff text and tree values are inserted with textContent, never innerHTML.
ANALYZER_HTML = """\
<!DOCTYPE html>
<html lang="en"><head><meta charset="utf-8">
<title>Text Analyzer</title>
<style>
body{font-family:system-ui,sans-serif;margin:0;padding:24px;background:#f8fafc;color:#1f2937}
h2{margin-top:0}
.grid{display:grid;grid-template-columns:1fr 1fr;gap:24px}
textarea{width:100%;height:16rem;padding:12px;border:1px solid #d1d5db;border-radius:8px;font-family:monospace;box-sizing:border-box}
label{display:block;font-size:.875rem;color:#374151;margin:8px 0}
button{padding:8px 16px;border-radius:8px;border:1px solid #d1d5db;background:#fff;cursor:pointer}
button.primary{background:#4f46e5;color:#fff;border-color:#4f46e5}
.card{background:#fff;padding:24px;border-radius:8px;box-shadow:0 1px 3px rgba(0,0,0,.1);margin-top:16px}
.stats{display:grid;grid-template-columns:1fr 1fr;gap:16px}
.muted{font-size:.875rem;color:#4b5563;margin:0}
.val{font-weight:600;margin:4px 0 0}
.bar{height:8px;background:#e5e7eb;border-radius:4px;overflow:hidden}
.bar div{height:100%;background:#6366f1}
pre{max-height:24rem;overflow:auto;background:#f9fafb;padding:12px;border-radius:6px;white-space:pre-wrap;font-size:.875rem}
.text-green-600{color:#16a34a;background:#dcfce7}
.text-red-600{color:#dc2626;background:#fee2e2;text-decoration:line-through}
.hidden{display:none}
</style></head>
<body>
<h2>Text Analyzer</h2>
<div class="grid">
  <div>
    <label for="t1">Primary Text</label>
    <textarea id="t1" placeholder="Paste your primary text here (e.g., single-line XML)"></textarea>
    <label for="t2">Comparison Text (Optional)</label>
    <textarea id="t2" placeholder="Paste text to compare (optional)"></textarea>
  </div>
  <div>
    <button class="primary" id="analyze">Analyze</button>
    <button id="clear">Clear</button>
    <div id="result" class="card hidden">
      <div style="display:flex;justify-content:space-between;align-items:center">
        <h3 style="margin:0">Analysis Results</h3><button id="copy">Copy JSON</button>
      </div>
      <div class="stats" style="margin-top:16px">
        <div><p class="muted">Original Size</p><p class="val" id="orig"></p></div>
        <div><p class="muted">Compressed Size</p><p class="val" id="comp"></p></div>
        <div><p class="muted">Compression Ratio</p><p class="val" id="ratio"></p></div>
        <div><p class="muted">Message Type</p><p class="val" id="mtype"></p></div>
      </div>
      <div id="simbox" class="hidden" style="margin-top:16px">
        <p class="muted">Text Similarity</p>
        <div class="bar"><div id="simbar"></div></div>
        <p class="val" id="sim"></p>
      </div>
      <div id="diffbox" class="hidden" style="margin-top:16px">
        <p class="muted">Differences</p><pre id="diff"></pre>
      </div>
      <details id="treebox" class="hidden" style="margin-top:16px" open>
        <summary class="muted">XML Structure</summary><pre id="tree"></pre>
      </details>
    </div>
  </div>
</div>
<script>
let last = null;
const $ = id => document.getElementById(id);
const fmt = v => v === null || v === undefined ? 'N/A' : v.toFixed(2) + '%';

function render(r) {
  last = r;
  $('result').classList.remove('hidden');
  $('orig').textContent = r.original_size + ' bytes';
  $('comp').textContent = r.compressed_size === null ? 'N/A' : r.compressed_size + ' bytes';
  $('ratio').textContent = fmt(r.compression_ratio);
  $('mtype').textContent = r.message_label;
  $('simbox').classList.toggle('hidden', r.similarity === null);
  if (r.similarity !== null) {
    $('simbar').style.width = r.similarity + '%';
    $('sim').textContent = fmt(r.similarity) + ' similar';
  }
  const diff = $('diff');
  diff.replaceChildren();
  $('diffbox').classList.toggle('hidden', !r.differences || !r.differences.length);
  (r.differences || []).forEach(seg => {
    const span = document.createElement('span');
    if (seg.kind === 'added') span.className = 'text-green-600';
    if (seg.kind === 'removed') span.className = 'text-red-600';
    span.textContent = seg.text;
    diff.appendChild(span);
  });
  $('treebox').classList.toggle('hidden', r.structural_content === null);
  $('tree').textContent = JSON.stringify(r.structural_content, null, 2);
}

$('analyze').onclick = async () => {
  const body = {primary: $('t1').value, secondary: $('t2').value || null};
  const resp = await fetch('/api/analyze', {
    method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify(body)});
  const data = await resp.json();
  if (!resp.ok) { alert(data.detail || 'Analysis failed'); return; }
  render(data);
};
$('clear').onclick = () => {
  $('t1').value = ''; $('t2').value = ''; last = null;
  $('result').classList.add('hidden');
};
$('copy').onclick = async () => {
  if (!last) return;
  await navigator.clipboard.writeText(JSON.stringify(last, null, 2));
  $('copy').textContent = 'Copied';
  setTimeout(() => { $('copy').textContent = 'Copy JSON'; }, 2000);
};
</script>
</body></html>
"""

if __name__ == "__main__":
    import uvicorn

    config = get_config()
    print(f"\n  Text Analyzer → http://localhost:{config.port}\n")
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=config.log_level)
