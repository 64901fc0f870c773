"""
Runtime Library embedded in every generated document.

Fixed client-side code, parameterized only by the PAGE_COUNT and PAGE_SCRIPTS
constants the generator writes in front of it.

Behaviour:
    - One page visible at a time; Previous/Next move by one, clamped,
      and are disabled at the edges.
    - Entering a page re-collects answers from every [data-sqe-key] element
      into window.SQE_ANSWERS, then runs that page's scripts in order.
    - Every script runs inside its own async function. Scripts with an id
      render their completion value into the matching [data-sqe-fn]
      placeholder; scripts without an id are fire-and-forget.
    - Any input/change/sqe:answer event re-collects answers and, after a
      30 ms debounce, re-runs the scripts of all pages.
    - Errors are caught and logged per script.

Embedded scripts are executed unsandboxed with the page's privileges. Only
compile sources you trust.
"""

DEBOUNCE_MS = 30

BASE_CSS = """\
body{font-family: system-ui, -apple-system, Roboto, 'Segoe UI', Arial; padding:20px; max-width:900px; margin:auto;}
.page{display:none;}
.page.active{display:block;}
.controls{display:flex;justify-content:space-between;margin-top:18px;}
.question{margin:12px 0;padding:10px;border-radius:8px;background:#f8f8f8;}
fieldset.question{border:1px solid #ddd;padding:10px;border-radius:6px;}
.text-block{margin:8px 0;}
.addon{margin:6px 0 0 4px;color:#444;}
.page-indicator{text-align:center;margin-top:12px;color:#666}
button:disabled{opacity:.5;cursor:not-allowed}"""

RUNTIME_JS = """\
document.addEventListener("DOMContentLoaded", () => {
  window.SQE = window.SQE || {};
  const SQE = window.SQE;

  function coerce(val) {
    if (val === null || typeof val === "undefined") return null;
    const num = Number(val);
    return (val !== "" && Number.isFinite(num)) ? num : val;
  }

  function rawValue(el) {
    const v = el.getAttribute("data-sqe-value");
    return v !== null ? v : el.value;
  }

  // Rebuild window.SQE_ANSWERS from every tracked element in the document.
  SQE.collectAnswers = SQE.collectAnswers || function() {
    window.SQE_ANSWERS = window.SQE_ANSWERS || {};
    const groups = new Map();
    document.querySelectorAll("[data-sqe-key]").forEach(el => {
      const key = el.getAttribute("data-sqe-key");
      if (!key) return;
      if (!groups.has(key)) groups.set(key, []);
      groups.get(key).push(el);
    });
    groups.forEach((group, key) => {
      const types = new Set(group.map(g => (g.type || g.tagName || "").toLowerCase()));
      let final;
      if (types.has("checkbox")) {
        final = group.filter(g => g.checked).map(rawValue);
      } else if (types.has("radio")) {
        let val = null;
        group.forEach(g => { if (g.checked) val = rawValue(g); });
        final = coerce(val);
      } else {
        let val = null;
        group.forEach(g => { if (typeof g.value !== "undefined" && g.value !== "") val = g.value; });
        final = coerce(val);
      }
      window.SQE_ANSWERS[key] = final;
      console.debug("[SQE] collectAnswers:", key, "=", final);
    });
  };

  SQE.insert = SQE.insert || function(text) {
    const page = document.querySelector(".page.active");
    if (!page) return null;
    const div = document.createElement("div");
    div.className = "text-block";
    div.textContent = String(text);
    page.appendChild(div);
    return div;
  };

  SQE.insertHTML = SQE.insertHTML || function(html) {
    const page = document.querySelector(".page.active");
    if (!page) return null;
    const div = document.createElement("div");
    div.className = "text-block";
    div.innerHTML = String(html);
    page.appendChild(div);
    return div;
  };

  SQE.getAnswer = SQE.getAnswer || function(key) {
    return (window.SQE_ANSWERS || {})[key];
  };

  SQE.setAnswer = SQE.setAnswer || function(key, val) {
    window.SQE_ANSWERS = window.SQE_ANSWERS || {};
    window.SQE_ANSWERS[key] = val;
    document.dispatchEvent(new CustomEvent("sqe:answer", { detail: { id: key, value: val } }));
  };

  function renderValue(target, res, nested) {
    if (res === null || typeof res === "undefined") return;
    if (typeof res === "string" || typeof res === "number" || typeof res === "boolean") {
      const d = document.createElement("div");
      d.className = "text-block";
      d.textContent = String(res);
      target.appendChild(d);
    } else if (res instanceof Node) {
      target.appendChild(res);
    } else if (Array.isArray(res) && !nested) {
      res.forEach(item => renderValue(target, item, true));
    } else {
      const d = document.createElement("pre");
      d.className = "text-block";
      d.textContent = JSON.stringify(res, null, 2);
      target.appendChild(d);
    }
  }

  function execute(scriptText) {
    return new Function("return (async function(){\\n" + scriptText + "\\n})()")();
  }

  const runCounters = new Map();

  function runScript(idx, s) {
    if (!s || typeof s !== "object") return;
    const id = s.id || null;
    const scriptText = s.script;
    if (!scriptText || !String(scriptText).trim()) return;
    console.debug("[SQE] run: page", idx, "id", id, String(scriptText).slice(0, 120));

    if (!id) {
      let exec;
      try {
        exec = execute(scriptText);
      } catch (e) {
        console.error("[SQE] Error executing setup script on page", idx, e);
        return;
      }
      if (exec && typeof exec.then === "function") {
        exec.catch(e => { console.error("[SQE] Error running setup script on page", idx, e); });
      }
      return;
    }

    const target = document.querySelector('[data-sqe-fn="' + CSS.escape(String(id)) + '"]');
    if (!target) return;
    // Only the latest run may write into the placeholder.
    const run = (runCounters.get(id) || 0) + 1;
    runCounters.set(id, run);
    target.innerHTML = "";
    let exec;
    try {
      exec = execute(scriptText);
    } catch (e) {
      console.error("[SQE] Error constructing function", id, e);
      return;
    }
    const handle = (res) => {
      if (runCounters.get(id) !== run) return;
      try {
        renderValue(target, res, false);
      } catch (e) {
        console.error("[SQE] Error rendering result of function", id, e);
      }
    };
    if (exec && typeof exec.then === "function") {
      exec.then(handle).catch(e => { console.error("[SQE] Error running function", id, e); });
    } else {
      handle(exec);
    }
  }

  function runScriptsForPage(idx) {
    const scripts = PAGE_SCRIPTS[idx];
    if (!Array.isArray(scripts) || scripts.length === 0) return;
    scripts.forEach(s => {
      try {
        runScript(idx, s);
      } catch (e) {
        console.error("[SQE] Error executing script object on page", idx, e);
      }
    });
  }

  function runAllPages() {
    try { SQE.collectAnswers(); } catch (e) { console.error("[SQE] collectAnswers failed", e); }
    for (let pi = 0; pi < PAGE_SCRIPTS.length; pi++) {
      try {
        runScriptsForPage(pi);
      } catch (e) {
        console.error("[SQE] Error running scripts for page", pi, e);
      }
    }
  }

  let runTimer = null;
  function runAllPagesDebounced() {
    if (runTimer) clearTimeout(runTimer);
    runTimer = setTimeout(() => { runTimer = null; runAllPages(); }, __DEBOUNCE_MS__);
  }

  function onAnswerChanged() {
    try { SQE.collectAnswers(); } catch (e) { console.error("[SQE] collectAnswers failed", e); }
    runAllPagesDebounced();
  }
  document.addEventListener("input", onAnswerChanged, true);
  document.addEventListener("change", onAnswerChanged, true);
  document.addEventListener("sqe:answer", onAnswerChanged);

  const pages = Array.from(document.querySelectorAll(".page"));
  const prevBtn = document.getElementById("prevBtn");
  const nextBtn = document.getElementById("nextBtn");
  const pageIndicator = document.getElementById("pageIndicator");
  const saveContainer = document.getElementById("saveBtnContainer");
  let currentIndex = 0;

  function showPage(idx) {
    if (PAGE_COUNT === 0) {
      if (prevBtn) prevBtn.disabled = true;
      if (nextBtn) nextBtn.disabled = true;
      return;
    }
    if (idx < 0) idx = 0;
    if (idx >= PAGE_COUNT) idx = PAGE_COUNT - 1;
    currentIndex = idx;

    pages.forEach((p, i) => {
      if (i === idx) {
        p.classList.add("active");
        p.style.display = "";
      } else {
        p.classList.remove("active");
        p.style.display = "none";
      }
    });

    if (prevBtn) prevBtn.disabled = (idx === 0);
    if (nextBtn) nextBtn.disabled = (idx === PAGE_COUNT - 1);
    if (pageIndicator) pageIndicator.textContent = "Page " + (idx + 1) + " of " + PAGE_COUNT;
    if (saveContainer) saveContainer.style.display = (idx === PAGE_COUNT - 1) ? "block" : "none";

    try { SQE.collectAnswers(); } catch (e) { console.error("[SQE] collectAnswers failed", e); }
    try {
      runScriptsForPage(idx);
    } catch (e) {
      console.error("[SQE] Error running scripts for page", idx, e);
    }
  }

  if (prevBtn) prevBtn.addEventListener("click", () => { showPage(currentIndex - 1); });
  if (nextBtn) nextBtn.addEventListener("click", () => { showPage(currentIndex + 1); });

  showPage(0);
});""".replace("__DEBOUNCE_MS__", str(DEBOUNCE_MS))

SAVE_JS = """\
document.addEventListener("DOMContentLoaded", () => {
  const saveBtn = document.getElementById("saveBtn");
  if (!saveBtn) return;
  saveBtn.addEventListener("click", () => {
    const data = JSON.stringify(window.SQE_ANSWERS || {}, null, 2);
    const blob = new Blob([data], { type: "application/json" });
    const url = URL.createObjectURL(blob);
    const a = document.createElement("a");
    a.href = url;
    a.download = "answers.json";
    document.body.appendChild(a);
    a.click();
    document.body.removeChild(a);
    URL.revokeObjectURL(url);
  });
});"""


__all__ = ["DEBOUNCE_MS", "BASE_CSS", "RUNTIME_JS", "SAVE_JS"]
