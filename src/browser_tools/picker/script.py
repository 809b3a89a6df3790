"""
Interactive element picker program.

The script below is evaluated inside the page. It installs a single
``window.__browserToolsPicker`` object (install-if-absent, so evaluating it
again is harmless) and evaluates to ``true`` when it installed the picker,
``false`` when one was already present.

``__browserToolsPicker.pick(message)`` shows an overlay that highlights the
element under the pointer and returns a promise that settles once:

- plain click: the clicked element's info, or the multi-selection if any
- Cmd/Ctrl + click: add the element to the multi-selection
- Enter: finish the multi-selection (ignored while it is empty)
- Escape: cancel, resolves ``null``

Usage:
    await page.evaluate(PICKER_SCRIPT)
    result = await page.evaluate(PICK_EXPRESSION, "Click the submit button")
"""

PICKER_GLOBAL = "__browserToolsPicker"

# Attribute set on every node the picker adds to the page
PICKER_NODE_ATTRIBUTE = "data-browser-tools-picker"

# Error prefixes thrown inside the page, matched by the runner
INVALID_ARGUMENT_PREFIX = "InvalidArgument"
PICKER_BUSY_PREFIX = "PickerBusy"

TEXT_LIMIT = 200
HTML_LIMIT = 500

PICKER_SCRIPT = """
(() => {
    if (window.%(global)s) {
        return false;
    }

    const NODE_ATTR = "%(attr)s";
    const TEXT_LIMIT = %(text_limit)d;
    const HTML_LIMIT = %(html_limit)d;
    const HIGHLIGHT_CSS =
        "position:absolute;box-sizing:border-box;border:2px solid #3b82f6;" +
        "background:rgba(59,130,246,0.1);pointer-events:none;";
    const SELECTED_OUTLINE = "3px solid #10b981";

    const describeAncestor = (el) => {
        const tag = el.tagName.toLowerCase();
        const id = el.id ? `#${el.id}` : "";
        const rawClass = (el.getAttribute("class") || "").trim();
        const cls = rawClass ? `.${rawClass.split(/\\s+/).join(".")}` : "";
        return tag + id + cls;
    };

    const buildElementInfo = (el) => {
        const parents = [];
        let current = el.parentElement;
        while (current && current !== document.body) {
            parents.push(describeAncestor(current));
            current = current.parentElement;
        }

        const text = (el.textContent || "").trim().slice(0, TEXT_LIMIT);
        return {
            tag: el.tagName.toLowerCase(),
            id: el.id || null,
            class: el.getAttribute("class") || null,
            text: text || null,
            html: el.outerHTML.slice(0, HTML_LIMIT),
            parents: parents.join(" > "),
        };
    };

    const picker = {
        active: false,

        pick(message) {
            if (typeof message !== "string" || !message) {
                return Promise.reject(
                    new Error("%(invalid)s: pick() requires a non-empty message")
                );
            }
            if (picker.active) {
                return Promise.reject(
                    new Error("%(busy)s: a picker session is already active on this page")
                );
            }
            picker.active = true;

            return new Promise((resolve) => {
                const selections = [];
                const selectedElements = new Set();
                let finished = false;

                const overlay = document.createElement("div");
                overlay.setAttribute(NODE_ATTR, "overlay");
                overlay.style.cssText =
                    "position:fixed;top:0;left:0;width:100%%;height:100%%;" +
                    "z-index:2147483647;pointer-events:none";

                const highlight = document.createElement("div");
                highlight.setAttribute(NODE_ATTR, "highlight");
                highlight.style.cssText = HIGHLIGHT_CSS + "display:none";
                overlay.appendChild(highlight);

                const banner = document.createElement("div");
                banner.setAttribute(NODE_ATTR, "banner");
                banner.style.cssText =
                    "position:fixed;bottom:20px;left:50%%;transform:translateX(-50%%);" +
                    "background:#1f2937;color:white;padding:12px 24px;border-radius:8px;" +
                    "font:14px sans-serif;box-shadow:0 4px 12px rgba(0,0,0,0.3);" +
                    "pointer-events:auto;z-index:2147483647";

                const updateBanner = () => {
                    banner.textContent =
                        `${message} (${selections.length} selected, ` +
                        "Cmd/Ctrl+click to add, Enter to finish, Esc to cancel)";
                };

                const isPickerNode = (el) => overlay.contains(el) || banner.contains(el);

                const resolveTarget = (e) => {
                    const el = document.elementFromPoint(e.clientX, e.clientY);
                    if (!el || isPickerNode(el)) {
                        return null;
                    }
                    return el;
                };

                const finish = (result) => {
                    if (finished) {
                        return;
                    }
                    finished = true;
                    document.removeEventListener("mousemove", onMove, true);
                    document.removeEventListener("click", onClick, true);
                    document.removeEventListener("keydown", onKey, true);
                    overlay.remove();
                    banner.remove();
                    selectedElements.forEach((el) => {
                        el.style.outline = "";
                    });
                    picker.active = false;
                    resolve(result);
                };

                const onMove = (e) => {
                    const el = resolveTarget(e);
                    if (!el) {
                        return;
                    }
                    const r = el.getBoundingClientRect();
                    highlight.style.cssText =
                        HIGHLIGHT_CSS +
                        `top:${r.top}px;left:${r.left}px;width:${r.width}px;height:${r.height}px`;
                };

                const onClick = (e) => {
                    if (banner.contains(e.target)) {
                        return;
                    }
                    e.preventDefault();
                    e.stopPropagation();

                    const el = resolveTarget(e);
                    if (!el) {
                        return;
                    }

                    if (e.metaKey || e.ctrlKey) {
                        if (!selectedElements.has(el)) {
                            selectedElements.add(el);
                            selections.push(buildElementInfo(el));
                            el.style.outline = SELECTED_OUTLINE;
                            updateBanner();
                        }
                        return;
                    }

                    const info = buildElementInfo(el);
                    finish(selections.length > 0 ? selections.slice() : info);
                };

                const onKey = (e) => {
                    if (e.key === "Escape") {
                        e.preventDefault();
                        e.stopPropagation();
                        finish(null);
                    } else if (e.key === "Enter" && selections.length > 0) {
                        e.preventDefault();
                        e.stopPropagation();
                        finish(selections.slice());
                    }
                };

                updateBanner();
                (document.body || document.documentElement).append(banner, overlay);

                document.addEventListener("mousemove", onMove, true);
                document.addEventListener("click", onClick, true);
                document.addEventListener("keydown", onKey, true);
            });
        },
    };

    Object.defineProperty(window, "%(global)s", {
        value: picker,
        writable: false,
        configurable: false,
    });
    return true;
})()
""" % {
    "global": PICKER_GLOBAL,
    "attr": PICKER_NODE_ATTRIBUTE,
    "text_limit": TEXT_LIMIT,
    "html_limit": HTML_LIMIT,
    "invalid": INVALID_ARGUMENT_PREFIX,
    "busy": PICKER_BUSY_PREFIX,
}

# Evaluated with the message as its single argument
PICK_EXPRESSION = f"(message) => window.{PICKER_GLOBAL}.pick(message)"

# True while a session is listening on the page
ACTIVE_EXPRESSION = f"() => Boolean(window.{PICKER_GLOBAL} && window.{PICKER_GLOBAL}.active)"
