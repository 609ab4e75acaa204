"""In-document predicate evaluated by PlaywrightPage.

The script receives a criteria descriptor (see ``criteria.py``) and returns
``{element, info}``: the matched element (or ``null``) plus JSON diagnostics.
It only reads the document; it never scrolls, focuses or clicks, so it is
safe to re-run on every poll tick.
"""

from __future__ import annotations

import json

from puppetcore.models import INTERACTIVE_ROLES

FIND_CANDIDATE_JS = """
(descriptor) => {
    const INTERACTIVE_ROLES = __INTERACTIVE_ROLES__;
    const CLICKABLE_SELECTOR = 'a, button, [role="button"], [onclick]';
    const CHECKBOX_SELECTOR = 'input[type="checkbox"]';

    function isVisible(el) {
        if (!el) return false;
        const style = window.getComputedStyle(el);
        if (
            style &&
            (style.visibility === 'hidden' || style.display === 'none' || style.opacity === '0')
        ) {
            return false;
        }
        const rect = el.getBoundingClientRect();
        return rect.width > 0 && rect.height > 0;
    }

    function rawText(el) {
        return (el.innerText || el.textContent || '').replace(/\\s+/g, ' ').trim();
    }

    function normalizedText(el) {
        return rawText(el).toLowerCase();
    }

    function isInteractive(el) {
        const role = (el.getAttribute('role') || '').toLowerCase();
        return (
            el.tagName === 'A' ||
            el.tagName === 'BUTTON' ||
            el.hasAttribute('onclick') ||
            INTERACTIVE_ROLES.includes(role)
        );
    }

    function findClickable(el) {
        let cur = el;
        while (cur) {
            if (isInteractive(cur)) return cur;
            cur = cur.parentElement;
        }
        return null;
    }

    function path(el) {
        const parts = [];
        let cur = el;
        while (cur) {
            const id = cur.id ? '#' + cur.id : '';
            parts.unshift(cur.tagName.toLowerCase() + id);
            cur = cur.parentElement;
        }
        return parts.join('>');
    }

    function visibleElements() {
        const out = [];
        if (!document.body) return out;
        const walker = document.createTreeWalker(document.body, NodeFilter.SHOW_ELEMENT);
        let node;
        while ((node = walker.nextNode())) {
            if (isVisible(node)) out.push(node);
        }
        return out;
    }

    function found(el, extra) {
        return {
            element: el,
            info: Object.assign(
                {tag: el.tagName.toLowerCase(), text: rawText(el).slice(0, 200), path: path(el), textMatched: false, count: 0},
                extra || {}
            ),
        };
    }

    function none(extra) {
        return {element: null, info: Object.assign({textMatched: false, count: 0}, extra || {})};
    }

    function byText(needle) {
        for (const el of document.querySelectorAll(CLICKABLE_SELECTOR)) {
            if (isVisible(el) && normalizedText(el).includes(needle)) return found(el, {phase: 1});
        }
        for (const node of visibleElements()) {
            if (normalizedText(node).includes(needle)) {
                const clickable = findClickable(node);
                return found(clickable || node, {phase: 2, fallback: !clickable});
            }
        }
        return none();
    }

    function byAttribute(name, value) {
        const escaped = (window.CSS && CSS.escape) ? CSS.escape(name) : name;
        for (const el of document.querySelectorAll('[' + escaped + ']')) {
            if (el.getAttribute(name) === value && isVisible(el)) return found(el);
        }
        return none();
    }

    function bySelectorIndex(selector, index) {
        const els = document.querySelectorAll(selector);
        const count = els.length;
        if (count < index) return none({count: count});
        const el = els[index - 1];
        if (!isVisible(el)) return none({count: count});
        return found(el, {count: count});
    }

    function checkboxByText(needle) {
        let textMatched = false;
        for (const node of visibleElements()) {
            if (!normalizedText(node).includes(needle)) continue;
            textMatched = true;
            let checkbox = null;
            const label = node.closest('label');
            if (label) checkbox = label.querySelector(CHECKBOX_SELECTOR);
            if (!checkbox) checkbox = node.querySelector(CHECKBOX_SELECTOR);
            if (checkbox) return found(checkbox, {textMatched: true});
        }
        return none({textMatched: textMatched});
    }

    switch (descriptor.kind) {
        case 'text':
            return byText(descriptor.needle);
        case 'attribute':
            return byAttribute(descriptor.name, descriptor.value);
        case 'selector_index':
            return bySelectorIndex(descriptor.selector, descriptor.index);
        case 'text_checkbox':
            return checkboxByText(descriptor.needle);
        default:
            throw new Error('Unknown criteria kind: ' + descriptor.kind);
    }
}
""".replace("__INTERACTIVE_ROLES__", json.dumps(list(INTERACTIVE_ROLES)))

SCROLL_INTO_VIEW_JS = "(el) => el.scrollIntoView({block: 'center', inline: 'center'})"

SYNTHETIC_CLICK_JS = "(el) => el.click()"
