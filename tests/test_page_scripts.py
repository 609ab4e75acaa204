"""Browser tests for the in-document lookup script.

Runs real Chromium through Playwright against small inline documents.
Skipped when Playwright or its Chromium build is not installed
(``playwright install chromium``).
"""

from __future__ import annotations

import pytest

pytest.importorskip("playwright")

from playwright.sync_api import Error as PlaywrightError  # noqa: E402
from playwright.sync_api import sync_playwright  # noqa: E402

from puppetcore.engine.errors import CheckboxNotFoundError, ElementNotFoundError  # noqa: E402
from puppetcore.engine.session import Session  # noqa: E402

pytestmark = pytest.mark.browser

CLICK_RECORDER = """
<script>
  window.clicks = [];
  document.addEventListener('click', (e) => window.clicks.push(e.target.id || e.target.tagName), true);
</script>
"""


@pytest.fixture(scope="module")
def browser():
    with sync_playwright() as p:
        try:
            instance = p.chromium.launch(headless=True)
        except PlaywrightError as exc:
            pytest.skip(f"Chromium is not available: {exc}")
        yield instance
        instance.close()


@pytest.fixture
def page(browser):
    context = browser.new_context(viewport={"width": 1280, "height": 720})
    page = context.new_page()
    yield page
    context.close()


def _load(page, body: str) -> None:
    page.set_content(f"<html><body>{CLICK_RECORDER}{body}</body></html>")


def _session(page, **kwargs) -> Session:
    kwargs.setdefault("settle_delay_ms", 0)
    kwargs.setdefault("timeout_ms", 2000)
    kwargs.setdefault("poll_interval_ms", 50)
    return Session(page, **kwargs)


def _clicks(page) -> list[str]:
    return page.evaluate("window.clicks")


# ---------------------------------------------------------------------------
# 1. Text matching
# ---------------------------------------------------------------------------

class TestTextMatching:
    def test_prefers_control_over_text_wrapper(self, page):
        _load(page, '<div id="wrap">Save your work <button id="save">Save</button></div>')

        outcome = _session(page).click_by_text("save")

        assert outcome.candidate.tag == "button"
        assert _clicks(page) == ["save"]

    def test_whitespace_and_case_are_normalised(self, page):
        _load(page, '<button id="go">  Submit\n   Now </button>')
        _session(page).click_by_text("submit now")
        assert _clicks(page) == ["go"]

    @pytest.mark.parametrize(
        "hidden_style",
        ["display: none", "visibility: hidden", "opacity: 0", "width: 0; height: 0; padding: 0; border: 0"],
    )
    def test_invisible_controls_are_skipped(self, page, hidden_style):
        _load(
            page,
            f'<a id="hidden" href="#" style="display: inline-block; overflow: hidden; {hidden_style}">Next</a>'
            '<a id="shown" href="#">Next</a>',
        )
        _session(page).click_by_text("Next")
        assert _clicks(page) == ["shown"]

    def test_custom_control_found_by_tree_walk(self, page):
        _load(page, '<div id="opt" role="option" style="padding: 4px">Blue</div>')

        outcome = _session(page).click_by_text("blue")

        assert outcome.candidate.tag == "div"
        assert _clicks(page) == ["opt"]

    def test_waits_for_late_rendered_button(self, page):
        _load(
            page,
            """
            <script>
              setTimeout(() => {
                const b = document.createElement('button');
                b.id = 'late';
                b.textContent = 'Continue';
                document.body.appendChild(b);
              }, 300);
            </script>
            """,
        )
        _session(page).click_by_text("Continue")
        assert _clicks(page) == ["late"]

    def test_missing_text_times_out(self, page):
        _load(page, "<button>Save</button>")
        with pytest.raises(ElementNotFoundError):
            _session(page, timeout_ms=300).click_by_text("Delete")


# ---------------------------------------------------------------------------
# 2. Attribute and index
# ---------------------------------------------------------------------------

class TestAttributeAndIndex:
    def test_first_visible_attribute_match(self, page):
        _load(
            page,
            '<button id="a" name="clear" style="display: none">x</button>'
            '<button id="b" name="clear">x</button>',
        )
        _session(page).click_by_attribute("clear")
        assert _clicks(page) == ["b"]

    def test_attribute_value_is_exact(self, page):
        _load(page, '<button id="a" name="Clear">x</button>')
        with pytest.raises(ElementNotFoundError):
            _session(page, timeout_ms=200).click_by_attribute("clear")

    def test_nth_selector_match(self, page):
        _load(page, "".join(f'<div class="card" id="c{i}">Card {i}</div>' for i in range(1, 4)))

        outcome = _session(page).click_by_index(".card", 2)

        assert outcome.candidate.path.endswith("div#c2")
        assert _clicks(page) == ["c2"]

    def test_nth_attribute_match(self, page):
        _load(page, "".join(f'<input type="radio" name="size" id="s{i}">' for i in range(1, 4)))
        _session(page).click_nth_by_attribute("size", 3)
        assert _clicks(page) == ["s3"]

    def test_nth_match_on_attribute_name_with_punctuation(self, page):
        _load(page, "".join(f'<button data:role="pick" id="p{i}">Pick {i}</button>' for i in range(1, 3)))
        _session(page).click_nth_by_attribute("pick", 2, attribute="data:role")
        assert _clicks(page) == ["p2"]

    def test_index_past_end_times_out(self, page):
        _load(page, '<div class="card">only</div>')

        with pytest.raises(ElementNotFoundError) as exc_info:
            _session(page, timeout_ms=300).click_by_index(".card", 5)

        assert exc_info.value.match_count == 1

    def test_invalid_selector_fails_fast(self, page):
        _load(page, "<div>x</div>")
        with pytest.raises(PlaywrightError):
            _session(page, timeout_ms=5000).click_by_index("::not-a-selector[", 1)


# ---------------------------------------------------------------------------
# 3. Checkboxes
# ---------------------------------------------------------------------------

class TestCheckbox:
    def test_checkbox_inside_label(self, page):
        _load(page, '<label><input type="checkbox" id="ship"> Free shipping</label>')

        _session(page).click_checkbox_by_text("free shipping")

        assert page.is_checked("#ship")

    def test_text_in_span_beside_checkbox_in_label(self, page):
        _load(page, '<label><span>Free shipping</span><input type="checkbox" id="ship"></label>')

        outcome = _session(page).click_checkbox_by_text("Free shipping")

        assert outcome.candidate.tag == "input"
        assert page.is_checked("#ship")

    def test_hidden_custom_checkbox_gets_synthetic_click(self, page):
        _load(
            page,
            '<label><input type="checkbox" id="gift" style="display: none">'
            '<span class="box" style="display: inline-block; width: 12px; height: 12px; border: 1px solid"></span>'
            " Gift wrap</label>",
        )

        outcome = _session(page, click_timeout_ms=500).click_checkbox_by_text("gift wrap")

        assert outcome.tier == "synthetic"
        assert page.evaluate("document.getElementById('gift').checked") is True

    def test_checkbox_among_descendants(self, page):
        _load(page, '<div><span>Remember me</span><input type="checkbox" id="remember"></div>')
        _session(page).click_checkbox_by_text("Remember me")
        assert page.is_checked("#remember")

    def test_text_without_checkbox(self, page):
        _load(page, "<p>Free shipping on orders over $50</p>")
        with pytest.raises(CheckboxNotFoundError):
            _session(page, timeout_ms=300).click_checkbox_by_text("Free shipping")


# ---------------------------------------------------------------------------
# 4. Click fallback
# ---------------------------------------------------------------------------

class TestClickFallback:
    def test_covered_button_gets_synthetic_click(self, page):
        _load(
            page,
            '<button id="under">Publish</button>'
            '<div id="overlay" style="position: fixed; inset: 0; z-index: 10"></div>',
        )

        outcome = _session(page, click_timeout_ms=500).click_by_text("Publish")

        assert outcome.tier == "synthetic"
        assert _clicks(page) == ["under"]
