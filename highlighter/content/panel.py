#!/usr/bin/env python3
"""
Settings panel module.

This module renders the floating term-cloud panel and turns panel
interactions (add, remove, recolor, emphasis checkbox, minimize button)
into TermStore mutations followed by a re-apply of article styles.
"""

from html import escape

from bs4 import BeautifulSoup

from ..core.settings import DEFAULT_TERM_COLOR, Flag, TermKind, sort_for_display
from .restyler import HIDDEN_CLASS, REDUCED_CLASS

PANEL_ID = "feedly-highlighter"
STYLESHEET_ID = "feedly-highlighter-styles"

MARKER_STYLESHEET = """
.{hidden_class} {{ display: none !important; }}
.{reduced_class} {{ opacity: 0.5; }}
"""

PANEL_STYLESHEET = """#feedly-highlighter {
    position: fixed; top: 16px; right: 16px; z-index: 2147483647;
    width: 300px; padding: 12px 16px; background: #ffffff;
    border: 1px solid #dddddd; border-radius: 8px;
    box-shadow: 0 2px 12px rgba(0, 0, 0, 0.15);
    font: 14px/1.4 -apple-system, "Segoe UI", Roboto, sans-serif; color: #333333;
}
#feedly-highlighter.minimized { width: auto; }
#feedly-highlighter.minimized .main-content { display: none; }
#feedly-highlighter .header { display: flex; align-items: center; justify-content: space-between; gap: 12px; }
#feedly-highlighter h3 { margin: 0; font-size: 15px; }
#feedly-highlighter h4 { margin: 16px 0 8px; font-size: 13px; }
#feedly-highlighter .hint { font-size: 12px; color: #666666; font-weight: normal; }
#feedly-highlighter .term-cloud { display: flex; flex-wrap: wrap; gap: 6px; }
#feedly-highlighter .term-tag {
    display: inline-flex; align-items: center; gap: 4px; padding: 2px 8px;
    border-radius: 12px; cursor: pointer;
}
#feedly-highlighter .remove-button { border: none; background: none; cursor: pointer; padding: 0 2px; }
#feedly-highlighter .term-input { display: flex; gap: 6px; margin-top: 8px; }
#feedly-highlighter .term-input input { flex: 1; }
#feedly-highlighter .emphasis-toggle { display: flex; align-items: center; gap: 8px; margin-top: 16px; }
"""


def build_stylesheet(hidden_class=HIDDEN_CLASS, reduced_class=REDUCED_CLASS):
    """Stylesheet for the marker classes and the panel."""
    markers = MARKER_STYLESHEET.format(hidden_class=hidden_class, reduced_class=reduced_class)
    return markers + PANEL_STYLESHEET


# Page-side wiring for live sessions. Interactions are queued on
# window.__feedHighlighter.events and drained by the session's poll loop.
PANEL_EVENTS_SCRIPT = """
const hub = window.__feedHighlighter;
if (hub.panelWired) { return false; }
hub.panelWired = true;
const push = (event) => hub.events.push(event);
const inPanel = (node) => {
    const panel = document.getElementById('feedly-highlighter');
    return panel && node && panel.contains(node);
};
const submit = (kind) => {
    const input = document.getElementById('new-' + kind);
    if (!input) { return; }
    push({type: 'add', kind: kind, text: input.value});
    input.value = '';
};
document.addEventListener('click', (e) => {
    const target = e.target;
    if (!inPanel(target)) { return; }
    if (target.closest('.minimize-button')) {
        push({type: 'minimize'});
        return;
    }
    const remove = target.closest('.remove-button');
    if (remove) {
        e.stopPropagation();
        push({type: 'remove', kind: remove.dataset.type, term: remove.dataset.term});
        return;
    }
    const add = target.closest('#add-highlight, #add-hidden');
    if (add) {
        submit(add.id === 'add-highlight' ? 'highlight' : 'hidden');
        return;
    }
    const tag = target.closest('#highlight-terms .term-tag');
    if (tag) {
        const picker = document.createElement('input');
        picker.type = 'color';
        picker.value = tag.dataset.color || '#e8f5e9';
        picker.addEventListener('input', (ev) => {
            push({type: 'recolor', term: tag.dataset.term, color: ev.target.value});
        });
        picker.addEventListener('change', () => picker.remove());
        picker.click();
    }
}, true);
document.addEventListener('keyup', (e) => {
    if (e.key !== 'Enter') { return; }
    if (e.target.id === 'new-highlight') { submit('highlight'); }
    else if (e.target.id === 'new-hidden') { submit('hidden'); }
});
document.addEventListener('change', (e) => {
    if (e.target.id === 'toggle-emphasis') {
        push({type: 'emphasis', value: e.target.checked});
    }
});
return true;
"""

EVENT_KINDS = {"highlight": TermKind.HIGHLIGHT, "hidden": TermKind.HIDDEN}


def render_term_tag(term):
    """Render one term tag of a term cloud."""
    text = escape(term.text, quote=True)
    color = getattr(term, "color", DEFAULT_TERM_COLOR)
    kind = term.kind.value
    return (
        f'<div class="term-tag" style="background-color: {color}" '
        f'data-term="{text}" data-color="{color}" data-type="{kind}">'
        f'<span>{text}</span>'
        f'<button class="remove-button" data-term="{text}" data-type="{kind}">×</button>'
        f'</div>'
    )


def render_term_cloud(terms):
    return "".join(render_term_tag(term) for term in sort_for_display(terms))


def render_panel(settings):
    """
    Render the panel markup for the given settings.

    Terms are listed alphabetically; matching order is unaffected.

    Args:
        settings: Current Settings

    Returns:
        str: HTML markup of the panel container
    """
    minimized = ' class="minimized"' if settings.is_minimized else ""
    toggle = "+" if settings.is_minimized else "−"
    checked = " checked" if settings.show_emphasis else ""
    return f"""<div id="{PANEL_ID}"{minimized}>
<div class="header">
<h3>Feedly Highlighter</h3>
<button class="minimize-button">{toggle}</button>
</div>
<div class="main-content">
<div>
<h4>Keywords <span class="hint">(Click to change color)</span></h4>
<div id="highlight-terms" class="term-cloud">{render_term_cloud(settings.highlight_terms)}</div>
<div class="term-input">
<input type="text" id="new-highlight" placeholder="Add keyword">
<button id="add-highlight">Add</button>
</div>
</div>
<div>
<h4>Hidden Terms</h4>
<div id="hidden-terms" class="term-cloud">{render_term_cloud(settings.hidden_terms)}</div>
<div class="term-input">
<input type="text" id="new-hidden" placeholder="Add term">
<button id="add-hidden">Add</button>
</div>
</div>
<label class="emphasis-toggle">
<input type="checkbox" id="toggle-emphasis"{checked}>
Emphasize Highlighted Articles
</label>
</div>
</div>"""


class SoupPanelView:
    """Shows the panel inside a BeautifulSoup document."""

    def __init__(self, soup):
        self.soup = soup

    def _container(self):
        return self.soup.body or self.soup

    def install_stylesheet(self, css=None):
        css = css if css is not None else build_stylesheet()
        existing = self.soup.find(id=STYLESHEET_ID)
        if existing is not None:
            existing.decompose()

        style = self.soup.new_tag("style", id=STYLESHEET_ID)
        style.string = css
        head = self.soup.head
        if head is not None:
            head.append(style)
        else:
            self.soup.insert(0, style)

    def show(self, markup):
        existing = self.soup.find(id=PANEL_ID)
        if existing is not None:
            existing.decompose()

        fragment = BeautifulSoup(markup, "html.parser")
        self._container().append(fragment.find(id=PANEL_ID))


class PanelController:
    """
    Wires panel interactions to TermStore mutations.

    Each handler persists through the TermStore, repaints the panel and
    calls ``on_change`` so articles are re-classified.
    """

    def __init__(self, term_store, view, on_change=None, prompt_for_color=None):
        """
        Initialize the controller.

        Args:
            term_store: TermStore owning the settings
            view: Object with show(markup) displaying the panel
            on_change: Callable re-applying article styles
            prompt_for_color: Callable taking the current color of a term and
                returning the chosen color, or None to cancel
        """
        self.term_store = term_store
        self.view = view
        self.on_change = on_change
        self.prompt_for_color = prompt_for_color

    @property
    def settings(self):
        return self.term_store.settings

    def refresh(self):
        markup = render_panel(self.settings)
        self.view.show(markup)
        return markup

    def _changed(self):
        self.refresh()
        if self.on_change is not None:
            self.on_change()

    async def add_term(self, kind, text):
        added = await self.term_store.add_term(kind, text)
        if added:
            self._changed()
        return added

    async def remove_term(self, kind, text):
        removed = await self.term_store.remove_term(kind, text)
        if removed:
            self._changed()
        return removed

    async def recolor(self, text, prompt=None):
        """
        Ask for a new color for a highlight term and store it.

        Args:
            text: Highlight term to recolor
            prompt: Color prompt for this interaction (defaults to the
                controller's prompt_for_color)

        Returns:
            bool: True if the color changed
        """
        prompt = prompt or self.prompt_for_color
        term = self.settings.find_highlight(text)
        if term is None or prompt is None:
            return False

        color = prompt(term.color)
        if not color or color == term.color:
            return False

        updated = await self.term_store.set_term_color(text, color)
        if updated:
            self._changed()
        return updated

    async def set_emphasis(self, enabled):
        await self.term_store.set_flag(Flag.SHOW_EMPHASIS, enabled)
        self._changed()

    async def toggle_minimized(self):
        await self.term_store.set_flag(Flag.IS_MINIMIZED, not self.settings.is_minimized)
        self._changed()

    async def handle_event(self, event):
        """
        Dispatch one interaction reported by the page.

        Args:
            event: Dictionary with a ``type`` key ('add', 'remove',
                'recolor', 'emphasis' or 'minimize') and its payload

        Returns:
            bool: True if the event was recognized
        """
        event_type = event.get("type")
        kind = EVENT_KINDS.get(event.get("kind"), TermKind.HIGHLIGHT)

        if event_type == "add":
            await self.add_term(kind, event.get("text"))
        elif event_type == "remove":
            await self.remove_term(kind, event.get("term"))
        elif event_type == "recolor":
            await self.recolor(event.get("term"), prompt=lambda current: event.get("color"))
        elif event_type == "emphasis":
            await self.set_emphasis(bool(event.get("value")))
        elif event_type == "minimize":
            await self.toggle_minimized()
        else:
            print(f"Warning: ignoring unknown panel event {event!r}")
            return False
        return True
