import pytest
from bs4 import BeautifulSoup

from highlighter.content.panel import (PANEL_ID, STYLESHEET_ID, PanelController,
                                       SoupPanelView, build_stylesheet, render_panel)
from highlighter.core.settings import (DEFAULT_TERM_COLOR, HiddenTerm,
                                       HighlightTerm, Settings, TermKind)
from highlighter.core.store import PersistenceError

from .helpers import make_soup, make_term_store, run


def parse_panel(markup):
    return BeautifulSoup(markup, "html.parser").find(id=PANEL_ID)


class RecordingView:
    def __init__(self):
        self.shown = []

    def show(self, markup):
        self.shown.append(markup)


def make_controller(data=None, prompt_for_color=None):
    term_store = make_term_store(data)
    run(term_store.load())
    view = RecordingView()
    changes = []
    controller = PanelController(term_store, view, on_change=lambda: changes.append(1),
                                 prompt_for_color=prompt_for_color)
    return controller, view, changes


def test_terms_render_alphabetically():
    settings = Settings(
        highlight_terms=(HighlightTerm("Zebra"), HighlightTerm("apple"), HighlightTerm("Mango")),
        hidden_terms=(HiddenTerm("sponsored"), HiddenTerm("ad")),
    )
    panel = parse_panel(render_panel(settings))

    highlight = [tag["data-term"] for tag in panel.select("#highlight-terms .term-tag")]
    hidden = [tag["data-term"] for tag in panel.select("#hidden-terms .term-tag")]
    assert highlight == ["apple", "Mango", "Zebra"]
    assert hidden == ["ad", "sponsored"]


def test_term_tags_carry_color_and_type():
    settings = Settings(highlight_terms=(HighlightTerm("python", "#336699"),))
    tag = parse_panel(render_panel(settings)).select_one(".term-tag")

    assert tag["data-color"] == "#336699"
    assert tag["data-type"] == "highlight"
    assert "background-color: #336699" in tag["style"]
    assert tag.select_one(".remove-button")["data-term"] == "python"


def test_term_text_is_escaped():
    nasty = '<b onclick="x()">"bold" & co</b>'
    panel = parse_panel(render_panel(Settings(hidden_terms=(HiddenTerm(nasty),))))

    assert panel.find("b") is None
    tag = panel.select_one("#hidden-terms .term-tag")
    assert tag["data-term"] == nasty
    assert tag.span.get_text() == nasty


def test_minimized_and_emphasis_state():
    panel = parse_panel(render_panel(Settings()))
    assert "minimized" in panel.get("class", [])
    assert panel.select_one(".minimize-button").get_text() == "+"
    assert not panel.select_one("#toggle-emphasis").has_attr("checked")

    panel = parse_panel(render_panel(Settings(is_minimized=False, show_emphasis=True)))
    assert not panel.has_attr("class")
    assert panel.select_one(".minimize-button").get_text() == "−"
    assert panel.select_one("#toggle-emphasis").has_attr("checked")


def test_soup_view_replaces_existing_panel():
    soup = make_soup()
    view = SoupPanelView(soup)
    view.install_stylesheet(build_stylesheet("gone", "dim"))
    view.install_stylesheet(build_stylesheet("gone", "dim"))
    view.show(render_panel(Settings()))
    view.show(render_panel(Settings(is_minimized=False)))

    assert len(soup.find_all(id=PANEL_ID)) == 1
    assert soup.find(id=PANEL_ID).parent is soup.body
    styles = soup.find_all(id=STYLESHEET_ID)
    assert len(styles) == 1
    assert styles[0].parent is soup.head
    assert ".gone" in styles[0].string and ".dim" in styles[0].string


def test_add_and_remove_events():
    controller, view, changes = make_controller()

    assert run(controller.handle_event({"type": "add", "kind": "hidden", "text": " ad "}))
    assert controller.settings.hidden_terms == (HiddenTerm("ad"),)
    assert len(changes) == 1
    assert 'data-term="ad"' in view.shown[-1]

    run(controller.handle_event({"type": "remove", "kind": "hidden", "term": "ad"}))
    assert controller.settings.hidden_terms == ()
    assert len(changes) == 2


def test_no_change_means_no_repaint():
    controller, view, changes = make_controller({"hiddenTerms": ["ad"]})

    run(controller.handle_event({"type": "add", "kind": "hidden", "text": "ad"}))
    run(controller.handle_event({"type": "add", "kind": "hidden", "text": "   "}))
    run(controller.handle_event({"type": "remove", "kind": "highlight", "term": "ad"}))
    assert changes == []
    assert view.shown == []


def test_add_defaults_to_highlight_kind():
    controller, _, _ = make_controller()
    run(controller.handle_event({"type": "add", "text": "python"}))
    assert controller.settings.highlight_terms == (HighlightTerm("python", DEFAULT_TERM_COLOR),)


def test_recolor_event():
    controller, _, changes = make_controller({"highlightTerms": [{"term": "python", "color": "#336699"}]})

    run(controller.handle_event({"type": "recolor", "term": "python", "color": "#ff8800"}))
    assert controller.settings.find_highlight("python").color == "#ff8800"
    assert len(changes) == 1

    run(controller.handle_event({"type": "recolor", "term": "python", "color": "#ff8800"}))
    run(controller.handle_event({"type": "recolor", "term": "missing", "color": "#000000"}))
    assert len(changes) == 1


def test_recolor_uses_prompt():
    offered = []

    def prompt(current):
        offered.append(current)
        return "#010203"

    controller, _, _ = make_controller({"highlightTerms": ["python"]}, prompt_for_color=prompt)
    assert run(controller.recolor("python"))
    assert offered == [DEFAULT_TERM_COLOR]
    assert controller.settings.find_highlight("python").color == "#010203"


def test_recolor_cancelled():
    controller, _, changes = make_controller({"highlightTerms": ["python"]},
                                             prompt_for_color=lambda current: None)
    assert not run(controller.recolor("python"))
    assert changes == []


def test_emphasis_and_minimize_events():
    controller, view, changes = make_controller()

    run(controller.handle_event({"type": "emphasis", "value": True}))
    run(controller.handle_event({"type": "minimize"}))

    assert controller.settings.show_emphasis is True
    assert controller.settings.is_minimized is False
    assert controller.term_store.store.data == {"showEmphasis": True, "isMinimized": False}
    assert len(changes) == 2
    assert 'class="minimized"' not in view.shown[-1]


def test_unknown_event_is_ignored(capsys):
    controller, view, changes = make_controller()
    assert not run(controller.handle_event({"type": "explode"}))
    assert changes == [] and view.shown == []
    assert "unknown panel event" in capsys.readouterr().out


def test_failed_write_propagates_without_repaint():
    controller, view, changes = make_controller()

    async def fail(mapping):
        raise OSError("quota exceeded")

    controller.term_store.store.set = fail
    with pytest.raises(PersistenceError):
        run(controller.handle_event({"type": "add", "text": "python"}))
    assert view.shown == [] and changes == []
    assert controller.settings.highlight_terms == ()


def test_refresh_returns_markup():
    controller, view, _ = make_controller({"highlightTerms": ["python"]})
    markup = controller.refresh()
    assert view.shown == [markup]
    assert TermKind.HIGHLIGHT.value in markup
