import json

import pytest

from highlighter.cli.argument_parser import parse_args
from highlighter.cli.config import (Configuration, is_url, load_config,
                                    load_config_from_args, save_config)
from highlighter.content.articles import ARTICLE_SELECTORS


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "feed.html"
    path.write_text("<html><body><article>x</article></body></html>", encoding="utf-8")
    return path


def test_is_url():
    assert is_url("https://feedly.com/i/latest")
    assert is_url("file:///tmp/feed.html")
    assert not is_url("feed.html")
    assert not is_url(None)


def test_output_name_is_derived(page):
    assert Configuration(source=str(page)).output_file == "feed_highlighted.html"
    assert Configuration(source="https://feedly.com/i/latest").output_file == "feedly_com_highlighted.html"
    assert Configuration(source=str(page), watch=True).output_file is None


def test_page_url_for_local_file(page):
    config = Configuration(source=str(page))
    assert config.page_url == page.resolve().as_uri()
    assert not config.is_remote


@pytest.mark.parametrize("kwargs", [
    {"engine": "lynx"},
    {"browser_type": "netscape"},
    {"source": "/no/such/feed.html"},
    {"hidden_class": "same", "reduced_class": "same"},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        Configuration(**kwargs)


def test_bad_numbers_are_corrected(capsys):
    config = Configuration(poll_interval=0, watch_duration=-5)
    assert config.poll_interval == 0.5
    assert config.watch_duration is None
    assert "Warning" in capsys.readouterr().out


def test_empty_selectors_fall_back_to_defaults():
    assert Configuration(article_selectors=[]).article_selectors == ARTICLE_SELECTORS


def test_save_and_load(tmp_path, page):
    config = Configuration(source=str(page), engine="playwright", hidden_class="gone")
    path = tmp_path / "conf" / "highlighter.json"
    save_config(config, str(path))

    assert load_config(str(path)) == config


def test_unknown_fields_are_ignored(tmp_path, capsys):
    path = tmp_path / "highlighter.json"
    path.write_text(json.dumps({"engine": "playwright", "colour": "blue"}), encoding="utf-8")

    assert load_config(str(path)).engine == "playwright"
    assert "colour" in capsys.readouterr().out


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_command_line_overrides_config_file(tmp_path, page):
    path = tmp_path / "highlighter.json"
    save_config(Configuration(source=str(page), engine="playwright", poll_interval=2.0), str(path))

    config = load_config_from_args(parse_args(["--config", str(path), "--poll-interval", "1.5", "--visible"]))
    assert config.engine == "playwright"
    assert config.poll_interval == 1.5
    assert config.headless is False
    assert config.source == str(page)


def test_broken_config_file_falls_back_to_arguments(tmp_path, capsys):
    path = tmp_path / "highlighter.json"
    path.write_text("{", encoding="utf-8")

    config = load_config_from_args(parse_args(["--config", str(path), "--engine", "playwright"]))
    assert config.engine == "playwright"
    assert "Falling back" in capsys.readouterr().out
