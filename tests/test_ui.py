"""
Tests for the HTML helpers shared by the Streamlit pages.
"""
from learning_hub.analytics import Stage
from learning_hub.auth import View
from learning_hub.ui import (
    BAND_COLOUR,
    GREEN,
    RED,
    VIEW_PAGES,
    avatar,
    badge,
    card,
    progress_bar,
    stage_strip,
)


class TestProgressBar:
    def test_width_is_clamped(self):
        assert "width:100.0%" in progress_bar(150)
        assert "width:0.0%" in progress_bar(-20)

    def test_label_shows_raw_value(self):
        assert "150%" in progress_bar(150)

    def test_colour_from_band(self):
        assert BAND_COLOUR["green"] in progress_bar(95)
        assert RED in progress_bar(10)

    def test_explicit_colour_and_no_label(self):
        html = progress_bar(40, GREEN, show_pct=False)
        assert GREEN in html
        assert ">40%<" not in html
        assert "min-width:3rem" not in html

    def test_width_format_is_stable_for_int_and_float(self):
        assert "width:40.0%" in progress_bar(40)
        assert "width:40.0%" in progress_bar(40.0)


class TestMarkupHelpers:
    def test_text_is_escaped(self):
        assert "&lt;b&gt;" in badge("<b>", RED)
        assert "&lt;script&gt;" in card("<script>", "1")

    def test_avatar_initials(self):
        assert ">AR<" in avatar("Alex Rodriguez")

    def test_stage_strip_numbers_stages(self):
        html = stage_strip([Stage("Profile", "completed"), Stage("Assessment", "current")])
        assert ">1<" in html and ">2<" in html
        assert "Assessment" in html


def test_every_portal_has_a_page():
    assert set(VIEW_PAGES) == {View.LEARNER, View.MANAGER, View.ADMIN}
