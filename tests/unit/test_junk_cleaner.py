from __future__ import annotations

from feedcleaner.processing.junk_cleaner import JunkCleaner, clean_common_issues


def test_removes_tracking_pixels_but_keeps_real_images() -> None:
    html = '<p>x</p><img width="1" height="1" src="t.gif"><img width="2" height="1" src="k.gif">'
    out = clean_common_issues(html)
    assert "t.gif" not in out
    assert "k.gif" in out


def test_tracking_pixel_dimensions_can_come_from_inline_style() -> None:
    html = (
        '<p>x</p>'
        '<img style="width: 1px; height: 1px" src="s.gif">'
        '<img width="1px" style="height:1px" src="m.gif">'
        '<img style="width: 1px" src="w.gif">'
    )
    out = clean_common_issues(html)
    assert "s.gif" not in out
    assert "m.gif" not in out
    assert "w.gif" in out


def test_removes_hidden_elements() -> None:
    html = (
        '<div style="display: none">h1</div>'
        '<span style="color:red;display:none">h2</span>'
        '<p style="visibility:hidden">h3</p>'
        '<p style="color:red">visible</p>'
    )
    out = clean_common_issues(html)
    for hidden in ("h1", "h2", "h3"):
        assert hidden not in out
    assert "visible" in out


def test_removes_empty_paragraphs_and_divs() -> None:
    html = "<div></div><p></p><p>keep</p><div><!-- c --></div>"
    assert clean_common_issues(html) == "<p>keep</p>"


def test_removes_embeds() -> None:
    html = '<p>a</p><iframe src="https://v.qq.com/x"></iframe><script>track()</script><style>p{color:red}</style>'
    out = clean_common_issues(html)
    assert "<iframe" not in out
    assert "<script" not in out
    assert "<style" not in out
    assert "<p>a</p>" in out


def test_removes_platform_widgets_by_class_marker() -> None:
    html = '<div class="rich_media js_wx_tap_highlight">widget</div><div class="rich_media">keep</div>'
    out = clean_common_issues(html)
    assert "widget" not in out
    assert "keep" in out


def test_widget_marker_is_configurable() -> None:
    html = '<div class="promo-box">ad</div><div class="js_wx_x">wx</div>'
    out = JunkCleaner(widget_class_marker="promo-").clean(html)
    assert "ad" not in out
    assert "wx" in out


def test_plain_content_passes_through_untouched() -> None:
    html = '<p>Hello <img src="a.png"> <a href="/x">link</a></p>'
    out = clean_common_issues(html)
    assert 'src="a.png"' in out
    assert '<a href="/x">link</a>' in out


def test_malformed_markup_does_not_raise() -> None:
    out = clean_common_issues("<div><p>unclosed <b>bold")
    assert "unclosed" in out
    assert "bold" in out


def test_nested_hidden_elements_are_removed_once() -> None:
    html = '<div style="display:none"><p style="display:none">a</p></div><p>b</p>'
    assert clean_common_issues(html) == "<p>b</p>"


def test_whitespace_only_paragraph_is_not_empty() -> None:
    out = JunkCleaner(parser="html.parser").clean("<p> </p><div></div>")
    assert out == "<p> </p>"
