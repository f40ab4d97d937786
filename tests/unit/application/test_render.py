"""Tests for application/render.py."""

from kitgen.application.render import Render


class TestRender:
    """Tests for the Render accumulator."""

    def test_empty(self) -> None:
        render = Render()
        assert render.is_empty
        assert render.text == ""
        assert len(render) == 0

    def test_append_is_chainable(self) -> None:
        render = Render()

        result = render.append("a").append("b")

        assert result is render
        assert render.text == "ab"
        assert len(render) == 2
        assert not render.is_empty

    def test_appendf(self) -> None:
        render = Render()
        render.appendf("package %s\n", "greeting")
        assert render.text == "package greeting\n"

    def test_appendf_without_args_is_literal(self) -> None:
        render = Render()
        render.appendf("100%")
        assert render.text == "100%"

    def test_append_empty_keeps_empty(self) -> None:
        render = Render()
        render.append("")
        assert render.is_empty
