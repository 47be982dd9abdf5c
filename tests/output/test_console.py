"""Tests for Rich Console factory and theme."""

from io import StringIO

from chartlower.output.console import CHART_THEME, create_console, get_output, style_for_scale


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_custom_width(self) -> None:
        assert create_console(width=80).width == 80

    def test_default_width(self) -> None:
        assert create_console().width == 120


class TestGetOutput:
    def test_empty_console(self) -> None:
        assert get_output(create_console()) == ""


class TestStyleForScale:
    def test_known_types(self) -> None:
        assert style_for_scale("ordinal") == "cl.scale.ordinal"
        assert style_for_scale("linear") == "cl.scale.linear"
        assert style_for_scale("time") == "cl.scale.time"

    def test_unknown_type(self) -> None:
        assert style_for_scale("log") == ""

    def test_styles_exist_in_theme(self) -> None:
        for name in ("ordinal", "linear", "time"):
            assert f"cl.scale.{name}" in CHART_THEME.styles
