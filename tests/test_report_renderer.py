"""
Tests for the Jinja2 report renderer and the bundled templates.
"""

import pytest

from gherkin_report.core.config import BUNDLED_TEMPLATES_DIR
from gherkin_report.core.gherkin import Analyzer
from gherkin_report.core.report import (
    ReportError,
    ReportRenderer,
    TemplatePartials,
    TemplatesView,
)


def bundled_partials() -> TemplatePartials:
    return TemplatePartials(
        **{
            name: (BUNDLED_TEMPLATES_DIR / f"{name}.html").read_text(encoding="utf-8")
            for name in ("meta", "footer", "files", "features", "page")
        }
    )


@pytest.fixture
def view() -> TemplatesView:
    lines = (
        "@smoke\n"
        "Feature: Checkout <fast>\n"
        "  Background:\n"
        "    Given a cart\n"
        "  Scenario Outline: Pay\n"
        "    When paying with <method>\n"
        '      """\n'
        "      receipt\n"
        '      """\n'
        "    Examples:\n"
        "      | method |\n"
        "      | card   |\n"
    ).splitlines()
    gherkin = Analyzer().parse(lines, "features/checkout.feature")
    return TemplatesView(
        date="2019/01/05",
        time="02:03:04",
        title="Nightly",
        meta='<meta name="x">',
        footer="<footer>{{ date }}</footer>",
        list=[gherkin],
    )


class TestReportRenderer:
    """Test page assembly."""

    def test_sections_are_placed_in_page(self):
        partials = TemplatePartials(
            page="[{{ meta }}][{{ files }}][{{ features }}][{{ footer }}]",
            files="F{{ list | length }}",
            features="<b>{{ title }}</b>",
        )
        view = TemplatesView(title="T", meta="<m>", footer="<f>", list=[])

        html = ReportRenderer(partials).render(view)

        assert html == "[<m>][F0][<b>T</b>][<f>]"

    def test_partials_can_use_view_fields(self, view):
        partials = TemplatePartials(page="{{ footer }}")

        assert ReportRenderer(partials).render(view) == "<footer>2019/01/05</footer>"

    def test_feature_text_is_escaped(self, view):
        partials = TemplatePartials(page="{{ list[0].name }}")

        assert ReportRenderer(partials).render(view) == "Checkout &lt;fast&gt;"

    def test_missing_page_raises(self, view):
        with pytest.raises(ReportError):
            ReportRenderer(TemplatePartials()).render(view)


class TestBundledTemplates:
    """Render the shipped templates end to end."""

    def test_full_page(self, view):
        partials = bundled_partials()
        view.meta = partials.meta
        view.footer = partials.footer

        html = ReportRenderer(partials).render(view)

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Nightly</title>" in html
        assert '<meta name="generator" content="gherkin-report">' in html
        assert "2019/01/05" in html
        assert "02:03:04" in html
        assert "Checkout &lt;fast&gt;" in html
        assert "features/checkout.feature" in html
        assert "@smoke" in html
        assert "Background:" in html
        assert "Scenario Outline:" in html
        assert "paying with &lt;method&gt;" in html
        assert '<pre class="doc-string">receipt</pre>' in html
        assert "<th>method</th>" in html
        assert "<td>card</td>" in html
        assert "1 features" in html

    def test_empty_report(self):
        partials = bundled_partials()
        view = TemplatesView(
            date="2019/10/20",
            time="13:22:30",
            title="Empty",
            footer=partials.footer,
            list=[],
        )

        html = ReportRenderer(partials).render(view)

        assert "No feature files found." in html
        assert "0 features" in html

    def test_feature_without_scenarios(self):
        gherkin = Analyzer().parse(["Feature: Lonely"])
        view = TemplatesView(title="T", list=[gherkin])

        html = ReportRenderer(bundled_partials()).render(view)

        assert "Lonely" in html
        assert "No scenarios." in html
