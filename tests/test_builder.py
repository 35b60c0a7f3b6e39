"""Tests for the site builder."""

import pytest

from webfactory.builder import SiteBuilder, output_dir_for
from webfactory.exceptions import BuildError, BlueprintParseError, ComponentResolutionError
from webfactory.processor import ProcessResult


@pytest.fixture
def sample_site(site):
    site.component("sample.card", {
        "card.html": "<h3>{{.header}}</h3><p>{{.content}}</p>{{component}}",
        "card.css": ".card{}",
        "script.js": "console.log('card')",
    })
    site.component("layout", {
        "layout.html": "<html><head>{{styles}}</head><body>{{component}}{{script}}</body></html>",
    })
    site.blueprint("index.blueprint", "\n".join([
        "1 layout",
        "1.1 sample.card",
        ".header=Title",
        ".content=Body",
    ]))
    return site


class TestSiteBuilder:
    """Test full builds against a temporary source tree."""

    def test_build_writes_page_and_assets(self, sample_site):
        reports = SiteBuilder(sample_site.store()).build()

        assert len(reports) == 1
        assert reports[0].html_path == "index.html"
        assert reports[0].components == {"layout": "layout", "sample.card": "sample/card"}

        out = sample_site.target
        assert (out / "index.html").read_text() == (
            '<html><head><link rel="stylesheet" href="css/styles.css"></head>'
            "<body><h3>Title</h3><p>Body</p>"
            '<script src="js/sample-card-script.js"></script></body></html>'
        )
        assert (out / "css" / "styles.css").read_text() == ".card{}\n"
        assert (out / "js" / "sample-card-script.js").read_text() == "console.log('card')"

    def test_subdirectory_blueprints(self, sample_site):
        sample_site.blueprint("about/team.blueprint", "1 sample.card\n.header=Team\n")
        reports = SiteBuilder(sample_site.store()).build()

        assert [r.html_path for r in reports] == ["about/team.html", "index.html"]
        assert "<h3>Team</h3>" in (sample_site.target / "about" / "team.html").read_text()

    def test_components_reloaded_per_blueprint(self, sample_site, monkeypatch):
        sample_site.blueprint("other.blueprint", "1 sample.card\n")
        store = sample_site.store()
        reads = []
        original = store.read_component

        def counting(component_path, filename):
            reads.append((component_path, filename))
            return original(component_path, filename)

        monkeypatch.setattr(store, "read_component", counting)
        SiteBuilder(store).build()

        assert reads.count(("sample/card", "card.html")) == 2

    def test_duplicate_index_stops_build(self, sample_site):
        sample_site.blueprint("broken.blueprint", "1 sample.card\n1 sample.card\n")

        with pytest.raises(BuildError) as exc:
            SiteBuilder(sample_site.store()).build()
        assert exc.value.blueprint == "broken.blueprint"
        assert isinstance(exc.value.cause, BlueprintParseError)

    def test_missing_component_stops_build(self, sample_site):
        sample_site.blueprint("index.blueprint", "1 layout\n1.1 missing.card\n")

        with pytest.raises(BuildError) as exc:
            SiteBuilder(sample_site.store()).build()
        assert isinstance(exc.value.cause, ComponentResolutionError)
        assert "missing.card" in str(exc.value)
        assert not (sample_site.target / "index.html").exists()

    def test_empty_blueprint_writes_empty_page(self, site):
        site.blueprint("blank.blueprint", "# nothing yet\n")
        SiteBuilder(site.store()).build()
        assert (site.target / "blank.html").read_bytes() == b""


def test_output_files():
    builder = SiteBuilder(store=None)
    result = ProcessResult(
        html=b"<p>",
        files={"styles.css": b"c", "a-b.js": b"j", "logo.svg": b"s"},
    )
    assert builder.output_files("blueprints/index", result) == {
        "index.html": b"<p>",
        "css/styles.css": b"c",
        "js/a-b.js": b"j",
        "assets/logo.svg": b"s",
    }


def test_output_dir_for():
    assert output_dir_for("styles.css") == "css"
    assert output_dir_for("x.js") == "js"
    assert output_dir_for("README") == "assets"
