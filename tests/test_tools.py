from __future__ import annotations

import landing_dev
import landing_sections
from landing_build import build
from landing_verify import find_unresolved_tokens, is_internal_link, target_exists, verify


def test_find_unresolved_tokens_deduplicates_in_order():
    text = "{{B}} {{A_1}} {{B}} {{HERO_CTATEXT-ALT}} {{ spaced }} {CONTENT}"
    assert find_unresolved_tokens(text) == ["{{B}}", "{{A_1}}", "{{HERO_CTATEXT-ALT}}"]


def test_is_internal_link():
    assert is_internal_link("assets/css/style.css")
    assert is_internal_link("/index.html")
    assert not is_internal_link("https://example.com/")
    assert not is_internal_link("mailto:hi@example.com")
    assert not is_internal_link("#contact")
    assert not is_internal_link("tel:+123")
    assert not is_internal_link("data:image/png;base64,AAAA")


def test_target_exists(tmp_path):
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "a.css").write_text("", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "index.html").write_text("", encoding="utf-8")
    page = tmp_path / "index.html"
    assert target_exists(tmp_path, page, "assets/a.css?v=2#x")
    assert target_exists(tmp_path, page, "/assets/a.css")
    assert target_exists(tmp_path, page, "sub/")
    assert not target_exists(tmp_path, page, "assets/missing.css")


def test_verify_reports_tokens_and_broken_links(make_site, capsys):
    config = {"content": {}, "sectionsOrder": ["hero"]}
    layout = '<link href="assets/site.css"><script src="assets/gone.js"></script>{{CONTENT}}'
    root = make_site(config, {"hero": "<h1>{{HERO_TITLE}}</h1>"}, layout=layout, assets={"site.css": ""})
    build(root)
    capsys.readouterr()

    assert verify(root / "dist") == 1
    out = capsys.readouterr().out
    assert "{{HERO_TITLE}}" in out
    assert "assets/gone.js" in out
    assert "assets/site.css" not in out


def test_verify_missing_directory(tmp_path):
    assert verify(tmp_path / "nope") == 1


def test_describe_sections(make_site):
    config = {
        "seo": {"title": "T"},
        "content": {"hero": {"title": "Hi"}},
        "sectionsOrder": ["hero", "hero2", "pricing"],
    }
    components = {
        "hero": "<h1>{{HERO_TITLE}}</h1><p>{{SEO_TITLE}}</p>",
        "hero2": "<h2>{{HERO_TITLE}}</h2><p>{{HERO_EXTRA}}</p>",
    }
    root = make_site(config, components)
    rows = landing_sections.describe_sections(root)

    assert [row["name"] for row in rows] == ["hero", "hero2", "pricing"]
    assert rows[0]["fragment"] == "src/components/hero.html"
    assert rows[0]["data_key"] == "hero"
    assert rows[0]["unresolved"] == []
    assert rows[1]["data_key"] == "hero"
    assert rows[1]["unresolved"] == ["{{HERO_EXTRA}}"]
    assert rows[2]["fragment"] is None
    assert rows[2]["data_key"] is None

    text = landing_sections.format_sections(rows)
    assert "3. pricing -> (missing) [(none)]" in text
    assert "unresolved: {{HERO_EXTRA}}" in text


def test_resolve_data_key_prefers_exact_name():
    content = {"hero": {}, "hero2": {}}
    assert landing_sections.resolve_data_key("hero2", content) == "hero2"
    assert landing_sections.resolve_data_key("hero3", content) == "hero"
    assert landing_sections.resolve_data_key("faq", content) is None


def test_sections_main_without_config(tmp_path, capsys):
    assert landing_sections.main(["--root", str(tmp_path)]) == 1
    assert "Missing configuration file" in capsys.readouterr().out


def test_dev_once_builds_without_serving(make_site, capsys):
    root = make_site(
        {"content": {"hero": {"title": "Hi"}}, "sectionsOrder": ["hero"]},
        {"hero": "<h1>{{HERO_TITLE}}</h1>"},
        layout="{{CONTENT}}",
    )
    assert landing_dev.main(["--root", str(root), "--once", "--port", "9999"]) == 0
    assert (root / "dist" / "index.html").read_text(encoding="utf-8") == "<h1>Hi</h1>"
    assert "http://localhost:9999/" in capsys.readouterr().out


def test_dev_reports_failed_build(tmp_path, capsys):
    assert landing_dev.main(["--root", str(tmp_path), "--once"]) == 1
    assert "Build failed" in capsys.readouterr().out


def test_resolve_data_key_skips_non_mapping_entries():
    content = {"hero": {"title": "base"}, "hero2": "oops", "faq": ["q"]}
    assert landing_sections.resolve_data_key("hero2", content) is None
    assert landing_sections.resolve_data_key("hero3", content) == "hero"
    assert landing_sections.resolve_data_key("faq", content) is None


def test_sections_main_rejects_invalid_json(make_site, capsys):
    root = make_site("{not json")
    assert landing_sections.main(["--root", str(root)]) == 1
    assert "[landing] Could not decode data.json" in capsys.readouterr().out


def test_sections_main_rejects_non_object_config(make_site, capsys):
    root = make_site("[1, 2]")
    assert landing_sections.main(["--root", str(root)]) == 1
    assert "must contain a JSON object" in capsys.readouterr().out


def test_sections_report_unresolved_tokens_like_the_build(make_site):
    config = {
        "seo": {"title": "T"},
        "content": {"hero": {"title": "Hi"}},
        "sectionsOrder": ["hero"],
    }
    fragment = "<h1>{{HERO_TITLE}}</h1><p>{{SEO_TITLE}}</p><a>{{HERO_CTATEXT-ALT}}</a>"
    root = make_site(config, {"hero": fragment}, layout="{{CONTENT}}")

    rows = landing_sections.describe_sections(root)
    output = build(root).read_text(encoding="utf-8")
    assert output == "<h1>Hi</h1><p>T</p><a>{{HERO_CTATEXT-ALT}}</a>"
    assert rows[0]["unresolved"] == find_unresolved_tokens(output) == ["{{HERO_CTATEXT-ALT}}"]
