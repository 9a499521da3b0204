"""Unit tests for the regex source scanner

Tests cover:
- Noise stripping keeps offsets
- Each extraction pass
- Within-file deduplication
- Directory discovery and unreadable files
"""

from __future__ import annotations

from forsaj.content.scanner import (
    RegexSourceScanner,
    discover_sources,
    looks_like_image,
    scan_directory,
    strip_noise,
)
from forsaj.content.types import CandidateKind, ExtractionPass


def _values(candidates, source=None):
    return [c.value for c in candidates if source is None or c.source == source]


def test_strip_noise_preserves_length_and_newlines():
    source = "import X from 'x';\n// note\nconst a = 1; /* block */\n<p style={{ color: 'red' }}>Hi</p>"
    cleaned = strip_noise(source)

    assert len(cleaned) == len(source)
    assert cleaned.count("\n") == source.count("\n")
    assert "import" not in cleaned
    assert "note" not in cleaned
    assert "block" not in cleaned
    assert "red" not in cleaned
    assert cleaned.index("Hi") == source.index("Hi")


def test_strip_noise_keeps_urls():
    source = '<img src="https://cdn.example.com/a.png" />'
    assert strip_noise(source) == source


def test_free_text_between_tags():
    candidates = RegexSourceScanner().scan("<h2>  Növbəti   yarış  </h2>")

    assert _values(candidates) == ["Növbəti yarış"]
    assert candidates[0].source == ExtractionPass.FREE_TEXT
    assert candidates[0].position == 6


def test_attribute_pass_records_attribute_name():
    candidates = RegexSourceScanner().scan('<input placeholder="Adınızı daxil edin" />')

    assert _values(candidates, ExtractionPass.ATTRIBUTE) == ["Adınızı daxil edin"]
    assert candidates[0].attribute == "placeholder"


def test_keyed_lookup_uses_call_site_key():
    source = "<h1>{getText('hero-title', 'Offroad Çempionatı')}</h1>"
    candidates = RegexSourceScanner().scan(source)

    assert len(candidates) == 1
    assert candidates[0].key == "hero-title"
    assert candidates[0].value == "Offroad Çempionatı"
    assert candidates[0].source == ExtractionPass.KEYED_LOOKUP


def test_keyed_lookup_with_page_scope_argument():
    source = "{getText('home', 'cta', 'Qoşul')}"
    candidates = RegexSourceScanner().scan(source)

    assert [(c.key, c.value) for c in candidates] == [("cta", "Qoşul")]


def test_keyed_lookup_bypasses_classifier():
    # "Show map" would be rejected by the classifier as free text
    candidates = RegexSourceScanner().scan("{getText('map-title', 'Show map')}")

    assert _values(candidates) == ["Show map"]


def test_keyed_image_lookup_yields_image():
    candidates = RegexSourceScanner().scan("<img src={getImage('logo', '/images/logo.png')} />")

    assert len(candidates) == 1
    assert candidates[0].kind == CandidateKind.IMAGE
    assert candidates[0].key == "logo"
    assert candidates[0].value == "/images/logo.png"


def test_duplicate_keys_keep_first():
    source = "{getText('title', 'Birinci')} {getText('title', 'İkinci')}"
    candidates = RegexSourceScanner().scan(source)

    assert _values(candidates) == ["Birinci"]


def test_uppercase_quoted_literals():
    source = "const tabs = ['Xəbərlər', 'Tədbirlər', 'primaryColor', 'HERO_TITLE', 'Logo.png'];"
    candidates = RegexSourceScanner().scan(source)

    assert _values(candidates, ExtractionPass.QUOTED_LITERAL) == ["Xəbərlər", "Tədbirlər"]


def test_image_sources_from_attributes_and_data():
    source = (
        '<img src="/images/car.jpg" />\n'
        "const items = [{ img: 'https://cdn.example.com/x.webp' }, { image: 'not-an-image' }];\n"
        '<video poster="/posters/intro.png" />'
    )
    candidates = RegexSourceScanner().scan(source)
    images = [c.value for c in candidates if c.kind == CandidateKind.IMAGE]

    assert images == ["/images/car.jpg", "https://cdn.example.com/x.webp", "/posters/intro.png"]


def test_same_text_in_one_file_is_captured_once():
    source = "<p>Qeydiyyat</p><span>Qeydiyyat</span><button title=\"Qeydiyyat\" />"
    candidates = RegexSourceScanner().scan(source)

    assert _values(candidates) == ["Qeydiyyat"]


def test_rejected_code_is_not_captured():
    source = "<p>{items.map(item => item.name)}</p><div>x => y</div>"
    assert RegexSourceScanner().scan(source) == []


def test_looks_like_image():
    assert looks_like_image("/a/b.JPG")
    assert looks_like_image("https://example.com/photo")
    assert not looks_like_image("/docs/rules.pdf")
    assert not looks_like_image("{base}/a.png")


def test_discover_sources_orders_components_then_entry(front_dir):
    sources = discover_sources(front_dir / "components", front_dir / "App.tsx")

    assert [p.name for p in sources] == ["Footer.tsx", "Hero.tsx", "Spacer.tsx", "App.tsx"]


def test_discover_sources_missing_directory(tmp_path):
    assert discover_sources(tmp_path / "missing") == []


def test_scan_directory_skips_unreadable_files(front_dir):
    (front_dir / "components" / "Broken.tsx").write_bytes(b"\xff\xfe\x00<p>bad")

    scanned = scan_directory(front_dir / "components")

    assert [s.stem for s in scanned] == ["Footer", "Hero", "Spacer"]


class _FixedScanner:
    def scan(self, file_contents):
        return []


def test_scan_directory_accepts_custom_scanner(front_dir):
    scanned = scan_directory(front_dir / "components", scanner=_FixedScanner())

    assert all(s.candidates == [] for s in scanned)
