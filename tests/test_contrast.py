from colorkit.cache import ColorCache
from colorkit.color import BLACK, WHITE, Color
from colorkit.contrast import (
    ContrastLevel,
    accessible_contrasting_color,
    compliance,
    contrast_ratio,
    meets_level,
    relative_luminance,
    validate_contrast,
)

GRAY = Color.from_hex("#777777")


def test_relative_luminance_monotonic():
    # White > Gray > Black
    assert relative_luminance(WHITE) > relative_luminance(GRAY) > relative_luminance(BLACK)
    assert abs(relative_luminance(WHITE) - 1.0) < 1e-9
    assert relative_luminance(BLACK) == 0.0


def test_contrast_ratio_basic():
    ratio = contrast_ratio(WHITE, BLACK)
    assert abs(ratio - 21.0) < 0.01


def test_contrast_ratio_symmetric_and_bounded():
    pairs = [(WHITE, GRAY), (Color(1, 0, 0), Color(0, 0, 1)), (GRAY, GRAY)]
    for a, b in pairs:
        r = contrast_ratio(a, b)
        assert r == contrast_ratio(b, a)
        assert 1.0 <= r <= 21.0
    assert contrast_ratio(GRAY, GRAY) == 1.0


def test_level_thresholds_distinct_members():
    assert ContrastLevel.AA.minimum_ratio == 4.5
    assert ContrastLevel.AA_LARGE.minimum_ratio == 3.0
    assert ContrastLevel.AAA.minimum_ratio == 7.0
    assert ContrastLevel.AAA_LARGE.minimum_ratio == 4.5
    assert ContrastLevel.AA is not ContrastLevel.AAA_LARGE
    assert len(list(ContrastLevel)) == 4
    assert "large" in ContrastLevel.AA_LARGE.description


def test_compliance_red_on_white():
    result = compliance(Color(1.0, 0.0, 0.0), WHITE)
    assert abs(result.contrast_ratio - 4.0) < 0.01
    assert result.passes_aa_large
    assert not result.passes_aa
    assert not result.passes_aaa
    assert result.highest_level is ContrastLevel.AA_LARGE
    assert result.passes == [ContrastLevel.AA_LARGE]


def test_compliance_black_on_white_passes_everything():
    result = compliance(BLACK, WHITE)
    assert result.highest_level is ContrastLevel.AAA
    assert result.passes == list(ContrastLevel)


def test_compliance_identical_passes_nothing():
    result = compliance(GRAY, GRAY)
    assert result.highest_level is None
    assert result.passes == []


def test_meets_level():
    assert meets_level(BLACK, WHITE, ContrastLevel.AAA)
    assert not meets_level(Color(1.0, 0.0, 0.0), WHITE, ContrastLevel.AA)


def test_accessible_contrasting_color():
    assert accessible_contrasting_color(Color.from_hex("#FFEE88")) == BLACK
    assert accessible_contrasting_color(Color.from_hex("#102040")) == WHITE


def test_validate_contrast_detect_failure():
    failures = validate_contrast(
        [
            (BLACK, WHITE, "Primary text on base background"),
            (GRAY, GRAY, "Muted on muted"),
        ],
        level=ContrastLevel.AA,
    )
    assert len(failures) == 1
    assert failures[0].startswith("[contrast-fail] Muted on muted")
    assert "#777777" in failures[0]


def test_cached_contrast_matches_uncached():
    cache = ColorCache()
    red = Color(1.0, 0.0, 0.0)
    first = contrast_ratio(red, WHITE, cache)
    assert first == contrast_ratio(red, WHITE)
    # reversed order shares the same entry
    assert contrast_ratio(WHITE, red, cache) == first
    assert relative_luminance(red, cache) == relative_luminance(red)
