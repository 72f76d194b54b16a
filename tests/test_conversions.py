import pytest

from colorkit.color import BLACK, WHITE, Color
from colorkit.conversions import (
    from_cmyk,
    from_hsl,
    from_lab,
    from_xyz,
    linear_to_srgb,
    srgb_to_linear,
    to_cmyk,
    to_hsl,
    to_lab,
    to_xyz,
)

SAMPLES = [
    Color(1.0, 0.0, 0.0),
    Color(0.0, 0.5, 1.0),
    Color(0.2, 0.4, 0.6),
    Color(0.9, 0.85, 0.1),
    Color(0.33, 0.33, 0.33),
    BLACK,
    WHITE,
]


def _close(a, b, tol=1e-6):
    return all(abs(x - y) < tol for x, y in zip(a, b))


def test_pure_red_lab():
    lab = to_lab(Color(1.0, 0.0, 0.0))
    assert abs(lab.l - 53.24) < 0.05
    assert abs(lab.a - 80.09) < 0.05
    assert abs(lab.b - 67.20) < 0.05


def test_white_and_black_lab_extremes():
    white = to_lab(WHITE)
    black = to_lab(BLACK)
    assert abs(white.l - 100.0) < 0.01
    assert abs(white.a) < 0.01 and abs(white.b) < 0.01
    assert _close(black, (0.0, 0.0, 0.0), 1e-9)


def test_white_xyz_matches_reference_white():
    xyz = to_xyz(WHITE)
    assert _close(xyz, (0.95047, 1.0, 1.08883), 1e-4)


def test_transfer_curve_round_trip():
    # The two branch thresholds do not meet exactly; the seam is ~3e-8
    for v in (0.0, 0.02, 0.04045, 0.0405, 0.2, 0.5, 0.99, 1.0):
        assert abs(linear_to_srgb(srgb_to_linear(v)) - v) < 1e-6


@pytest.mark.parametrize("color", SAMPLES)
def test_hsl_round_trip(color):
    hsl = to_hsl(color)
    assert _close(from_hsl(*hsl).rgb, color.rgb, 1e-6)


@pytest.mark.parametrize("color", SAMPLES)
def test_lab_round_trip(color):
    lab = to_lab(color)
    assert _close(from_lab(*lab).rgb, color.rgb, 1e-3)


@pytest.mark.parametrize("color", SAMPLES)
def test_xyz_round_trip(color):
    assert _close(from_xyz(*to_xyz(color)).rgb, color.rgb, 1e-4)


@pytest.mark.parametrize("color", SAMPLES)
def test_cmyk_round_trip(color):
    assert _close(from_cmyk(*to_cmyk(color)).rgb, color.rgb, 1e-9)


def test_hsl_known_values():
    assert _close(to_hsl(Color(1.0, 0.0, 0.0)), (0.0, 1.0, 0.5))
    assert _close(to_hsl(Color(0.0, 1.0, 0.0)), (1 / 3, 1.0, 0.5))
    gray = to_hsl(Color(0.5, 0.5, 0.5))
    assert gray.hue == 0.0 and gray.saturation == 0.0
    assert abs(gray.lightness - 0.5) < 1e-9


def test_from_hsl_wraps_hue_and_clamps():
    assert _close(from_hsl(1.0, 1.0, 0.5).rgb, (1.0, 0.0, 0.0))
    assert _close(from_hsl(-1 / 3, 1.0, 0.5).rgb, (0.0, 0.0, 1.0))
    assert from_hsl(0.3, 2.0, 1.5) == WHITE
    assert from_hsl(0.3, 0.5, -1.0) == BLACK


def test_cmyk_black_and_primaries():
    assert to_cmyk(BLACK) == (0.0, 0.0, 0.0, 1.0)
    assert _close(to_cmyk(Color(1.0, 0.0, 0.0)), (0.0, 1.0, 1.0, 0.0))


def test_alpha_passes_through_from_functions():
    assert from_hsl(0.5, 0.5, 0.5, alpha=0.25).alpha == 0.25
    assert from_lab(50, 0, 0, alpha=0.5).alpha == 0.5


def test_from_lab_clamps_out_of_range():
    assert from_lab(150, 0, 0) == from_lab(100, 0, 0)
    c = from_lab(50, 400, -400)
    assert all(0.0 <= v <= 1.0 for v in c.rgb)


@pytest.mark.parametrize("bad", [None, "red", (1, 0), 7])
def test_malformed_input_returns_none(bad):
    assert to_hsl(bad) is None
    assert to_lab(bad) is None
    assert to_xyz(bad) is None
    assert to_cmyk(bad) is None


def test_sequences_are_accepted():
    assert _close(to_lab((1, 0, 0)), to_lab(Color(1.0, 0.0, 0.0)))


def test_cached_conversions_match_uncached(cache):
    for color in SAMPLES:
        assert to_lab(color, cache) == to_lab(color)
        assert to_hsl(color, cache) == to_hsl(color)
        assert to_xyz(color, cache) == to_xyz(color)
        # second call served from cache, same value
        assert to_lab(color, cache) == to_lab(color)
