from colorkit.blending import (
    BlendMode,
    InterpolationSpace,
    analogous_gradient,
    blend,
    complementary_gradient,
    gradient,
    interpolate,
    monochromatic_gradient,
    triadic_gradient,
)
from colorkit.cache import CacheCategory, ColorCache
from colorkit.color import BLACK, WHITE, Color
from colorkit.conversions import to_hsl


def _close(a, b, tol=1e-6):
    return all(abs(x - y) < tol for x, y in zip(a, b))


BASE = Color(0.2, 0.4, 0.6)
TOP = Color(0.8, 0.5, 0.1)


def test_normal_blend_replaces_base():
    assert _close(blend(BASE, TOP).rgb, TOP.rgb)


def test_multiply_and_screen():
    assert _close(blend(BASE, TOP, BlendMode.MULTIPLY).rgb, (0.16, 0.2, 0.06))
    assert _close(blend(BASE, TOP, BlendMode.SCREEN).rgb, (0.84, 0.7, 0.64))
    assert blend(BASE, WHITE, BlendMode.MULTIPLY) == BASE
    assert _close(blend(BASE, BLACK, BlendMode.SCREEN).rgb, BASE.rgb)


def test_difference_and_exclusion():
    assert _close(blend(BASE, TOP, BlendMode.DIFFERENCE).rgb, (0.6, 0.1, 0.5))
    assert _close(blend(BASE, BASE, BlendMode.DIFFERENCE).rgb, (0.0, 0.0, 0.0))
    assert _close(blend(BASE, BLACK, BlendMode.EXCLUSION).rgb, BASE.rgb)


def test_darken_lighten():
    assert _close(blend(BASE, TOP, BlendMode.DARKEN).rgb, (0.2, 0.4, 0.1))
    assert _close(blend(BASE, TOP, BlendMode.LIGHTEN).rgb, (0.8, 0.5, 0.6))


def test_all_modes_stay_in_range():
    for mode in BlendMode:
        for top in (BLACK, WHITE, TOP):
            result = blend(BASE, top, mode)
            assert all(0.0 <= v <= 1.0 for v in result.rgb), mode


def test_amount_and_overlay_alpha_scale_effect():
    half = blend(BASE, TOP, amount=0.5)
    assert _close(half.rgb, (0.5, 0.45, 0.35))
    assert _close(blend(BASE, TOP.with_alpha(0.5)).rgb, half.rgb)
    assert blend(BASE, TOP, amount=0.0) == BASE
    assert blend(BASE.with_alpha(0.3), TOP).alpha == 0.3


def test_blend_cache_matches_uncached():
    cache = ColorCache()
    first = blend(BASE, TOP, BlendMode.OVERLAY, cache=cache)
    assert first == blend(BASE, TOP, BlendMode.OVERLAY)
    assert blend(BASE, TOP, BlendMode.OVERLAY, cache=cache) == first
    assert cache.stats()["entries"][CacheCategory.BLEND.value] == 1


def test_interpolate_endpoints():
    for space in InterpolationSpace:
        assert _close(interpolate(BASE, TOP, 0.0, space).rgb, BASE.rgb, 1e-3)
        assert _close(interpolate(BASE, TOP, 1.0, space).rgb, TOP.rgb, 1e-3)


def test_interpolate_rgb_midpoint_and_clamp():
    assert _close(interpolate(BLACK, WHITE, 0.5).rgb, (0.5, 0.5, 0.5))
    assert interpolate(BLACK, WHITE, 2.0) == interpolate(BLACK, WHITE, 1.0)


def test_interpolate_hsl_takes_shortest_hue_path():
    red = Color(1.0, 0.0, 0.0)
    magenta = Color(1.0, 0.0, 1.0)  # hue 300deg
    mid = interpolate(red, magenta, 0.5, InterpolationSpace.HSL)
    assert abs(to_hsl(mid).hue - 330 / 360) < 1e-6


def test_gradient_steps():
    steps = gradient(BLACK, WHITE, 5)
    assert len(steps) == 5
    assert steps[0] == BLACK
    assert _close(steps[-1].rgb, WHITE.rgb)
    lum = [c.red for c in steps]
    assert lum == sorted(lum)
    assert len(gradient(BLACK, WHITE, 1)) == 2


def test_gradient_lab_with_cache():
    cache = ColorCache()
    cached = gradient(BASE, TOP, 4, InterpolationSpace.LAB, cache)
    assert cached == gradient(BASE, TOP, 4, InterpolationSpace.LAB)
    assert cache.stats()["entries"][CacheCategory.INTERPOLATION.value] == 4


def _hue_gap(a, b):
    gap = abs(a - b) % 1.0
    return min(gap, 1 - gap)


RED = Color(1.0, 0.0, 0.0)


def test_complementary_gradient_ends_at_opposite_hue():
    colors = complementary_gradient(RED, 5)
    assert len(colors) == 5
    assert _close(colors[0].rgb, RED.rgb)
    assert _close(colors[-1].rgb, (0.0, 1.0, 1.0))
    for c in colors:
        assert abs(to_hsl(c).saturation - 1.0) < 1e-6
        assert abs(to_hsl(c).lightness - 0.5) < 1e-6


def test_analogous_gradient_spans_angle_around_hue():
    seed = Color.from_hex("#3FA7D6")
    hue = to_hsl(seed).hue
    colors = analogous_gradient(seed, 5)
    assert len(colors) == 5
    assert abs(_hue_gap(to_hsl(colors[0]).hue, hue) - 15 / 360) < 1e-6
    assert abs(_hue_gap(to_hsl(colors[-1]).hue, hue) - 15 / 360) < 1e-6
    assert _hue_gap(to_hsl(colors[2]).hue, hue) < 1e-6
    wide = analogous_gradient(seed, 3, angle=0.25)
    assert abs(_hue_gap(to_hsl(wide[0]).hue, to_hsl(wide[-1]).hue) - 0.25) < 1e-6


def test_triadic_gradient_visits_all_three_hues():
    steps = 4
    colors = triadic_gradient(RED, steps)
    assert len(colors) == 3 * (steps - 1) + 1
    assert colors[0] == RED
    assert _close(colors[-1].rgb, RED.rgb)
    assert _close(colors[steps - 1].rgb, (0.0, 1.0, 0.0))
    assert _close(colors[2 * (steps - 1)].rgb, (0.0, 0.0, 1.0))


def test_monochromatic_gradient_keeps_hue_and_alpha():
    seed = Color(0.2, 0.4, 0.6, 0.5)
    hsl = to_hsl(seed)
    colors = monochromatic_gradient(seed, 5)
    assert len(colors) == 5
    lightness = [to_hsl(c).lightness for c in colors]
    assert _close(lightness, [0.1, 0.3, 0.5, 0.7, 0.9])
    for c in colors:
        assert _hue_gap(to_hsl(c).hue, hsl.hue) < 1e-6
        assert abs(to_hsl(c).saturation - hsl.saturation) < 1e-6
        assert c.alpha == 0.5
    custom = monochromatic_gradient(seed, 3, lightness_range=(0.2, 0.4))
    assert _close([to_hsl(c).lightness for c in custom], [0.2, 0.3, 0.4])
