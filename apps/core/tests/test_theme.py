"""
Theme Tests
===========

Test Coverage:
1. Hex sanitizing and conversion
2. generate_accent_scale - mix stops, foreground, ring
3. build_css_vars - palette fallback and accent override
4. ThemeForm

Run tests:
    python manage.py test apps.core.tests.test_theme
"""

from django.test import SimpleTestCase

from apps.core.forms import ThemeForm
from apps.core.theme import (
    RGB,
    SKY,
    MIDNIGHT,
    sanitize_hex,
    hex_to_rgb,
    mix_colors,
    readable_foreground,
    generate_accent_scale,
    build_css_vars,
    find_palette,
)


class HexHelpersTest(SimpleTestCase):

    def test_sanitize_hex(self):
        self.assertEqual(sanitize_hex('0EA5E9'), '#0ea5e9')
        self.assertEqual(sanitize_hex(' #abc '), '#abc')
        self.assertEqual(sanitize_hex('#12345'), '')
        self.assertEqual(sanitize_hex('blue'), '')
        self.assertEqual(sanitize_hex(None), '')

    def test_hex_to_rgb_expands_short_form(self):
        self.assertEqual(hex_to_rgb('#fff'), RGB(255, 255, 255))
        self.assertEqual(hex_to_rgb('#0ea5e9'), RGB(14, 165, 233))

    def test_mix_rounds_half_up(self):
        # 0 + (255 - 0) * 0.5 = 127.5
        self.assertEqual(mix_colors(RGB(0, 0, 0), RGB(255, 255, 255), 0.5), RGB(128, 128, 128))


class AccentScaleTest(SimpleTestCase):
    """Test generate_accent_scale"""

    def test_base_and_stops(self):
        """
        Test: Scale for #0ea5e9

        Expected: 500 is the base, 50 is lighter and 800 darker
        """
        scale = generate_accent_scale('#0ea5e9')

        self.assertEqual(scale['--accent-500'], '#0ea5e9')
        # r: 14 + (255 - 14) * 0.92 = 235.72 -> 236
        self.assertEqual(scale['--accent-50'], '#ecf8fd')
        # r: 14 * (1 - 0.45) = 7.7 -> 8
        self.assertTrue(scale['--accent-800'].startswith('#08'))
        for token in ('--accent-100', '--accent-200', '--accent-300', '--accent-400',
                      '--accent-600', '--accent-700'):
            self.assertIn(token, scale)

    def test_readable_foreground(self):
        self.assertEqual(readable_foreground(RGB(255, 255, 255)), '#0f172a')
        self.assertEqual(readable_foreground(RGB(0, 0, 0)), '#ffffff')
        self.assertEqual(generate_accent_scale('#fde047')['--accent-foreground'], '#0f172a')

    def test_ring_uses_accent_400(self):
        scale = generate_accent_scale('#000000')

        # 0 + 255 * 0.25 = 63.75 -> 64
        self.assertEqual(scale['--accent-ring'], 'rgba(64, 64, 64, 0.4)')


class BuildCssVarsTest(SimpleTestCase):

    def test_unknown_palette_falls_back_to_sky(self):
        self.assertEqual(find_palette('neon'), SKY)
        self.assertEqual(build_css_vars('neon')['--background'], SKY.css_vars['--background'])

    def test_accent_override(self):
        css_vars = build_css_vars(MIDNIGHT.id, '#ff0000')

        self.assertEqual(css_vars['--background'], MIDNIGHT.css_vars['--background'])
        self.assertEqual(css_vars['--accent-500'], '#ff0000')

    def test_invalid_accent_keeps_palette_accent(self):
        css_vars = build_css_vars(MIDNIGHT.id, 'nope')

        self.assertEqual(css_vars['--accent-500'], MIDNIGHT.css_vars['--accent-500'])


class ThemeFormTest(SimpleTestCase):
    """Test ThemeForm"""

    def test_valid(self):
        form = ThemeForm(data={'palette': 'aurora', 'accent': '#10B981'})

        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['palette'], 'aurora')
        self.assertEqual(form.cleaned_data['accent'], '#10b981')

    def test_unknown_palette_falls_back(self):
        form = ThemeForm(data={'palette': 'neon', 'accent': ''})

        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['palette'], 'sky')

    def test_bad_accent(self):
        form = ThemeForm(data={'palette': 'sky', 'accent': 'red'})

        self.assertFalse(form.is_valid())
        self.assertIn('accent', form.errors)

    def test_reset_accent(self):
        form = ThemeForm(data={'palette': 'sky', 'accent': '#123456', 'reset_accent': 'on'})

        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['accent'], '')
