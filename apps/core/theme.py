"""
Theme palettes and accent scale generation.

A theme is a named palette of CSS custom properties. The accent colour can
be overridden with any hex value; the --accent-50 ... --accent-800 scale,
the readable foreground and the focus ring are then derived from it.
"""
import math
import re
from collections import namedtuple


Palette = namedtuple('Palette', ['id', 'name', 'description', 'swatch', 'css_vars'])

RGB = namedtuple('RGB', ['r', 'g', 'b'])

WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)

HEX_PATTERN = re.compile(r'^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# (token, amount mixed towards white)
LIGHT_STOPS = [
    ('--accent-50', 0.92),
    ('--accent-100', 0.82),
    ('--accent-200', 0.65),
    ('--accent-300', 0.45),
    ('--accent-400', 0.25),
]

# (token, amount mixed towards black)
DARK_STOPS = [
    ('--accent-600', 0.18),
    ('--accent-700', 0.3),
    ('--accent-800', 0.45),
]


SKY = Palette(
    id='sky',
    name='Skyflow',
    description='Bright blues with a clean, professional feel.',
    swatch=['#e0f2fe', '#0ea5e9', '#0369a1'],
    css_vars={
        '--background': '#f1f5f9',
        '--foreground': '#0f172a',
        '--surface-app': '#f1f5f9',
        '--surface-sidebar': 'rgba(255, 255, 255, 0.92)',
        '--surface-card': '#ffffff',
        '--surface-card-glass': 'rgba(255, 255, 255, 0.68)',
        '--surface-overlay': 'rgba(255, 255, 255, 0.78)',
        '--surface-hover': '#f8fafc',
        '--border-soft': 'rgba(148, 163, 184, 0.28)',
        '--border-strong': 'rgba(15, 23, 42, 0.12)',
        '--text-strong': '#0f172a',
        '--text-muted': '#475569',
        '--accent-foreground': '#ffffff',
        '--accent-ring': 'rgba(14, 165, 233, 0.35)',
        '--accent-50': '#f0f9ff',
        '--accent-100': '#e0f2fe',
        '--accent-200': '#bae6fd',
        '--accent-300': '#7dd3fc',
        '--accent-400': '#38bdf8',
        '--accent-500': '#0ea5e9',
        '--accent-600': '#0284c7',
        '--accent-700': '#0369a1',
        '--accent-800': '#075985',
        '--hero-from': 'rgba(14, 165, 233, 0.06)',
        '--hero-to': 'rgba(14, 165, 233, 0.01)',
    },
)

AURORA = Palette(
    id='aurora',
    name='Aurora',
    description='Greens inspired by growth and freshness.',
    swatch=['#dcfce7', '#10b981', '#047857'],
    css_vars={
        '--background': '#f1f7f3',
        '--foreground': '#0b1620',
        '--surface-app': '#f1f7f3',
        '--surface-sidebar': 'rgba(255, 255, 255, 0.9)',
        '--surface-card': '#ffffff',
        '--surface-card-glass': 'rgba(255, 255, 255, 0.7)',
        '--surface-overlay': 'rgba(255, 255, 255, 0.78)',
        '--surface-hover': '#f6fbf8',
        '--border-soft': 'rgba(52, 211, 153, 0.22)',
        '--border-strong': 'rgba(15, 118, 110, 0.18)',
        '--text-strong': '#0f172a',
        '--text-muted': '#466460',
        '--accent-foreground': '#03241a',
        '--accent-ring': 'rgba(16, 185, 129, 0.35)',
        '--accent-50': '#ecfdf5',
        '--accent-100': '#d1fae5',
        '--accent-200': '#a7f3d0',
        '--accent-300': '#6ee7b7',
        '--accent-400': '#34d399',
        '--accent-500': '#10b981',
        '--accent-600': '#059669',
        '--accent-700': '#047857',
        '--accent-800': '#065f46',
        '--hero-from': 'rgba(16, 185, 129, 0.05)',
        '--hero-to': 'rgba(16, 185, 129, 0.02)',
    },
)

SUNSET = Palette(
    id='sunset',
    name='Sunset',
    description='Warm oranges full of energy.',
    swatch=['#ffedd5', '#f97316', '#c2410c'],
    css_vars={
        '--background': '#fdf6f0',
        '--foreground': '#1f1a17',
        '--surface-app': '#fdf6f0',
        '--surface-sidebar': 'rgba(255, 255, 255, 0.95)',
        '--surface-card': '#ffffff',
        '--surface-card-glass': 'rgba(255, 255, 255, 0.74)',
        '--surface-overlay': 'rgba(255, 255, 255, 0.82)',
        '--surface-hover': '#fff7ed',
        '--border-soft': 'rgba(248, 180, 107, 0.25)',
        '--border-strong': 'rgba(194, 65, 12, 0.2)',
        '--text-strong': '#1f1a17',
        '--text-muted': '#7b5644',
        '--accent-foreground': '#2f1103',
        '--accent-ring': 'rgba(249, 115, 22, 0.35)',
        '--accent-50': '#fff7ed',
        '--accent-100': '#ffedd5',
        '--accent-200': '#fed7aa',
        '--accent-300': '#fdba74',
        '--accent-400': '#fb923c',
        '--accent-500': '#f97316',
        '--accent-600': '#ea580c',
        '--accent-700': '#c2410c',
        '--accent-800': '#9a3412',
        '--hero-from': 'rgba(249, 115, 22, 0.05)',
        '--hero-to': 'rgba(249, 115, 22, 0.015)',
    },
)

MIDNIGHT = Palette(
    id='midnight',
    name='Midnight',
    description='Elegant darks with indigo accents.',
    swatch=['#312e81', '#6366f1', '#a855f7'],
    css_vars={
        '--background': '#070b1a',
        '--foreground': '#e2e8f0',
        '--surface-app': '#070b1a',
        '--surface-sidebar': 'rgba(15, 23, 42, 0.76)',
        '--surface-card': 'rgba(15, 23, 42, 0.88)',
        '--surface-card-glass': 'rgba(15, 23, 42, 0.72)',
        '--surface-overlay': 'rgba(15, 23, 42, 0.82)',
        '--surface-hover': 'rgba(99, 102, 241, 0.12)',
        '--border-soft': 'rgba(129, 140, 248, 0.28)',
        '--border-strong': 'rgba(129, 140, 248, 0.45)',
        '--text-strong': '#e2e8f0',
        '--text-muted': '#94a3b8',
        '--accent-foreground': '#0b1120',
        '--accent-ring': 'rgba(99, 102, 241, 0.45)',
        '--accent-50': '#eef2ff',
        '--accent-100': '#e0e7ff',
        '--accent-200': '#c7d2fe',
        '--accent-300': '#a5b4fc',
        '--accent-400': '#818cf8',
        '--accent-500': '#6366f1',
        '--accent-600': '#4f46e5',
        '--accent-700': '#4338ca',
        '--accent-800': '#312e81',
        '--hero-from': 'rgba(99, 102, 241, 0.12)',
        '--hero-to': 'rgba(168, 85, 247, 0.08)',
    },
)

THEME_PALETTES = [SKY, AURORA, SUNSET, MIDNIGHT]

DEFAULT_THEME_ID = SKY.id


def find_palette(palette_id):
    for palette in THEME_PALETTES:
        if palette.id == palette_id:
            return palette
    return SKY


def sanitize_hex(value):
    """Return '#rrggbb'/'#rgb' lowercased, or '' when value isn't a hex colour."""
    if not value:
        return ''
    value = value.strip()
    hex_value = value if value.startswith('#') else f'#{value}'
    return hex_value.lower() if HEX_PATTERN.match(hex_value) else ''


def hex_to_rgb(hex_value):
    normalized = hex_value.replace('#', '')
    if len(normalized) == 3:
        normalized = ''.join(char * 2 for char in normalized)
    else:
        normalized = normalized.ljust(6, '0')
    value = int(normalized, 16)
    return RGB((value >> 16) & 255, (value >> 8) & 255, value & 255)


def rgb_to_hex(rgb):
    return '#{:02x}{:02x}{:02x}'.format(*rgb)


def rgba_string(rgb, alpha):
    return f'rgba({rgb.r}, {rgb.g}, {rgb.b}, {alpha})'


def readable_foreground(rgb):
    luminance = (0.2126 * rgb.r + 0.7152 * rgb.g + 0.0722 * rgb.b) / 255
    return '#0f172a' if luminance > 0.62 else '#ffffff'


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def mix_colors(base, target, amount):
    return RGB(*(
        _round_half_up(channel + (target_channel - channel) * amount)
        for channel, target_channel in zip(base, target)
    ))


def generate_accent_scale(base_hex):
    """
    Derive the accent CSS variables from a single hex colour.

    Example:
        >>> generate_accent_scale('#0ea5e9')['--accent-500']
        '#0ea5e9'
    """
    base = hex_to_rgb(base_hex)
    scale = {'--accent-500': rgb_to_hex(base)}

    for token, amount in LIGHT_STOPS:
        scale[token] = rgb_to_hex(mix_colors(base, WHITE, amount))

    for token, amount in DARK_STOPS:
        scale[token] = rgb_to_hex(mix_colors(base, BLACK, amount))

    scale['--accent-foreground'] = readable_foreground(base)
    scale['--accent-ring'] = rgba_string(hex_to_rgb(scale['--accent-400']), 0.4)
    return scale


def build_css_vars(palette_id=DEFAULT_THEME_ID, accent_hex=''):
    """Palette variables with the accent scale applied on top."""
    palette = find_palette(palette_id)
    css_vars = dict(palette.css_vars)
    accent = sanitize_hex(accent_hex) or palette.css_vars['--accent-500']
    css_vars.update(generate_accent_scale(accent))
    return css_vars
