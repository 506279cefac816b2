from .theme import THEME_PALETTES, DEFAULT_THEME_ID, build_css_vars, find_palette

SESSION_PALETTE_KEY = 'theme_palette'
SESSION_ACCENT_KEY = 'theme_accent'


def theme(request):
    """Expose the session's theme as CSS custom properties for base.html."""
    session = getattr(request, 'session', {})
    palette_id = session.get(SESSION_PALETTE_KEY, DEFAULT_THEME_ID)
    accent = session.get(SESSION_ACCENT_KEY, '')

    return {
        'theme_palette': find_palette(palette_id),
        'theme_accent': accent,
        'theme_css_vars': build_css_vars(palette_id, accent),
        'theme_palettes': THEME_PALETTES,
    }
