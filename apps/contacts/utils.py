"""
Tag string parsing and colouring.

Wired into django-taggit through TAGGIT_TAGS_FROM_STRING and
TAGGIT_STRING_FROM_TAGS, so TagField only ever splits on commas.
"""

TAG_PALETTE = [
    '#0ea5e9',
    '#6366f1',
    '#f97316',
    '#dc2626',
    '#10b981',
    '#f59e0b',
    '#8b5cf6',
]


def comma_splitter(tag_string):
    """
    Split on commas, trim, drop empties and case-insensitive repeats.

    >>> comma_splitter('VIP, High Priority,vip,,')
    ['VIP', 'High Priority']
    """
    tags = []
    seen = set()
    for part in (tag_string or '').split(','):
        name = part.strip()
        if name and name.casefold() not in seen:
            seen.add(name.casefold())
            tags.append(name)
    return tags


def comma_joiner(tags):
    return ', '.join(tag.name for tag in tags)


def pick_tag_color(name):
    """Same name, same colour: sum of code points modulo the palette size."""
    index = sum(ord(char) for char in name.lower()) % len(TAG_PALETTE)
    return TAG_PALETTE[index]
