from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address


def _clean_ip(value):
    value = (value or '').split(',')[0].strip()
    if not value:
        return None
    try:
        validate_ipv46_address(value)
    except ValidationError:
        return None
    return value


def get_client_ip(request):
    """
    Best guess at the client address.

    X-Forwarded-For can contain a proxy chain; the first entry is the
    original client. Falls back to X-Real-IP, then REMOTE_ADDR.
    Anything that isn't an IP address is dropped.
    """
    for header in ('HTTP_X_FORWARDED_FOR', 'HTTP_X_REAL_IP', 'REMOTE_ADDR'):
        if request.META.get(header):
            return _clean_ip(request.META[header])
    return None
