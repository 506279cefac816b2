"""
Action state helpers shared by every mutation.

Mutations never raise to the view: they return a plain dict

    {'status': 'success' | 'error' | 'idle', 'message': str, 'field_errors': {field: str}}

which views turn into flash messages or a JSON response.
"""
from django.utils.translation import gettext as _

from .utils import first_value


STATUS_IDLE = 'idle'
STATUS_SUCCESS = 'success'
STATUS_ERROR = 'error'

ACTION_IDLE = {'status': STATUS_IDLE}


def action_success(message, **extra):
    state = {'status': STATUS_SUCCESS, 'message': str(message)}
    state.update(extra)
    return state


def action_error(message, field_errors=None):
    state = {'status': STATUS_ERROR, 'message': str(message)}
    if field_errors:
        state['field_errors'] = {field: str(error) for field, error in field_errors.items()}
    return state


def is_success(state):
    return state.get('status') == STATUS_SUCCESS


def parse_identifier(value):
    """
    Parse a record id coming from a form or URL.

    Returns:
        int: the id, or None when it isn't a positive integer
    """
    if isinstance(value, bool):
        return None
    try:
        identifier = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return identifier if identifier > 0 else None


def invalid_identifier_error():
    return action_error(_('Invalid identifier.'))


def resolve_instance(queryset, data, not_found_message):
    """
    Row an upsert payload refers to through its 'id' value.

    No id means create. An id that doesn't parse or matches nothing is
    reported as an error state instead.

    Returns:
        tuple: (instance or None, error state or None)
    """
    raw_id = first_value(data, 'id', '')
    if raw_id is None or str(raw_id).strip() == '':
        return None, None

    identifier = parse_identifier(raw_id)
    if identifier is None:
        return None, invalid_identifier_error()

    instance = queryset.filter(pk=identifier).first()
    if instance is None:
        return None, action_error(not_found_message)

    return instance, None
