import logging

from django.utils.translation import gettext as _

from apps.core import cache
from apps.core.actions import (
    action_success,
    action_error,
    parse_identifier,
    invalid_identifier_error,
    resolve_instance,
)
from apps.core.cache import invalidate_topics
from apps.core.forms import first_errors
from .forms import ActivityForm, MISSING_ASSOCIATION
from .models import Activity

logger = logging.getLogger(__name__)

# Payload key used by the list filter and quick-create; the column is activity_type
TYPE_KEY = 'type'


def normalize_activity_payload(data):
    """Copy `type` onto `activity_type` when only `type` was sent."""
    if TYPE_KEY in data and 'activity_type' not in data:
        data = data.copy()
        data['activity_type'] = data[TYPE_KEY]
    return data


def save_activity(data, invalidate=invalidate_topics):
    """
    Create (no id) or update (id) an activity.

    The type may be sent as `type` or `activity_type`.
    A missing contact/opportunity association gets its own message so the
    user knows what to fix; other validation errors share the generic one.
    """
    activity, error = resolve_instance(Activity.objects.all(), data, _('Activity not found.'))
    if error:
        return error

    is_update = activity is not None

    form = ActivityForm(normalize_activity_payload(data), instance=activity)
    if not form.is_valid():
        if form.has_error('contact', code=MISSING_ASSOCIATION):
            message = _('Link the activity to a contact or opportunity.')
        else:
            message = _('Please review the activity details.')
        return action_error(message, first_errors(form))

    try:
        activity = form.save()
    except Exception:
        logger.exception("save_activity failed (id=%s)", activity.pk if is_update else 'new')
        return action_error(_('We could not save the activity.'))

    # Contact and opportunity pages list their activities
    invalidate(cache.ACTIVITIES, cache.CONTACTS, cache.OPPORTUNITIES, cache.DASHBOARD)

    message = _('Activity updated') if is_update else _('Activity logged')
    return action_success(message, id=activity.pk)


def delete_activity(pk, invalidate=invalidate_topics):
    identifier = parse_identifier(pk)
    if identifier is None:
        return invalid_identifier_error()

    try:
        deleted, _per_model = Activity.objects.filter(pk=identifier).delete()
    except Exception:
        logger.exception("delete_activity failed (id=%s)", identifier)
        return action_error(_('We could not delete the activity.'))

    if not deleted:
        return action_error(_('Activity not found.'))

    invalidate(cache.ACTIVITIES, cache.DASHBOARD)
    logger.info("Deleted activity %s", identifier)
    return action_success(_('Activity deleted.'))
