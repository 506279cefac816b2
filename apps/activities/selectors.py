"""
Activity reads: filtered list and detail.
"""
from django.conf import settings
from django.utils.translation import gettext as _

from apps.core.actions import parse_identifier
from apps.core.exceptions import InvalidQueryParameters
from apps.core.forms import first_errors
from apps.core.utils import paginate, first_value
from .forms import ActivityFilterForm, DATE_FIELD_COLUMNS, TYPE_ALL
from .models import Activity

FILTER_PARAMS = ('type', 'date_field', 'date_from', 'date_to')


def filter_activities(activities, filters):
    """
    Apply cleaned ActivityFilterForm data.

    The date range is inclusive, compared by calendar day, and applies to
    the single column selected by date_field.
    """
    if filters['type'] != TYPE_ALL:
        activities = activities.filter(activity_type=filters['type'])

    column = DATE_FIELD_COLUMNS[filters['date_field']]
    if filters.get('date_from'):
        activities = activities.filter(**{f'{column}__date__gte': filters['date_from']})
    if filters.get('date_to'):
        activities = activities.filter(**{f'{column}__date__lte': filters['date_to']})

    return activities


def list_activities(params=None, page=1, page_size=None, owner=None):
    """
    Filtered, paginated activity list, newest first.

    Args:
        params: QueryDict or dict with type, date_field, date_from, date_to
        owner: TeamMember id to restrict to, None for everyone

    Returns:
        dict: activities, filters, pagination, page_obj

    Raises:
        InvalidQueryParameters: on a malformed date
    """
    form = ActivityFilterForm({key: first_value(params, key, '') for key in FILTER_PARAMS})
    if not form.is_valid():
        raise InvalidQueryParameters(_('Invalid filter parameters.'), first_errors(form))

    filters = form.cleaned_data

    activities = Activity.objects.select_related('contact', 'opportunity', 'team_member')
    if owner is not None:
        activities = activities.filter(team_member_id=owner)
    activities = filter_activities(activities, filters).order_by('-created_at', '-id')

    page_obj, pagination = paginate(activities, page, page_size or settings.ACTIVITIES_PAGE_SIZE)

    return {
        'activities': list(page_obj.object_list),
        'filters': filters,
        'pagination': pagination,
        'page_obj': page_obj,
    }


def get_activity(pk):
    identifier = parse_identifier(pk)
    if identifier is None:
        return None

    return (
        Activity.objects
        .select_related('contact', 'contact__company', 'opportunity', 'team_member')
        .filter(pk=identifier)
        .first()
    )
