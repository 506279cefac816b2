"""
Display filters for money, dates, enum labels and avatars.

    {% load crm_format %}
    {{ opportunity.value|currency }}  ->  $12,500
    {{ activity.due_date|short_date }}  ->  02 Nov 2026
"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django import template
from django.utils import timezone

from apps.activities.models import Activity
from apps.opportunities.models import Opportunity

register = template.Library()

NO_DATE = 'No date'

OPPORTUNITY_STATUS_LABELS = dict(Opportunity.STATUS_CHOICES)
ACTIVITY_TYPE_LABELS = dict(Activity.TYPE_CHOICES)
ACTIVITY_STATUS_LABELS = dict(Activity.STATUS_CHOICES)


@register.filter
def currency(value, symbol='$'):
    """Whole-unit amount with thousands separators, '-' for missing values."""
    if value is None or value == '':
        return '-'
    try:
        amount = Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return '-'
    sign = '-' if amount < 0 else ''
    return f'{sign}{symbol}{abs(amount):,.0f}'


@register.filter
def short_date(value):
    if not value:
        return NO_DATE
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    if not isinstance(value, date):
        return NO_DATE
    return value.strftime('%d %b %Y')


@register.filter
def opportunity_status_label(status):
    return OPPORTUNITY_STATUS_LABELS.get(status, status)


@register.filter
def activity_type_label(activity_type):
    return ACTIVITY_TYPE_LABELS.get(activity_type, activity_type)


@register.filter
def activity_status_label(status):
    return ACTIVITY_STATUS_LABELS.get(status, status)


@register.simple_tag
def initials(first_name, last_name=''):
    """Two-letter avatar text. A single full name is split on whitespace."""
    if not last_name and first_name and len(first_name.split()) > 1:
        words = first_name.split()
        first_name, last_name = words[0], words[-1]
    return f"{(first_name or '')[:1]}{(last_name or '')[:1]}".upper()
