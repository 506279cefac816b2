"""
Dashboard metrics and the shared option lists used by form selects.
"""
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, F, Q, Sum
from django.utils import timezone

from . import cache
from .models import Company, Tag

UPCOMING_DAYS = 7
UPCOMING_LIMIT = 10

DASHBOARD_TOPICS = (cache.DASHBOARD, cache.CONTACTS, cache.OPPORTUNITIES, cache.ACTIVITIES)


def _pipeline_totals(owner=None):
    # Imported here: opportunities depends on core
    from apps.opportunities.models import Opportunity

    opportunities = Opportunity.objects.all()
    if owner is not None:
        opportunities = opportunities.filter(owner_id=owner)

    totals = {
        status: {'count': 0, 'value': Decimal('0')}
        for status, _label in Opportunity.STATUS_CHOICES
    }
    rows = opportunities.order_by().values('status').annotate(count=Count('id'), value=Sum('value'))
    for row in rows:
        totals[row['status']] = {
            'count': row['count'],
            'value': row['value'] or Decimal('0'),
        }
    return totals


def _upcoming_activities(owner=None, now=None):
    from apps.activities.models import Activity

    now = now or timezone.now()
    horizon = now + timedelta(days=UPCOMING_DAYS)

    activities = Activity.objects.select_related('contact', 'opportunity', 'team_member').filter(
        Q(due_date__gte=now, due_date__lte=horizon) |
        Q(scheduled_for__gte=now, scheduled_for__lte=horizon)
    )
    if owner is not None:
        activities = activities.filter(team_member_id=owner)

    return list(
        activities.order_by(F('due_date').asc(nulls_last=True), 'scheduled_for', 'id')[:UPCOMING_LIMIT]
    )


def _dashboard_counts(owner=None):
    from apps.activities.models import Activity
    from apps.contacts.models import Contact

    contacts = Contact.objects.all()
    activities = Activity.objects.all()
    if owner is not None:
        contacts = contacts.filter(owner_id=owner)
        activities = activities.filter(team_member_id=owner)

    return {
        'contact_count': contacts.count(),
        'activity_count': activities.count(),
        'pipeline_totals': _pipeline_totals(owner),
    }


def compute_dashboard_metrics(owner=None, now=None):
    metrics = _dashboard_counts(owner)
    metrics['upcoming_activities'] = _upcoming_activities(owner, now)
    return metrics


def get_dashboard_metrics(owner=None, now=None):
    """
    Headline numbers for the dashboard.

    Counts and pipeline totals are cached per owner until a topic is
    invalidated. The upcoming list depends on the clock, so it is read
    fresh every time.

    Args:
        owner: TeamMember id to restrict to, None for the whole team
        now: start of the upcoming window, defaults to timezone.now()

    Returns:
        dict: contact_count, activity_count, pipeline_totals
              ({status: {'count', 'value'}}) and upcoming_activities
              (due or scheduled within the next 7 days, at most 10)
    """
    owner_key = owner if owner is not None else 'all'
    metrics = dict(cache.cached_read(
        DASHBOARD_TOPICS,
        f'dashboard-counts:{owner_key}',
        lambda: _dashboard_counts(owner),
    ))
    metrics['upcoming_activities'] = _upcoming_activities(owner, now)
    return metrics


# OPTION LISTS

def list_companies():
    return list(Company.objects.order_by('name', 'city'))


def list_tags():
    return list(Tag.objects.order_by('name'))


def list_team_members():
    from apps.accounts.models import TeamMember

    return list(TeamMember.objects.order_by('name'))
