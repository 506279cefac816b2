"""
Opportunity reads: the pipeline board, detail and select options.
"""
from django.conf import settings
from django.db.models import Count, Prefetch

from apps.core.actions import parse_identifier
from apps.core.utils import paginate
from .forms import normalize_status
from .models import Opportunity

PIPELINE_STATUSES = [status for status, _label in Opportunity.STATUS_CHOICES]


def count_by_status(opportunities):
    """{status: count} over the whole queryset; every status is present."""
    counts = {status: 0 for status in PIPELINE_STATUSES}
    rows = opportunities.order_by().values('status').annotate(count=Count('id'))
    for row in rows:
        counts[row['status']] = row['count']
    return counts


def list_opportunities(page=1, page_size=None, status=None, owner=None):
    """
    Pipeline board data.

    Without a status every column gets a preview of its most recently
    updated opportunities. With a status only that column is filled, one
    page at a time; the other columns are empty lists.

    `counts` always covers every opportunity visible to `owner`, whatever
    page is being shown.

    Args:
        page: page of the active column (ignored without a status)
        page_size: defaults to PIPELINE_PAGE_SIZE / PIPELINE_PREVIEW_SIZE
        status: pipeline status or a friendly alias ("in-progress", "won")
        owner: TeamMember id to restrict to, None for everyone

    Returns:
        dict: pipeline, counts, pagination, active_status
    """
    active_status = normalize_status(status)

    opportunities = Opportunity.objects.select_related('company', 'contact', 'owner')
    if owner is not None:
        opportunities = opportunities.filter(owner_id=owner)

    counts = count_by_status(opportunities)
    pipeline = {key: [] for key in PIPELINE_STATUSES}

    if active_status:
        page_obj, pagination = paginate(
            opportunities.filter(status=active_status).order_by('-updated_at', '-id'),
            page,
            page_size or settings.PIPELINE_PAGE_SIZE,
        )
        pipeline[active_status] = list(page_obj.object_list)
    else:
        size = max(1, int(page_size or settings.PIPELINE_PREVIEW_SIZE))
        for key in PIPELINE_STATUSES:
            pipeline[key] = list(opportunities.filter(status=key).order_by('-updated_at', '-id')[:size])
        pagination = {
            'page': 1,
            'page_size': size,
            'total': sum(counts.values()),
            'total_pages': 1,
        }

    return {
        'pipeline': pipeline,
        'counts': counts,
        'pagination': pagination,
        'active_status': active_status,
    }


def get_opportunity(pk):
    """Opportunity with company, contact, owner and activities, or None."""
    from apps.activities.models import Activity

    identifier = parse_identifier(pk)
    if identifier is None:
        return None

    return (
        Opportunity.objects
        .select_related('company', 'contact', 'owner')
        .prefetch_related(
            Prefetch(
                'activities',
                queryset=Activity.objects.select_related('contact', 'team_member').order_by('-created_at'),
            ),
        )
        .filter(pk=identifier)
        .first()
    )


def list_opportunity_options(limit=200):
    return list(
        Opportunity.objects
        .only('id', 'title', 'status')
        .order_by('-updated_at')[:limit]
    )
