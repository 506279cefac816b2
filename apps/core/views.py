from decimal import Decimal

from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.utils.translation import gettext as _
from django.views.decorators.http import require_http_methods

from apps.accounts.auth import owner_filter
from apps.opportunities.models import Opportunity, STATUS_WON, STATUS_LOST
from apps.opportunities.selectors import list_opportunities
from .context_processors import SESSION_PALETTE_KEY, SESSION_ACCENT_KEY
from .forms import ThemeForm
from .selectors import get_dashboard_metrics
from .theme import DEFAULT_THEME_ID


DASHBOARD_PIPELINE_PREVIEW = 4
CLOSED_STATUSES = (STATUS_WON, STATUS_LOST)


@login_required
def dashboard_view(request):
    """
    Main dashboard view
    - Admins: whole-team numbers
    - Members: only records they own
    """
    owner = owner_filter(request.user)

    metrics = get_dashboard_metrics(owner=owner)
    board = list_opportunities(page_size=DASHBOARD_PIPELINE_PREVIEW, owner=owner)

    pipeline = [
        {
            'status': status,
            'label': label,
            'count': metrics['pipeline_totals'][status]['count'],
            'value': metrics['pipeline_totals'][status]['value'],
            'opportunities': board['pipeline'][status],
        }
        for status, label in Opportunity.STATUS_CHOICES
    ]

    context = {
        **metrics,
        'pipeline': pipeline,
        'open_pipeline_value': sum(
            (column['value'] for column in pipeline if column['status'] not in CLOSED_STATUSES),
            Decimal('0'),
        ),
        'stats_label': _('Team') if owner is None else _('My'),
        'active_page': 'dashboard',
    }

    return render(request, 'core/dashboard.html', context)


@login_required
@require_http_methods(['GET', 'POST'])
def theme_view(request):
    """Palette picker; the choice lives in the session."""
    if request.method == 'POST':
        form = ThemeForm(request.POST)
        if form.is_valid():
            request.session[SESSION_PALETTE_KEY] = form.cleaned_data['palette']
            request.session[SESSION_ACCENT_KEY] = form.cleaned_data['accent']
            messages.success(request, _('Theme updated.'))
            return redirect('core:theme')
    else:
        form = ThemeForm(initial={
            'palette': request.session.get(SESSION_PALETTE_KEY, DEFAULT_THEME_ID),
            'accent': request.session.get(SESSION_ACCENT_KEY, ''),
        })

    context = {
        'form': form,
        'page_title': _('Theme'),
        'active_page': 'theme',
    }

    return render(request, 'core/theme.html', context)
