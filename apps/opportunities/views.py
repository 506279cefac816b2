from django.shortcuts import render, redirect
from django.urls import reverse
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.http import Http404, JsonResponse
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_http_methods

from apps.accounts.auth import ensure_team_member, owner_filter
from apps.core.actions import is_success, parse_identifier
from apps.core.forms import apply_field_errors
from apps.core.utils import is_ajax, querystring_without_page
from .actions import save_opportunity, delete_opportunity
from .forms import OpportunityForm, normalize_status
from .models import Opportunity
from .selectors import list_opportunities, get_opportunity


@login_required
def opportunity_list_view(request):
    """
    Pipeline board.

    ?status= narrows the board to one paginated column.
    Non-admins only see opportunities they own.
    """
    result = list_opportunities(
        page=request.GET.get('page', 1),
        status=request.GET.get('status'),
        owner=owner_filter(request.user),
    )

    columns = [
        {
            'status': status,
            'label': label,
            'count': result['counts'][status],
            'opportunities': result['pipeline'][status],
        }
        for status, label in Opportunity.STATUS_CHOICES
        if not result['active_status'] or result['active_status'] == status
    ]

    context = {
        **result,
        'columns': columns,
        'status_choices': Opportunity.STATUS_CHOICES,
        'filter_query': querystring_without_page(request),
        'active_page': 'opportunities',
    }

    return render(request, 'opportunities/opportunity_list.html', context)


@login_required
def opportunity_detail_view(request, pk):
    opportunity = get_opportunity(pk)
    if opportunity is None:
        raise Http404(_('Opportunity not found.'))

    context = {
        'opportunity': opportunity,
        'activities': opportunity.activities.all(),
        'active_page': 'opportunities',
    }

    return render(request, 'opportunities/opportunity_detail.html', context)


def _opportunity_form_view(request, opportunity=None):
    if request.method == 'POST':
        data = request.POST.copy()
        if opportunity is not None:
            data['id'] = str(opportunity.pk)

        state = save_opportunity(data)

        if is_ajax(request):
            return JsonResponse(state)

        if is_success(state):
            messages.success(request, state['message'])
            return redirect('opportunities:opportunity_detail', pk=state['id'])

        form = OpportunityForm(request.POST, instance=opportunity)
        if form.is_valid():
            apply_field_errors(form, state)
        messages.error(request, state['message'])
    else:
        initial = {}
        if opportunity is None:
            # Prefill from links such as "New opportunity" on a contact page
            member = ensure_team_member(request.user)
            if member is not None:
                initial['owner'] = member.pk
            contact_id = parse_identifier(request.GET.get('contact'))
            if contact_id:
                initial['contact'] = contact_id
            status = normalize_status(request.GET.get('status'))
            if status:
                initial['status'] = status
        form = OpportunityForm(instance=opportunity, initial=initial)

    context = {
        'form': form,
        'opportunity': opportunity,
        'page_title': _('Edit opportunity') if opportunity else _('New opportunity'),
        'active_page': 'opportunities',
    }

    return render(request, 'opportunities/opportunity_form.html', context)


@login_required
@require_http_methods(['GET', 'POST'])
def opportunity_create_view(request):
    return _opportunity_form_view(request)


@login_required
@require_http_methods(['GET', 'POST'])
def opportunity_edit_view(request, pk):
    opportunity = get_opportunity(pk)
    if opportunity is None:
        raise Http404(_('Opportunity not found.'))
    return _opportunity_form_view(request, opportunity)


@login_required
@require_http_methods(['GET', 'POST'])
def opportunity_delete_view(request, pk):
    if request.method == 'POST':
        state = delete_opportunity(pk)

        if is_ajax(request):
            return JsonResponse(state)

        if is_success(state):
            messages.success(request, state['message'])
        else:
            messages.error(request, state['message'])
        return redirect('opportunities:opportunity_list')

    opportunity = get_opportunity(pk)
    if opportunity is None:
        raise Http404(_('Opportunity not found.'))

    return render(request, 'core/confirm_delete.html', {
        'object': opportunity,
        'object_label': opportunity.title,
        'cancel_url': reverse('opportunities:opportunity_detail', args=[opportunity.pk]),
        'page_title': _('Delete opportunity'),
        'active_page': 'opportunities',
    })
