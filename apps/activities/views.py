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
from .actions import save_activity, delete_activity
from .forms import ActivityForm, ActivityFilterForm
from .selectors import list_activities, get_activity


@login_required
def activity_list_view(request):
    """
    Activities, newest first.

    Query string: ?type=&date_field=created|scheduled|due|resolved&date_from=&date_to=&page=
    """
    result = list_activities(
        request.GET,
        page=request.GET.get('page', 1),
        owner=owner_filter(request.user),
    )

    filters = result['filters']

    context = {
        **result,
        'filter_form': ActivityFilterForm(initial=filters),
        # Keeps the active filters on pagination links
        'filter_query': querystring_without_page(request),
        'page_range': result['page_obj'].paginator.get_elided_page_range(
            result['page_obj'].number,
            on_each_side=2,
            on_ends=1
        ),
        'active_page': 'activities',
    }

    return render(request, 'activities/activity_list.html', context)


@login_required
def activity_detail_view(request, pk):
    activity = get_activity(pk)
    if activity is None:
        raise Http404(_('Activity not found.'))

    return render(request, 'activities/activity_detail.html', {
        'activity': activity,
        'active_page': 'activities',
    })


def _activity_form_view(request, activity=None):
    if request.method == 'POST':
        data = request.POST.copy()
        if activity is not None:
            data['id'] = str(activity.pk)

        state = save_activity(data)

        if is_ajax(request):
            return JsonResponse(state)

        if is_success(state):
            messages.success(request, state['message'])
            return redirect('activities:activity_detail', pk=state['id'])

        form = ActivityForm(request.POST, instance=activity)
        if form.is_valid():
            apply_field_errors(form, state)
        messages.error(request, state['message'])
    else:
        initial = {}
        if activity is None:
            member = ensure_team_member(request.user)
            if member is not None:
                initial['team_member'] = member.pk
            for field in ('contact', 'opportunity'):
                identifier = parse_identifier(request.GET.get(field))
                if identifier:
                    initial[field] = identifier
        form = ActivityForm(instance=activity, initial=initial)

    context = {
        'form': form,
        'activity': activity,
        'page_title': _('Edit activity') if activity else _('Log activity'),
        'active_page': 'activities',
    }

    return render(request, 'activities/activity_form.html', context)


@login_required
@require_http_methods(['GET', 'POST'])
def activity_create_view(request):
    return _activity_form_view(request)


@login_required
@require_http_methods(['GET', 'POST'])
def activity_edit_view(request, pk):
    activity = get_activity(pk)
    if activity is None:
        raise Http404(_('Activity not found.'))
    return _activity_form_view(request, activity)


@login_required
@require_http_methods(['GET', 'POST'])
def activity_delete_view(request, pk):
    if request.method == 'POST':
        state = delete_activity(pk)

        if is_ajax(request):
            return JsonResponse(state)

        if is_success(state):
            messages.success(request, state['message'])
        else:
            messages.error(request, state['message'])
        return redirect('activities:activity_list')

    activity = get_activity(pk)
    if activity is None:
        raise Http404(_('Activity not found.'))

    return render(request, 'core/confirm_delete.html', {
        'object': activity,
        'object_label': activity.subject,
        'cancel_url': reverse('activities:activity_detail', args=[activity.pk]),
        'page_title': _('Delete activity'),
        'active_page': 'activities',
    })
