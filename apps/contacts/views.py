from django.shortcuts import render, redirect
from django.urls import reverse
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.http import Http404, JsonResponse
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_http_methods

from apps.accounts.auth import ensure_team_member
from apps.core.actions import is_success
from apps.core.forms import apply_field_errors
from apps.core.selectors import list_companies, list_tags
from apps.core.utils import is_ajax, querystring_without_page
from .actions import save_contact, delete_contact
from .forms import ContactForm, ContactSearchForm
from .selectors import list_contacts, get_contact


@login_required
def contact_list_view(request):
    """
    Contacts with search, grouping and pagination.

    Query string: ?query=&group_by=none|city|company|tag&page=
    """
    result = list_contacts(request.GET, page=request.GET.get('page', 1))

    context = {
        **result,
        'search_form': ContactSearchForm(initial={'query': result['query'], 'group_by': result['group_by']}),
        'page_range': result['page_obj'].paginator.get_elided_page_range(
            result['page_obj'].number,
            on_each_side=2,
            on_ends=1
        ),
        'filter_query': querystring_without_page(request),
        'active_page': 'contacts',
    }

    return render(request, 'contacts/contact_list.html', context)


@login_required
def contact_detail_view(request, pk):
    contact = get_contact(pk)
    if contact is None:
        raise Http404(_('Contact not found.'))

    context = {
        'contact': contact,
        'tags': contact.tags.all(),
        'opportunities': contact.opportunities.all(),
        'activities': contact.activities.all()[:20],
        'active_page': 'contacts',
    }

    return render(request, 'contacts/contact_detail.html', context)


def _contact_form_view(request, contact=None):
    if request.method == 'POST':
        data = request.POST.copy()
        if contact is not None:
            data['id'] = str(contact.pk)

        state = save_contact(data)

        # Quick-create widget and other AJAX callers get the raw state
        if is_ajax(request):
            return JsonResponse(state)

        if is_success(state):
            messages.success(request, state['message'])
            return redirect('contacts:contact_detail', pk=state['id'])

        form = ContactForm(request.POST, instance=contact)
        if form.is_valid():
            apply_field_errors(form, state)
        messages.error(request, state['message'])
    else:
        initial = {}
        if contact is None:
            member = ensure_team_member(request.user)
            if member is not None:
                initial['owner'] = member.pk
        form = ContactForm(instance=contact, initial=initial)

    context = {
        'form': form,
        'contact': contact,
        'companies': list_companies(),
        'tags': list_tags(),
        'page_title': _('Edit contact') if contact else _('New contact'),
        'active_page': 'contacts',
    }

    return render(request, 'contacts/contact_form.html', context)


@login_required
@require_http_methods(['GET', 'POST'])
def contact_create_view(request):
    return _contact_form_view(request)


@login_required
@require_http_methods(['GET', 'POST'])
def contact_edit_view(request, pk):
    contact = get_contact(pk)
    if contact is None:
        raise Http404(_('Contact not found.'))
    return _contact_form_view(request, contact)


@login_required
@require_http_methods(['GET', 'POST'])
def contact_delete_view(request, pk):
    """GET shows a confirmation page, POST deletes."""
    if request.method == 'POST':
        state = delete_contact(pk)

        if is_ajax(request):
            return JsonResponse(state)

        if is_success(state):
            messages.success(request, state['message'])
        else:
            messages.error(request, state['message'])
        return redirect('contacts:contact_list')

    contact = get_contact(pk)
    if contact is None:
        raise Http404(_('Contact not found.'))

    return render(request, 'core/confirm_delete.html', {
        'object': contact,
        'object_label': contact.full_name,
        'cancel_url': reverse('contacts:contact_detail', args=[contact.pk]),
        'page_title': _('Delete contact'),
        'active_page': 'contacts',
    })
