"""
Contact reads: search, grouping, detail and select options.
"""
from django.conf import settings
from django.db.models import Q, Prefetch
from django.utils.translation import gettext as _

from apps.core.actions import parse_identifier
from apps.core.exceptions import InvalidQueryParameters
from apps.core.forms import first_errors
from apps.core.utils import paginate, first_value
from .forms import ContactSearchForm, GROUP_NONE, GROUP_CITY, GROUP_COMPANY, GROUP_TAG
from .models import Contact


NO_CITY = 'No city'
NO_COMPANY = 'No company'
NO_TAGS = 'No tags'

# Fields a search token is matched against (case-insensitive substring)
SEARCH_FIELDS = [
    'first_name',
    'last_name',
    'email',
    'phone',
    'company__name',
    'tags__name',
]


def search_contacts(query=''):
    """
    Contacts matching every whitespace-separated token of `query`.

    A token matches when it is contained in at least one SEARCH_FIELDS
    value, so "john acme" finds John at Acme Corp. Each token gets its own
    filter() call (and its own tag join), letting different tokens match
    different tags of the same contact.
    """
    contacts = Contact.objects.select_related('company', 'owner').prefetch_related('tags')

    tokens = (query or '').split()
    for token in tokens:
        condition = Q()
        for field in SEARCH_FIELDS:
            condition |= Q(**{f'{field}__icontains': token})
        contacts = contacts.filter(condition)

    if tokens:
        contacts = contacts.distinct()

    # id keeps pages stable between contacts sharing a name
    return contacts.order_by('last_name', 'first_name', 'id')


def group_contacts(contacts, group_by=GROUP_NONE):
    """
    Partition a page of contacts for display.

    Grouping by tag is not a partition: a contact appears once per tag.
    Groups are sorted by key and labelled "key (count)".
    """
    contacts = list(contacts)

    if group_by not in (GROUP_CITY, GROUP_COMPANY, GROUP_TAG):
        return [{
            'key': 'all',
            'label': _('All (%(count)d)') % {'count': len(contacts)},
            'contacts': contacts,
        }]

    groups = {}
    for contact in contacts:
        if group_by == GROUP_TAG:
            keys = [tag.name for tag in contact.tags.all()] or [NO_TAGS]
        elif group_by == GROUP_CITY:
            keys = [contact.city or NO_CITY]
        else:
            keys = [contact.company.name if contact.company else NO_COMPANY]

        for key in keys:
            groups.setdefault(key, []).append(contact)

    return [
        {
            'key': key,
            'label': f'{key} ({len(members)})',
            'contacts': members,
        }
        for key, members in sorted(groups.items(), key=lambda item: (item[0].casefold(), item[0]))
    ]


def list_contacts(params=None, page=1, page_size=None):
    """
    Search, paginate and group contacts.

    Args:
        params: QueryDict or dict with optional 'query' and 'group_by'
        page: requested page, clamped to the available range
        page_size: defaults to settings.CONTACTS_PAGE_SIZE

    Returns:
        dict: contacts, groups, group_by, query, pagination, page_obj

    Raises:
        InvalidQueryParameters: when the search parameters don't validate
    """
    form = ContactSearchForm({
        'query': first_value(params, 'query', ''),
        'group_by': first_value(params, 'group_by', ''),
    })
    if not form.is_valid():
        raise InvalidQueryParameters(_('Invalid search parameters.'), first_errors(form))

    query = form.cleaned_data['query']
    group_by = form.cleaned_data['group_by']

    page_obj, pagination = paginate(
        search_contacts(query),
        page,
        page_size or settings.CONTACTS_PAGE_SIZE,
    )
    contacts = list(page_obj.object_list)

    return {
        'contacts': contacts,
        'groups': group_contacts(contacts, group_by),
        'group_by': group_by,
        'query': query,
        'pagination': pagination,
        'page_obj': page_obj,
    }


def get_contact(pk):
    """Contact with company, owner, tags, opportunities and recent activities, or None."""
    from apps.activities.models import Activity

    identifier = parse_identifier(pk)
    if identifier is None:
        return None

    return (
        Contact.objects
        .select_related('company', 'owner')
        .prefetch_related(
            'tags',
            'opportunities',
            Prefetch(
                'activities',
                queryset=Activity.objects.select_related('team_member', 'opportunity').order_by('-created_at'),
            ),
        )
        .filter(pk=identifier)
        .first()
    )


def list_contact_options(limit=200):
    """Most recently updated contacts, for select inputs."""
    return list(
        Contact.objects
        .only('id', 'first_name', 'last_name', 'email')
        .order_by('-updated_at')[:limit]
    )
