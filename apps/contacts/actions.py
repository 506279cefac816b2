"""
Contact mutations.

save_contact() is the one multi-row write of the CRM: the company, the
contact row and its full tag set are written in a single transaction, so
a half-applied tag update is never visible.
"""
import logging

from django.db import transaction
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
from apps.core.models import Company, Tag
from .forms import ContactForm
from .models import Contact
from .utils import pick_tag_color

logger = logging.getLogger(__name__)


def find_or_create_company(name, city='', country=''):
    """
    Company matching (name, case-insensitive) + city + country, created when missing.

    An existing match takes the newly typed spelling of the name.
    Concurrent creates are settled by the unique constraint: get_or_create
    falls back to fetching the row the other request inserted.
    """
    name = (name or '').strip()
    if not name:
        return None

    company, created = Company.objects.get_or_create(
        name__iexact=name,
        city=city or '',
        country=country or '',
        defaults={'name': name},
    )

    if not created and company.name != name:
        company.name = name
        company.save(update_fields=['name', 'updated_at'])

    return company


def find_or_create_tag(name):
    """Tag matching `name` case-insensitively; new tags get a colour derived from the name."""
    tag, created = Tag.objects.get_or_create(
        name__iexact=name,
        defaults={'name': name, 'color': pick_tag_color(name)},
    )
    if created:
        logger.debug("Created tag %s (%s)", tag.pk, tag.name)
    return tag


def _persist_contact(form):
    cleaned = form.cleaned_data

    with transaction.atomic():
        # 1. Company
        company = find_or_create_company(
            cleaned.get('company_name'),
            cleaned.get('company_city') or cleaned.get('city'),
            cleaned.get('country'),
        )

        # 2. Contact row
        contact = form.save(commit=False)
        contact.company = company
        contact.save()

        # 3-5. Replace the tag set
        tags = [find_or_create_tag(name) for name in cleaned.get('tags') or []]
        contact.tags.clear()
        if tags:
            contact.tags.add(*tags)

    return contact


def save_contact(data, invalidate=invalidate_topics):
    """
    Create (no id) or update (id) a contact.

    Returns:
        dict: action state; on success it carries the contact id
    """
    contact, error = resolve_instance(Contact.objects.all(), data, _('Contact not found.'))
    if error:
        return error

    is_update = contact is not None

    form = ContactForm(data, instance=contact)
    if not form.is_valid():
        return action_error(_('Please review the form.'), first_errors(form))

    try:
        contact = _persist_contact(form)
    except Exception:
        logger.exception("save_contact failed (id=%s)", contact.pk if is_update else "new")
        return action_error(_('We could not save the contact.'))

    invalidate(cache.CONTACTS, cache.DASHBOARD)

    message = _('Contact updated') if is_update else _('Contact created')
    return action_success(message, id=contact.pk)


def delete_contact(pk, invalidate=invalidate_topics):
    """
    Delete a contact. Its tag links go with it; opportunities and
    activities keep existing without a contact.
    """
    identifier = parse_identifier(pk)
    if identifier is None:
        return invalid_identifier_error()

    try:
        deleted, _per_model = Contact.objects.filter(pk=identifier).delete()
    except Exception:
        logger.exception("delete_contact failed (id=%s)", identifier)
        return action_error(_('We could not delete the contact.'))

    if not deleted:
        return action_error(_('Contact not found.'))

    invalidate(*cache.TOPICS)
    logger.info("Deleted contact %s", identifier)
    return action_success(_('Contact deleted.'))
