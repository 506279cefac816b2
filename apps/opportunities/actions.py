import logging

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
from .forms import OpportunityForm
from .models import Opportunity

logger = logging.getLogger(__name__)

# Activity pages show the opportunity title, the dashboard its totals
OPPORTUNITY_TOPICS = (cache.OPPORTUNITIES, cache.ACTIVITIES, cache.DASHBOARD)


def save_opportunity(data, invalidate=invalidate_topics):
    """Create (no id) or update (id) an opportunity."""
    opportunity, error = resolve_instance(Opportunity.objects.all(), data, _('Opportunity not found.'))
    if error:
        return error

    is_update = opportunity is not None

    form = OpportunityForm(data, instance=opportunity)
    if not form.is_valid():
        return action_error(_('Please review the opportunity details.'), first_errors(form))

    try:
        opportunity = form.save()
    except Exception:
        logger.exception("save_opportunity failed (id=%s)", opportunity.pk if is_update else 'new')
        return action_error(_('We could not save the opportunity.'))

    invalidate(*OPPORTUNITY_TOPICS)

    message = _('Opportunity updated') if is_update else _('Opportunity created')
    return action_success(message, id=opportunity.pk)


def delete_opportunity(pk, invalidate=invalidate_topics):
    identifier = parse_identifier(pk)
    if identifier is None:
        return invalid_identifier_error()

    try:
        deleted, _per_model = Opportunity.objects.filter(pk=identifier).delete()
    except Exception:
        logger.exception("delete_opportunity failed (id=%s)", identifier)
        return action_error(_('We could not delete the opportunity.'))

    if not deleted:
        return action_error(_('Opportunity not found.'))

    invalidate(*OPPORTUNITY_TOPICS)
    logger.info("Deleted opportunity %s", identifier)
    return action_success(_('Opportunity deleted.'))
