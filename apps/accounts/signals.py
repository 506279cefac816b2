import logging

from django.contrib.auth.signals import user_logged_in
from django.db import transaction
from django.dispatch import receiver

from .models import SessionLog
from .utils import get_client_ip

logger = logging.getLogger(__name__)


# LOGIN AUDIT TRAIL
@receiver(user_logged_in)
def record_session_log(sender, request, user, **kwargs):
    """
    Append a SessionLog row for every successful login.

    Best effort: a failure here is logged and never blocks the login.
    """
    if request is None:
        return

    try:
        with transaction.atomic():
            SessionLog.objects.create(
                user=user,
                email=user.email,
                ip_address=get_client_ip(request),
                user_agent=request.META.get('HTTP_USER_AGENT', '')[:500],
            )
    except Exception:
        logger.exception("Could not record session log for user %s", user.pk)
