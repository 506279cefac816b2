"""
Credential login and the session principal.

authenticate_credentials() is what the login view calls: it checks the
email/password pair, makes sure the user has a correctly linked
TeamMember and returns a Principal describing the session.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction

from .models import TeamMember, ROLE_MEMBER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    id: int
    email: str
    name: str
    role: str
    team_member_id: Optional[int]

    @property
    def is_admin(self):
        return self.role == 'admin'

    @property
    def owner_filter(self):
        """Team member id to restrict list pages to, None for admins."""
        return None if self.is_admin else self.team_member_id


def ensure_team_member(user):
    """
    Return the TeamMember linked to `user`, linking or creating one if needed.

    1. Already linked: returned as is.
    2. A TeamMember with the same email exists (seeded, or pointing at a
       stale user): relinked to this user.
    3. Otherwise one is created, unless the user is an admin.

    Returns:
        TeamMember or None (admins without a team member)
    """
    try:
        return user.team_member
    except TeamMember.DoesNotExist:
        pass

    member = TeamMember.objects.filter(email__iexact=user.email).first()
    if member is not None:
        member.user = user
        member.save(update_fields=['user', 'updated_at'])
        logger.info("Relinked team member %s to user %s", member.pk, user.pk)
        return member

    if user.is_admin():
        return None

    try:
        with transaction.atomic():
            member = TeamMember.objects.create(
                name=user.name or user.email,
                email=user.email,
                role=user.role or ROLE_MEMBER,
                user=user,
            )
    except IntegrityError:
        # Created concurrently by another login
        member = TeamMember.objects.get(email__iexact=user.email)
    logger.info("Created team member %s for user %s", member.pk, user.pk)
    return member


def get_principal(user, team_member=None):
    if team_member is None:
        team_member = ensure_team_member(user)
    return Principal(
        id=user.pk,
        email=user.email,
        name=user.name,
        role=user.role or ROLE_MEMBER,
        team_member_id=team_member.pk if team_member else None,
    )


def authenticate_credentials(request, email, password):
    """
    Check an email/password pair.

    Returns:
        tuple: (User, Principal) on success, (None, None) otherwise
    """
    email = (email or '').strip().lower()
    if not email or not password:
        return None, None

    user = authenticate(request, username=email, password=password)
    if user is None:
        return None, None

    team_member = ensure_team_member(user)
    return user, get_principal(user, team_member)


def owner_filter(user):
    """
    Team member id that list pages and the dashboard are restricted to.

    Admins see everything (None). Other users only see records owned by
    their own team member.
    """
    if user.is_admin():
        return None
    team_member = ensure_team_member(user)
    return team_member.pk if team_member else None
