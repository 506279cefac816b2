"""
Account mutations: registration, profile and password changes.

Each function validates through a form and returns an action state dict
(see apps.core.actions).
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils.translation import gettext as _

from apps.core.actions import action_success, action_error
from apps.core.forms import first_errors
from .forms import RegisterForm, ProfileUpdateForm, ChangePasswordForm
from .models import TeamMember, ROLE_MEMBER

logger = logging.getLogger(__name__)

User = get_user_model()

DEFAULT_TEAM_ROLE = 'Account Executive'


def _session_error():
    return action_error(_('We could not validate your session. Please sign in again.'))


def _is_authenticated(user):
    return user is not None and user.is_authenticated


def register_user(data):
    form = RegisterForm(data)
    if not form.is_valid():
        return action_error(_('Please review the form.'), first_errors(form))

    cleaned = form.cleaned_data

    if User.objects.filter(email__iexact=cleaned['email']).exists():
        return action_error(
            _('This email is already registered.'),
            {'email': _('An account with this email already exists.')},
        )

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=cleaned['email'],
                password=cleaned['password'],
                name=cleaned['name'],
                role=cleaned['role'] or ROLE_MEMBER,
            )
            member = TeamMember.objects.filter(email__iexact=user.email).first()
            if member is None:
                TeamMember.objects.create(
                    name=user.name,
                    email=user.email,
                    role=cleaned['role'] or DEFAULT_TEAM_ROLE,
                    user=user,
                )
            else:
                member.user = user
                member.save(update_fields=['user', 'updated_at'])
    except Exception:
        logger.exception("register_user failed for %s", cleaned['email'])
        return action_error(_('We could not create your account. Please try again.'))

    logger.info("Registered user %s", user.pk)
    return action_success(_('Account created. You can now sign in.'))


def update_profile(user, data):
    if not _is_authenticated(user):
        return _session_error()

    form = ProfileUpdateForm(data, user=user)
    if not form.is_valid():
        return action_error(_('Please review the form.'), first_errors(form))

    cleaned = form.cleaned_data

    try:
        with transaction.atomic():
            user.name = cleaned['name']
            if cleaned['role']:
                user.role = cleaned['role']
            user.save(update_fields=['name', 'role', 'updated_at'])

            updates = {'name': user.name}
            if cleaned['role']:
                updates['role'] = cleaned['role']
            TeamMember.objects.filter(user=user).update(**updates)
    except Exception:
        logger.exception("update_profile failed for user %s", user.pk)
        return action_error(_('We could not update your profile. Please try again.'))

    return action_success(_('Profile updated.'))


def change_password(user, data):
    """
    Rules, each reported on its own field:
    - current_password must match the stored hash
    - confirm_password must equal new_password
    - new_password must differ from the current one
    """
    if not _is_authenticated(user):
        return _session_error()

    form = ChangePasswordForm(data)
    if not form.is_valid():
        return action_error(_('Please review the form.'), first_errors(form))

    cleaned = form.cleaned_data

    if not user.check_password(cleaned['current_password']):
        return action_error(
            _('Your current password is incorrect.'),
            {'current_password': _('Incorrect current password.')},
        )

    if cleaned['new_password'] == cleaned['current_password']:
        return action_error(
            _('Your new password must be different from the current one.'),
            {'new_password': _('Choose a different password.')},
        )

    try:
        user.set_password(cleaned['new_password'])
        user.save(update_fields=['password', 'updated_at'])
    except Exception:
        logger.exception("change_password failed for user %s", user.pk)
        return action_error(_('We could not update your password. Please try again.'))

    return action_success(_('Password updated.'))
