"""
Give every team member a login.

    python manage.py backfill_team_users

Each TeamMember with an email gets a User with that email (created or
updated) carrying the member's name and role and SEED_TEAM_PASSWORD, and
the two are linked.
"""
import logging

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, TeamMember, ROLE_MEMBER

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Create or update a user account for every team member and link them.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            default=settings.SEED_TEAM_PASSWORD,
            help='Shared password for the backfilled accounts (defaults to SEED_TEAM_PASSWORD)',
        )

    def handle(self, *args, **options):
        password_hash = make_password(options['password'])
        created = 0
        updated = 0

        with transaction.atomic():
            for member in TeamMember.objects.exclude(email='').select_related('user'):
                email = User.objects.normalize_email(member.email)
                user = User.objects.filter(email=email).first()

                if user is None:
                    user = User(email=email)
                    created += 1
                else:
                    updated += 1

                user.name = member.name
                user.role = member.role or ROLE_MEMBER
                user.password = password_hash
                user.save()

                if member.user_id != user.pk:
                    # user is one-to-one with TeamMember
                    TeamMember.objects.filter(user=user).exclude(pk=member.pk).update(user=None)
                    member.user = user
                    member.save(update_fields=['user', 'updated_at'])

        logger.info("Backfilled team users: %s created, %s updated", created, updated)
        self.stdout.write(f'Users created: {created}')
        self.stdout.write(f'Users updated: {updated}')
