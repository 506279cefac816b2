"""
Authentication Tests
====================

Test Coverage:
1. UserManager - email normalization, superuser defaults
2. ensure_team_member - keep, relink, create, admin without member
3. authenticate_credentials - principal, case-insensitive email
4. owner_filter

Run tests:
    python manage.py test apps.accounts.tests.test_auth
"""

from django.test import TestCase, RequestFactory
from django.contrib.auth import get_user_model

from apps.accounts.auth import (
    Principal,
    authenticate_credentials,
    ensure_team_member,
    get_principal,
    owner_filter,
)
from apps.accounts.models import TeamMember

User = get_user_model()


class UserManagerTest(TestCase):

    def test_email_is_lowercased(self):
        user = User.objects.create_user(email=' Sara@CRM.Test ', password='Testpass123', name='Sara')

        self.assertEqual(user.email, 'sara@crm.test')
        self.assertEqual(user.role, 'member')
        self.assertFalse(user.is_admin())

    def test_email_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='Testpass123')

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser(email='root@crm.test', password='Testpass123', name='Root')

        self.assertTrue(user.is_staff)
        self.assertEqual(user.role, 'admin')
        self.assertTrue(user.is_admin())


class EnsureTeamMemberTest(TestCase):
    """Test ensure_team_member"""

    def setUp(self):
        self.user = User.objects.create_user(email='sara@crm.test', password='Testpass123', name='Sara')

    def test_existing_link_is_kept(self):
        member = TeamMember.objects.create(name='Sara', email='sara@crm.test', user=self.user)

        self.assertEqual(ensure_team_member(self.user), member)
        self.assertEqual(TeamMember.objects.count(), 1)

    def test_relinks_member_with_same_email(self):
        """
        Test: Seeded team member with the user's email but no link

        Expected: Linked to the user instead of creating a duplicate
        """
        member = TeamMember.objects.create(name='Sara L.', email='SARA@crm.test')

        result = ensure_team_member(self.user)

        self.assertEqual(result, member)
        member.refresh_from_db()
        self.assertEqual(member.user, self.user)
        self.assertEqual(TeamMember.objects.count(), 1)

    def test_creates_member_for_non_admin(self):
        member = ensure_team_member(self.user)

        self.assertEqual(member.email, 'sara@crm.test')
        self.assertEqual(member.name, 'Sara')
        self.assertEqual(member.user, self.user)

    def test_admin_without_member_gets_none(self):
        admin = User.objects.create_user(email='boss@crm.test', password='Testpass123', role='admin')

        self.assertIsNone(ensure_team_member(admin))
        self.assertFalse(TeamMember.objects.filter(email='boss@crm.test').exists())


class AuthenticateCredentialsTest(TestCase):
    """Test authenticate_credentials"""

    def setUp(self):
        self.factory = RequestFactory()
        self.user = User.objects.create_user(email='sara@crm.test', password='Testpass123', name='Sara')

    def test_valid_credentials(self):
        request = self.factory.post('/accounts/login/')

        user, principal = authenticate_credentials(request, '  SARA@crm.test ', 'Testpass123')

        self.assertEqual(user, self.user)
        self.assertIsInstance(principal, Principal)
        self.assertEqual(principal.email, 'sara@crm.test')
        self.assertEqual(principal.role, 'member')
        self.assertEqual(principal.team_member_id, self.user.team_member.pk)

    def test_wrong_password(self):
        request = self.factory.post('/accounts/login/')

        self.assertEqual(authenticate_credentials(request, 'sara@crm.test', 'nope'), (None, None))
        self.assertEqual(authenticate_credentials(request, '', ''), (None, None))

    def test_principal_is_frozen(self):
        principal = get_principal(self.user)

        with self.assertRaises(Exception):
            principal.role = 'admin'


class OwnerFilterTest(TestCase):

    def test_admin_sees_everything(self):
        admin = User.objects.create_user(email='boss@crm.test', password='Testpass123', role='admin')

        self.assertIsNone(owner_filter(admin))

    def test_member_restricted_to_own_member(self):
        user = User.objects.create_user(email='sara@crm.test', password='Testpass123')
        member = TeamMember.objects.create(name='Sara', email='sara@crm.test', user=user)

        self.assertEqual(owner_filter(user), member.pk)
        self.assertEqual(get_principal(user).owner_filter, member.pk)
