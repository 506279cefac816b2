"""
Core Views Tests
================

Test Coverage:
1. Dashboard - login required, owner scoped numbers
2. Theme settings - session storage, context processor

Run tests:
    python manage.py test apps.core.tests.test_views
"""

from decimal import Decimal

from django.core.cache import cache as django_cache
from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model

from apps.accounts.models import TeamMember
from apps.contacts.models import Contact
from apps.opportunities.models import Opportunity

User = get_user_model()


class DashboardViewTest(TestCase):
    """Test dashboard_view"""

    def setUp(self):
        """Setup test data"""
        django_cache.clear()
        self.client = Client()

        self.member_user = User.objects.create_user(email='sara@crm.test', password='Testpass123', name='Sara')
        self.member = TeamMember.objects.create(name='Sara', email='sara@crm.test', user=self.member_user)
        self.admin_user = User.objects.create_user(
            email='boss@crm.test',
            password='Testpass123',
            name='Boss',
            role='admin',
        )
        other = TeamMember.objects.create(name='Omar', email='omar@crm.test')

        Contact.objects.create(first_name='Ana', last_name='Lopez', owner=self.member)
        Contact.objects.create(first_name='Luis', last_name='Perez', owner=other)
        Opportunity.objects.create(title='Mine', value=Decimal('100'), owner=self.member)
        Opportunity.objects.create(title='Theirs', value=Decimal('900'), status='IN_PROGRESS', owner=other)

    def test_requires_login(self):
        response = self.client.get(reverse('core:dashboard'))

        self.assertRedirects(response, f"{reverse('accounts:login')}?next=/")

    def test_member_sees_own_numbers(self):
        """
        Test: Member opens the dashboard

        Expected: Counts and pipeline limited to their own records
        """
        self.client.login(email='sara@crm.test', password='Testpass123')

        response = self.client.get(reverse('core:dashboard'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'core/dashboard.html')
        self.assertEqual(response.context['contact_count'], 1)
        self.assertEqual(response.context['open_pipeline_value'], Decimal('100'))
        columns = {column['status']: column for column in response.context['pipeline']}
        self.assertEqual([o.title for o in columns['NEW']['opportunities']], ['Mine'])
        self.assertEqual(columns['IN_PROGRESS']['count'], 0)

    def test_admin_sees_team_numbers(self):
        self.client.login(email='boss@crm.test', password='Testpass123')

        response = self.client.get(reverse('core:dashboard'))

        self.assertEqual(response.context['contact_count'], 2)
        self.assertEqual(response.context['open_pipeline_value'], Decimal('1000'))


class ThemeViewTest(TestCase):
    """Test theme_view and the theme context processor"""

    def setUp(self):
        self.client = Client()
        User.objects.create_user(email='sara@crm.test', password='Testpass123', name='Sara')
        self.client.login(email='sara@crm.test', password='Testpass123')

    def test_default_theme_in_context(self):
        response = self.client.get(reverse('core:theme'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['theme_palette'].id, 'sky')
        self.assertEqual(response.context['theme_css_vars']['--accent-500'], '#0ea5e9')

    def test_post_stores_choice_in_session(self):
        """
        Test: POST palette=midnight, accent=#ff0000

        Expected: Stored in the session and applied on the next page
        """
        response = self.client.post(reverse('core:theme'), {'palette': 'midnight', 'accent': '#FF0000'})

        self.assertRedirects(response, reverse('core:theme'))
        self.assertEqual(self.client.session['theme_palette'], 'midnight')
        self.assertEqual(self.client.session['theme_accent'], '#ff0000')

        response = self.client.get(reverse('core:theme'))
        self.assertEqual(response.context['theme_css_vars']['--accent-500'], '#ff0000')

    def test_invalid_accent_rerenders(self):
        response = self.client.post(reverse('core:theme'), {'palette': 'sky', 'accent': 'red'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('accent', response.context['form'].errors)
        self.assertNotIn('theme_accent', self.client.session)
