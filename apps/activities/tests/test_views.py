"""
Activity Views Tests
====================

Test Coverage:
1. List view - owner restriction, bad filter parameters
2. Create view - prefill, association error, AJAX contract
3. Detail and delete views

Run tests:
    python manage.py test apps.activities.tests.test_views
"""

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model

from apps.accounts.models import TeamMember
from apps.activities.models import Activity
from apps.contacts.models import Contact

User = get_user_model()


class ActivityViewsTest(TestCase):
    """Test activity list, create and delete views"""

    def setUp(self):
        """Setup test data"""
        self.client = Client()
        self.user = User.objects.create_user(
            email='sara@crm.test',
            password='Testpass123',
            name='Sara',
        )
        self.member = TeamMember.objects.create(name='Sara', email='sara@crm.test', user=self.user)
        self.other = TeamMember.objects.create(name='Omar', email='omar@crm.test')
        self.contact = Contact.objects.create(first_name='Ana', last_name='Lopez')

        self.mine = Activity.objects.create(subject='Mine', contact=self.contact, team_member=self.member)
        self.theirs = Activity.objects.create(subject='Theirs', contact=self.contact, team_member=self.other)

        self.client.login(email='sara@crm.test', password='Testpass123')

    def test_list_restricted_to_own_activities(self):
        """
        Test: Member opens the activity list

        Expected: Only activities assigned to their team member
        """
        response = self.client.get(reverse('activities:activity_list'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'activities/activity_list.html')
        self.assertEqual(response.context['activities'], [self.mine])

    def test_list_bad_date_is_bad_request(self):
        response = self.client.get(reverse('activities:activity_list'), {'date_from': '31/02/2026'})

        self.assertEqual(response.status_code, 400)

    def test_create_prefills_contact(self):
        """
        Test: GET /activities/new/?contact=<id>

        Expected: Contact and team member prefilled
        """
        response = self.client.get(reverse('activities:activity_create'), {'contact': self.contact.pk})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['form'].initial['contact'], self.contact.pk)
        self.assertEqual(response.context['form'].initial['team_member'], self.member.pk)

    def test_create_without_association_shows_error(self):
        """
        Test: POST without contact or opportunity

        Expected: Form re-rendered with an error on contact
        """
        response = self.client.post(reverse('activities:activity_create'), {'subject': 'Call'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('contact', response.context['form'].errors)

    def test_create_ajax(self):
        response = self.client.post(
            reverse('activities:activity_create'),
            {'subject': 'Call', 'contact': str(self.contact.pk), 'team_member': str(self.member.pk)},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        payload = response.json()
        self.assertEqual(payload['status'], 'success')
        self.assertEqual(Activity.objects.get(pk=payload['id']).team_member, self.member)

    def test_detail_and_delete(self):
        response = self.client.get(reverse('activities:activity_detail', args=[self.mine.pk]))
        self.assertEqual(response.status_code, 200)

        response = self.client.post(reverse('activities:activity_delete', args=[self.mine.pk]))
        self.assertRedirects(response, reverse('activities:activity_list'))
        self.assertFalse(Activity.objects.filter(pk=self.mine.pk).exists())
