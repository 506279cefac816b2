"""
Contact Views Tests
===================

Test Coverage:
1. List View - contact_list_view
2. Detail View - contact_detail_view
3. Create View - contact_create_view (HTML and AJAX)
4. Edit View - contact_edit_view
5. Delete View - contact_delete_view

Run tests:
    python manage.py test apps.contacts.tests.test_views
"""

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model

from apps.contacts.models import Contact

User = get_user_model()


class ContactViewTestMixin:

    def setUp(self):
        """Setup test data"""
        self.client = Client()
        self.user = User.objects.create_user(
            email='agent@crm.test',
            password='Testpass123',
            name='Agent Smith',
        )
        self.client.login(email='agent@crm.test', password='Testpass123')

        self.contact = Contact.objects.create(
            first_name='John',
            last_name='Smith',
            city='Lima',
        )


class ContactListViewTest(ContactViewTestMixin, TestCase):
    """Test contact list view"""

    def test_list_requires_login(self):
        """
        Test: Anonymous access

        Expected: Redirect to login
        """
        self.client.logout()
        response = self.client.get(reverse('contacts:contact_list'))

        self.assertEqual(response.status_code, 302)
        self.assertIn('login', response.url)

    def test_list_view(self):
        """
        Test: Authenticated access

        Expected: 200 OK with contacts and groups in context
        """
        response = self.client.get(reverse('contacts:contact_list'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'contacts/contact_list.html')
        self.assertEqual(response.context['contacts'], [self.contact])
        self.assertEqual(response.context['groups'][0]['label'], 'All (1)')

    def test_list_view_search_and_group(self):
        """
        Test: ?query=smith&group_by=city

        Expected: Query echoed back, grouped by city
        """
        response = self.client.get(reverse('contacts:contact_list'), {'query': 'smith', 'group_by': 'city'})

        self.assertEqual(response.context['query'], 'smith')
        self.assertEqual(response.context['groups'][0]['label'], 'Lima (1)')

    def test_overlong_query_is_bad_request(self):
        """
        Test: Query over 200 characters

        Expected: 400
        """
        response = self.client.get(reverse('contacts:contact_list'), {'query': 'x' * 201})

        self.assertEqual(response.status_code, 400)


class ContactDetailViewTest(ContactViewTestMixin, TestCase):
    """Test contact detail view"""

    def test_detail_view(self):
        response = self.client.get(reverse('contacts:contact_detail', args=[self.contact.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['contact'], self.contact)

    def test_detail_not_found(self):
        """
        Test: Unknown id

        Expected: 404
        """
        response = self.client.get(reverse('contacts:contact_detail', args=[self.contact.pk + 100]))

        self.assertEqual(response.status_code, 404)


class ContactCreateViewTest(ContactViewTestMixin, TestCase):
    """Test contact create view"""

    def test_create_form_defaults_owner(self):
        """
        Test: GET the create form

        Expected: Owner preselected to the user's team member
        """
        response = self.client.get(reverse('contacts:contact_create'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.context['form'].initial['owner'],
            self.user.team_member.pk,
        )

    def test_create_contact(self):
        """
        Test: POST valid data

        Expected: Redirect to the new contact's detail page
        """
        response = self.client.post(reverse('contacts:contact_create'), {
            'first_name': 'Jane',
            'last_name': 'Doe',
            'company_name': 'Globex',
            'tags': 'VIP',
        })

        contact = Contact.objects.get(first_name='Jane')
        self.assertRedirects(response, reverse('contacts:contact_detail', args=[contact.pk]))
        self.assertEqual(contact.company.name, 'Globex')

    def test_create_contact_invalid(self):
        """
        Test: POST without last name

        Expected: Form re-rendered with the error
        """
        response = self.client.post(reverse('contacts:contact_create'), {'first_name': 'Jane'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('last_name', response.context['form'].errors)

    def test_create_contact_ajax(self):
        """
        Test: Quick-create AJAX POST

        Expected: JSON action state with the new id
        """
        response = self.client.post(
            reverse('contacts:contact_create'),
            {'first_name': 'Jane', 'last_name': 'Doe'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload['status'], 'success')
        self.assertEqual(payload['message'], 'Contact created')
        self.assertTrue(Contact.objects.filter(pk=payload['id']).exists())

    def test_create_contact_ajax_errors(self):
        """
        Test: Quick-create AJAX POST with missing names

        Expected: JSON error state with field errors
        """
        response = self.client.post(
            reverse('contacts:contact_create'),
            {},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        payload = response.json()
        self.assertEqual(payload['status'], 'error')
        self.assertIn('first_name', payload['field_errors'])


class ContactEditDeleteViewTest(ContactViewTestMixin, TestCase):
    """Test contact edit and delete views"""

    def test_edit_contact(self):
        """
        Test: POST to the edit URL

        Expected: Existing contact updated in place
        """
        response = self.client.post(reverse('contacts:contact_edit', args=[self.contact.pk]), {
            'first_name': 'Johnny',
            'last_name': 'Smith',
        })

        self.assertRedirects(response, reverse('contacts:contact_detail', args=[self.contact.pk]))
        self.contact.refresh_from_db()
        self.assertEqual(self.contact.first_name, 'Johnny')
        self.assertEqual(Contact.objects.count(), 1)

    def test_delete_confirmation_page(self):
        response = self.client.get(reverse('contacts:contact_delete', args=[self.contact.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'core/confirm_delete.html')

    def test_delete_contact(self):
        """
        Test: POST to the delete URL

        Expected: Contact removed, redirect to list
        """
        response = self.client.post(reverse('contacts:contact_delete', args=[self.contact.pk]))

        self.assertRedirects(response, reverse('contacts:contact_list'))
        self.assertFalse(Contact.objects.exists())

    def test_delete_missing_contact_ajax(self):
        """
        Test: AJAX delete of an unknown id

        Expected: JSON error state
        """
        response = self.client.post(
            reverse('contacts:contact_delete', args=[self.contact.pk + 100]),
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        self.assertEqual(response.json(), {'status': 'error', 'message': 'Contact not found.'})
