"""
Contact Actions Tests
=====================

Tests for save_contact / delete_contact.

Test Coverage:
1. Create and update with validation errors
2. Company find-or-create (case-insensitive dedupe)
3. Tag find-or-create and full tag set replacement
4. Identifier handling and not-found errors
5. Cache topic invalidation
6. Rollback on unexpected errors

Run tests:
    python manage.py test apps.contacts.tests.test_actions
"""

from unittest.mock import patch

from django.test import TestCase

from apps.accounts.models import TeamMember
from apps.core import cache
from apps.core.models import Company, Tag
from apps.contacts.actions import save_contact, delete_contact, find_or_create_company
from apps.contacts.models import Contact, ContactTag
from apps.contacts.utils import pick_tag_color


class InvalidationRecorder:
    """Stand-in for invalidate_topics that remembers what it was called with"""

    def __init__(self):
        self.calls = []

    def __call__(self, *topics):
        self.calls.append(set(topics))


class SaveContactTest(TestCase):
    """Test save_contact create/update"""

    def setUp(self):
        """Setup test data"""
        self.member = TeamMember.objects.create(name='Sara Owner', email='sara@crm.test')
        self.invalidate = InvalidationRecorder()

    def _data(self, **overrides):
        data = {
            'first_name': 'John',
            'last_name': 'Smith',
            'email': 'john@acme.test',
            'city': 'Lima',
            'country': 'Peru',
        }
        data.update(overrides)
        return data

    def test_create_contact(self):
        """
        Test: Minimal valid data

        Expected: Contact created, success state carries the id
        """
        state = save_contact(self._data(owner=str(self.member.pk)), invalidate=self.invalidate)

        self.assertEqual(state['status'], 'success')
        self.assertEqual(state['message'], 'Contact created')

        contact = Contact.objects.get(pk=state['id'])
        self.assertEqual(contact.full_name, 'John Smith')
        self.assertEqual(contact.owner, self.member)
        self.assertIsNone(contact.company)

    def test_missing_required_fields(self):
        """
        Test: Empty first and last name

        Expected: Error state with field errors, nothing written
        """
        state = save_contact(self._data(first_name='', last_name=''), invalidate=self.invalidate)

        self.assertEqual(state['status'], 'error')
        self.assertEqual(state['message'], 'Please review the form.')
        self.assertEqual(state['field_errors']['first_name'], 'First name is required.')
        self.assertIn('last_name', state['field_errors'])
        self.assertEqual(Contact.objects.count(), 0)
        self.assertEqual(self.invalidate.calls, [])

    def test_invalid_email(self):
        """
        Test: Malformed email

        Expected: Field error on email
        """
        state = save_contact(self._data(email='not-an-email'), invalidate=self.invalidate)

        self.assertIn('email', state['field_errors'])

    def test_unknown_owner(self):
        """
        Test: Owner id that matches no team member

        Expected: Field error on owner
        """
        state = save_contact(self._data(owner='9999'), invalidate=self.invalidate)

        self.assertEqual(state['status'], 'error')
        self.assertIn('owner', state['field_errors'])

    def test_update_contact(self):
        """
        Test: Save with an existing id

        Expected: Same row updated, "Contact updated"
        """
        contact = Contact.objects.create(first_name='Old', last_name='Name')

        state = save_contact(self._data(id=str(contact.pk)), invalidate=self.invalidate)

        self.assertEqual(state['message'], 'Contact updated')
        self.assertEqual(state['id'], contact.pk)
        contact.refresh_from_db()
        self.assertEqual(contact.first_name, 'John')
        self.assertEqual(Contact.objects.count(), 1)

    def test_update_unknown_id(self):
        """
        Test: Id that matches no contact

        Expected: Not found error
        """
        state = save_contact(self._data(id='9999'), invalidate=self.invalidate)

        self.assertEqual(state, {'status': 'error', 'message': 'Contact not found.'})

    def test_update_invalid_id(self):
        """
        Test: Non-numeric id

        Expected: Invalid identifier error
        """
        state = save_contact(self._data(id='abc'), invalidate=self.invalidate)

        self.assertEqual(state['message'], 'Invalid identifier.')

    def test_company_is_deduplicated_case_insensitively(self):
        """
        Test: Two contacts naming "Acme" and "ACME" in the same city/country

        Expected: One company, name takes the latest spelling
        """
        first = save_contact(self._data(company_name='Acme'), invalidate=self.invalidate)
        second = save_contact(
            self._data(first_name='Jane', company_name='ACME'),
            invalidate=self.invalidate,
        )

        self.assertEqual(Company.objects.count(), 1)
        company = Company.objects.get()
        self.assertEqual(company.name, 'ACME')
        self.assertEqual(company.city, 'Lima')
        self.assertEqual(company.country, 'Peru')
        self.assertEqual(Contact.objects.get(pk=first['id']).company, company)
        self.assertEqual(Contact.objects.get(pk=second['id']).company, company)

    def test_company_city_defaults_to_contact_city(self):
        """
        Test: company_city given vs omitted

        Expected: Different cities make different companies
        """
        save_contact(self._data(company_name='Acme'), invalidate=self.invalidate)
        save_contact(self._data(company_name='Acme', company_city='Cusco'), invalidate=self.invalidate)

        self.assertEqual(
            sorted(Company.objects.values_list('city', flat=True)),
            ['Cusco', 'Lima'],
        )

    def test_blank_company_name_clears_company(self):
        """
        Test: Edit with an empty company_name

        Expected: Contact has no company
        """
        created = save_contact(self._data(company_name='Acme'), invalidate=self.invalidate)
        save_contact(self._data(id=str(created['id']), company_name=''), invalidate=self.invalidate)

        self.assertIsNone(Contact.objects.get(pk=created['id']).company)

    def test_tags_created_and_deduplicated(self):
        """
        Test: "VIP, vip, Renewal"

        Expected: Two tags, colours from the palette
        """
        state = save_contact(self._data(tags='VIP, vip, Renewal'), invalidate=self.invalidate)

        contact = Contact.objects.get(pk=state['id'])
        self.assertEqual(sorted(contact.tags.names()), ['Renewal', 'VIP'])
        self.assertEqual(Tag.objects.get(name='VIP').color, pick_tag_color('VIP'))

    def test_existing_tag_reused_case_insensitively(self):
        """
        Test: Tag "vip" when "VIP" already exists

        Expected: Existing tag linked, no new tag
        """
        vip = Tag.objects.create(name='VIP', slug='vip')

        state = save_contact(self._data(tags='vip'), invalidate=self.invalidate)

        self.assertEqual(Tag.objects.count(), 1)
        self.assertEqual(list(Contact.objects.get(pk=state['id']).tags.all()), [vip])

    def test_repeated_tag_values(self):
        """
        Test: Tags sent as repeated form values

        Expected: Every value becomes a tag
        """
        state = save_contact(self._data(tags=['VIP', 'Key account']), invalidate=self.invalidate)

        contact = Contact.objects.get(pk=state['id'])
        self.assertEqual(sorted(contact.tags.names()), ['Key account', 'VIP'])

    def test_tag_set_is_replaced(self):
        """
        Test: Update with a different tag list

        Expected: Old links removed, only the new set remains
        """
        created = save_contact(self._data(tags='VIP, Renewal'), invalidate=self.invalidate)
        save_contact(self._data(id=str(created['id']), tags='Churn risk'), invalidate=self.invalidate)

        contact = Contact.objects.get(pk=created['id'])
        self.assertEqual(list(contact.tags.names()), ['Churn risk'])
        self.assertEqual(ContactTag.objects.filter(content_object=contact).count(), 1)
        # Tags themselves are kept
        self.assertEqual(Tag.objects.count(), 3)

    def test_invalidates_contacts_and_dashboard(self):
        """
        Test: Successful save

        Expected: contacts and dashboard topics invalidated
        """
        save_contact(self._data(), invalidate=self.invalidate)

        self.assertEqual(self.invalidate.calls, [{cache.CONTACTS, cache.DASHBOARD}])

    def test_unexpected_error_rolls_back(self):
        """
        Test: Tag creation blows up mid-transaction

        Expected: Generic error, neither contact nor company written
        """
        with patch('apps.contacts.actions.find_or_create_tag', side_effect=RuntimeError('boom')):
            with self.assertLogs('apps.contacts.actions', level='ERROR'):
                state = save_contact(
                    self._data(company_name='Acme', tags='VIP'),
                    invalidate=self.invalidate,
                )

        self.assertEqual(state, {'status': 'error', 'message': 'We could not save the contact.'})
        self.assertEqual(Contact.objects.count(), 0)
        self.assertEqual(Company.objects.count(), 0)
        self.assertEqual(self.invalidate.calls, [])


class FindOrCreateCompanyTest(TestCase):
    """Test company lookup helper"""

    def test_blank_name(self):
        """
        Test: Empty or whitespace name

        Expected: None, nothing created
        """
        self.assertIsNone(find_or_create_company('  ', 'Lima', 'Peru'))
        self.assertEqual(Company.objects.count(), 0)

    def test_country_is_part_of_the_key(self):
        """
        Test: Same name and city, different country

        Expected: Two companies
        """
        one = find_or_create_company('Acme', 'Santiago', 'Chile')
        two = find_or_create_company('Acme', 'Santiago', 'Dominican Republic')

        self.assertNotEqual(one.pk, two.pk)


class DeleteContactTest(TestCase):
    """Test delete_contact"""

    def setUp(self):
        """Setup test data"""
        self.contact = Contact.objects.create(first_name='Ana', last_name='Lopez')
        self.tag = Tag.objects.create(name='VIP', slug='vip')
        self.contact.tags.add(self.tag)
        self.invalidate = InvalidationRecorder()

    def test_delete_contact(self):
        """
        Test: Delete an existing contact

        Expected: Contact and tag links removed, tag kept, every topic invalidated
        """
        state = delete_contact(self.contact.pk, invalidate=self.invalidate)

        self.assertEqual(state, {'status': 'success', 'message': 'Contact deleted.'})
        self.assertFalse(Contact.objects.exists())
        self.assertFalse(ContactTag.objects.exists())
        self.assertTrue(Tag.objects.filter(pk=self.tag.pk).exists())
        self.assertEqual(self.invalidate.calls, [set(cache.TOPICS)])

    def test_delete_invalid_id(self):
        """
        Test: Zero, negative and non-numeric ids

        Expected: Invalid identifier, nothing deleted
        """
        for value in (0, -1, 'abc', '', None):
            state = delete_contact(value, invalidate=self.invalidate)
            self.assertEqual(state['message'], 'Invalid identifier.')

        self.assertTrue(Contact.objects.exists())
        self.assertEqual(self.invalidate.calls, [])

    def test_delete_missing_contact(self):
        """
        Test: Id that matches no row

        Expected: Not found error
        """
        state = delete_contact(self.contact.pk + 100, invalidate=self.invalidate)

        self.assertEqual(state, {'status': 'error', 'message': 'Contact not found.'})
