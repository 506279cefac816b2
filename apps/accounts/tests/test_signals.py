"""
Login Audit Tests
=================

Test Coverage:
1. get_client_ip - header precedence and validation
2. record_session_log - written on login, never blocks it

Run tests:
    python manage.py test apps.accounts.tests.test_signals
"""

from unittest.mock import patch

from django.test import TestCase, RequestFactory, SimpleTestCase
from django.contrib.auth import get_user_model
from django.contrib.auth.signals import user_logged_in

from apps.accounts.models import SessionLog
from apps.accounts.utils import get_client_ip

User = get_user_model()


class ClientIpTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_forwarded_for_first_entry(self):
        request = self.factory.get('/', HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1', HTTP_X_REAL_IP='10.0.0.2')

        self.assertEqual(get_client_ip(request), '203.0.113.7')

    def test_real_ip_then_remote_addr(self):
        request = self.factory.get('/', HTTP_X_REAL_IP='198.51.100.4')
        self.assertEqual(get_client_ip(request), '198.51.100.4')

        request = self.factory.get('/', REMOTE_ADDR='192.0.2.1')
        self.assertEqual(get_client_ip(request), '192.0.2.1')

    def test_garbage_is_dropped(self):
        request = self.factory.get('/', HTTP_X_FORWARDED_FOR='unknown')

        self.assertIsNone(get_client_ip(request))


class SessionLogSignalTest(TestCase):
    """Test the user_logged_in receiver"""

    def setUp(self):
        self.factory = RequestFactory()
        self.user = User.objects.create_user(email='sara@crm.test', password='Testpass123')

    def test_login_appends_session_log(self):
        request = self.factory.post('/accounts/login/', HTTP_USER_AGENT='Firefox', REMOTE_ADDR='192.0.2.9')

        user_logged_in.send(sender=User, request=request, user=self.user)

        log = SessionLog.objects.get()
        self.assertEqual(log.user, self.user)
        self.assertEqual(log.email, 'sara@crm.test')
        self.assertEqual(log.ip_address, '192.0.2.9')
        self.assertEqual(log.user_agent, 'Firefox')

    def test_client_login_is_audited(self):
        self.client.login(email='sara@crm.test', password='Testpass123')

        self.assertEqual(SessionLog.objects.filter(user=self.user).count(), 1)

    def test_failure_is_logged_not_raised(self):
        """
        Test: SessionLog insert fails

        Expected: Error logged, signal returns normally
        """
        request = self.factory.post('/accounts/login/')

        with patch('apps.accounts.signals.SessionLog.objects.create', side_effect=RuntimeError('db down')):
            with self.assertLogs('apps.accounts.signals', level='ERROR'):
                user_logged_in.send(sender=User, request=request, user=self.user)

        self.assertFalse(SessionLog.objects.exists())
