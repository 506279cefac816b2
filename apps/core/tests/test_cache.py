"""
Topic Cache Tests
=================

Test Coverage:
1. cached_read - hits, per-key isolation
2. invalidate_topics - only dependent reads are recomputed

Run tests:
    python manage.py test apps.core.tests.test_cache
"""

from django.core.cache import cache as django_cache
from django.test import TestCase

from apps.core import cache


class Counter:

    def __init__(self, value='computed'):
        self.calls = 0
        self.value = value

    def __call__(self):
        self.calls += 1
        return self.value


class CachedReadTest(TestCase):
    """Test topic-versioned reads"""

    def setUp(self):
        django_cache.clear()

    def test_second_read_is_served_from_cache(self):
        compute = Counter()

        first = cache.cached_read([cache.CONTACTS], 'contacts-page', compute)
        second = cache.cached_read([cache.CONTACTS], 'contacts-page', compute)

        self.assertEqual(first, 'computed')
        self.assertEqual(second, 'computed')
        self.assertEqual(compute.calls, 1)

    def test_keys_are_isolated(self):
        compute = Counter()

        cache.cached_read([cache.CONTACTS], 'page-1', compute)
        cache.cached_read([cache.CONTACTS], 'page-2', compute)

        self.assertEqual(compute.calls, 2)

    def test_invalidation_recomputes_dependent_reads(self):
        """
        Test: Invalidate the contacts topic

        Expected: Reads depending on contacts recompute, others stay cached
        """
        contacts_read = Counter()
        activities_read = Counter()

        cache.cached_read([cache.CONTACTS, cache.DASHBOARD], 'dash', contacts_read)
        cache.cached_read([cache.ACTIVITIES], 'activities', activities_read)

        cache.invalidate_topics(cache.CONTACTS)

        cache.cached_read([cache.CONTACTS, cache.DASHBOARD], 'dash', contacts_read)
        cache.cached_read([cache.ACTIVITIES], 'activities', activities_read)

        self.assertEqual(contacts_read.calls, 2)
        self.assertEqual(activities_read.calls, 1)

    def test_invalidating_unknown_version_starts_fresh(self):
        cache.invalidate_topics(cache.OPPORTUNITIES)

        self.assertEqual(cache.topic_version(cache.OPPORTUNITIES), 2)

        cache.invalidate_topics(cache.OPPORTUNITIES)
        self.assertEqual(cache.topic_version(cache.OPPORTUNITIES), 3)
