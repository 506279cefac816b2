"""
Topic-versioned cache for rendered page data.

Every cached read is keyed by the current version of the topics it depends
on. Mutations call invalidate_topics(...) which bumps those versions, so
stale entries are simply never read again and expire on their own.
"""
import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

CONTACTS = 'contacts'
OPPORTUNITIES = 'opportunities'
ACTIVITIES = 'activities'
DASHBOARD = 'dashboard'

TOPICS = (CONTACTS, OPPORTUNITIES, ACTIVITIES, DASHBOARD)


def _version_key(topic):
    return f'crm:topic-version:{topic}'


def topic_version(topic):
    version = cache.get(_version_key(topic))
    if version is None:
        # add() is a no-op when another request won the race
        cache.add(_version_key(topic), 1, timeout=None)
        version = cache.get(_version_key(topic), 1)
    return version


def invalidate_topics(*topics):
    for topic in topics:
        try:
            cache.incr(_version_key(topic))
        except ValueError:
            # Key missing (never read or evicted)
            cache.set(_version_key(topic), 2, timeout=None)
    logger.debug("Invalidated cache topics: %s", ', '.join(topics))


def cached_read(topics, key, compute, timeout=None):
    """
    Return compute() through the cache, scoped to the given topics.

    Args:
        topics: iterable of topic names the result depends on
        key: cache key suffix unique to this read (include its arguments)
        compute: zero-argument callable producing the value
        timeout: seconds, defaults to settings.CACHE_TIMEOUT
    """
    versions = '.'.join(f'{topic}{topic_version(topic)}' for topic in sorted(topics))
    full_key = f'crm:{key}:{versions}'

    value = cache.get(full_key)
    if value is None:
        value = compute()
        cache.set(full_key, value, timeout if timeout is not None else settings.CACHE_TIMEOUT)
    return value
