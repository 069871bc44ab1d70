"""Django signals for cache invalidation."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from pickup.cache import invalidate_session
from pickup.models import GameSession


@receiver([post_save, post_delete], sender=GameSession)
def invalidate_session_cache(sender, instance, **kwargs):
    """Invalidate caches when a session is saved or deleted."""
    invalidate_session(str(instance.pk))
