from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import TranslationKey
from .services import invalidate_translation_bundles


@receiver(post_save, sender=TranslationKey)
@receiver(post_delete, sender=TranslationKey)
def translation_key_changed(sender, instance, **kwargs):
    # bundles must not be rebuilt from rows the writer has not committed yet
    transaction.on_commit(invalidate_translation_bundles)
