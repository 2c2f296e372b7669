import factory
from django.contrib.auth import get_user_model
from factory.django import DjangoModelFactory

from .models import ChangeType, TranslationHistory, TranslationKey

User = get_user_model()


class UserFactory(DjangoModelFactory):
    class Meta:
        model = User
        django_get_or_create = ("username",)

    username = factory.Sequence(lambda n: f"translator{n}")
    email = factory.Sequence(lambda n: f"translator{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    is_active = True
    is_staff = False
    is_superuser = False


class TranslationKeyFactory(DjangoModelFactory):
    class Meta:
        model = TranslationKey

    key = factory.Sequence(lambda n: f"common.item{n}")
    namespace = factory.LazyAttribute(lambda o: o.key.split(".", 1)[0])
    en = factory.Sequence(lambda n: f"Item {n}")
    ne = factory.Sequence(lambda n: f"वस्तु {n}")
    context = ""
    is_required = False
    updated_by = factory.SubFactory(UserFactory)


class TranslationHistoryFactory(DjangoModelFactory):
    """Snapshot of an existing key; ``version`` must be set by the caller."""

    class Meta:
        model = TranslationHistory

    translation_key = factory.SubFactory(TranslationKeyFactory)
    key = factory.SelfAttribute("translation_key.key")
    namespace = factory.SelfAttribute("translation_key.namespace")
    en = factory.SelfAttribute("translation_key.en")
    ne = factory.SelfAttribute("translation_key.ne")
    context = factory.SelfAttribute("translation_key.context")
    is_required = factory.SelfAttribute("translation_key.is_required")
    change_type = ChangeType.UPDATE
    version = 1
