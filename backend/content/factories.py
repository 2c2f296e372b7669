import factory
from factory.django import DjangoModelFactory

from translations.factories import UserFactory

from .models import GalleryItem, MayorMessage, NewsItem, Product


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    name_en = factory.Sequence(lambda n: f"Tomato {n}")
    name_ne = factory.Sequence(lambda n: f"गोलभेडा {n}")
    description_en = "Fresh organic tomatoes"
    description_ne = "ताजा अर्गानिक गोलभेडा"
    category_en = "vegetables"
    price = "120.00"
    unit = "kg"
    farmer = factory.SubFactory(UserFactory)


class NewsItemFactory(DjangoModelFactory):
    class Meta:
        model = NewsItem

    headline_en = factory.Sequence(lambda n: f"Market update {n}")
    summary_en = "Prices this week"
    content_en = "Vegetable prices dropped this week."
    priority = NewsItem.Priority.NORMAL
    created_by = factory.SubFactory(UserFactory)


class GalleryItemFactory(DjangoModelFactory):
    class Meta:
        model = GalleryItem

    title_en = factory.Sequence(lambda n: f"Harvest {n}")
    description_en = "Harvest festival"
    image_url = "https://example.com/harvest.jpg"
    category_en = "Events"
    created_by = factory.SubFactory(UserFactory)


class MayorMessageFactory(DjangoModelFactory):
    class Meta:
        model = MayorMessage

    text_en = "Welcome to the farmers market"
    text_ne = "किसान बजारमा स्वागत छ"
    created_by = factory.SubFactory(UserFactory)
