from modeltranslation.translator import register, TranslationOptions

from .models import GalleryItem, MayorMessage, NewsItem, Product


@register(Product)
class ProductTranslation(TranslationOptions):
    fields = ['name', 'description', 'category']


@register(NewsItem)
class NewsItemTranslation(TranslationOptions):
    fields = ['headline', 'summary', 'content']


@register(GalleryItem)
class GalleryItemTranslation(TranslationOptions):
    fields = ['title', 'description', 'category']


@register(MayorMessage)
class MayorMessageTranslation(TranslationOptions):
    fields = ['text']
