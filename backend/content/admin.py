from django.contrib import admin
from modeltranslation.admin import TabbedTranslationAdmin
from unfold.admin import ModelAdmin
from unfold.decorators import display

from .models import GalleryItem, MayorMessage, NewsItem, Product


@admin.register(Product)
class ProductAdmin(ModelAdmin, TabbedTranslationAdmin):
    list_display = ['name', 'category', 'price', 'unit', 'farmer', 'has_nepali', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name_en', 'name_ne', 'description_en', 'description_ne']
    readonly_fields = ['created_at', 'updated_at']

    @display(description="Nepali", boolean=True)
    def has_nepali(self, obj):
        return bool(obj.name_ne)


@admin.register(NewsItem)
class NewsItemAdmin(ModelAdmin, TabbedTranslationAdmin):
    list_display = ['headline', 'priority', 'published_at', 'has_nepali', 'is_active']
    list_filter = ['priority', 'is_active']
    search_fields = ['headline_en', 'headline_ne', 'summary_en', 'summary_ne']
    readonly_fields = ['created_at', 'updated_at']

    @display(description="Nepali", boolean=True)
    def has_nepali(self, obj):
        return bool(obj.headline_ne)


@admin.register(GalleryItem)
class GalleryItemAdmin(ModelAdmin, TabbedTranslationAdmin):
    list_display = ['title', 'category', 'order', 'has_nepali', 'is_active']
    list_filter = ['is_active']
    search_fields = ['title_en', 'title_ne', 'description_en', 'description_ne']
    readonly_fields = ['created_at', 'updated_at']

    @display(description="Nepali", boolean=True)
    def has_nepali(self, obj):
        return bool(obj.title_ne)


@admin.register(MayorMessage)
class MayorMessageAdmin(ModelAdmin, TabbedTranslationAdmin):
    list_display = ['__str__', 'scroll_speed', 'has_nepali', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['text_en', 'text_ne']
    readonly_fields = ['created_at', 'updated_at']

    @display(description="Nepali", boolean=True)
    def has_nepali(self, obj):
        return bool(obj.text_ne)
