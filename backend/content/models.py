from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class LocalizedContent(models.Model):
    """
    Base for marketplace content with English/Nepali fields.

    The bilingual columns are added by django-modeltranslation (see
    ``translation.py``). Subclasses name which of their translated fields
    play the generic title, description and body roles; ``owner_field`` is
    the user the content belongs to.
    """

    content_type = None
    title_field = None
    description_field = None
    body_field = None
    owner_field = 'created_by'

    is_active = models.BooleanField(_('is active'), default=True)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']

    @property
    def owner_id(self):
        return getattr(self, f"{self.owner_field}_id")


class Product(LocalizedContent):
    content_type = 'product'
    title_field = 'name'
    description_field = 'description'
    body_field = 'description'
    owner_field = 'farmer'

    name = models.CharField(_('name'), max_length=200)
    description = models.TextField(_('description'), blank=True, default="")
    category = models.CharField(_('category'), max_length=100, blank=True, default="")
    price = models.DecimalField(_('price'), max_digits=10, decimal_places=2, default=0)
    unit = models.CharField(_('unit'), max_length=20, default="kg")
    images = models.JSONField(_('images'), default=list, blank=True)
    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        verbose_name=_('farmer'),
    )

    class Meta(LocalizedContent.Meta):
        verbose_name = _('product')
        verbose_name_plural = _('products')

    def __str__(self):
        return self.name


class NewsItem(LocalizedContent):
    class Priority(models.TextChoices):
        LOW = "LOW", _("Low")
        NORMAL = "NORMAL", _("Normal")
        HIGH = "HIGH", _("High")

    content_type = 'news'
    title_field = 'headline'
    description_field = 'summary'
    body_field = 'content'

    headline = models.CharField(_('headline'), max_length=200)
    summary = models.TextField(_('summary'), blank=True, default="")
    content = models.TextField(_('content'), blank=True, default="")
    priority = models.CharField(_('priority'), max_length=10, choices=Priority.choices, default=Priority.NORMAL)
    published_at = models.DateTimeField(_('published at'), default=timezone.now)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="news_items",
        verbose_name=_('created by'),
    )

    class Meta(LocalizedContent.Meta):
        verbose_name = _('news item')
        verbose_name_plural = _('news items')

    def __str__(self):
        return self.headline


class GalleryItem(LocalizedContent):
    content_type = 'gallery'
    title_field = 'title'
    description_field = 'description'
    body_field = 'description'

    title = models.CharField(_('title'), max_length=200)
    description = models.TextField(_('description'), blank=True, default="")
    image_url = models.URLField(_('image URL'), max_length=500, blank=True, default="")
    category = models.CharField(_('category'), max_length=100, blank=True, default="")
    order = models.PositiveIntegerField(_('order'), default=0)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="gallery_items",
        verbose_name=_('created by'),
    )

    class Meta(LocalizedContent.Meta):
        verbose_name = _('gallery item')
        verbose_name_plural = _('gallery items')
        ordering = ['order', '-created_at']

    def __str__(self):
        return self.title


class MayorMessage(LocalizedContent):
    content_type = 'mayor'
    title_field = 'text'
    body_field = 'text'

    text = models.TextField(_('text'))
    scroll_speed = models.PositiveIntegerField(_('scroll speed'), default=50)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="mayor_messages",
        verbose_name=_('created by'),
    )

    class Meta(LocalizedContent.Meta):
        verbose_name = _('mayor message')
        verbose_name_plural = _('mayor messages')

    def __str__(self):
        return self.text[:50]
