from django.db import models


class Article(models.Model):
    slug = models.SlugField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    # Translatable, not mapped: filled from the translation store.
    summary = None

    def get_title(self):
        return getattr(self, "_title", None)

    def set_title(self, value):
        self._title = value

    def __str__(self) -> str:
        return self.get_title() or self.slug


class FeaturedArticle(Article):
    class Meta:
        proxy = True


class Product(models.Model):
    sku = models.CharField(max_length=32, unique=True)
    price_cents = models.IntegerField(default=0)

    name = None

    def __str__(self) -> str:
        return self.name or self.sku


class Tag(models.Model):
    label = models.CharField(max_length=50)

    def __str__(self) -> str:
        return self.label
