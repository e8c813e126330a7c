from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.text import slugify


class Product(models.Model):
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)  # for clean urls, follows the name
    description = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    category = models.CharField(max_length=100, db_index=True)
    stock_quantity = models.PositiveIntegerField(default=0)
    image_urls = models.JSONField(default=list, blank=True)

    # educational fields shown on the product page
    scientific_name = models.CharField(max_length=200, blank=True, default='')
    key_benefits = models.JSONField(default=list, blank=True)  # ["Energy", "Immunity"] - matched against quiz goals
    suggested_dosage = models.CharField(max_length=255, default='See label')
    contraindications = models.TextField(default='None known')

    average_rating = models.FloatField(default=0, validators=[MinValueValidator(0), MaxValueValidator(5)])

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def matches_goals(self, goals):
        return bool(set(self.key_benefits or []) & set(goals or []))
