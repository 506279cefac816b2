from django.db import models
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _
from taggit.models import TagBase


class Company(models.Model):

    # Basic Information
    name = models.CharField(max_length=200, help_text="Company name")
    industry = models.CharField(max_length=120, blank=True, help_text="e.g. Software, Retail")
    website = models.URLField(blank=True, help_text="Company website")
    description = models.TextField(blank=True, help_text="Brief description about the company")

    # Location (part of the dedupe key together with the name)
    city = models.CharField(max_length=120, blank=True)
    country = models.CharField(max_length=120, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Company"
        verbose_name_plural = "Companies"
        ordering = ['name']
        constraints = [
            # Contacts name companies inline; one row per (name, city, country)
            models.UniqueConstraint(
                Lower('name'), 'city', 'country',
                name='core_company_unique_name_city_country',
            ),
        ]

    def __str__(self):
        if self.city:
            return f"{self.name} ({self.city})"
        return self.name


class Tag(TagBase):
    """Contact tag with a display colour. Names are unique case-insensitively."""

    color = models.CharField(max_length=7, default='#0ea5e9', help_text="Hex color code (e.g. #0ea5e9)")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Tag")
        verbose_name_plural = _("Tags")
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(Lower('name'), name='core_tag_unique_lower_name'),
        ]
