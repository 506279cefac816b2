from django.db import models
from django.utils.translation import gettext_lazy as _
from taggit.managers import TaggableManager
from taggit.models import ItemBase

from apps.core.models import Tag


class ContactTag(ItemBase):
    """
    Contact <-> Tag link. Rebuilt as a whole on every contact save.
    """

    content_object = models.ForeignKey('Contact', on_delete=models.CASCADE, related_name='tag_links')
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name='contact_links')

    class Meta:
        verbose_name = _("Contact tag")
        verbose_name_plural = _("Contact tags")
        constraints = [
            models.UniqueConstraint(fields=['content_object', 'tag'], name='contacts_contacttag_unique'),
        ]


class Contact(models.Model):

    # Basic Information
    first_name = models.CharField(max_length=120)
    last_name = models.CharField(max_length=120)
    email = models.EmailField(blank=True, db_index=True)
    phone = models.CharField(max_length=40, blank=True)
    job_title = models.CharField(max_length=120, blank=True)

    # Location
    city = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    country = models.CharField(max_length=120, blank=True)

    notes = models.TextField(blank=True)

    # Relations
    company = models.ForeignKey('core.Company', on_delete=models.SET_NULL, null=True, blank=True, related_name='contacts')
    owner = models.ForeignKey('accounts.TeamMember', on_delete=models.SET_NULL, null=True, blank=True, related_name='contacts', help_text="Team member responsible for this contact")
    tags = TaggableManager(through=ContactTag, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Contact"
        verbose_name_plural = "Contacts"
        ordering = ['last_name', 'first_name']
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='contacts_name_idx'),
            models.Index(fields=['city'], name='contacts_city_idx'),
        ]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self):
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()
