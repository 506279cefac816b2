from decimal import Decimal

from django.db import models
from django.urls import reverse


STATUS_NEW = 'NEW'
STATUS_IN_PROGRESS = 'IN_PROGRESS'
STATUS_WON = 'WON'
STATUS_LOST = 'LOST'


class Opportunity(models.Model):

    # Status choices (pipeline columns, in board order)
    STATUS_CHOICES = [
        (STATUS_NEW, 'New'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_WON, 'Won'),
        (STATUS_LOST, 'Lost'),
    ]

    # Basic Information
    title = models.CharField(max_length=200, help_text='Short name of the deal')
    description = models.TextField(blank=True)
    value = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'), help_text='Expected deal value')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_NEW, db_index=True)
    estimated_close_date = models.DateField(null=True, blank=True)

    # Relations
    company = models.ForeignKey('core.Company', on_delete=models.SET_NULL, null=True, blank=True, related_name='opportunities')
    contact = models.ForeignKey('contacts.Contact', on_delete=models.SET_NULL, null=True, blank=True, related_name='opportunities')
    owner = models.ForeignKey('accounts.TeamMember', on_delete=models.SET_NULL, null=True, blank=True, related_name='opportunities', help_text='Team member responsible for this deal')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        verbose_name = 'Opportunity'
        verbose_name_plural = 'Opportunities'
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['status', '-updated_at'], name='opportunities_status_idx'),
            models.Index(fields=['owner', 'status'], name='opportunities_owner_idx'),
        ]

    def __str__(self):
        return f"{self.title} - {self.get_status_display()}"

    def get_absolute_url(self):
        return reverse('opportunities:opportunity_detail', kwargs={'pk': self.pk})

    def is_closed(self):
        return self.status in (STATUS_WON, STATUS_LOST)
