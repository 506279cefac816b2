from django.db import models
from django.urls import reverse


TYPE_CALL = 'CALL'
TYPE_EMAIL = 'EMAIL'
TYPE_MEETING = 'MEETING'
TYPE_TASK = 'TASK'

STATUS_PLANNED = 'PLANNED'
STATUS_COMPLETED = 'COMPLETED'
STATUS_CANCELLED = 'CANCELLED'


class Activity(models.Model):
    """
    A call, email, meeting or task logged against a contact and/or an
    opportunity. The "at least one of them" rule lives in ActivityForm,
    not in the schema.
    """

    TYPE_CHOICES = [
        (TYPE_CALL, 'Call'),
        (TYPE_EMAIL, 'Email'),
        (TYPE_MEETING, 'Meeting'),
        (TYPE_TASK, 'Task'),
    ]

    STATUS_CHOICES = [
        (STATUS_PLANNED, 'Planned'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    activity_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_CALL, db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PLANNED)
    subject = models.CharField(max_length=200)
    notes = models.TextField(blank=True)

    # Dates (each one selectable as the list's date filter)
    scheduled_for = models.DateTimeField(null=True, blank=True, db_index=True)
    due_date = models.DateTimeField(null=True, blank=True, db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    # Relations
    contact = models.ForeignKey('contacts.Contact', on_delete=models.SET_NULL, null=True, blank=True, related_name='activities')
    opportunity = models.ForeignKey('opportunities.Opportunity', on_delete=models.SET_NULL, null=True, blank=True, related_name='activities')
    team_member = models.ForeignKey('accounts.TeamMember', on_delete=models.SET_NULL, null=True, blank=True, related_name='activities', help_text='Team member who owns this activity')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Activity'
        verbose_name_plural = 'Activities'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['team_member', '-created_at'], name='activities_member_idx'),
        ]

    def __str__(self):
        return f"{self.get_activity_type_display()}: {self.subject}"

    def get_absolute_url(self):
        return reverse('activities:activity_detail', kwargs={'pk': self.pk})
