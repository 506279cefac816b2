from django import forms
from django.utils.translation import gettext_lazy as _

from apps.accounts.models import TeamMember
from apps.contacts.models import Contact
from apps.contacts.selectors import list_contact_options
from apps.core.forms import FallbackChoiceField
from apps.opportunities.forms import limit_widget_choices
from apps.opportunities.models import Opportunity
from apps.opportunities.selectors import list_opportunity_options
from .models import Activity, TYPE_CALL, STATUS_PLANNED


MISSING_ASSOCIATION = 'missing_association'

TYPE_ALL = 'ALL'

DATE_CREATED = 'created'
DATE_SCHEDULED = 'scheduled'
DATE_DUE = 'due'
DATE_RESOLVED = 'resolved'

DATE_FIELD_CHOICES = [
    (DATE_CREATED, _('Created')),
    (DATE_SCHEDULED, _('Scheduled')),
    (DATE_DUE, _('Due')),
    (DATE_RESOLVED, _('Resolved')),
]

# Filter dimension -> model field
DATE_FIELD_COLUMNS = {
    DATE_CREATED: 'created_at',
    DATE_SCHEDULED: 'scheduled_for',
    DATE_DUE: 'due_date',
    DATE_RESOLVED: 'completed_at',
}

DATETIME_LOCAL_FORMAT = '%Y-%m-%dT%H:%M'


def datetime_local_input():
    return forms.DateTimeInput(
        attrs={'class': 'form-control', 'type': 'datetime-local'},
        format=DATETIME_LOCAL_FORMAT,
    )


# ACTIVITY FORM
class ActivityForm(forms.ModelForm):
    """
    Create/edit an activity. It must point at a contact, an opportunity,
    or both; the error is reported on `contact`.
    """

    activity_type = FallbackChoiceField(
        label=_('Type'),
        fallback=TYPE_CALL,
        choices=Activity.TYPE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    status = FallbackChoiceField(
        label=_('Status'),
        fallback=STATUS_PLANNED,
        choices=Activity.STATUS_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    class Meta:
        model = Activity
        fields = [
            'activity_type',
            'status',
            'subject',
            'notes',
            'scheduled_for',
            'due_date',
            'completed_at',
            'contact',
            'opportunity',
            'team_member',
        ]

        widgets = {
            'subject': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': _('e.g., Follow-up call'),
            }),
            'notes': forms.Textarea(attrs={
                'class': 'form-control',
                'rows': 3,
            }),
            'scheduled_for': datetime_local_input(),
            'due_date': datetime_local_input(),
            'completed_at': datetime_local_input(),
            'contact': forms.Select(attrs={'class': 'form-select'}),
            'opportunity': forms.Select(attrs={'class': 'form-select'}),
            'team_member': forms.Select(attrs={'class': 'form-select'}),
        }

        error_messages = {
            'subject': {'required': _('Subject is required.')},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['contact'].queryset = Contact.objects.all()
        self.fields['contact'].empty_label = _('No contact')

        self.fields['opportunity'].queryset = Opportunity.objects.all()
        self.fields['opportunity'].empty_label = _('No opportunity')

        self.fields['team_member'].queryset = TeamMember.objects.order_by('name')
        self.fields['team_member'].empty_label = _('Unassigned')

        if not self.is_bound:
            limit_widget_choices(
                self.fields['contact'],
                list_contact_options(),
                self.instance.contact if self.instance.contact_id else None,
            )
            limit_widget_choices(
                self.fields['opportunity'],
                list_opportunity_options(),
                self.instance.opportunity if self.instance.opportunity_id else None,
            )

    def clean(self):
        cleaned_data = super().clean()

        if 'contact' in cleaned_data and 'opportunity' in cleaned_data:
            if not cleaned_data['contact'] and not cleaned_data['opportunity']:
                self.add_error('contact', forms.ValidationError(
                    _('Select a record.'),
                    code=MISSING_ASSOCIATION,
                ))

        return cleaned_data


# FILTER FORM
class ActivityFilterForm(forms.Form):
    """
    Query string of the activity list. Unknown type/date_field values fall
    back to their defaults; a malformed date is an error.
    """

    type = FallbackChoiceField(
        label=_('Type'),
        fallback=TYPE_ALL,
        choices=[(TYPE_ALL, _('All types'))] + Activity.TYPE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    date_field = FallbackChoiceField(
        label=_('Date'),
        fallback=DATE_CREATED,
        choices=DATE_FIELD_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    date_from = forms.DateField(
        label=_('From'),
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )

    date_to = forms.DateField(
        label=_('To'),
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )
