import re
import unicodedata

from django import forms
from django.utils.translation import gettext_lazy as _

from apps.accounts.models import TeamMember
from apps.contacts.models import Contact
from apps.contacts.selectors import list_contact_options
from apps.core.forms import FallbackChoiceField
from apps.core.models import Company
from .models import Opportunity, STATUS_NEW, STATUS_IN_PROGRESS, STATUS_WON, STATUS_LOST


# Friendly spellings accepted in ?status=
STATUS_ALIASES = {
    'new': STATUS_NEW,
    'open': STATUS_NEW,
    'progress': STATUS_IN_PROGRESS,
    'inprogress': STATUS_IN_PROGRESS,
    'in progress': STATUS_IN_PROGRESS,
    'in-progress': STATUS_IN_PROGRESS,
    'in_progress': STATUS_IN_PROGRESS,
    'won': STATUS_WON,
    'win': STATUS_WON,
    'lost': STATUS_LOST,
    'loss': STATUS_LOST,
}


def normalize_status(value):
    """
    Map a query-string status to a pipeline status.

    Accepts the canonical value in any case, an alias such as
    "in-progress", or a column label such as "In progress". Accents are
    ignored.

    Returns:
        str or None: NEW / IN_PROGRESS / WON / LOST, None when unrecognized
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if not value:
        return None

    normalized = unicodedata.normalize('NFKD', str(value))
    normalized = ''.join(char for char in normalized if not unicodedata.combining(char))
    normalized = normalized.strip().lower()

    if normalized in STATUS_ALIASES:
        return STATUS_ALIASES[normalized]

    for status, label in Opportunity.STATUS_CHOICES:
        if label.lower() == normalized:
            return status

    canonical = re.sub(r'[\s-]+', '_', normalized).upper()
    statuses = [status for status, _label in Opportunity.STATUS_CHOICES]
    return canonical if canonical in statuses else None


def limit_widget_choices(field, options, current=None):
    """
    Render only `options` (plus the current value) in a select while the
    field still validates against its full queryset.
    """
    options = list(options)
    if current is not None and current not in options:
        options.insert(0, current)
    field.widget.choices = [('', field.empty_label)] + [(obj.pk, str(obj)) for obj in options]


# OPPORTUNITY FORM
class OpportunityForm(forms.ModelForm):

    status = FallbackChoiceField(
        label=_('Status'),
        fallback=STATUS_NEW,
        choices=Opportunity.STATUS_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    class Meta:
        model = Opportunity
        fields = [
            'title',
            'description',
            'value',
            'status',
            'estimated_close_date',
            'company',
            'contact',
            'owner',
        ]

        widgets = {
            'title': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': _('e.g., Annual renewal'),
                'autofocus': True,
            }),
            'description': forms.Textarea(attrs={
                'class': 'form-control',
                'rows': 3,
            }),
            'value': forms.NumberInput(attrs={
                'class': 'form-control',
                'step': '0.01',
                'placeholder': '0.00',
            }),
            'estimated_close_date': forms.DateInput(attrs={
                'class': 'form-control',
                'type': 'date',
            }, format='%Y-%m-%d'),
            'company': forms.Select(attrs={'class': 'form-select'}),
            'contact': forms.Select(attrs={'class': 'form-select'}),
            'owner': forms.Select(attrs={'class': 'form-select'}),
        }

        error_messages = {
            'title': {'required': _('Title is required.')},
            'value': {'invalid': _('Enter a valid amount.')},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['value'].required = False

        self.fields['company'].queryset = Company.objects.order_by('name')
        self.fields['company'].empty_label = _('No company')

        self.fields['contact'].queryset = Contact.objects.all()
        self.fields['contact'].empty_label = _('No contact')

        self.fields['owner'].queryset = TeamMember.objects.order_by('name')
        self.fields['owner'].empty_label = _('Unassigned')

        if not self.is_bound:
            limit_widget_choices(
                self.fields['contact'],
                list_contact_options(),
                self.instance.contact if self.instance.contact_id else None,
            )

    def clean_value(self):
        # Empty keeps the current value (0 for a new opportunity)
        value = self.cleaned_data.get('value')
        if value is None:
            return self.instance.value
        return value
