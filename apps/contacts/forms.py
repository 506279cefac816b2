from django import forms
from django.utils.translation import gettext_lazy as _
from taggit.forms import TagField, TagWidget

from apps.accounts.models import TeamMember
from apps.core.forms import FallbackChoiceField
from .models import Contact


GROUP_NONE = 'none'
GROUP_CITY = 'city'
GROUP_COMPANY = 'company'
GROUP_TAG = 'tag'

GROUP_BY_CHOICES = [
    (GROUP_NONE, _('No grouping')),
    (GROUP_CITY, _('City')),
    (GROUP_COMPANY, _('Company')),
    (GROUP_TAG, _('Tag')),
]

TAG_NAME_MAX_LENGTH = 100


class TagListWidget(TagWidget):
    """
    Reads tags from repeated `tags` values (checkboxes, chips) and falls back
    to a single comma-separated `tags_csv` value when none are sent.
    """

    def value_from_datadict(self, data, files, name):
        if hasattr(data, 'getlist'):
            values = data.getlist(name)
        else:
            value = data.get(name)
            if isinstance(value, (list, tuple)):
                values = list(value)
            else:
                values = [value] if value else []

        values = [value for value in values if value]
        if not values and data.get(f'{name}_csv'):
            values = [data.get(f'{name}_csv')]

        return ', '.join(values)


# CONTACT FORM
class ContactForm(forms.ModelForm):
    """
    Create/edit a contact.

    company_name/company_city name a company inline; the save_contact
    action finds or creates it. tags are plain names, created on demand.
    """

    company_name = forms.CharField(
        label=_('Company'),
        max_length=200,
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Acme Corp'),
            'list': 'company-options',
        })
    )

    company_city = forms.CharField(
        label=_('Company city'),
        max_length=120,
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Defaults to the contact city'),
        })
    )

    tags = TagField(
        label=_('Tags'),
        required=False,
        widget=TagListWidget(attrs={
            'class': 'form-control',
            'placeholder': _('VIP, Renewal'),
        }),
        help_text=_('Separate tags with commas.'),
    )

    class Meta:
        model = Contact
        fields = [
            'first_name',
            'last_name',
            'email',
            'phone',
            'job_title',
            'city',
            'state',
            'country',
            'notes',
            'owner',
        ]

        widgets = {
            'first_name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': _('First name'),
            }),
            'last_name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': _('Last name'),
            }),
            'email': forms.EmailInput(attrs={
                'class': 'form-control',
                'placeholder': _('name@company.com'),
            }),
            'phone': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': _('+1 555 0100'),
            }),
            'job_title': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': _('e.g., Head of Sales'),
            }),
            'city': forms.TextInput(attrs={'class': 'form-control'}),
            'state': forms.TextInput(attrs={'class': 'form-control'}),
            'country': forms.TextInput(attrs={'class': 'form-control'}),
            'notes': forms.Textarea(attrs={
                'class': 'form-control',
                'rows': 3,
            }),
            'owner': forms.Select(attrs={
                'class': 'form-select',
            }),
        }

        error_messages = {
            'first_name': {'required': _('First name is required.')},
            'last_name': {'required': _('Last name is required.')},
            'email': {'invalid': _('Enter a valid email address.')},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['owner'].queryset = TeamMember.objects.order_by('name')
        self.fields['owner'].required = False
        self.fields['owner'].empty_label = _('Unassigned')

        # Edit mode: show the current company and tags
        if self.instance.pk and not self.is_bound:
            if self.instance.company_id:
                self.initial.setdefault('company_name', self.instance.company.name)
                self.initial.setdefault('company_city', self.instance.company.city)
            self.initial.setdefault('tags', list(self.instance.tags.all()))

    def clean_tags(self):
        tags = self.cleaned_data.get('tags') or []
        for name in tags:
            if len(name) > TAG_NAME_MAX_LENGTH:
                raise forms.ValidationError(
                    _('Tags must be at most %(limit)d characters.'),
                    params={'limit': TAG_NAME_MAX_LENGTH},
                )
        return tags


# SEARCH FORM
class ContactSearchForm(forms.Form):
    """
    Query string of the contact list. An over-long query is invalid;
    an unknown group_by silently falls back to no grouping.
    """

    query = forms.CharField(
        label=_('Search'),
        max_length=200,
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Name, email, phone, company or tag'),
        })
    )

    group_by = FallbackChoiceField(
        label=_('Group by'),
        fallback=GROUP_NONE,
        choices=GROUP_BY_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
