from django import forms
from django.utils.translation import gettext_lazy as _
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Submit, Div

from .theme import THEME_PALETTES, DEFAULT_THEME_ID, sanitize_hex


class FallbackChoiceField(forms.ChoiceField):
    """
    Choice field that never fails: a missing or unknown value becomes `fallback`.

    Used for enum inputs (statuses, types, filter selectors) where a stale
    link or a hand-edited query string should still render a page.
    """

    def __init__(self, *, fallback, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)
        self.fallback = fallback
        self.initial = self.initial or fallback

    def clean(self, value):
        value = self.to_python(value).strip()
        if not value or not self.valid_value(value):
            return self.fallback
        return value


def first_errors(form):
    """
    Collapse a bound form's errors to {field: first message}.

    Non-field errors are reported under '__all__'.
    """
    return {field: str(errors[0]) for field, errors in form.errors.items() if errors}


# THEME FORM
class ThemeForm(forms.Form):

    palette = FallbackChoiceField(
        label=_('Palette'),
        fallback=DEFAULT_THEME_ID,
        choices=[(palette.id, palette.name) for palette in THEME_PALETTES],
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    accent = forms.CharField(
        label=_('Accent colour'),
        required=False,
        max_length=7,
        widget=forms.TextInput(attrs={
            'class': 'form-control form-control-color',
            'type': 'color',
        }),
        help_text=_('Leave empty to use the palette accent.'),
    )

    reset_accent = forms.BooleanField(
        label=_('Reset accent'),
        required=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'}),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Div(
                Div('palette', css_class='col-md-6'),
                Div('accent', css_class='col-md-3'),
                Div('reset_accent', css_class='col-md-3'),
                css_class='row'
            ),
            Submit('submit', _('Apply theme'), css_class='btn btn-primary'),
        )

    def clean_accent(self):
        accent = self.cleaned_data.get('accent', '')
        if accent and not sanitize_hex(accent):
            raise forms.ValidationError(_('Enter a hex colour such as #0ea5e9.'))
        return sanitize_hex(accent)

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('reset_accent'):
            cleaned_data['accent'] = ''
        return cleaned_data


def apply_field_errors(form, state):
    """Attach an action state's business-rule field errors to a valid bound form."""
    for field, error in state.get('field_errors', {}).items():
        form.add_error(field if field in form.fields else None, error)
