from django import forms
from django.contrib.auth import password_validation
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Fieldset, Submit, Div, Field, HTML
from crispy_forms.bootstrap import FormActions

from .models import ROLE_ADMIN


def _password_input(placeholder, autofocus=False):
    attrs = {'class': 'form-control', 'placeholder': placeholder}
    if autofocus:
        attrs['autofocus'] = True
    return forms.PasswordInput(attrs=attrs)


# LOGIN FORM
class LoginForm(forms.Form):
    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        required=True,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@company.com'),
            'autofocus': True,
        })
    )

    password = forms.CharField(
        label=_('Password'),
        required=True,
        widget=_password_input(_('Enter your password')),
    )

    remember = forms.BooleanField(
        label=_('Remember me'),
        required=False,
        initial=False,
        widget=forms.CheckboxInput(attrs={
            'class': 'form-check-input',
        })
    )

    def __init__(self, *args, **kwargs):

        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Field('email', css_class='mb-3'),
            Field('password', css_class='mb-3'),
            Field('remember', css_class='mb-3'),
            FormActions(
                Submit('submit', _('Login'), css_class='btn btn-primary btn-block w-100')
            )
        )

    def clean_email(self):

        email = self.cleaned_data.get('email', '')
        return email.lower().strip()


# REGISTER FORM
class RegisterForm(forms.Form):
    """
    Self-service sign-up. Duplicate emails are rejected by the
    register_user action, not here, so the message can name the conflict.
    """

    name = forms.CharField(
        label=_('Full name'),
        min_length=2,
        max_length=150,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Jane Doe'),
            'autofocus': True,
        }),
        error_messages={'min_length': _('Name must be at least 2 characters.')},
    )

    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@company.com'),
        })
    )

    password = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=_password_input(_('At least 8 characters')),
        help_text=password_validation.password_validators_help_text_html(),
    )

    confirm_password = forms.CharField(
        label=_('Confirm password'),
        strip=False,
        widget=_password_input(_('Repeat your password')),
    )

    role = forms.CharField(
        label=_('Role'),
        max_length=50,
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('e.g. Account Executive'),
        })
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Fieldset(
                _('Your account'),
                'name',
                'email',
                Div(
                    Div('password', css_class='col-md-6'),
                    Div('confirm_password', css_class='col-md-6'),
                    css_class='row'
                ),
                'role',
            ),
            FormActions(
                Submit('submit', _('Create account'), css_class='btn btn-primary w-100'),
                HTML('<a href="{% url \'accounts:login\' %}" class="btn btn-link">Already have an account?</a>'),
            )
        )

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()

    def clean_role(self):
        role = self.cleaned_data.get('role', '').strip()
        if role.lower() == ROLE_ADMIN:
            raise ValidationError(_('The admin role can only be granted by an administrator.'))
        return role

    def clean_password(self):
        password = self.cleaned_data.get('password')
        password_validation.validate_password(password)
        return password

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm_password = cleaned_data.get('confirm_password')

        if password and confirm_password and password != confirm_password:
            self.add_error('confirm_password', _('Passwords do not match.'))

        return cleaned_data


# PROFILE FORM
class ProfileUpdateForm(forms.Form):

    name = forms.CharField(
        label=_('Full name'),
        min_length=2,
        max_length=150,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={'min_length': _('Name must be at least 2 characters.')},
    )

    role = forms.CharField(
        label=_('Role'),
        max_length=50,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Div(
                Div('name', css_class='col-md-6'),
                Div('role', css_class='col-md-6'),
                css_class='row'
            ),
            Submit('submit', _('Save profile'), css_class='btn btn-primary'),
        )

    def clean_role(self):
        role = self.cleaned_data.get('role', '').strip()
        is_admin = self.user is not None and self.user.is_admin()
        if role.lower() == ROLE_ADMIN and not is_admin:
            raise ValidationError(_('The admin role can only be granted by an administrator.'))
        return role


# CHANGE PASSWORD FORM
class ChangePasswordForm(forms.Form):
    """
    Shape checks only. Whether current_password is correct, and whether the
    new password differs from it, is decided by the change_password action.
    """

    current_password = forms.CharField(
        label=_('Current password'),
        strip=False,
        widget=_password_input(_('Current password'), autofocus=True),
    )

    new_password = forms.CharField(
        label=_('New password'),
        strip=False,
        widget=_password_input(_('New password')),
        help_text=password_validation.password_validators_help_text_html(),
    )

    confirm_password = forms.CharField(
        label=_('Confirm new password'),
        strip=False,
        widget=_password_input(_('Repeat the new password')),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            'current_password',
            Div(
                Div('new_password', css_class='col-md-6'),
                Div('confirm_password', css_class='col-md-6'),
                css_class='row'
            ),
            Submit('submit', _('Update password'), css_class='btn btn-primary'),
        )

    def clean_new_password(self):
        password = self.cleaned_data.get('new_password')
        password_validation.validate_password(password)
        return password

    def clean(self):
        cleaned_data = super().clean()
        new_password = cleaned_data.get('new_password')
        confirm_password = cleaned_data.get('confirm_password')

        if new_password and confirm_password and new_password != confirm_password:
            self.add_error('confirm_password', _('Passwords do not match.'))

        return cleaned_data
