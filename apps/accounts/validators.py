import re

from django.core.exceptions import ValidationError
from django.utils.translation import gettext as _


class PasswordComplexityValidator:
    """
    Require at least one upper case letter, one lower case letter and one digit.

    Registered in AUTH_PASSWORD_VALIDATORS next to MinimumLengthValidator.
    """

    rules = [
        (re.compile(r'[A-Z]'), 'password_no_upper', 'Password must contain at least one uppercase letter.'),
        (re.compile(r'[a-z]'), 'password_no_lower', 'Password must contain at least one lowercase letter.'),
        (re.compile(r'\d'), 'password_no_digit', 'Password must contain at least one number.'),
    ]

    def validate(self, password, user=None):
        for pattern, code, message in self.rules:
            if not pattern.search(password):
                raise ValidationError(_(message), code=code)

    def get_help_text(self):
        return _('Your password must contain upper case and lower case letters and at least one number.')
