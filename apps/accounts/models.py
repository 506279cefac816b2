# Models:
# 1. User - Custom user model (login identity)
# 2. TeamMember - Salesperson/owner of contacts, opportunities and activities
# 3. SessionLog - Append-only login audit trail


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


ROLE_ADMIN = 'admin'
ROLE_MEMBER = 'member'


# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Emails are stored lowercase so that login lookups are
    case-insensitive.
    """

    use_in_migrations = True

    @classmethod
    def normalize_email(cls, email):
        return (email or '').strip().lower()

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password (required)
            **extra_fields: Additional fields (name, role, etc.)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser (admin)
        Superusers have all permissions and can access admin panel
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', ROLE_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)

    def get_by_natural_key(self, username):
        return self.get(**{self.model.USERNAME_FIELD: self.normalize_email(username)})


# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model

    Features:
    - Email-based authentication (no username)
    - Free-text role; 'admin' sees every team member's records
    - Optional link to a TeamMember (see TeamMember.user)
    """

    email = models.EmailField(_('email address'), unique=True, max_length=255, help_text=_('Required. Used for login.'))
    name = models.CharField(_('name'), max_length=150, blank=True, help_text=_('Display name'))
    role = models.CharField(_('role'), max_length=50, default=ROLE_MEMBER, db_index=True, help_text=_('"admin" grants access to every team member\'s records'))

    is_active = models.BooleanField(_('active'), default=True, help_text=_('Designates whether this user should be treated as active. Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    # Use email as the unique identifier for authentication
    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']  # Newest first

    def __str__(self):
        if self.name:
            return f"{self.name} ({self.email})"
        return self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(' ')[0] if self.name else self.email

    def is_admin(self):
        return self.role == ROLE_ADMIN or self.is_superuser


# TEAM MEMBER
class TeamMember(models.Model):
    """
    A salesperson or operator who owns contacts, opportunities and activities.

    Team members may exist before any login (seeded data) and get linked
    to a User on first login or by the backfill_team_users command.
    """

    name = models.CharField(_('name'), max_length=150)
    email = models.EmailField(_('email'), unique=True, max_length=255)
    role = models.CharField(_('role'), max_length=50, blank=True)
    user = models.OneToOneField(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='team_member', verbose_name=_('user'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('team member')
        verbose_name_plural = _('team members')
        ordering = ['name']

    def __str__(self):
        return self.name


# SESSION LOG
class SessionLog(models.Model):
    """Login audit record. Written once per login, never updated."""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='session_logs')
    email = models.EmailField(max_length=255)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('session log')
        verbose_name_plural = _('session logs')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='accounts_sessionlog_user_idx'),
        ]

    def __str__(self):
        return f"{self.email} @ {self.created_at:%Y-%m-%d %H:%M}"
