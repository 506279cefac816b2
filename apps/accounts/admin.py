from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserCreationForm, UserChangeForm
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html
from .models import User, TeamMember, SessionLog, ROLE_ADMIN


class UserAdminCreationForm(UserCreationForm):
    class Meta(UserCreationForm.Meta):
        model = User
        fields = ('email', 'name', 'role')


class UserAdminChangeForm(UserChangeForm):
    class Meta(UserChangeForm.Meta):
        model = User
        fields = '__all__'


# TEAM MEMBER INLINE (linked team member inside user form)
class TeamMemberInline(admin.StackedInline):

    model = TeamMember
    can_delete = False
    fk_name = 'user'
    extra = 0
    max_num = 1
    fields = ('name', 'email', 'role')


# CUSTOM USER ADMIN
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserAdminChangeForm
    add_form = UserAdminCreationForm

    list_display = (
        'email',
        'name',
        'role_badge',
        'is_active_badge',
        'date_joined',
    )

    list_display_links = ('email', 'name')

    list_filter = (
        'role',
        'is_active',
        'is_staff',
        'is_superuser',
        'date_joined',
    )
    search_fields = ('email', 'name')

    ordering = ('-date_joined',)
    list_per_page = 25

    fieldsets = (
        (_('Login Credentials'), {
            'fields': ('email', 'password'),
            'classes': ('wide',),
            'description': _('Email is used for login. Password is stored hashed.')
        }),
        (_('Profile'), {
            'fields': ('name', 'role'),
            'classes': ('wide',),
            'description': _('Role "admin" sees every team member\'s records')
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Activity Tracking'), {
            'fields': ('date_joined', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    # Fields shown when creating NEW user
    add_fieldsets = (
        (_('Login Credentials'), {
            'fields': ('email', 'password1', 'password2'),
            'classes': ('wide',),
        }),
        (_('Profile'), {
            'fields': ('name', 'role'),
            'classes': ('wide',),
        }),
    )

    readonly_fields = ('date_joined', 'last_login')

    inlines = [TeamMemberInline]

    def role_badge(self, obj):
        color = '#28a745' if obj.role == ROLE_ADMIN else '#007bff'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            color, obj.role
        )

    role_badge.short_description = _('Role')
    role_badge.admin_order_field = 'role'

    def is_active_badge(self, obj):
        if obj.is_active:
            return format_html(
                '<span style="background: #28a745; color: white; padding: 3px 10px; '
                'border-radius: 3px; font-size: 11px;">✓ Active</span>'
            )
        return format_html(
            '<span style="background: #dc3545; color: white; padding: 3px 10px; '
            'border-radius: 3px; font-size: 11px;">✗ Inactive</span>'
        )

    is_active_badge.short_description = _('Status')
    is_active_badge.admin_order_field = 'is_active'

    def has_delete_permission(self, request, obj=None):
        if obj and obj == request.user:
            return False  # Cannot delete yourself

        return super().has_delete_permission(request, obj)


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'role', 'user', 'created_at')
    list_filter = ('role',)
    search_fields = ('name', 'email', 'user__email')
    list_select_related = ('user',)
    raw_id_fields = ('user',)


@admin.register(SessionLog)
class SessionLogAdmin(admin.ModelAdmin):
    """Read-only: the audit trail is append-only."""

    list_display = ('email', 'ip_address', 'user_agent', 'created_at')
    search_fields = ('email', 'ip_address')
    list_filter = ('created_at',)
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ADMIN SITE CUSTOMIZATION
admin.site.site_header = _('Pipeline CRM Administration')
admin.site.site_title = _('Pipeline CRM')
admin.site.index_title = _('Welcome to the Pipeline CRM Admin Panel')
