from django.contrib import admin
from django.utils.html import format_html

from .models import Activity, STATUS_PLANNED, STATUS_COMPLETED, STATUS_CANCELLED


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'subject',
        'activity_type',
        'status_badge',
        'contact',
        'opportunity',
        'team_member',
        'due_date',
        'created_at',
    ]

    list_filter = [
        'activity_type',
        'status',
        'team_member',
        'created_at',
    ]

    search_fields = [
        'subject',
        'notes',
        'contact__first_name',
        'contact__last_name',
        'opportunity__title',
    ]

    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'
    autocomplete_fields = ['contact', 'opportunity', 'team_member']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Activity', {
            'fields': ('activity_type', 'status', 'subject', 'notes')
        }),
        ('Dates', {
            'fields': ('scheduled_for', 'due_date', 'completed_at')
        }),
        ('Relations', {
            'fields': ('contact', 'opportunity', 'team_member'),
            'description': 'Link at least a contact or an opportunity.'
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('contact', 'opportunity', 'team_member')

    def status_badge(self, obj):
        colors = {
            STATUS_PLANNED: '#0ea5e9',
            STATUS_COMPLETED: '#10b981',
            STATUS_CANCELLED: '#6c757d',
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">● {}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )

    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
