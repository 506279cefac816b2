from django.contrib import admin
from django.utils.html import format_html

from .models import Opportunity, STATUS_NEW, STATUS_IN_PROGRESS, STATUS_WON, STATUS_LOST


@admin.register(Opportunity)
class OpportunityAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'title',
        'status_badge',
        'value',
        'estimated_close_date',
        'contact',
        'company',
        'owner',
        'updated_at',
    ]

    list_filter = [
        'status',
        'owner',
        'estimated_close_date',
    ]

    search_fields = [
        'title',
        'description',
        'contact__first_name',
        'contact__last_name',
        'company__name',
    ]

    ordering = ['-updated_at']
    list_per_page = 50
    date_hierarchy = 'created_at'
    autocomplete_fields = ['company', 'contact', 'owner']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Deal', {
            'fields': ('title', 'description', 'value', 'status', 'estimated_close_date')
        }),
        ('Relations', {
            'fields': ('company', 'contact', 'owner')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('company', 'contact', 'owner')

    def status_badge(self, obj):
        colors = {
            STATUS_NEW: '#0ea5e9',
            STATUS_IN_PROGRESS: '#f59e0b',
            STATUS_WON: '#10b981',
            STATUS_LOST: '#dc2626',
        }
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )

    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
