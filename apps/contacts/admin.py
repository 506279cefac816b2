from django.contrib import admin
from django.utils.html import format_html, format_html_join

from .models import Contact, ContactTag


class ContactTagInline(admin.TabularInline):

    model = ContactTag
    extra = 0
    autocomplete_fields = ['tag']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('tag')


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'full_name',
        'email',
        'phone',
        'company',
        'city',
        'owner',
        'tag_badges',
        'updated_at',
    ]

    list_filter = [
        'owner',
        'country',
        'created_at',
    ]

    search_fields = [
        'first_name',
        'last_name',
        'email',
        'phone',
        'company__name',
    ]

    ordering = ['last_name', 'first_name']
    list_per_page = 50
    date_hierarchy = 'created_at'
    autocomplete_fields = ['company', 'owner']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ContactTagInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('first_name', 'last_name', 'email', 'phone', 'job_title')
        }),
        ('Location', {
            'fields': ('city', 'state', 'country')
        }),
        ('Relations', {
            'fields': ('company', 'owner')
        }),
        ('Notes', {
            'fields': ('notes',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('company', 'owner').prefetch_related('tags')

    def tag_badges(self, obj):
        return format_html_join(
            ' ',
            '<span style="background-color: {}; color: white; padding: 2px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            ((tag.color, tag.name) for tag in obj.tags.all())
        ) or '-'

    tag_badges.short_description = 'Tags'

    def full_name(self, obj):
        return format_html('<strong>{}</strong>', obj.full_name)

    full_name.short_description = 'Name'
    full_name.admin_order_field = 'last_name'
