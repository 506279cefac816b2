from django.contrib import admin
from django.db.models import Count
from django.utils.html import format_html
from .models import Company, Tag


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'location',
        'industry',
        'contacts_count',
        'created_at'
    ]
    list_filter = ['country', 'industry', 'created_at']
    search_fields = ['name', 'city', 'country']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'industry', 'website', 'description')
        }),
        ('Location', {
            'fields': ('city', 'country'),
            'description': 'Name, city and country identify a company; contacts reuse a matching row.'
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(contacts_total=Count('contacts'))

    def location(self, obj):
        parts = [part for part in (obj.city, obj.country) if part]
        return ', '.join(parts) or '-'

    location.short_description = 'Location'

    def contacts_count(self, obj):
        return format_html(
            '<span style="color: #0ea5e9; font-weight: bold;">{} contacts</span>',
            obj.contacts_total
        )

    contacts_count.short_description = 'Contacts'
    contacts_count.admin_order_field = 'contacts_total'


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):

    list_display = [
        'name_with_color',
        'slug',
        'color_preview',
        'created_at'
    ]
    search_fields = ['name']
    ordering = ['name']
    readonly_fields = ['slug', 'created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug')
        }),
        ('Visual Settings', {
            'fields': ('color',),
            'description': 'Color: Hex code (e.g. #0ea5e9)'
        }),
    )

    def name_with_color(self, obj):
        return format_html(
            '<strong style="color: {};">{}</strong>',
            obj.color,
            obj.name
        )

    name_with_color.short_description = 'Tag'

    def color_preview(self, obj):
        return format_html(
            '<div style="width: 40px; height: 20px; background-color: {}; '
            'border-radius: 3px; border: 1px solid #ddd;"></div>',
            obj.color
        )

    color_preview.short_description = 'Color'
