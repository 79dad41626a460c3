"""
Django Admin Configuration for GPS Tracking
"""
from django.contrib import admin
from .models import Point


@admin.register(Point)
class PointAdmin(admin.ModelAdmin):
    """
    Read-only browsing of stored points
    """
    list_display = ['id', 'user', 'session', 'lat', 'lon', 'alt', 'speed', 'time']
    list_filter = ['user']
    search_fields = ['user', 'session']
    ordering = ['-id']

    fieldsets = (
        ('Scope', {
            'fields': ('user', 'session')
        }),
        ('Location', {
            'fields': ('lat', 'lon', 'alt', 'hdop')
        }),
        ('Movement', {
            'fields': ('speed', 'bearing', 'time')
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
