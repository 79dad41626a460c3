"""
Main URL Configuration
Routes to the GPS tracking application and Django admin
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django admin panel
    path('admin/', admin.site.urls),

    # GPS tracking routes
    # Includes: /addpoint/, /history/, /lastpos/, /live/, /sessions/, /resetpoint/, /export/
    path('', include('apps.tracking.urls')),
]
