from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

# Main URL Configuration
# Routes all requests to appropriate apps

urlpatterns = [

    path('admin/', admin.site.urls),
    path('accounts/', include('apps.accounts.urls')),
    path('contacts/', include('apps.contacts.urls')),
    path('opportunities/', include('apps.opportunities.urls')),
    path('activities/', include('apps.activities.urls')),
    # Dashboard at '/', theme settings under /settings/
    path('', include('apps.core.urls')),

]

if settings.DEBUG:
    # Static files (CSS, JS, images)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
