# ASGI (Asynchronous Server Gateway Interface) configuration
#
# Production servers:
# - Uvicorn: uvicorn config.asgi:application
# - Hypercorn
# ==============================================================================

import os
from django.core.asgi import get_asgi_application

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_asgi_application()
