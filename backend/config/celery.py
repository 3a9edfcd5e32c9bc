# backend/config/celery.py
import os
from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.prod')

app = Celery('storefront')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()

# Queue Configuration
app.conf.task_routes = {
    # Storage housekeeping never competes with request-driven work
    'apps.ecommerce.tasks.cleanup_design_assets': {'queue': 'maintenance'},
}
