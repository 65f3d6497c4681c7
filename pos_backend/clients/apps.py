# clients/apps.py

"""
CLIENTS APP CONFIG

Client directory:
- Buyers looked up by name at sale/return time
- Created on first sale, phone kept current
"""

from django.apps import AppConfig


class ClientsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "clients"
    verbose_name = "Clients"
