from importlib import import_module

from django.apps import AppConfig

from .conf import settings
from .registry import default_layouts


class CustomizableLayoutAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.customizable_layout"
    label = "customizable_layout"
    verbose_name = "Customizable layouts"

    def ready(self):
        # Default layouts: "module" entries register on import, "module:callable"
        # entries are called with the registry.
        for entry in getattr(settings, "CUSTOMIZABLE_LAYOUT_DEFAULTS", []):
            try:
                module_path, callable_name = entry.split(":", 1)
            except ValueError:
                import_module(entry)
            else:
                module = import_module(module_path)
                registrar = getattr(module, callable_name)
                registrar(default_layouts)
