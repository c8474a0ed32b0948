from apps.customizable_layout.registry import default_layouts

default_layouts.register(
    {
        "name": "sample-module-layout",
        "version": 1,
        "mobile": {"lists": [{"containerName": "main", "items": [{"componentName": "notes"}]}]},
    }
)


def register(registry):
    registry.register(
        {
            "name": "sample-callable-layout",
            "version": 3,
            "mobile": {"lists": [{"containerName": "main", "items": [{"componentName": "alerts"}]}]},
        }
    )
