"""Default layouts shipped with the site.

Bump ``version`` whenever components are added so existing users pick them
up on their next visit.
"""

DASHBOARD = {
    "name": "dashboard",
    "version": 1,
    "mobile": {
        "lists": [
            {
                "containerName": "main",
                "width": "1fr",
                "items": [
                    {"componentName": "kpi-summary"},
                    {"componentName": "open-orders", "title": "Open orders"},
                    {"componentName": "activity-feed"},
                ],
            },
        ],
    },
    "tablet": {
        "lists": [
            {
                "containerName": "left",
                "width": "2fr",
                "items": [
                    {"componentName": "kpi-summary"},
                    {"componentName": "open-orders", "title": "Open orders"},
                ],
            },
            {
                "containerName": "right",
                "width": "1fr",
                "items": [{"componentName": "activity-feed"}],
            },
        ],
    },
    "desktop": {
        "lists": [
            {"containerName": "left", "width": "1fr", "items": [{"componentName": "kpi-summary"}]},
            {
                "containerName": "center",
                "width": "2fr",
                "items": [{"componentName": "open-orders", "title": "Open orders"}],
            },
            {"containerName": "right", "width": "1fr", "items": [{"componentName": "activity-feed"}]},
        ],
    },
}


def register(registry):
    registry.register(DASHBOARD)
