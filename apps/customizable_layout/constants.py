from django.db import models


class LayoutType(models.TextChoices):
    """Breakpoint variants a layout config carries one arrangement for."""

    MOBILE = "mobile", "Mobile"
    TABLET = "tablet", "Tablet"
    DESKTOP = "desktop", "Desktop"


# Order used when walking every variant of a config (mobile first).
LAYOUT_TYPES = (LayoutType.MOBILE, LayoutType.TABLET, LayoutType.DESKTOP)

DEFAULT_COLUMN_WIDTH = "1fr"

DEFAULT_BREAKPOINTS = {
    "desktop": 1024,
    "tablet": 990,
    "mobile": 420,
}

MOBILE_DRAG_DELAY = 150
