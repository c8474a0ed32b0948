"""Database storage for user-customized layouts."""

from django.conf import settings
from django.db import models


class StoredLayout(models.Model):
    """JSON text of one user's working layout config.

    ``payload`` is kept as text rather than a JSON column so the stored value
    is exactly what the engine serialized; anything unreadable is treated as
    "no stored layout" when loading.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="stored_layouts",
    )
    name = models.CharField(
        max_length=255,
        help_text="Layout name; the default config registered under it is the baseline.",
    )
    payload = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=("owner", "name"),
                name="unique_stored_layout_owner_name",
            ),
        ]
        ordering = ("owner", "name")

    def __str__(self) -> str:
        return f"{self.name} ({self.owner})"
