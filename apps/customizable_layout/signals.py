from django.dispatch import Signal

# Sent by LayoutEngine after initialization and after every state-affecting
# event. Keyword arguments: ``name``, ``layout_type``, ``layout``,
# ``template_columns`` and ``drag_delay``.
layout_changed = Signal()
