"""Gradio studio UI for the Lumière product-photo generator.

Modules
-------
app
    Blocks layout and the ``lumiere-studio`` entry point.
handlers
    Event handlers for upload, theme selection, description and gallery.
models
    Session state (``StudioState``, ``ProductConfig``, ``GenerationStatus``).
state
    Lazy creation of the generation components.
validation
    User-facing input checks.
"""
