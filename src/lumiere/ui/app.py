"""Gradio studio for the Lumière product-photo generator."""

import asyncio
import logging

import gradio as gr

from lumiere.core.config import config
from lumiere.core.themes import DEFAULT_THEME_ID, THEME_PRESETS, get_theme

from .handlers import (
    auto_describe,
    begin_generation,
    download_active,
    generate_gallery,
    select_theme,
    select_thumbnail,
    set_description,
    set_elements,
    set_product_name,
    upload_image,
)
from .models import StudioState
from .state import close_shared_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the studio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="Lumière Product Studio")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(StudioState())

        gr.Markdown(
            """
            # Lumière Product Studio
            ### Upload a product, pick a theme, generate a five-shot campaign gallery
            """
        )

        with gr.Row():
            with gr.Column(scale=4):
                gr.Markdown("### 1. Upload Asset")
                image_input = gr.Image(label="Product image", type="pil", height=280)

                gr.Markdown("### 2. Configuration")
                product_name = gr.Textbox(
                    label="Product Name",
                    placeholder="e.g. Eau de Rose, Serum Nuit...",
                )
                default_theme = get_theme(DEFAULT_THEME_ID)
                theme_radio = gr.Radio(
                    label="Theme",
                    choices=[(theme.name, theme.id) for theme in THEME_PRESETS],
                    value=DEFAULT_THEME_ID,
                )
                theme_hint = gr.Markdown(f"**{default_theme.name}** · {default_theme.description}")

                with gr.Row():
                    description = gr.Textbox(
                        label="Scene Description",
                        placeholder=(
                            "Describe the mood, lighting, background, and environment in detail..."
                        ),
                        lines=5,
                        scale=4,
                    )
                    auto_button = gr.Button("✨ Auto-Write with AI", scale=1)

                elements = gr.Textbox(
                    label="Extra Elements",
                    placeholder="e.g. rose petals, water droplets...",
                )
                generate_button = gr.Button("Generate Gallery (5 Variations)", variant="primary")
                status = gr.Markdown("")

            with gr.Column(scale=8):
                active_image = gr.Image(label="Preview", type="pil", interactive=False, height=520)
                gallery = gr.Gallery(
                    label="Variations",
                    columns=5,
                    rows=1,
                    height=160,
                    object_fit="cover",
                    allow_preview=False,
                )
                with gr.Row():
                    download_button = gr.Button("Download")
                    download_file = gr.File(label="Download", interactive=False)

        # Event wiring
        image_input.change(upload_image, inputs=[image_input, ui_state], outputs=[ui_state])
        product_name.change(set_product_name, inputs=[product_name, ui_state], outputs=[ui_state])
        description.change(set_description, inputs=[description, ui_state], outputs=[ui_state])
        elements.change(set_elements, inputs=[elements, ui_state], outputs=[ui_state])
        theme_radio.change(
            select_theme, inputs=[theme_radio, ui_state], outputs=[theme_hint, ui_state]
        )

        auto_button.click(
            auto_describe,
            inputs=[ui_state],
            outputs=[description, status, ui_state],
        )
        generate_button.click(
            begin_generation,
            inputs=[ui_state],
            outputs=[status, ui_state],
        ).then(
            generate_gallery,
            inputs=[ui_state],
            outputs=[gallery, active_image, status, ui_state],
        )
        gallery.select(select_thumbnail, inputs=[ui_state], outputs=[active_image, ui_state])
        download_button.click(download_active, inputs=[ui_state], outputs=[download_file])

    return app


def main() -> None:
    """Launch the Gradio studio using host/port from configuration."""
    logger.info("Starting Lumière Product Studio")
    app = create_ui()
    try:
        app.queue().launch(
            server_name=config.gradio_server_name,
            server_port=config.gradio_server_port,
            share=config.gradio_share,
        )
    finally:
        asyncio.run(close_shared_client())


if __name__ == "__main__":
    main()
