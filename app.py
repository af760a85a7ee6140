import logging

import gradio as gr

from json_table_viewer.html_renderer import PLACEHOLDER_HTML
from json_table_viewer.handlers import (
    clear_input,
    collapse_all_handler,
    copy_record_handler,
    expand_all_handler,
    export_table_handler,
    handle_file_upload,
    load_json_text,
)

# --- UI Definition ---
with gr.Blocks(title="JSON Table Viewer") as demo:
    gr.Markdown("# JSON Table Viewer")
    gr.Markdown("Paste JSON or upload a file to view it as nested tables and export record arrays to CSV.")

    # State
    json_data_state = gr.State()
    collapsed_state = gr.State(value=[])

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### Input")
            json_input = gr.Textbox(label="JSON", placeholder="Paste JSON here...", lines=20, max_lines=40)
            with gr.Row():
                file_input = gr.File(label="Upload JSON", file_types=[".json"])
                clear_btn = gr.Button("Clear")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### Export")
            table_selector = gr.Dropdown(label="Table", choices=[], interactive=True)
            export_btn = gr.Button("Export CSV", variant="primary")
            download_output = gr.File(label="Download CSV")

            gr.Markdown("### Copy record")
            record_selector = gr.Dropdown(label="Record", choices=[], interactive=True)
            record_json = gr.Code(label="Record JSON", language="json", interactive=False)

        # Right Panel: Table view
        with gr.Column(scale=2):
            gr.Markdown("### Table")
            with gr.Row():
                collapse_btn = gr.Button("Collapse all")
                expand_btn = gr.Button("Expand all")
            table_view = gr.HTML(value=PLACEHOLDER_HTML)

    json_input.change(
        fn=load_json_text,
        inputs=[json_input],
        outputs=[json_data_state, collapsed_state, status_msg, table_view, table_selector, record_selector],
    )

    file_input.upload(
        fn=handle_file_upload,
        inputs=[file_input],
        outputs=[json_input, status_msg],
    )

    clear_btn.click(fn=clear_input, outputs=[json_input, status_msg])

    export_btn.click(
        fn=export_table_handler,
        inputs=[json_data_state, table_selector, collapsed_state],
        outputs=[download_output, status_msg],
    )

    record_selector.change(
        fn=copy_record_handler,
        inputs=[json_data_state, record_selector],
        outputs=[record_json],
    )

    collapse_btn.click(fn=collapse_all_handler, inputs=[json_data_state], outputs=[collapsed_state, table_view])
    expand_btn.click(fn=expand_all_handler, inputs=[json_data_state], outputs=[collapsed_state, table_view])

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    demo.launch()
