import gradio as gr

from workflow_extractor.config import ExtractorConfig, configure_logging
from workflow_extractor.conditions import condition_columns
from workflow_extractor.glossary import GLOSSARY_FIELDS
from workflow_extractor.handlers import OUTPUT_FORMATS, export_workflow_handler, load_workflow_handler
from workflow_extractor.modules import MODULE_FIELDS

config = ExtractorConfig.from_env()
configure_logging(config.log_level)

# --- UI Definition ---
with gr.Blocks(title="Workflow Extractor") as demo:
    gr.Markdown("# Workflow Extractor")
    gr.Markdown("Upload a workflow JSON file to extract its modules, conditions, and SDK response keys.")

    # State
    extraction_state = gr.State()
    workflow_name_state = gr.State(value="workflow")

    with gr.Row():
        # Left Panel: Input & Summary
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload Workflow JSON", file_types=[".json"])
            status_msg = gr.Textbox(label="Status", interactive=False)
            stats_view = gr.JSON(label="Summary")

        # Right Panel: Export
        with gr.Column(scale=1):
            gr.Markdown("### 2. Export")
            output_format = gr.Radio(choices=OUTPUT_FORMATS, value=OUTPUT_FORMATS[0], label="Output Format")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="workflow_extracted")
            export_btn = gr.Button("Extract and Download", variant="primary")
            download_output = gr.File(label="Download Result")

    gr.Markdown("### 3. Preview")
    with gr.Tab("Modules"):
        modules_table = gr.Dataframe(headers=MODULE_FIELDS, interactive=False, label="Modules")
    with gr.Tab("Conditions"):
        conditions_table = gr.Dataframe(headers=condition_columns([]), interactive=False, label="Conditions")
    with gr.Tab("SDK Response Keys"):
        sdk_table = gr.Dataframe(headers=GLOSSARY_FIELDS, interactive=False, label="SDK Response Keys")

    file_input.upload(
        fn=lambda file_obj: load_workflow_handler(file_obj, config),
        inputs=[file_input],
        outputs=[
            extraction_state,
            workflow_name_state,
            status_msg,
            stats_view,
            modules_table,
            conditions_table,
            sdk_table,
        ],
    )

    export_btn.click(
        fn=export_workflow_handler,
        inputs=[extraction_state, workflow_name_state, output_format, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
