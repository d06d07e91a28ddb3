import logging
from functools import partial

import gradio as gr

from renovate_schema_visualizer.config import get_settings
from renovate_schema_visualizer.filtering import CONFIG_TABLE_HEADERS
from renovate_schema_visualizer.handlers import (
    ASCENDING,
    EXAMPLES,
    clear_reference_schema,
    fetch_reference_schema_handler,
    fetch_schema_example_handler,
    handle_document_upload,
    handle_input_change,
    handle_reference_schema_upload,
    load_example_handler,
    render_config_view,
    render_schema_summary,
    render_schema_view,
    sort_button_label,
    toggle_sort_direction,
)
from renovate_schema_visualizer.schema_utils import (
    SCHEMA_TABLE_HEADERS,
    SORT_FIELDS,
    build_schema_tree,
    format_schema_value,
    is_json_schema,
)

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
render_config = partial(render_config_view, max_depth=settings.max_depth)

# --- UI Definition ---
with gr.Blocks(title="JSON/JSON5 Schema Visualizer") as demo:
    gr.Markdown("# JSON/JSON5 Schema Visualizer")
    gr.Markdown("Paste a JSON or JSON5 document on the left and see the visualization on the right.")

    # State
    document_state = gr.State()
    reference_schema_state = gr.State()
    sort_direction_state = gr.State(value=ASCENDING)

    with gr.Row():
        example_buttons = {label: gr.Button(f"Load {label}", variant="secondary") for label in EXAMPLES}
        fetch_schema_btn = gr.Button("Load Renovate Schema Example", variant="secondary")
        mode_selector = gr.Radio(choices=["JSON", "JSON5"], value=settings.default_mode, label="Mode")

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### Input")
            json_input = gr.Code(label="JSON / JSON5", language="json", lines=30, interactive=True)
            file_input = gr.File(label="Open File", file_types=[".json", ".json5"])
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### Reference Schema")
            gr.Markdown("Descriptions in the config view come from this schema.")
            reference_file = gr.File(label="Upload Schema", file_types=[".json", ".json5"])
            with gr.Row():
                fetch_reference_btn = gr.Button("Fetch Renovate Schema")
                clear_reference_btn = gr.Button("Clear")
            reference_status = gr.Textbox(label="Reference Status", value="No reference schema loaded.", interactive=False)

        # Right Panel: Visualization
        with gr.Column(scale=1):
            gr.Markdown("### Visualization")
            view_msg = gr.Markdown("Paste a JSON or JSON5 document to see the visualization.")

            with gr.Column(visible=False) as config_view:
                with gr.Row():
                    config_search = gr.Textbox(label="Search properties...", scale=4)
                    config_sort_btn = gr.Button(sort_button_label(ASCENDING), scale=1)
                config_count = gr.Markdown()
                config_table = gr.Dataframe(
                    headers=CONFIG_TABLE_HEADERS,
                    datatype=["str"] * len(CONFIG_TABLE_HEADERS),
                    interactive=False,
                    wrap=True,
                    label="Config View",
                )

            with gr.Column(visible=False) as schema_view:
                with gr.Tab("Table View"):
                    with gr.Row():
                        schema_search = gr.Textbox(label="Search properties...", scale=3)
                        schema_sort_field = gr.Dropdown(choices=list(SORT_FIELDS), value="name", label="Sort by", scale=1)
                        schema_sort_direction = gr.Radio(choices=["asc", "desc"], value=ASCENDING, label="Direction", scale=1)
                    schema_count = gr.Markdown()
                    schema_table = gr.Dataframe(
                        headers=SCHEMA_TABLE_HEADERS,
                        datatype=["str", "str", "str", "str", "str", "bool", "bool"],
                        interactive=False,
                        wrap=True,
                        label="Schema Properties",
                    )
                    schema_link = gr.Markdown()

                with gr.Tab("Tree View"):
                    @gr.render(inputs=[document_state], triggers=[document_state.change])
                    def render_schema_tree(document):
                        if not is_json_schema(document):
                            gr.Markdown("No schema loaded.")
                            return

                        def node_heading(node):
                            heading = node["label"] or "(root)"
                            if node["type"]:
                                heading += f"  ·  {node['type']}"
                            return heading

                        def recursive_ui(node, depth=0):
                            if node["kind"] == "leaf":
                                lines = [f"**{node_heading(node)}**"]
                                if node["description"]:
                                    lines.append(node["description"])
                                if "enum" in node:
                                    lines.append("Possible values: " + ", ".join(f"`{format_schema_value(v)}`" for v in node["enum"]))
                                if "default" in node:
                                    lines.append(f"Default: `{format_schema_value(node['default'])}`")
                                gr.Markdown("\n\n".join(lines))
                                return

                            with gr.Accordion(node_heading(node), open=depth < 1):
                                if node["description"]:
                                    gr.Markdown(node["description"])
                                for child in node["children"]:
                                    recursive_ui(child, depth + 1)

                        recursive_ui(build_schema_tree(document))

                with gr.Tab("Properties"):
                    schema_summary = gr.Markdown()

    input_change_outputs = [document_state, view_msg, config_view, schema_view]
    config_inputs = [document_state, reference_schema_state, config_search, sort_direction_state]
    schema_inputs = [document_state, schema_search, schema_sort_field, schema_sort_direction]
    schema_outputs = [schema_table, schema_count, schema_link]

    json_input.change(
        fn=handle_input_change,
        inputs=[json_input, mode_selector],
        outputs=input_change_outputs,
    )
    mode_selector.change(
        fn=handle_input_change,
        inputs=[json_input, mode_selector],
        outputs=input_change_outputs,
    )

    document_state.change(fn=render_config, inputs=config_inputs, outputs=[config_table, config_count])
    document_state.change(fn=render_schema_view, inputs=schema_inputs, outputs=schema_outputs)
    document_state.change(fn=render_schema_summary, inputs=[document_state], outputs=[schema_summary])

    config_search.change(fn=render_config, inputs=config_inputs, outputs=[config_table, config_count])
    reference_schema_state.change(fn=render_config, inputs=config_inputs, outputs=[config_table, config_count])
    config_sort_btn.click(
        fn=toggle_sort_direction,
        inputs=[sort_direction_state],
        outputs=[sort_direction_state, config_sort_btn],
    ).then(fn=render_config, inputs=config_inputs, outputs=[config_table, config_count])

    for component in (schema_search, schema_sort_field, schema_sort_direction):
        component.change(fn=render_schema_view, inputs=schema_inputs, outputs=schema_outputs)

    for label, button in example_buttons.items():
        button.click(
            fn=lambda label=label: load_example_handler(label),
            inputs=[],
            outputs=[json_input, mode_selector, status_msg],
        )

    fetch_schema_btn.click(
        fn=fetch_schema_example_handler,
        inputs=[],
        outputs=[json_input, mode_selector, status_msg],
    )

    file_input.upload(
        fn=handle_document_upload,
        inputs=[file_input, mode_selector],
        outputs=[json_input, mode_selector, status_msg],
    )

    reference_file.upload(
        fn=handle_reference_schema_upload,
        inputs=[reference_file],
        outputs=[reference_schema_state, reference_status],
    )
    fetch_reference_btn.click(
        fn=fetch_reference_schema_handler,
        inputs=[],
        outputs=[reference_schema_state, reference_status],
    )
    clear_reference_btn.click(
        fn=clear_reference_schema,
        inputs=[],
        outputs=[reference_schema_state, reference_status],
    )

if __name__ == "__main__":
    demo.launch()
