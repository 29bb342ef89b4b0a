from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial

from nicegui import ui

from ...job import editable
from ...run.models import RunState
from ..editor_model import Edit, EditorModel
from ..state import GuiServices

logger = logging.getLogger("PromptEvaluator.gui.editor")


def render_editor(services: GuiServices) -> None:
    """Job editor with prompt, variables, model targets and the Run button."""

    controller = services.controller
    spec = services.app_state.job
    if spec is None:
        return
    model = EditorModel(spec, is_locked=lambda: controller.is_running)
    bind = model.bind

    def change(edit: Edit) -> None:
        model.apply(edit)

    def restructure(edit: Edit) -> None:
        if model.apply(edit):
            fields.refresh()

    def delete_button(edit: Edit) -> None:
        bind(ui.button(icon="delete", on_click=lambda: restructure(edit)).props("flat dense color=negative"))

    @ui.refreshable
    def fields() -> None:
        job = model.job
        with ui.row().classes("w-full gap-8 items-start no-wrap"):
            with ui.column().classes("flex-1 gap-2"):
                with ui.row().classes("items-center gap-2"):
                    ui.label("Variables").classes("font-semibold")
                    bind(ui.button("Add", icon="add", on_click=lambda: restructure(editable.insert_variable))).props(
                        "outline dense"
                    )
                for index, variable in enumerate(job.variables):
                    with ui.row().classes("w-full items-start gap-4 no-wrap"):
                        with ui.column().classes("gap-1"):
                            name = bind(
                                ui.input(
                                    placeholder="Variable name",
                                    value=variable.key,
                                    on_change=lambda e, i=index: change(
                                        partial(editable.rename_variable, index=i, key=e.value)
                                    ),
                                )
                            )
                            with name.add_slot("append"):
                                delete_button(partial(editable.remove_variable, index=index))
                            bind(
                                ui.button(
                                    "Add value",
                                    icon="add",
                                    on_click=lambda i=index: restructure(
                                        partial(editable.insert_value, variable_index=i)
                                    ),
                                )
                            ).props("dense")
                        ui.separator().props("vertical")
                        with ui.column().classes("flex-1 gap-1"):
                            for value_index, value in enumerate(variable.values):
                                value_input = bind(
                                    ui.textarea(
                                        placeholder="Variable value",
                                        value=value,
                                        on_change=lambda e, i=index, v=value_index: change(
                                            partial(editable.set_value, variable_index=i, index=v, value=e.value)
                                        ),
                                    )
                                ).props("autogrow").classes("w-full")
                                with value_input.add_slot("append"):
                                    delete_button(
                                        partial(editable.remove_value, variable_index=index, index=value_index)
                                    )

            with ui.column().classes("flex-1 gap-2"):
                with ui.row().classes("items-center gap-2"):
                    ui.label("Local Models").classes("font-semibold")
                    bind(
                        ui.button("Add", icon="add", on_click=lambda: restructure(editable.insert_local_model))
                    ).props("outline dense")
                for index, local in enumerate(job.local_models):
                    with ui.column().classes("w-full gap-1"):
                        path_input = bind(
                            ui.input(
                                label="Model path",
                                value=local.path,
                                on_change=lambda e, i=index: change(
                                    partial(editable.update_local_model, index=i, path=e.value)
                                ),
                            )
                        ).classes("w-full")
                        with path_input.add_slot("append"):
                            delete_button(partial(editable.remove_local_model, index=index))
                        bind(
                            ui.input(
                                label="Model template path",
                                value=local.template_path,
                                on_change=lambda e, i=index: change(
                                    partial(editable.update_local_model, index=i, template_path=e.value)
                                ),
                            )
                        ).classes("w-full")
                        bind(
                            ui.input(
                                label="Model architecture",
                                placeholder="llama",
                                value=local.architecture,
                                on_change=lambda e, i=index: change(
                                    partial(editable.update_local_model, index=i, architecture=e.value)
                                ),
                            )
                        ).classes("w-full")

                with ui.row().classes("items-center gap-2"):
                    ui.label("Remote Models").classes("font-semibold")
                    bind(
                        ui.button("Add", icon="add", on_click=lambda: restructure(editable.insert_remote_model))
                    ).props("outline dense")
                for index, remote in enumerate(job.remote_models):
                    with ui.column().classes("w-full gap-1"):
                        name_input = bind(
                            ui.input(
                                label="Model name",
                                value=remote.name,
                                on_change=lambda e, i=index: change(
                                    partial(editable.update_remote_model, index=i, name=e.value)
                                ),
                            )
                        ).classes("w-full")
                        with name_input.add_slot("append"):
                            delete_button(partial(editable.remove_remote_model, index=index))
                        bind(
                            ui.input(
                                label="API base URL",
                                value=remote.api_base_url,
                                on_change=lambda e, i=index: change(
                                    partial(editable.update_remote_model, index=i, api_base_url=e.value)
                                ),
                            )
                        ).classes("w-full")

    async def run() -> None:
        spec = model.specification()
        services.app_state.set_job(spec)
        await controller.submit(spec)

    with ui.column().classes("w-full gap-4 my-2"):
        bind(
            ui.textarea(
                label="System Prompt",
                placeholder="Enter a system prompt",
                value=model.job.system,
                on_change=lambda e: change(lambda job: replace(job, system=e.value)),
            )
        ).props("autogrow").classes("w-full")
        bind(
            ui.textarea(
                label="Prompt",
                placeholder="Enter a prompt",
                value=model.job.prompt,
                on_change=lambda e: change(lambda job: replace(job, prompt=e.value)),
            )
        ).props("autogrow").classes("w-full")
        fields()
        with ui.row().classes("w-full justify-end"):
            run_button = ui.button("Run", on_click=run)

    def on_state(state: RunState) -> None:
        model.sync_controls()
        if state is RunState.RUNNING:
            run_button.props("loading")
            run_button.disable()
        else:
            run_button.props(remove="loading")
            run_button.enable()

    on_state(controller.state)
    remove_listener = controller.add_listener(on_state)
    ui.context.client.on_disconnect(remove_listener)
