"""Markup for each built-in field type."""

from __future__ import annotations

from markupsafe import Markup, escape

from .markup import filter_post_markup
from .types import FieldDefinition, RenderContext


def render_text(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    return Markup(
        f'<input type="text" {ctx.common_attributes} id="{ctx.element_id}" value="{escape(ctx.value)}" />'
    )


def render_textarea(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    # Enclosed text only needs entity escaping; the value is not an attribute.
    return Markup(f'<textarea {ctx.common_attributes} id="{ctx.element_id}">{escape(ctx.value)}</textarea>')


def render_upload(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    html = (
        f'<input type="text" {ctx.common_attributes} id="{ctx.element_id}" value="{escape(ctx.value)}"'
        f' data-upload-show-image="{escape(definition.upload_show_image)}" />'
        f'<input type="button" value="{escape(definition.upload_button)}"'
        f' class="upload_button button {ctx.prefix}-upload-file"'
        f' data-upload-target="{ctx.element_id}"'
        f' data-upload-type="{escape(definition.upload_type)}"'
        f' data-upload-title="{escape(definition.upload_title)}" />'
    )
    if definition.upload_show_image and ctx.value:
        html += (
            f'<div class="{ctx.prefix}-upload-preview" id="{ctx.element_id}-preview">'
            f'<img src="{escape(ctx.value)}" width="{escape(definition.upload_show_image)}" alt="" />'
            "</div>"
        )
    return Markup(html)


def render_checkbox(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    checked = ' checked="checked"' if ctx.value == "1" else ""
    # The hidden input makes an unchecked box still submit its key.
    html = f'<input type="hidden" {ctx.common_attributes} value="" />'
    html += f'<label for="{ctx.element_id}">'
    html += f'<input type="checkbox" {ctx.common_attributes} id="{ctx.element_id}" value="1"{checked} />'
    if definition.checkbox_label:
        html += f" {escape(definition.checkbox_label)}"
    html += "</label>"
    return Markup(html)


def render_radio(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    inline = f" {ctx.prefix}-inline" if definition.inline else ""
    html = ""
    for option_value, option_text in definition.options.items():
        radio_id = f"{ctx.element_id}-{escape(option_value)}"
        checked = ' checked="checked"' if option_value == ctx.value else ""
        html += f'<div class="{ctx.prefix}-radio-container{inline}">'
        html += f'<label for="{radio_id}">'
        html += (
            f'<input type="radio" {ctx.common_attributes} id="{radio_id}"'
            f' value="{escape(option_value)}"{checked} /> {escape(option_text)}'
        )
        html += "</label></div>"
    return Markup(html)


def render_select(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    if not definition.options:
        return Markup("")
    html = f'<select {ctx.common_attributes} id="{ctx.element_id}">'
    for option_value, option_text in definition.options.items():
        selected = ' selected="selected"' if option_value == ctx.value else ""
        html += f'<option value="{escape(option_value)}"{selected}>{escape(option_text)}</option>'
    html += "</select>"
    return Markup(html)


def render_number(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    return Markup(
        f'<input type="number" {ctx.common_attributes} id="{ctx.element_id}" value="{escape(ctx.value)}" />'
    )


def render_content(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    return Markup(filter_post_markup(definition.content))


def render_nothing(definition: FieldDefinition, ctx: RenderContext) -> Markup:
    return Markup("")
