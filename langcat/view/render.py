"""Plain renderings of a page state for the command line."""

from __future__ import annotations

from langcat.page.states import (
    EditLang,
    Error,
    Home,
    Loading,
    PageState,
    ViewLang,
    ViewTag,
    state_name,
)


def state_to_dict(state: PageState) -> dict:
    """
    Convert a page state to a JSON-serializable dictionary.

    The "page" key holds the variant name; the rest is the variant payload.
    """
    data: dict = {"page": state_name(state)}

    if isinstance(state, Error):
        data["message"] = state.message
        if state.draft is not None:
            data["draft"] = state.draft.to_dict()
    elif isinstance(state, Home):
        data["languages"] = [lang.to_dict() for lang in state.languages]
        data["tags"] = [tag.tag for tag in state.tags]
    elif isinstance(state, ViewLang):
        data["lang"] = state.lang.to_dict()
    elif isinstance(state, ViewTag):
        data["tag"] = state.tag
        data["languages"] = [lang.to_dict() for lang in state.languages]
    elif isinstance(state, EditLang):
        data["errors"] = list(state.errors)
        data["draft"] = state.draft.to_dict()
        data["new"] = state.is_new

    return data


def render_text(state: PageState) -> str:
    """Render a page state as human-readable text."""
    if isinstance(state, Loading):
        return "Loading..."

    if isinstance(state, Error):
        return f"Error: {state.message}"

    lines: list[str] = []

    if isinstance(state, Home):
        lines.append("Languages")
        lines.append("=" * 40)
        lines.extend(f"  {lang.key:<20} {lang.name}" for lang in state.languages)
        lines.append("")
        lines.append("Tags")
        lines.append("=" * 40)
        lines.extend(f"  {tag.tag}" for tag in state.tags)

    elif isinstance(state, ViewLang):
        lang = state.lang
        lines.append(f"{lang.name} ({lang.key})")
        lines.append("=" * 40)
        lines.append(lang.description)
        lines.append(f"Homepage: {lang.homepage}")
        lines.append(f"Rating: {lang.rating}")
        lines.append(f"Tags: {', '.join(lang.tags)}")

    elif isinstance(state, ViewTag):
        lines.append(f"Tag: {state.tag}")
        lines.append("=" * 40)
        lines.extend(f"  {lang.key:<20} {lang.name}" for lang in state.languages)

    elif isinstance(state, EditLang):
        lines.append("New language" if state.is_new else f"Edit {state.original_key}")
        lines.append("=" * 40)
        lines.extend(f"  ! {message}" for message in state.errors)
        draft = state.draft
        lines.append(f"key: {draft.key}")
        lines.append(f"name: {draft.name}")
        lines.append(f"description: {draft.description}")
        lines.append(f"homepage: {draft.homepage}")
        lines.append(f"tags: {', '.join(draft.tags)}")

    return "\n".join(lines)
