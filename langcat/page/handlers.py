"""Action handlers: how each action turns the current page into the next ones.

A handler is an async generator. Each yielded step is either a page state
for the machine to apply, or a Chain directive naming the action whose
handler continues the same dispatch.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import AsyncIterator, Callable, Union

from langcat.forms.validator import validate_lang
from langcat.models import Lang, empty_lang
from langcat.page.states import (
    REQUIRED_STATE,
    Action,
    Chain,
    ContractViolation,
    EditLang,
    Error,
    Home,
    LoadEditLang,
    Loading,
    LoadLang,
    LoadList,
    LoadNewLang,
    LoadTag,
    PageState,
    ResumeEdit,
    SaveLang,
    UpdateForm,
    ViewLang,
    ViewTag,
)
from langcat.transport import TransportClient
from langcat.utils.logging import get_logger
from langcat.utils.result import Result

logger = get_logger("page.handlers")

Step = Union[PageState, Chain]
Validator = Callable[[Lang], Result[Lang, list[str]]]


def check_contract(action: Action, state: PageState) -> None:
    """
    Reject actions dispatched from a page that cannot handle them.

    Raises:
        ContractViolation: If the action requires another kind of page
    """
    required = REQUIRED_STATE.get(type(action))
    if required is not None and not isinstance(state, required):
        raise ContractViolation(action, state)
    if isinstance(action, ResumeEdit) and state.draft is None:
        raise ContractViolation(action, state)


async def handle(
    action: Action,
    state: PageState,
    transport: TransportClient,
    validator: Validator = validate_lang,
    loading_on_list: bool = False,
) -> AsyncIterator[Step]:
    """
    Run the handler for one action.

    Args:
        action: Action to handle
        state: Page state current when the handler starts
        transport: Catalog API client
        validator: Draft validator used by SaveLang
        loading_on_list: Emit Loading before fetching the landing page

    Yields:
        Page states to apply, in order, or a Chain directive

    Raises:
        ContractViolation: If the action is not valid from state
    """
    check_contract(action, state)

    if isinstance(action, LoadList):
        if loading_on_list:
            yield Loading()
        langs, tags = await asyncio.gather(transport.list_langs(), transport.list_tags())
        if langs.is_err():
            yield Error(langs.unwrap_err())
        elif tags.is_err():
            yield Error(tags.unwrap_err())
        else:
            yield Home(languages=tuple(langs.unwrap()), tags=tuple(tags.unwrap()))

    elif isinstance(action, LoadLang):
        yield Loading()
        result = await transport.get_lang(action.key)
        if result.is_err():
            yield Error(result.unwrap_err())
        else:
            yield ViewLang(lang=result.unwrap())

    elif isinstance(action, LoadTag):
        yield Loading()
        result = await transport.get_tag(action.tag)
        if result.is_err():
            yield Error(result.unwrap_err())
        else:
            yield ViewTag(tag=action.tag, languages=tuple(result.unwrap()))

    elif isinstance(action, LoadNewLang):
        yield EditLang(errors=(), draft=empty_lang())

    elif isinstance(action, LoadEditLang):
        yield EditLang(errors=(), draft=action.lang, original_key=action.lang.key)

    elif isinstance(action, UpdateForm):
        draft = action.transform(state.draft)
        if not state.is_new and draft.key != state.original_key:
            # Key is the identity of an existing language
            logger.warning(
                "key_edit_ignored",
                original_key=state.original_key,
                attempted_key=draft.key,
            )
            draft = replace(draft, key=state.original_key)
        yield replace(state, draft=draft)

    elif isinstance(action, SaveLang):
        checked = validator(state.draft)
        if checked.is_err():
            yield replace(state, errors=tuple(checked.unwrap_err()))
            return

        saved = await transport.put_lang(checked.unwrap())
        if saved.is_err():
            yield Error(
                saved.unwrap_err(),
                draft=state.draft,
                original_key=state.original_key,
            )
        else:
            yield Chain(LoadList())

    elif isinstance(action, ResumeEdit):
        yield EditLang(
            errors=(state.message,),
            draft=state.draft,
            original_key=state.original_key,
        )

    else:
        raise TypeError(f"Unknown action: {action!r}")
