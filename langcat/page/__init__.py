"""Page state machine for the catalog client.

The whole client is one page that re-renders from a single page state.
Views emit actions; the machine runs each action's handler, which may
await the catalog API, and applies the resulting page states in order:

    Loading -> Home | ViewLang | ViewTag | Error
    Home/ViewLang -> EditLang -> (SaveLang) -> Home | EditLang(errors) | Error(draft)
    Error(draft) -> (ResumeEdit) -> EditLang

UpdateForm and SaveLang are only valid from EditLang, ResumeEdit only from
an Error that kept a draft; anything else raises ContractViolation.
"""

from langcat.page.handlers import check_contract, handle
from langcat.page.machine import DispatchStats, PageMachine
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
    state_name,
)

__all__ = [
    # States
    "PageState",
    "Loading",
    "Error",
    "Home",
    "ViewLang",
    "ViewTag",
    "EditLang",
    "state_name",
    # Actions
    "Action",
    "LoadList",
    "LoadLang",
    "LoadTag",
    "LoadNewLang",
    "LoadEditLang",
    "UpdateForm",
    "SaveLang",
    "ResumeEdit",
    "Chain",
    "REQUIRED_STATE",
    "ContractViolation",
    # Handlers
    "handle",
    "check_contract",
    # Machine
    "PageMachine",
    "DispatchStats",
]
