"""Page states and actions for the catalog page machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from langcat.models import Key, Lang, LangSummary, Tag, TagSummary


# Page states. Exactly one is current at any time and it fully determines
# what the view shows.


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight; nothing to show yet."""


@dataclass(frozen=True)
class Error:
    """
    The last operation failed.

    Attributes:
        message: Text shown verbatim to the user
        draft: Unsaved draft when the failure happened while persisting it
        original_key: Key of the language being edited, if any
    """

    message: str
    draft: Optional[Lang] = None
    original_key: Optional[Key] = None


@dataclass(frozen=True)
class Home:
    """Landing page listing all languages and tags."""

    languages: tuple[LangSummary, ...] = ()
    tags: tuple[TagSummary, ...] = ()


@dataclass(frozen=True)
class ViewLang:
    """Detail view of one language."""

    lang: Lang


@dataclass(frozen=True)
class ViewTag:
    """Languages carrying one tag."""

    tag: Tag
    languages: tuple[LangSummary, ...] = ()


@dataclass(frozen=True)
class EditLang:
    """
    Create/edit form.

    Attributes:
        errors: Messages from the last failed save attempt (empty on a fresh form)
        draft: Current, possibly invalid, draft
        original_key: Key of the language being edited; None when creating
    """

    errors: tuple[str, ...]
    draft: Lang
    original_key: Optional[Key] = None

    @property
    def is_new(self) -> bool:
        """True when the form creates a language rather than editing one."""
        return self.original_key is None


PageState = Union[Loading, Error, Home, ViewLang, ViewTag, EditLang]


# Actions emitted by the view.


@dataclass(frozen=True)
class LoadList:
    """Fetch languages and tags, then show the landing page."""


@dataclass(frozen=True)
class LoadLang:
    """Fetch one language, then show its detail page."""

    key: Key


@dataclass(frozen=True)
class LoadTag:
    """Fetch the languages under a tag, then show them."""

    tag: Tag


@dataclass(frozen=True)
class LoadNewLang:
    """Open the form with an empty draft."""


@dataclass(frozen=True)
class LoadEditLang:
    """Open the form pre-filled with an existing language."""

    lang: Lang


@dataclass(frozen=True)
class UpdateForm:
    """Apply a pure edit to the current draft."""

    transform: Callable[[Lang], Lang] = field(compare=False)


@dataclass(frozen=True)
class SaveLang:
    """Validate the draft and persist it when valid."""


@dataclass(frozen=True)
class ResumeEdit:
    """Return to the form with the draft kept by a failed save."""


Action = Union[
    LoadList,
    LoadLang,
    LoadTag,
    LoadNewLang,
    LoadEditLang,
    UpdateForm,
    SaveLang,
    ResumeEdit,
]


@dataclass(frozen=True)
class Chain:
    """Handler step: continue with another action in the same dispatch."""

    action: Action


# Actions that are only valid from one kind of page. Anything not listed
# is accepted from every page.
REQUIRED_STATE: dict[type, type] = {
    UpdateForm: EditLang,
    SaveLang: EditLang,
    ResumeEdit: Error,
}


class ContractViolation(Exception):
    """Action dispatched from a page that cannot handle it."""

    def __init__(self, action: Action, state: PageState) -> None:
        self.action = action
        self.state = state
        super().__init__(
            f"{type(action).__name__} is not valid from {type(state).__name__}"
        )


def state_name(state: PageState) -> str:
    """Variant name of a page state, used in logs and history."""
    return type(state).__name__
