"""Data models for catalog records exchanged with the API."""

from __future__ import annotations

from dataclasses import dataclass, field

Key = str
Tag = str


@dataclass(frozen=True)
class LangSummary:
    """
    Projection of a language used in list pages.

    Attributes:
        key: Stable identifier of the language
        name: Display name
    """

    key: Key
    name: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"key": self.key, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "LangSummary":
        """Create from dictionary."""
        return cls(key=data["key"], name=data["name"])


@dataclass(frozen=True)
class TagSummary:
    """A tag as shown on the landing page."""

    tag: Tag

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"tag": self.tag}

    @classmethod
    def from_dict(cls, data: dict) -> "TagSummary":
        """Create from dictionary."""
        return cls(tag=data["tag"])


@dataclass(frozen=True)
class Lang:
    """
    A programming language record.

    Attributes:
        key: Stable identifier (e.g., "python")
        name: Display name
        description: Free-form description
        homepage: Homepage URL
        rating: Rating maintained by the server, never edited client-side
        tags: Tag labels attached to the language
    """

    key: Key
    name: str
    description: str
    homepage: str
    rating: int = 0
    tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def summary(self) -> LangSummary:
        """The list projection of this language."""
        return LangSummary(key=self.key, name=self.name)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "homepage": self.homepage,
            "rating": self.rating,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Lang":
        """
        Create from dictionary.

        Missing rating decodes as 0 and missing tags as empty.

        Raises:
            KeyError: If a required field is missing
            TypeError: If rating is not an integer or tags is not a list of strings
        """
        rating = data.get("rating", 0)
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise TypeError(f"rating must be an integer, got {rating!r}")

        tags = data.get("tags")
        if tags is None:
            tags = []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise TypeError(f"tags must be a list of strings, got {tags!r}")

        return cls(
            key=data["key"],
            name=data["name"],
            description=data["description"],
            homepage=data["homepage"],
            rating=rating,
            tags=tuple(tags),
        )


def empty_lang() -> Lang:
    """Blank draft used by the new-language form."""
    return Lang(key="", name="", description="", homepage="")
