"""Shared fixtures for langcat tests."""
import asyncio
from typing import Optional

import pytest

from langcat.models import Lang, TagSummary
from langcat.page import PageMachine
from langcat.utils.logging import configure_logging
from langcat.utils.result import Err, Ok


PYTHON = Lang(
    key="python",
    name="Python",
    description="A readable general purpose language",
    homepage="https://www.python.org",
    rating=5,
    tags=("dynamic", "scripting"),
)

HASKELL = Lang(
    key="haskell",
    name="Haskell",
    description="A lazy purely functional language",
    homepage="https://www.haskell.org",
    rating=4,
    tags=("functional",),
)


class FakeTransport:
    """In-memory catalog API.

    failures maps an operation name to the error message it returns.
    gates maps "operation:argument" to an asyncio.Event the call waits on,
    so tests can decide when a response arrives.
    """

    def __init__(self, langs=None):
        self.langs = {lang.key: lang for lang in (langs or [PYTHON, HASKELL])}
        self.calls = []
        self.failures = {}
        self.gates = {}
        self.saved = []
        self.closed = False

    async def _call(self, op: str, arg: Optional[str] = None):
        self.calls.append((op, arg))
        gate = self.gates.get(f"{op}:{arg}")
        if gate is not None:
            await gate.wait()
        return self.failures.get(op)

    def ops(self):
        return [op for op, _ in self.calls]

    async def list_langs(self):
        failure = await self._call("list_langs")
        if failure:
            return Err(failure)
        return Ok([lang.summary for lang in self.langs.values()])

    async def list_tags(self):
        failure = await self._call("list_tags")
        if failure:
            return Err(failure)
        tags = sorted({tag for lang in self.langs.values() for tag in lang.tags})
        return Ok([TagSummary(tag) for tag in tags])

    async def get_lang(self, key):
        failure = await self._call("get_lang", key)
        if failure:
            return Err(failure)
        if key not in self.langs:
            return Err(f"not found: {key}")
        return Ok(self.langs[key])

    async def get_tag(self, tag):
        failure = await self._call("get_tag", tag)
        if failure:
            return Err(failure)
        return Ok([lang.summary for lang in self.langs.values() if tag in lang.tags])

    async def put_lang(self, lang):
        failure = await self._call("put_lang", lang.key)
        if failure:
            return Err(failure)
        self.saved.append(lang)
        self.langs[lang.key] = lang
        return Ok(None)

    async def aclose(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _logging():
    """Send logs to the (captured) stderr of the running test."""
    configure_logging(level="debug", format_type="text")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def machine(transport):
    return PageMachine(transport=transport)


@pytest.fixture
def gate():
    return asyncio.Event()
